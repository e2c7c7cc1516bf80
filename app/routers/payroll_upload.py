"""
CreativeGroups Payroll - Payroll Upload Router

API endpoints for the monthly payroll cycle:
- Upload gate and payroll sheet upload
- Manual maintenance of payroll entries
- Download readiness and the ECR / ESI statutory returns
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Path, Query, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_upload_content
from app.schemas.payroll import (
    CanDownloadResponse,
    CanUploadResponse,
    PayrollEntryCreate,
    PayrollEntryResponse,
    PayrollEntryUpdate,
    PayrollUploadResponse,
)
from app.services.payroll_service import PayrollService
from app.services.payroll_upload_service import PayrollUploadService
from app.services.report_service import ReportFile, ReportService


router = APIRouter()


def _attachment(report: ReportFile) -> Response:
    return Response(
        content=report.content,
        media_type=report.media_type,
        headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
    )


# ===========================================
# UPLOAD
# ===========================================

@router.get(
    "/can-upload/{company_id}",
    response_model=CanUploadResponse,
    summary="Check payroll upload eligibility",
    description="Payroll can be uploaded only while the employee master has no errors.",
)
async def can_upload(
    company_id: int = Path(..., description="Company ID"),
    db: AsyncSession = Depends(get_async_session),
):
    allowed, message, error_count = await PayrollUploadService(db).can_upload(company_id)
    return CanUploadResponse(
        can_upload=allowed,
        message=message,
        employees_with_errors=error_count,
    )


@router.post(
    "/upload",
    response_model=PayrollUploadResponse,
    summary="Upload payroll sheet",
    description=(
        "Replaces the payroll entries of the company's month. Any row error "
        "rejects the whole upload with the itemized error list."
    ),
)
async def upload_payroll(
    company_id: int = Form(...),
    payroll_month_id: int = Form(...),
    content: bytes = Depends(get_upload_content),
    db: AsyncSession = Depends(get_async_session),
):
    result = await PayrollUploadService(db).upload(company_id, payroll_month_id, content)
    return PayrollUploadResponse(
        message=result.message,
        uploaded_count=result.uploaded_count,
        backfilled_count=result.backfilled_count,
    )


# ===========================================
# PAYROLL ENTRIES
# ===========================================

@router.get(
    "/payroll/{company_id}/{payroll_month_id}",
    response_model=List[PayrollEntryResponse],
    summary="List payroll entries",
    description="Entries of active employees, zero working day rows first.",
)
async def list_entries(
    company_id: int = Path(..., description="Company ID"),
    payroll_month_id: int = Path(..., description="Payroll month ID"),
    search_name: Optional[str] = Query(None),
    search_pf: Optional[str] = Query(None),
    search_esi: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).list_entries(
        company_id,
        payroll_month_id,
        search_name=search_name,
        search_pf=search_pf,
        search_esi=search_esi,
    )


@router.post(
    "/add-entry",
    response_model=PayrollEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add payroll entry",
)
async def add_entry(
    request: PayrollEntryCreate,
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).add_entry(
        employee_id=request.employee_id,
        payroll_month_id=request.payroll_month_id,
        working_days=request.working_days,
        basic_da=request.basic_da,
        gross_salary=request.gross_salary,
        reason=request.reason,
    )


@router.put("/update-entry/{entry_id}", response_model=PayrollEntryResponse, summary="Update payroll entry")
async def update_entry(
    request: PayrollEntryUpdate,
    entry_id: int = Path(..., description="Payroll entry ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).update_entry(
        entry_id,
        working_days=request.working_days,
        basic_da=request.basic_da,
        gross_salary=request.gross_salary,
        reason=request.reason,
    )


@router.delete(
    "/delete-entry/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete payroll entry",
)
async def delete_entry(
    entry_id: int = Path(..., description="Payroll entry ID"),
    db: AsyncSession = Depends(get_async_session),
):
    await PayrollService(db).delete_entry(entry_id)


# ===========================================
# STATUTORY REPORTS
# ===========================================

@router.get(
    "/can-download/{company_id}/{payroll_month_id}",
    response_model=CanDownloadResponse,
    summary="Check report download readiness",
)
async def can_download(
    company_id: int = Path(..., description="Company ID"),
    payroll_month_id: int = Path(..., description="Payroll month ID"),
    db: AsyncSession = Depends(get_async_session),
):
    allowed, message = await ReportService(db).check_download(company_id, payroll_month_id)
    return CanDownloadResponse(can_download=allowed, message=message)


@router.get(
    "/download-pf/{company_id}/{payroll_month_id}",
    summary="Download ECR challan",
    description="PF electronic challan-cum-return as '#~#' delimited text.",
    response_class=Response,
)
async def download_pf(
    company_id: int = Path(..., description="Company ID"),
    payroll_month_id: int = Path(..., description="Payroll month ID"),
    db: AsyncSession = Depends(get_async_session),
):
    report = await ReportService(db).generate_ecr(company_id, payroll_month_id)
    return _attachment(report)


@router.get(
    "/download-esi/{company_id}/{payroll_month_id}",
    summary="Download ESI return",
    description="ESI monthly contribution workbook (.xlsx).",
    response_class=Response,
)
async def download_esi(
    company_id: int = Path(..., description="Company ID"),
    payroll_month_id: int = Path(..., description="Payroll month ID"),
    db: AsyncSession = Depends(get_async_session),
):
    report = await ReportService(db).generate_esi(company_id, payroll_month_id)
    return _attachment(report)
