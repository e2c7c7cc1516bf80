"""
CreativeGroups Payroll - Employees Router

API endpoints for the employee master: CRUD, bulk corrections, spreadsheet
upload and the error overview.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_upload_content
from app.schemas.employee import (
    EmployeeCreate,
    EmployeeDeleteResponse,
    EmployeeErrorOverview,
    EmployeeFix,
    EmployeeResponse,
    EmployeeUpdate,
    EmployeeUploadResponse,
)
from app.services.employee_service import EmployeeService


router = APIRouter()


# ===========================================
# COMPANY-WIDE ENDPOINTS
# ===========================================

@router.get(
    "/company/{company_id}",
    response_model=List[EmployeeResponse],
    summary="List employees of a company",
    description="Ordered by name. Search filters are case-insensitive substrings.",
)
async def list_employees(
    company_id: int = Path(..., description="Company ID"),
    search_name: Optional[str] = Query(None),
    search_pf: Optional[str] = Query(None),
    search_esi: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    return await EmployeeService(db).list_employees(
        company_id,
        search_name=search_name,
        search_pf=search_pf,
        search_esi=search_esi,
    )


@router.get(
    "/has-errors/{company_id}",
    response_model=EmployeeErrorOverview,
    summary="Employee master error overview",
    description="All employees of the company, rows carrying a validation error first.",
)
async def has_errors(
    company_id: int = Path(..., description="Company ID"),
    db: AsyncSession = Depends(get_async_session),
):
    has_any, employees = await EmployeeService(db).error_overview(company_id)
    return EmployeeErrorOverview(
        has_errors=has_any,
        employees=[EmployeeResponse.model_validate(e) for e in employees],
    )


@router.delete(
    "/company/{company_id}",
    response_model=EmployeeDeleteResponse,
    summary="Delete all employees of a company",
    description="Also deletes their payroll entries.",
)
async def delete_company_employees(
    company_id: int = Path(..., description="Company ID"),
    db: AsyncSession = Depends(get_async_session),
):
    count = await EmployeeService(db).delete_company_employees(company_id)
    return EmployeeDeleteResponse(
        message=f"Deleted {count} employees for company ID {company_id}.",
        deleted_count=count,
    )


@router.post(
    "/upload",
    response_model=EmployeeUploadResponse,
    summary="Upload employee master",
    description=(
        "Spreadsheet with name, joining_date, pf, esi and optional leaving_date "
        "columns; the header may sit on row 1 or row 2."
    ),
)
async def upload_employees(
    company_id: int = Form(...),
    content: bytes = Depends(get_upload_content),
    db: AsyncSession = Depends(get_async_session),
):
    result = await EmployeeService(db).upload_employees(company_id, content)
    return EmployeeUploadResponse(
        message="Employees uploaded successfully",
        added=result.added,
        skipped=result.skipped,
        with_errors=result.with_errors,
        employees=[EmployeeResponse.model_validate(e) for e in result.employees],
    )


@router.post(
    "/bulk-fix",
    response_model=List[EmployeeResponse],
    summary="Apply employee corrections",
    description="All or nothing: an unknown employee id fails the whole batch.",
)
async def bulk_fix(
    fixes: List[EmployeeFix],
    db: AsyncSession = Depends(get_async_session),
):
    return await EmployeeService(db).bulk_fix([fix.model_dump() for fix in fixes])


# ===========================================
# SINGLE EMPLOYEE ENDPOINTS
# ===========================================

@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
)
async def create_employee(
    request: EmployeeCreate,
    db: AsyncSession = Depends(get_async_session),
):
    return await EmployeeService(db).create_employee(
        company_id=request.company_id,
        name=request.name,
        pf_number=request.pf_number,
        esi_number=request.esi_number,
        joining_date=request.joining_date,
        leaving_date=request.leaving_date,
        is_active=request.is_active,
    )


@router.get("/{employee_id}", response_model=EmployeeResponse, summary="Get employee")
async def get_employee(
    employee_id: int = Path(..., description="Employee ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await EmployeeService(db).get_employee(employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse, summary="Update employee")
async def update_employee(
    request: EmployeeUpdate,
    employee_id: int = Path(..., description="Employee ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await EmployeeService(db).update_employee(employee_id, request.model_dump())


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete employee",
    description="Also deletes the employee's payroll entries.",
)
async def delete_employee(
    employee_id: int = Path(..., description="Employee ID"),
    db: AsyncSession = Depends(get_async_session),
):
    await EmployeeService(db).delete_employee(employee_id)
