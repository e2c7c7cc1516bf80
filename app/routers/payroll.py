"""
CreativeGroups Payroll - Payroll Months Router

API endpoints for payroll months.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.schemas.payroll import (
    PayrollMonthCreate,
    PayrollMonthResponse,
    PayrollMonthUpdate,
)
from app.services.payroll_service import PayrollService


router = APIRouter()


@router.get(
    "/months",
    response_model=List[PayrollMonthResponse],
    summary="List payroll months",
    description="All payroll months, or those of one company.",
)
async def list_months(
    company_id: Optional[int] = Query(None, description="Filter by company"),
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).list_months(company_id)


@router.get("/months/{payroll_month_id}", response_model=PayrollMonthResponse, summary="Get payroll month")
async def get_month(
    payroll_month_id: int = Path(..., description="Payroll month ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).get_month(payroll_month_id)


@router.post(
    "/months",
    response_model=PayrollMonthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create payroll month",
    description="total_days defaults to 30 and drives the NCP of every entry.",
)
async def create_month(
    request: PayrollMonthCreate,
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).create_month(
        company_id=request.company_id,
        month=request.month,
        total_days=request.total_days,
    )


@router.put(
    "/months/{payroll_month_id}",
    response_model=PayrollMonthResponse,
    summary="Update payroll month",
    description="A new total_days re-derives the NCP of the month's entries. A month with entries cannot change company.",
)
async def update_month(
    request: PayrollMonthUpdate,
    payroll_month_id: int = Path(..., description="Payroll month ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await PayrollService(db).update_month(payroll_month_id, request.model_dump())


@router.delete(
    "/months/{payroll_month_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete payroll month",
    description="Also deletes the month's payroll entries.",
)
async def delete_month(
    payroll_month_id: int = Path(..., description="Payroll month ID"),
    db: AsyncSession = Depends(get_async_session),
):
    await PayrollService(db).delete_month(payroll_month_id)
