"""
CreativeGroups Payroll - Companies Router

API endpoints for companies.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate
from app.services.company_service import CompanyService


router = APIRouter()


@router.get(
    "",
    response_model=List[CompanyResponse],
    summary="List companies",
    description="Active companies ordered by name, optionally for one organization.",
)
async def list_companies(
    organization_id: Optional[int] = Query(None, description="Filter by organization"),
    db: AsyncSession = Depends(get_async_session),
):
    return await CompanyService(db).list_companies(organization_id)


@router.get("/{company_id}", response_model=CompanyResponse, summary="Get company")
async def get_company(
    company_id: int = Path(..., description="Company ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await CompanyService(db).get_company(company_id)


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create company",
)
async def create_company(
    request: CompanyCreate,
    db: AsyncSession = Depends(get_async_session),
):
    return await CompanyService(db).create_company(
        name=request.name,
        pf_enabled=request.pf_enabled,
        esi_enabled=request.esi_enabled,
        organization_id=request.organization_id,
    )


@router.put(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Update company",
    description="Changing the PF or ESI flag re-validates the company's employees.",
)
async def update_company(
    request: CompanyUpdate,
    company_id: int = Path(..., description="Company ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await CompanyService(db).update_company(company_id, request.model_dump())


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate company",
)
async def delete_company(
    company_id: int = Path(..., description="Company ID"),
    db: AsyncSession = Depends(get_async_session),
):
    await CompanyService(db).delete_company(company_id)
