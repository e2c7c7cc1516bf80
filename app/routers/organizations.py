"""
CreativeGroups Payroll - Organizations Router

API endpoints for tenant organizations.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.schemas.organization import (
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
)
from app.services.organization_service import OrganizationService


router = APIRouter()


@router.get(
    "",
    response_model=List[OrganizationResponse],
    summary="List organizations",
    description="Active organizations ordered by name.",
)
async def list_organizations(db: AsyncSession = Depends(get_async_session)):
    return await OrganizationService(db).list_organizations()


@router.get(
    "/{organization_id}",
    response_model=OrganizationResponse,
    summary="Get organization",
)
async def get_organization(
    organization_id: int = Path(..., description="Organization ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await OrganizationService(db).get_organization(organization_id)


@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create organization",
    description="Usernames are unique across users and organizations.",
)
async def create_organization(
    request: OrganizationCreate,
    db: AsyncSession = Depends(get_async_session),
):
    return await OrganizationService(db).create_organization(
        name=request.name,
        username=request.username,
        password=request.password,
    )


@router.put(
    "/{organization_id}",
    response_model=OrganizationResponse,
    summary="Update organization",
)
async def update_organization(
    request: OrganizationUpdate,
    organization_id: int = Path(..., description="Organization ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await OrganizationService(db).update_organization(
        organization_id, request.model_dump()
    )


@router.delete(
    "/{organization_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate organization",
)
async def delete_organization(
    organization_id: int = Path(..., description="Organization ID"),
    db: AsyncSession = Depends(get_async_session),
):
    await OrganizationService(db).delete_organization(organization_id)
