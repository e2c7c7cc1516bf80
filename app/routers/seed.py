"""
CreativeGroups Payroll - Seed Router

Bootstrap accounts for a fresh installation.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.schemas.auth import Credentials, SeedAdminResponse, SeedAllResponse
from app.services.seed_service import SeedService


router = APIRouter()


@router.post(
    "/create-admin",
    response_model=SeedAdminResponse,
    summary="Create admin user",
    description="Fails with 409 when an admin user already exists.",
)
async def create_admin(db: AsyncSession = Depends(get_async_session)):
    credentials = await SeedService(db).create_admin()
    return SeedAdminResponse(message="Admin user created successfully", **credentials)


@router.post(
    "/seed-all",
    response_model=SeedAllResponse,
    summary="Seed bootstrap data",
    description="Creates the admin, a sample organization and a sample user where missing.",
)
async def seed_all(db: AsyncSession = Depends(get_async_session)):
    seeded = await SeedService(db).seed_all()
    return SeedAllResponse(
        message="Seed data created successfully",
        admin=Credentials(**seeded["admin"]),
        organization=Credentials(**seeded["organization"]),
        user=Credentials(**seeded["user"]),
    )
