"""
CreativeGroups Payroll - Users Router

API endpoints for user accounts.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.user_service import UserService


router = APIRouter()


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List users",
    description="Active users ordered by username, optionally for one organization.",
)
async def list_users(
    organization_id: Optional[int] = Query(None, description="Filter by organization"),
    db: AsyncSession = Depends(get_async_session),
):
    return await UserService(db).list_users(organization_id)


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
async def get_user(
    user_id: int = Path(..., description="User ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await UserService(db).get_user(user_id)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Role may be given by name or by code (1 Admin, 2 Organization, 3 User).",
)
async def create_user(
    request: UserCreate,
    db: AsyncSession = Depends(get_async_session),
):
    return await UserService(db).create_user(
        username=request.username,
        password=request.password,
        role=request.role,
        organization_id=request.organization_id,
    )


@router.put("/{user_id}", response_model=UserResponse, summary="Update user")
async def update_user(
    request: UserUpdate,
    user_id: int = Path(..., description="User ID"),
    db: AsyncSession = Depends(get_async_session),
):
    return await UserService(db).update_user(user_id, request.model_dump())


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate user",
)
async def delete_user(
    user_id: int = Path(..., description="User ID"),
    db: AsyncSession = Depends(get_async_session),
):
    await UserService(db).delete_user(user_id)
