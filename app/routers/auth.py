"""
CreativeGroups Payroll - Authentication Router

API endpoints for login.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.schemas.auth import LoginRequest, LoginResponse
from app.services.auth_service import (
    LOGIN_FAILURE_MESSAGE,
    LOGIN_SUCCESS_MESSAGE,
    AuthService,
)


router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Authenticate a user, or an organization with its own credentials.",
    responses={401: {"model": LoginResponse}},
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """
    Authenticate with username and password.

    Active users are matched first, then active organizations.
    """
    result = await AuthService(db).authenticate(request.username, request.password)
    if result is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=LoginResponse(success=False, message=LOGIN_FAILURE_MESSAGE).model_dump(),
        )

    return LoginResponse(
        success=True,
        user_id=result.user_id,
        username=result.username,
        role=result.role.value,
        organization_id=result.organization_id,
        organization_name=result.organization_name,
        message=LOGIN_SUCCESS_MESSAGE,
    )
