"""
CreativeGroups Payroll - Authentication Service

Username/password login for users and organizations.

Credentials are compared as stored (plaintext). Active users are checked
first, then active organizations; an organization signs in with the
Organization role and its own id as organization id.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.organization import Organization
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


LOGIN_SUCCESS_MESSAGE = "Login successful"
LOGIN_FAILURE_MESSAGE = "Invalid username or password."


@dataclass
class LoginResult:
    """Identity of a successful login."""
    user_id: int
    username: str
    role: UserRole
    organization_id: Optional[int] = None
    organization_name: Optional[str] = None


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _active_user(self, username: str, password: str) -> Optional[User]:
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.organization))
            .where(
                User.username == username,
                User.password == password,
                User.is_active == True,
            )
        )
        return result.scalars().first()

    async def _active_organization(self, username: str, password: str) -> Optional[Organization]:
        result = await self.db.execute(
            select(Organization).where(
                Organization.username == username,
                Organization.password == password,
                Organization.is_active == True,
            )
        )
        return result.scalars().first()

    async def authenticate(self, username: str, password: str) -> Optional[LoginResult]:
        """
        Authenticate a user or an organization.

        Returns:
            LoginResult, or None when nothing matches
        """
        user = await self._active_user(username, password)
        if user is not None:
            logger.info(f"User {user.id} logged in as {user.role.value}")
            return LoginResult(
                user_id=user.id,
                username=user.username,
                role=user.role,
                organization_id=user.organization_id,
                organization_name=user.organization.name if user.organization else None,
            )

        organization = await self._active_organization(username, password)
        if organization is not None:
            logger.info(f"Organization {organization.id} logged in")
            return LoginResult(
                user_id=organization.id,
                username=organization.username,
                role=UserRole.ORGANIZATION,
                organization_id=organization.id,
                organization_name=organization.name,
            )

        logger.warning(f"Failed login attempt for username '{username}'")
        return None
