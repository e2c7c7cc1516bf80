"""
CreativeGroups Payroll - User Service

User account management.

Role rules:
- Organization accounts are never assigned to an organization
- User accounts always belong to one
- Admin accounts may carry an organization or not
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.organization import Organization
from app.models.user import User, UserRole
from app.services.organization_service import username_taken
from app.utils.error_handling import (
    DuplicateUsernameException,
    NotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def check_role_assignment(role: UserRole, organization_id: Optional[int]) -> None:
    """Raise when the role and the organization assignment disagree."""
    if role == UserRole.ORGANIZATION and organization_id is not None:
        raise ValidationException(
            "Organization role users cannot be assigned to an organization.",
            field="organization_id",
        )
    if role == UserRole.USER and organization_id is None:
        raise ValidationException(
            "User role requires an organization assignment.",
            field="organization_id",
        )


class UserService:
    """Service for user account operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_users(self, organization_id: Optional[int] = None) -> List[User]:
        query = (
            select(User)
            .options(selectinload(User.organization))
            .where(User.is_active == True)
        )
        if organization_id is not None:
            query = query.where(User.organization_id == organization_id)
        result = await self.db.execute(query.order_by(User.username))
        return list(result.scalars().all())

    async def _find(self, user_id: int) -> User:
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.organization))
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundException("User", user_id)
        return user

    async def get_user(self, user_id: int) -> User:
        """Active user by id."""
        user = await self._find(user_id)
        if not user.is_active:
            raise NotFoundException("User", user_id)
        return user

    async def _check_organization(self, organization_id: Optional[int]) -> None:
        if organization_id is not None and await self.db.get(Organization, organization_id) is None:
            raise NotFoundException("Organization", organization_id)

    async def create_user(
        self,
        username: str,
        password: str,
        role: UserRole,
        organization_id: Optional[int] = None,
    ) -> User:
        if await username_taken(self.db, username):
            raise DuplicateUsernameException(username)
        check_role_assignment(role, organization_id)
        await self._check_organization(organization_id)

        user = User(
            username=username,
            password=password,
            role=role,
            organization_id=organization_id,
            is_active=True,
        )
        self.db.add(user)
        await self.db.commit()

        logger.info(f"Created user {user.id} ({user.username}, {user.role.value})")
        return await self._find(user.id)

    async def update_user(self, user_id: int, data: Dict[str, Any]) -> User:
        user = await self._find(user_id)
        if await username_taken(self.db, data["username"], exclude_user_id=user_id):
            raise DuplicateUsernameException(data["username"])
        check_role_assignment(data["role"], data.get("organization_id"))
        await self._check_organization(data.get("organization_id"))

        user.username = data["username"]
        user.password = data["password"]
        user.role = data["role"]
        user.organization_id = data.get("organization_id")
        user.is_active = data.get("is_active", True)

        await self.db.commit()
        return await self._find(user_id)

    async def delete_user(self, user_id: int) -> None:
        """Soft delete."""
        user = await self._find(user_id)
        user.is_active = False
        await self.db.commit()
        logger.info(f"Deactivated user {user_id}")
