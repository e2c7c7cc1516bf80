"""
CreativeGroups Payroll - Organization Service

Tenant organizations. Organizations log in with their own username, so a
username must be unique across users and organizations together, active or
not. Deleting an organization only clears is_active.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.models.user import User
from app.utils.error_handling import DuplicateUsernameException, NotFoundException

logger = logging.getLogger(__name__)


async def username_taken(
    db: AsyncSession,
    username: str,
    exclude_user_id: Optional[int] = None,
    exclude_organization_id: Optional[int] = None,
) -> bool:
    """True when a user or an organization already uses this username."""
    user_query = select(User.id).where(User.username == username)
    if exclude_user_id is not None:
        user_query = user_query.where(User.id != exclude_user_id)
    if (await db.execute(user_query)).first() is not None:
        return True

    org_query = select(Organization.id).where(Organization.username == username)
    if exclude_organization_id is not None:
        org_query = org_query.where(Organization.id != exclude_organization_id)
    return (await db.execute(org_query)).first() is not None


class OrganizationService:
    """Service for organization management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_organizations(self) -> List[Organization]:
        result = await self.db.execute(
            select(Organization)
            .where(Organization.is_active == True)
            .order_by(Organization.name)
        )
        return list(result.scalars().all())

    async def _find(self, organization_id: int) -> Organization:
        organization = await self.db.get(Organization, organization_id)
        if organization is None:
            raise NotFoundException("Organization", organization_id)
        return organization

    async def get_organization(self, organization_id: int) -> Organization:
        """Active organization by id; inactive ones are reported as missing."""
        organization = await self._find(organization_id)
        if not organization.is_active:
            raise NotFoundException("Organization", organization_id)
        return organization

    async def create_organization(self, name: str, username: str, password: str) -> Organization:
        if await username_taken(self.db, username):
            raise DuplicateUsernameException(username)

        organization = Organization(
            name=name,
            username=username,
            password=password,
            is_active=True,
        )
        self.db.add(organization)
        await self.db.commit()
        await self.db.refresh(organization)

        logger.info(f"Created organization {organization.id} ({organization.username})")
        return organization

    async def update_organization(self, organization_id: int, data: Dict[str, Any]) -> Organization:
        organization = await self._find(organization_id)
        if await username_taken(self.db, data["username"], exclude_organization_id=organization_id):
            raise DuplicateUsernameException(data["username"])

        organization.name = data["name"]
        organization.username = data["username"]
        organization.password = data["password"]
        organization.is_active = data.get("is_active", True)

        await self.db.commit()
        await self.db.refresh(organization)
        return organization

    async def delete_organization(self, organization_id: int) -> None:
        """Soft delete."""
        organization = await self._find(organization_id)
        organization.is_active = False
        await self.db.commit()
        logger.info(f"Deactivated organization {organization_id}")
