"""
CreativeGroups Payroll - Seed Service

Bootstrap accounts for a fresh database: the admin user, plus a sample
organization with one office user.
"""

import logging
from typing import Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.models.user import User, UserRole
from app.utils.error_handling import ConflictException

logger = logging.getLogger(__name__)


ADMIN_CREDENTIALS = {"username": "admin", "password": "admin123"}
SAMPLE_ORGANIZATION_CREDENTIALS = {"username": "org1", "password": "org123"}
SAMPLE_ORGANIZATION_NAME = "Sample Organization"
SAMPLE_USER_CREDENTIALS = {"username": "user1", "password": "user123"}


class SeedService:
    """Creates the bootstrap accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _admin_exists(self) -> bool:
        result = await self.db.execute(select(User.id).where(User.role == UserRole.ADMIN))
        return result.first() is not None

    def _add_admin(self) -> None:
        self.db.add(User(
            username=ADMIN_CREDENTIALS["username"],
            password=ADMIN_CREDENTIALS["password"],
            role=UserRole.ADMIN,
            organization_id=None,
            is_active=True,
        ))

    async def create_admin(self) -> Dict[str, str]:
        """
        Create the admin account.

        Raises:
            ConflictException: Any admin user already exists
        """
        if await self._admin_exists():
            raise ConflictException("Admin user already exists.", resource_type="User")

        self._add_admin()
        await self.db.commit()
        logger.info("Seeded admin user")
        return dict(ADMIN_CREDENTIALS)

    async def seed_all(self) -> Dict[str, Dict[str, str]]:
        """Create whichever bootstrap accounts are missing. Safe to repeat."""
        try:
            if not await self._admin_exists():
                self._add_admin()
                logger.info("Seeding admin user")

            existing_org = await self.db.execute(
                select(Organization.id).where(
                    Organization.username == SAMPLE_ORGANIZATION_CREDENTIALS["username"]
                )
            )
            if existing_org.first() is None:
                organization = Organization(
                    name=SAMPLE_ORGANIZATION_NAME,
                    username=SAMPLE_ORGANIZATION_CREDENTIALS["username"],
                    password=SAMPLE_ORGANIZATION_CREDENTIALS["password"],
                    is_active=True,
                )
                self.db.add(organization)
                await self.db.flush()

                self.db.add(User(
                    username=SAMPLE_USER_CREDENTIALS["username"],
                    password=SAMPLE_USER_CREDENTIALS["password"],
                    role=UserRole.USER,
                    organization_id=organization.id,
                    is_active=True,
                ))
                logger.info(f"Seeding sample organization {organization.id} with user")

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return {
            "admin": dict(ADMIN_CREDENTIALS),
            "organization": dict(SAMPLE_ORGANIZATION_CREDENTIALS),
            "user": dict(SAMPLE_USER_CREDENTIALS),
        }
