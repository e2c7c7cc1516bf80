"""
CreativeGroups Payroll - Company Service

Companies registered for PF and/or ESI. A change to the PF or ESI flag
changes which identifiers are mandatory, so updates re-validate the
company's employee master.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company
from app.models.organization import Organization
from app.services.employee_service import EmployeeService
from app.utils.error_handling import (
    CompanyNotFoundException,
    IdMismatchException,
    NotFoundException,
)

logger = logging.getLogger(__name__)


class CompanyService:
    """Service for company management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_companies(self, organization_id: Optional[int] = None) -> List[Company]:
        query = select(Company).where(Company.is_active == True)
        if organization_id is not None:
            query = query.where(Company.organization_id == organization_id)
        result = await self.db.execute(query.order_by(Company.name))
        return list(result.scalars().all())

    async def get_company(self, company_id: int) -> Company:
        company = await self.db.get(Company, company_id)
        if company is None:
            raise CompanyNotFoundException(company_id)
        return company

    async def _check_organization(self, organization_id: Optional[int]) -> None:
        if organization_id is not None and await self.db.get(Organization, organization_id) is None:
            raise NotFoundException("Organization", organization_id)

    async def create_company(
        self,
        name: str,
        pf_enabled: bool = False,
        esi_enabled: bool = False,
        organization_id: Optional[int] = None,
    ) -> Company:
        await self._check_organization(organization_id)

        company = Company(
            name=name.strip(),
            pf_enabled=pf_enabled,
            esi_enabled=esi_enabled,
            organization_id=organization_id,
            is_active=True,
        )
        self.db.add(company)
        await self.db.commit()
        await self.db.refresh(company)

        logger.info(f"Created company {company.id} ({company.name})")
        return company

    async def update_company(self, company_id: int, data: Dict[str, Any]) -> Company:
        """
        Replace a company's fields.

        Raises:
            IdMismatchException: Body id differs from the path id
        """
        if data.get("id") is not None and data["id"] != company_id:
            raise IdMismatchException(company_id, data["id"])

        company = await self.get_company(company_id)
        await self._check_organization(data.get("organization_id"))

        company.name = data["name"].strip()
        company.pf_enabled = data.get("pf_enabled", company.pf_enabled)
        company.esi_enabled = data.get("esi_enabled", company.esi_enabled)
        company.organization_id = data.get("organization_id")
        company.is_active = data.get("is_active", company.is_active)

        error_count = await EmployeeService(self.db).revalidate(company_id)
        await self.db.commit()
        await self.db.refresh(company)

        logger.info(f"Updated company {company_id}; {error_count} employees with errors")
        return company

    async def delete_company(self, company_id: int) -> None:
        """Soft delete."""
        company = await self.get_company(company_id)
        company.is_active = False
        await self.db.commit()
        logger.info(f"Deactivated company {company_id}")
