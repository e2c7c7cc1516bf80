"""
CreativeGroups Payroll - Test Configuration

Pytest fixtures and configuration.
"""

from datetime import date
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_async_session
from app.models import Company, Employee, Organization, PayrollMonth
from main import app


# In-memory database shared by every connection of one test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ===========================================
# DATA FIXTURES
# ===========================================

@pytest_asyncio.fixture
async def test_organization(db_session: AsyncSession) -> Organization:
    """Create a test organization."""
    org = Organization(name="Test Organization", username="testorg", password="orgpass")
    db_session.add(org)
    await db_session.commit()
    await db_session.refresh(org)
    return org


@pytest_asyncio.fixture
async def test_company(db_session: AsyncSession, test_organization: Organization) -> Company:
    """Company registered for both PF and ESI."""
    company = Company(
        name="Acme Textiles",
        pf_enabled=True,
        esi_enabled=True,
        organization_id=test_organization.id,
    )
    db_session.add(company)
    await db_session.commit()
    await db_session.refresh(company)
    return company


@pytest_asyncio.fixture
async def test_month(db_session: AsyncSession, test_company: Company) -> PayrollMonth:
    """August payroll month with 31 days."""
    month = PayrollMonth(company_id=test_company.id, month="August 2025", total_days=31)
    db_session.add(month)
    await db_session.commit()
    await db_session.refresh(month)
    return month


@pytest_asyncio.fixture
async def test_employees(db_session: AsyncSession, test_company: Company) -> list:
    """
    Three valid employees:
    - Asha: active, PF and ESI
    - Bala: active, PF and ESI "NIL"
    - Chitra: left on 15 Aug 2025
    """
    employees = [
        Employee(
            company_id=test_company.id,
            name="Asha",
            pf_number="PF001",
            esi_number="ESI001",
            joining_date=date(2020, 1, 1),
        ),
        Employee(
            company_id=test_company.id,
            name="Bala",
            pf_number="PF002",
            esi_number="NIL",
            joining_date=date(2021, 6, 1),
        ),
        Employee(
            company_id=test_company.id,
            name="Chitra",
            pf_number="PF003",
            esi_number="ESI003",
            joining_date=date(2019, 3, 1),
            leaving_date=date(2025, 8, 15),
        ),
    ]
    db_session.add_all(employees)
    await db_session.commit()
    for employee in employees:
        await db_session.refresh(employee)
    return employees
