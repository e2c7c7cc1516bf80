"""
CreativeGroups Payroll - FastAPI Application Entry Point

This is the main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import init_db, close_db
from app.utils.error_handling import setup_exception_handlers
from app.routers import (
    auth,
    organizations,
    users,
    companies,
    employees,
    payroll,
    payroll_upload,
    seed,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.app_env}")

    # Initialize database (dev only - use migrations in production)
    if settings.is_development:
        await init_db()
        logger.info("Database tables initialized")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await close_db()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="PF and ESI statutory compliance for monthly payroll",
    version="0.1.0",
    docs_url="/api/docs" if settings.is_development else None,
    redoc_url="/api/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.app_env,
    }


# ===========================================
# API ROUTERS
# ===========================================

api = settings.api_prefix

app.include_router(auth.router, prefix=f"{api}/auth", tags=["Authentication"])
app.include_router(seed.router, prefix=f"{api}/seed", tags=["Seed"])
app.include_router(organizations.router, prefix=f"{api}/organizations", tags=["Organizations"])
app.include_router(users.router, prefix=f"{api}/users", tags=["Users"])
app.include_router(companies.router, prefix=f"{api}/companies", tags=["Companies"])
app.include_router(employees.router, prefix=f"{api}/employees", tags=["Employees"])
app.include_router(payroll.router, prefix=f"{api}/payroll", tags=["Payroll Months"])
app.include_router(payroll_upload.router, prefix=f"{api}/payroll-upload", tags=["Payroll Upload & Reports"])
