"""
FastAPI Application Entry Point

Multi-tenant restaurant storefront.

Endpoints:
    - GET /api/menu/{tenant}: Tenant menu (categories, active products, modifiers)
    - GET /pedir/{tenant}: Server-rendered menu page
    - GET /health: System health check
"""

import logging
from datetime import datetime
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse, HTMLResponse
from fastapi.templating import Jinja2Templates
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from storefront.core.config import get_settings, setup_logging
from storefront.core.money import format_cents, format_delta
from storefront.database import get_db, init_db, engine
from storefront.schemas import MenuResponse, ErrorResponse, HealthResponse
from storefront.services.menu import get_menu, TenantNotFoundError

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

# Template configuration
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["euros"] = format_cents
templates.env.filters["delta"] = format_delta


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} {settings.app_version} ({settings.env_mode.value})")

    await init_db()

    yield  # Application runs

    logger.info("Shutting down...")
    await engine.dispose()


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Multi-tenant restaurant ordering storefront: menu API and storefront pages.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    db: AsyncSession = Depends(get_db)
) -> HealthResponse:
    """Verify the database is reachable."""
    db_status = "healthy"
    try:
        await db.execute(select(1))
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    return HealthResponse(
        status="operational" if db_status == "healthy" else "degraded",
        database=db_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@app.get(
    "/api/menu/{tenant}",
    response_model=MenuResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Menu"],
    summary="Tenant Menu",
)
async def read_menu(
    tenant: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Return the tenant with its categories and active products.

    Categories are ordered by (sortOrder, name); products by name.
    """
    try:
        menu = await get_menu(db, tenant)
    except TenantNotFoundError:
        logger.info(f"Menu requested for unknown tenant: {tenant}")
        return JSONResponse(status_code=404, content={"error": "Tenant not found"})
    except Exception as e:
        logger.exception(f"Error loading menu for {tenant}: {e}")
        return JSONResponse(status_code=500, content={"error": "Internal error"})

    return JSONResponse(
        content=menu.model_dump(mode="json", by_alias=True),
        headers={"Cache-Control": "no-store"},
    )


@app.get(
    "/pedir/{tenant}",
    response_class=HTMLResponse,
    tags=["Storefront"],
)
async def menu_page(
    request: Request,
    tenant: str,
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """Serve the read-only menu page of a tenant."""
    try:
        menu = await get_menu(db, tenant)
    except TenantNotFoundError:
        return templates.TemplateResponse(
            request,
            "error.html",
            {"title": "Tenant not found", "message": f"No restaurant named '{tenant}'."},
            status_code=404,
        )
    except Exception as e:
        logger.exception(f"Error rendering menu page for {tenant}: {e}")
        return templates.TemplateResponse(
            request,
            "error.html",
            {"title": "Menu unavailable", "message": "The menu could not be loaded."},
            status_code=500,
        )

    return templates.TemplateResponse(request, "menu.html", {"menu": menu})


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )
