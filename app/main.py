# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the AutoInsta dashboard API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.exceptions import (
    DashboardException,
    dashboard_exception_handler,
    validation_exception_handler,
)
from app.routers import health, uploads, assets, prompt, profile, schedule, posts

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the configuration that matters when diagnosing a deployment.
    No background tasks are started.
    """
    logger.info(f"Starting AutoInsta API in {settings.ENVIRONMENT} mode")
    logger.info(
        f"Buckets: assets={settings.ASSETS_BUCKET} videos={settings.VIDEOS_BUCKET} "
        f"products={settings.PRODUCTS_BUCKET}"
    )
    logger.info(f"Smart filenames: format={settings.FILENAME_FORMAT} provider={settings.VISION_PROVIDER}")
    if not settings.n8n_configured:
        logger.warning("n8n not configured; schedule updates will return 501")

    yield

    logger.info("Shutting down AutoInsta API")


# Create FastAPI application
app = FastAPI(
    title="AutoInsta API",
    description="""
## Business Dashboard API

Backs the AutoInsta dashboard: assets, business profile, scheduled posting
and AI helpers.

### Features

| Area | Endpoints |
|------|-----------|
| **Uploads** | Smart-named asset / video uploads, product uploads |
| **Assets** | Bucket listings, product deletion |
| **Prompt** | Instagram product-post prompt builder |
| **Profile** | Single-row business profile |
| **Schedule** | n8n trigger hours, run-now |
| **Posts** | Planned posts |
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Uploads", "description": "Upload images to storage buckets"},
        {"name": "Assets", "description": "List and delete stored objects"},
        {"name": "Prompt", "description": "Build prompts for post generation"},
        {"name": "Profile", "description": "Business profile"},
        {"name": "Schedule", "description": "Posting schedule and manual runs"},
        {"name": "Posts", "description": "Planned posts"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(DashboardException)
async def handle_dashboard_exception(request: Request, exc: DashboardException):
    """Handle custom dashboard exceptions."""
    return await dashboard_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and query strings."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

API_PREFIX = "/api/v1"

app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(uploads.router, prefix=API_PREFIX, tags=["Uploads"])
app.include_router(assets.router, prefix=API_PREFIX, tags=["Assets"])
app.include_router(prompt.router, prefix=API_PREFIX, tags=["Prompt"])
app.include_router(profile.router, prefix=API_PREFIX, tags=["Profile"])
app.include_router(schedule.router, prefix=API_PREFIX, tags=["Schedule"])
app.include_router(posts.router, prefix=API_PREFIX, tags=["Posts"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "AutoInsta API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
