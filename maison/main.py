"""
Maison Catalog API: FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, CORS, exception handlers, routers
       and the process-wide image host; uvicorn serves `maison.main:app`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  CORS → Request ID → Logging           │
    │                                                     │
    │  Routes:                                            │
    │    /api/products       /api/hero-images   /health   │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400  NotFoundError→404           │
    │    UploadError→500  DatabaseError→500               │
    │    anything else→500 (RequestIDMiddleware)          │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, report missing Cloudinary credentials
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from maison import __version__
from maison.config import settings
from maison.database import dispose_engine
from maison.exceptions import (
    DatabaseError,
    MaisonError,
    NotFoundError,
    UploadError,
    ValidationError,
)
from maison.middleware.logging import RequestLoggingMiddleware
from maison.middleware.request_id import RequestIDMiddleware, request_id_var
from maison.routes import health, hero_images, products
from maison.services.cloudinary_service import CloudinaryImageHost
from maison.services.image_host_base import ImageHost

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"]


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by the container runtime)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Maison Catalog API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: listing endpoints and /health still work without uploads
        logger.error("Configuration error: %s", str(e))

    logger.info("Allowed CORS origins: %s", ", ".join(settings.cors_origins_list))
    logger.info("Server ready on %s:%d", settings.backend_host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("Maison Catalog API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and the shared error body.

    Handler hierarchy:
        ValidationError  → 400
        NotFoundError    → 404
        UploadError      → 500 (generic message, context logged)
        DatabaseError    → 500 (generic message, context logged)
        MaisonError      → 500
        anything else    → 500, built by RequestIDMiddleware

    5xx bodies never contain driver or SDK details.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(UploadError)
    async def handle_upload_error(request: Request, exc: UploadError):
        rid = request_id_var.get("")
        logger.error("[%s] Upload error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(MaisonError)
    async def handle_app_error(request: Request, exc: MaisonError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(image_host: Optional[ImageHost] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        image_host: The image host to inject into the routes. Defaults to a
                    CloudinaryImageHost built from settings.
    """
    app = FastAPI(
        title="Maison Catalog API",
        description="Product catalog and hero image carousel backed by Cloudinary-hosted images.",
        version=__version__,
        lifespan=lifespan,
    )

    # One credential set per process, shared by every request
    app.state.image_host = image_host or CloudinaryImageHost(settings)

    # Last added executes first: CORS → RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)

    app.include_router(products.router)
    app.include_router(hero_images.router)
    app.include_router(health.router)

    return app


app = create_app()
