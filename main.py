"""
Storefront Bridge main application.

FastAPI application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import structlog
from datetime import datetime

from config import settings
from integrations.shopify import close_catalog_client
from services.sku_cache_service import get_sku_cache

SERVICE_NAME = "Storefront Bridge: source -> target store integration"
VERSION = "2.0.0"

logging.basicConfig(format="%(message)s", level=settings.log_level)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer() if settings.is_production
            else structlog.dev.ConsoleRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: Log store configuration, start the SKU cache sweep
    Shutdown: Stop the sweep, close the shared HTTP client
    """
    # Startup
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug,
        port=settings.api_port
    )
    logger.info(
        "stores_configured",
        source=settings.source_store_domain or "not configured",
        target=settings.target_store_domain or "not configured"
    )

    cache = get_sku_cache()
    cache.start_sweeper()

    yield

    # Shutdown
    logger.info("application_shutting_down")
    await cache.stop_sweeper()
    await close_catalog_client()


# Create FastAPI app
app = FastAPI(
    title="Storefront Bridge",
    description="Cross-store SKU reconciliation and checkout translation",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================
# ROUTES
# ===================

@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        Static liveness payload
    """
    return {
        "status": "online",
        "service": SERVICE_NAME,
        "version": VERSION,
        "features": ["Pre-mapped products", "SKU-based matching", "Cache system"]
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Basic health status and which stores are configured
    """
    configured = {
        "source": settings.source_store is not None,
        "target": settings.target_store is not None,
    }
    return {
        "status": "healthy" if all(configured.values()) else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "environment": settings.environment,
        "stores_configured": configured,
        "cache_entries": get_sku_cache().size
    }


# ===================
# ERROR HANDLERS
# ===================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Catches unhandled exceptions and returns standard error format.
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": str(exc) if settings.debug else "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# ===================
# INCLUDE ROUTERS
# ===================
from routes.checkout import router as checkout_router
from routes.products import router as products_router
from routes.diagnostics import router as diagnostics_router

app.include_router(checkout_router, prefix="/api", tags=["Checkout"])
app.include_router(products_router, prefix="/api/products", tags=["Products"])
app.include_router(diagnostics_router, prefix="/api", tags=["Diagnostics"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
