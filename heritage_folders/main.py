import sys

from .core.config import (
    CORS_ORIGINS,
    DATABASE_TYPE,
    DOCUMENT_CASCADE_POLICY,
    ENVIRONMENT,
    RATE_LIMIT_ENABLED,
    RATE_LIMIT_PER_HOUR,
    RATE_LIMIT_PER_MINUTE,
)
from .core.logging_config import get_logger, setup_logging
from .gateway import APIGateway, APIVersion
from .routers import folders
from .routers.dependencies import initialize_database, initialize_services, shutdown_services

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize API Gateway
gateway = APIGateway(
    title="Heritage Folders API",
    description="Folder hierarchy engine for heritage site documents",
    version="1.0.0"
)

# Setup middleware (CORS, logging, error handling)
gateway.setup_middleware()

# Versioned and unversioned mounts of the same routes
gateway.register_router(folders.router, prefix="/api", tags=["Folders"], version=APIVersion.V1)
gateway.register_router(folders.router, prefix="/api", tags=["Folders"])

gateway.register_health_endpoints()

app = gateway.get_app()


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("=" * 60)
    logger.info("Starting Heritage Folders service...")
    logger.info("=" * 60)

    import fastapi
    logger.info(f"  -> FastAPI Version: {fastapi.__version__}")
    logger.info(f"  -> Python Version: {sys.version.split()[0]}")
    logger.info(f"  -> Environment: {ENVIRONMENT}")
    logger.info(f"  -> Docs URL: {app.docs_url if app.docs_url else 'Disabled (production)'}")
    logger.info(f"  -> Database Backend: {DATABASE_TYPE.upper()}")
    logger.info(f"  -> Document cascade policy: {DOCUMENT_CASCADE_POLICY}")
    logger.info(f"  -> CORS Origins: {', '.join(CORS_ORIGINS)}")
    logger.info(f"  -> Rate Limiting: {RATE_LIMIT_ENABLED}")
    if RATE_LIMIT_ENABLED:
        logger.info(f"     {RATE_LIMIT_PER_MINUTE} requests/minute, {RATE_LIMIT_PER_HOUR} requests/hour")

    await initialize_database()
    await initialize_services()

    logger.info("API Endpoints:")
    logger.info("  -> Folders: /api/folders/* and /v1/api/folders/*")
    logger.info(f"  -> Total Routes: {len(app.routes)}")
    logger.info("Heritage Folders service initialized successfully")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down Heritage Folders service...")
    await shutdown_services()
    logger.info("Heritage Folders service shutdown complete")
