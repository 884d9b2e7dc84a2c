"""
API Gateway

Main gateway class that orchestrates routing, middleware, and API versioning.
Acts as the single entry point for all API requests.
"""
from typing import List, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ..api.dto import ErrorResponseDTO
from ..api.exceptions import FolderEngineError, handle_business_exception
from ..core.config import CORS_ORIGINS, ENVIRONMENT
from ..core.logging_config import get_logger
from ..middleware.rate_limit import limiter
from .middleware import ErrorHandlingMiddleware, RequestIDMiddleware, RequestLoggingMiddleware
from .versioning import APIVersion, VersionRouter

logger = get_logger(__name__)


async def folder_engine_error_handler(request: Request, exc: FolderEngineError) -> JSONResponse:
    """Render an engine error as the standard error body."""
    http_exception = handle_business_exception(exc)
    if http_exception.status_code >= 500:
        logger.error(f"{exc.kind} for {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.kind} for {request.method} {request.url.path}: {exc.message}")

    body = ErrorResponseDTO(
        **http_exception.detail,
        status_code=http_exception.status_code,
        path=request.url.path,
        request_id=getattr(request.state, "request_id", None)
    )
    return JSONResponse(status_code=http_exception.status_code, content=body.model_dump())


class APIGateway:
    """
    API Gateway that manages routing, middleware, and API versioning.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, rate limiting, logging, error handling)
    - Manage API versioning
    - Register routers
    - Provide health check endpoints
    """

    def __init__(
        self,
        title: str = "Heritage Folders API",
        description: str = "Folder hierarchy engine for heritage site documents",
        version: str = "1.0.0",
        enable_docs: Optional[bool] = None
    ):
        """
        Initialize API Gateway.

        Args:
            title: API title
            description: API description
            version: API version
            enable_docs: Enable API docs (auto-detected from ENVIRONMENT if None)
        """
        self.title = title
        self.description = description
        self.version = version
        self.enable_docs = enable_docs if enable_docs is not None else ENVIRONMENT != "production"

        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url="/docs" if self.enable_docs else None,
            redoc_url="/redoc" if self.enable_docs else None
        )

        self.version_router = VersionRouter()

        self.limiter = limiter
        self.app.state.limiter = self.limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
        self.app.add_exception_handler(FolderEngineError, folder_engine_error_handler)

        logger.info("API Gateway initialized")

    def setup_middleware(self):
        """Configure all middleware."""
        logger.info("Setting up middleware...")

        # Added first so it sits innermost and still sees the request id
        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  -> Error handling middleware added")

        self.app.add_middleware(
            RequestLoggingMiddleware,
            skip_paths=["/health", "/ready", "/docs", "/redoc", "/openapi.json"]
        )
        logger.debug("  -> Request logging middleware added")

        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  -> Request ID middleware added")

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.debug(f"  -> CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")

        logger.info("All middleware configured")

    def register_router(
        self,
        router: APIRouter,
        prefix: str = "",
        tags: Optional[List[str]] = None,
        version: Optional[APIVersion] = None
    ):
        """
        Register a router with the gateway.

        Args:
            router: FastAPI router instance
            prefix: URL prefix for the router (e.g., "/api")
            tags: OpenAPI tags for documentation
            version: API version; the router is then served under /<version><prefix>
        """
        if version:
            full_prefix = f"/{version.value}{prefix}"
            self.app.include_router(router, prefix=full_prefix, tags=tags or [])
            self.version_router.register(version, router)
            logger.info(f"Registered router with version {version.value} at prefix '{full_prefix}'")
        else:
            self.app.include_router(router, prefix=prefix, tags=tags or [])
            logger.info(f"Registered router at prefix '{prefix}'")

    def register_health_endpoints(self):
        """Register root, liveness and readiness endpoints."""

        @self.app.get("/")
        async def root():
            """Root endpoint - API information."""
            return {
                "message": f"{self.title} is running",
                "version": self.version,
                "status": "healthy",
                "api_versions": [v.value for v in self.version_router.get_all_versions()]
            }

        @self.app.get("/health")
        async def health_check():
            """
            Liveness probe.
            Returns 200 when the database and folder service are up, 503 otherwise.
            """
            from ..routers import dependencies

            if dependencies.db_service is None:
                logger.warning("Health check failed: Database not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "reason": "Database not initialized"}
                )
            if dependencies.folder_service is None:
                logger.warning("Health check failed: Services not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "reason": "Services not initialized"}
                )
            return {"status": "healthy", "database": "connected", "services": "initialized"}

        @self.app.get("/ready")
        async def readiness_check():
            """Readiness probe: verifies the store answers a query."""
            from ..routers import dependencies

            if dependencies.db_service is None:
                logger.warning("Readiness check failed: Database not initialized")
                return JSONResponse(status_code=503, content={"ready": False, "reason": "Database not initialized"})
            try:
                await dependencies.db_service.get_all_folders()
            except Exception as e:
                logger.error(f"Readiness check failed: {e}", exc_info=True)
                return JSONResponse(status_code=503, content={"ready": False, "reason": str(e)})
            return {"ready": True}

        logger.info("Health check endpoints registered")

    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app
