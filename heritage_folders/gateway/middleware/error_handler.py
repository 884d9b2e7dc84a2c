"""
Error Handling Middleware

Catch-all for exceptions nothing else handled. Engine errors are turned
into responses by the gateway's exception handler before they get here.
"""
import traceback

from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ...core.config import ENVIRONMENT
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Converts unexpected exceptions into a 500 JSON response.
    The exception text and traceback are only included outside production.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            is_development = ENVIRONMENT != "production"
            error_traceback = traceback.format_exc() if is_development else None

            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}", exc_info=True)

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "InternalError",
                    "message": str(e) if is_development else "Internal server error",
                    "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
                    "path": request.url.path,
                    "request_id": getattr(request.state, "request_id", None),
                    "traceback": error_traceback
                }
            )
