"""
Rate Limiting Middleware - Protect the API from abuse.

Applied to the expensive endpoints (bulk creation). Switched off with
RATE_LIMIT_ENABLED=false.
"""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..core.config import RATE_LIMIT_ENABLED, RATE_LIMIT_PER_HOUR, RATE_LIMIT_PER_MINUTE
from ..core.logging_config import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """
    Get rate limit key for request.

    Clients presenting an API key share one bucket per key; everyone else
    is limited by IP address.
    """
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"api_key:{api_key}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_rate_limit_key,
    enabled=RATE_LIMIT_ENABLED
)

if not RATE_LIMIT_ENABLED:
    logger.info("Rate limiting disabled")

# Per-minute and per-hour limits for the bulk endpoints
rate_limit_bulk = limiter.limit(f"{RATE_LIMIT_PER_MINUTE}/minute;{RATE_LIMIT_PER_HOUR}/hour")
