"""
Rate limiting with slowapi.

One process-wide ``Limiter`` keyed by client IP. Limits are declared per
route with ``@limiter.limit(RateLimitConfig.X)``; decorated endpoints must
take a ``request: Request`` argument for slowapi to find the client.
"""

import logging

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


def get_ip_address(request: Request) -> str:
    """
    Client IP for rate limiting.

    X-Forwarded-For is trusted because production runs behind a proxy
    that overwrites it.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"


limiter = Limiter(key_func=get_ip_address)


class RateLimitConfig:
    """Rate limits per kind of endpoint."""

    READ = "100/minute"
    WRITE = "20/minute"
    DELETE = "10/minute"

    # Uploads decode and re-encode up to 10 images each
    UPLOAD = "10/minute"

    # Public lead form
    LEAD_SUBMIT = "5/minute"

    AUTH_ATTEMPT = "5/minute"


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Return 429 with Retry-After in the application's error shape."""
    logger.warning(f"Rate limit exceeded: {get_ip_address(request)} on {request.url.path}")

    retry_after = 60
    request_id = getattr(request.state, "request_id", "unknown")
    response = JSONResponse(
        status_code=429,
        content={
            "error": f"Rate limit exceeded: {exc.detail}",
            "details": {"retry_after": retry_after},
            "request_id": request_id,
        },
    )
    response.headers["Retry-After"] = str(retry_after)
    response.headers["X-RateLimit-Limit"] = str(exc.detail).split()[0]
    response.headers["X-RateLimit-Remaining"] = "0"
    return response
