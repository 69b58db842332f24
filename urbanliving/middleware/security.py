"""
Security Middleware - HTTP security headers and request logging.

Security headers are a cheap browser-enforced layer on top of the API's
own checks. Headers are applied to every response, including the photo
files served from the static mount.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all HTTP responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        # nosniff: serve uploaded photos strictly as their declared type
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store, no-cache, max-age=0"

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every API request with status and timing.

    Only ``/api`` paths are logged; static photo hits and health probes
    would drown the useful lines. API keys are masked to their first 4
    characters.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.url.path.startswith("/api"):
            return await call_next(request)

        start_time = time.time()
        request_id = getattr(request.state, "request_id", "-")
        client_ip = request.client.host if request.client else "unknown"
        api_key = request.headers.get("x-api-key", "")
        masked_key = f"{api_key[:4]}..." if api_key else "none"

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        log_data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip,
            "api_key": masked_key,
        }

        if response.status_code >= 500:
            logger.error(f"Request: {log_data}")
        elif response.status_code >= 400:
            logger.warning(f"Request: {log_data}")
        else:
            logger.info(f"Request: {log_data}")

        return response
