"""Global error handling middleware.

This module provides centralized exception handling with
structured JSON responses and request tracking. Every error body has
the same shape::

    {"error": "...", "details": {...}, "request_id": "..."}
"""

import logging
import traceback
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from urbanliving.core.exceptions import AppException

logger = logging.getLogger(__name__)


def _error_response(
    request_id: str, status_code: int, message: str, details: dict
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "details": details, "request_id": request_id},
        headers={"X-Request-ID": request_id},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for catching and formatting unhandled exceptions.

    Assigns the request ID used by the exception handlers and the
    request logger, and turns anything that escapes the route into a
    generic 500 response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        except AppException as exc:
            logger.warning(f"Application error [{request_id}]: {exc.message}")
            return _error_response(request_id, exc.status_code, exc.message, exc.details)

        except Exception as exc:
            logger.error(
                f"Unhandled exception [{request_id}] on {request.method} "
                f"{request.url.path}: {exc}\n{traceback.format_exc()}"
            )
            return _error_response(request_id, 500, "Internal server error", {})


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure global exception handlers for the FastAPI app.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        request_id = getattr(request.state, "request_id", "unknown")
        if exc.status_code >= 500:
            logger.error(f"Application error [{request_id}]: {exc.message} {exc.details}")
        else:
            logger.info(f"Rejected request [{request_id}]: {exc.status_code} {exc.message}")
        return _error_response(request_id, exc.status_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed bodies, params and form fields as 400."""
        request_id = getattr(request.state, "request_id", "unknown")
        return _error_response(
            request_id,
            400,
            "Validation error",
            {"errors": jsonable_encoder(exc.errors())},
        )
