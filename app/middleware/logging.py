"""Request/response logging middleware."""

import logging
import time
from typing import Any, Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.request_context import generate_request_id, set_request_id, set_user_id

logger = logging.getLogger(__name__)

SENSITIVE_KEYS = ("api_key", "password", "token", "secret", "auth", "code", "state")


def mask_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Mask values whose keys look like credentials (OAuth codes included)."""
    masked: Dict[str, Any] = {}
    for key, value in data.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            masked[key] = "***"
        else:
            masked[key] = value
    return masked


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses with timing.

    Request bodies are not logged; route handlers log the parameters they
    care about.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log details."""
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)
        set_user_id("")
        request.state.request_id = request_id

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        logger.info(
            f"API Request: {method} {path}",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "query": mask_sensitive_data(dict(request.query_params)),
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent", "Unknown"),
            },
        )

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"API Error: {method} {path}",
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        logger.info(
            f"API Response: {method} {path} - {response.status_code}",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "user_id": getattr(request.state, "user_id", None),
                "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )

        response.headers["X-Request-ID"] = request_id
        return response
