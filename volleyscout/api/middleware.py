"""
API Middleware — Request logging tagged with the live match being scouted.
"""

from __future__ import annotations
import time
import uuid
import logging
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("volleyscout.api")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every API call with its match id, status and duration.

    The match id comes from the resolved route's path parameters, so it is
    only known once the request has been routed.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        match_id = request.scope.get("path_params", {}).get("match_id")
        logger.info(
            "[%s] match=%s %s %s -> %d (%.1fms)",
            request_id, match_id or "-", request.method, request.url.path,
            response.status_code, elapsed_ms,
        )

        response.headers["X-Request-ID"] = request_id
        if match_id:
            response.headers["X-Match-ID"] = match_id
        return response
