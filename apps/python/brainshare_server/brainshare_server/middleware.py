from __future__ import annotations

import time

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One log line per request: method, path, status and latency."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        duration = (time.perf_counter() - start) * 1000
        logger.info(
            "{method} {path} {status} {duration:.2f} ms",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration=duration,
        )
        return response
