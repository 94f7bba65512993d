# configapi/middleware/request_logger.py
# Access log: one line per request with status and duration

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from configapi.observability.logger import access_logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log `METHOD path | status | duration` to the access logger."""

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        access_logger.info(
            f"{request.method} {request.url.path} | {response.status_code} | {duration_ms:.1f}ms",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
