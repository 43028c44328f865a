"""
Per-request access log.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("winajaya.requests")


def iso_timestamp(moment: datetime | None = None) -> str:
    """UTC timestamp with millisecond precision and a trailing Z."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger.info("%s - %s %s", iso_timestamp(), request.method, request.url.path)
        logger.info("Origin: %s", request.headers.get("origin") or "none")
        return await call_next(request)
