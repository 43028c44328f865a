"""
Terminal error translation.

Sits just inside the origin policy so that 500 answers still carry the
CORS headers an allowed browser needs to read them.
"""

import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from winajaya.core.config import Settings
from winajaya.core.errors import internal_error_response

logger = logging.getLogger(__name__)


class ErrorResponseMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, settings: Settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "Server error on %s %s: %s",
                request.method,
                request.url.path,
                exc,
                exc_info=exc,
            )
            return internal_error_response(exc, self.settings)
