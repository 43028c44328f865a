"""
Origin allow-list enforcement.

Requests without an Origin header, or with one on the allow-list, go
through with credential support advertised. Anything else is answered
with a 403 before it reaches the rest of the stack, except on exempt
paths (the liveness probe), which are served without CORS headers.
"""

import logging
from typing import Callable, Iterable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from winajaya.core.errors import CORSError, cors_error_response

logger = logging.getLogger(__name__)

PREFLIGHT_SUCCESS_STATUS = 200


class OriginPolicyMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        allowed_origins: Iterable[str],
        allow_methods: Iterable[str],
        allow_headers: Iterable[str],
        exempt_paths: Iterable[str] = (),
    ):
        super().__init__(app)
        self.allowed_origins = list(allowed_origins)
        self.allow_methods = ",".join(allow_methods)
        self.allow_headers = ",".join(allow_headers)
        self.exempt_paths = set(exempt_paths)

    def is_origin_allowed(self, origin: str | None) -> bool:
        return not origin or origin in self.allowed_origins

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        origin = request.headers.get("origin")

        if not self.is_origin_allowed(origin):
            if request.url.path in self.exempt_paths:
                return await call_next(request)

            logger.warning("Rejected request from origin %s", origin)
            return cors_error_response(CORSError())

        if request.method == "OPTIONS":
            response = Response(status_code=PREFLIGHT_SUCCESS_STATUS)
            response.headers["Access-Control-Allow-Methods"] = self.allow_methods
            response.headers["Access-Control-Allow-Headers"] = self.allow_headers
        else:
            response = await call_next(request)

        self._apply_headers(response, origin)
        return response

    @staticmethod
    def _apply_headers(response: Response, origin: str | None) -> None:
        if origin:
            response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers.append("Vary", "Origin")
