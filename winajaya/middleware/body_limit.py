"""
Request body size limit for JSON and urlencoded payloads.

Oversized bodies are refused outright, never truncated: a declared
Content-Length over the limit fails before the app runs, and chunked
bodies fail as soon as the running byte count passes it. Either way a
PayloadTooLargeError propagates to the error middleware like any other
body parsing failure.
"""

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from winajaya.core.errors import MalformedBodyError, PayloadTooLargeError

METHODS_WITH_BODY = {"POST", "PUT", "PATCH", "DELETE"}


class BodySizeLimitMiddleware:
    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in METHODS_WITH_BODY:
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                raise MalformedBodyError(f"Invalid Content-Length: {content_length}")
            if declared > self.max_body_size:
                raise PayloadTooLargeError(self.max_body_size)

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    raise PayloadTooLargeError(self.max_body_size)
            return message

        await self.app(scope, limited_receive, send)
