"""
Request logging middleware.

Pure ASGI middleware (not BaseHTTPMiddleware) so uploads and streaming
responses pass through untouched. Logs method, path, status and duration.
"""

import logging
import time
from typing import Optional
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Logs one line per HTTP request, at WARNING for 4xx and ERROR for 5xx."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[list] = None):
        """
        Args:
            app: The ASGI application
            exclude_paths: Paths that are never logged (e.g., ["/health"])
        """
        self.app = app
        self.exclude_paths = set(exclude_paths or ["/health", "/"])

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.time() - start_time) * 1000
            if status_code >= 500:
                level = logging.ERROR
            elif status_code >= 400:
                level = logging.WARNING
            else:
                level = logging.INFO

            logger.log(
                level,
                f"{scope.get('method', '')} {scope.get('path', '')} -> {status_code} ({duration_ms:.1f}ms)",
                extra={"extra_fields": {
                    "method": scope.get("method"),
                    "path": scope.get("path"),
                    "query": scope.get("query_string", b"").decode("latin-1"),
                    "status_code": status_code,
                    "duration_ms": round(duration_ms, 2),
                }}
            )
