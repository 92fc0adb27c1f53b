"""
Host Lifecycle Middleware for FastAPI.

Each HTTP request is one host request cycle:

- a ``RequestScope`` with the request cookies and a ``PendingCookieWriter`` is
  built and stored on ``request.state.gluon``,
- the plugin fires ``init`` with that scope,
- the route runs,
- queued cookies are copied onto the response and the writer is sealed, so a
  write attempted after this point fails instead of being lost silently.

Request metrics are logged the same way for every request.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from sparxstar_gluon.core.logging_config import get_logger
from sparxstar_gluon.core.monitoring import log_api_request
from sparxstar_gluon.plugin import GluonPlugin
from sparxstar_gluon.session.cookies import PendingCookieWriter, RequestScope

logger = get_logger(__name__)

SLOW_REQUEST_MS = 1000


class HostLifecycleMiddleware(BaseHTTPMiddleware):
    """Fires the plugin's per-request hooks and applies queued cookies."""

    def __init__(self, app: ASGIApp, plugin: GluonPlugin) -> None:
        super().__init__(app)
        self.plugin = plugin

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request inside one host request cycle.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware/handler

        Returns:
            The HTTP response, carrying any cookie queued during ``init``
        """
        start_time = time.time()
        method = request.method
        path = request.url.path

        writer = PendingCookieWriter()
        scope = RequestScope(cookies=dict(request.cookies), writer=writer)
        request.state.gluon = scope

        try:
            self.plugin.handle_request_init(scope)
            response = await call_next(request)
        except Exception as e:
            writer.seal()
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"API request failed: {method} {path}",
                exc_info=True,
                extra={"method": method, "path": path, "duration_ms": duration_ms, "error": str(e)},
            )
            log_api_request(method=method, path=path, status_code=500, duration_ms=duration_ms)
            raise

        written = writer.flush(response)
        if written:
            logger.debug(f"Attached {written} cookie(s) to {method} {path}")

        duration_ms = (time.time() - start_time) * 1000
        log_api_request(method=method, path=path, status_code=response.status_code, duration_ms=duration_ms)
        response.headers["X-Process-Time"] = str(duration_ms)

        if duration_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                extra={"method": method, "path": path, "duration_ms": duration_ms, "status_code": response.status_code},
            )

        return response
