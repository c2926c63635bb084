"""Request/response logging middleware."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_share.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

PROBE_PATHS = ("/health", "/ready", "/metrics")


def completion_level(status_code: int) -> str:
    """Log level for a finished request: WARNING for 401/403, ERROR for 5xx."""
    if status_code >= 500:
        return "ERROR"
    if status_code in (401, 403):
        return "WARNING"
    return "INFO"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line when a request starts and one when it completes.

    Probe endpoints mounted under ``prefix`` are not logged.
    """

    def __init__(self, app: ASGIApp, *, prefix: str = "") -> None:
        super().__init__(app)
        self.exclude_paths = {f"{prefix}{path}" for path in PROBE_PATHS}
        self.exclude_paths.add("/favicon.ico")

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = request.url.path
        if path in self.exclude_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=path,
            client_ip=self._get_client_ip(request),
        )
        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        response = await call_next(request)

        logger.log(
            completion_level(response.status_code),
            "Request completed",
            status_code=response.status_code,
        )
        return response

    @staticmethod
    def _get_client_ip(request: Request) -> str:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            # First hop is the original client
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host
        return "unknown"
