"""Request timing middleware."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

SLOW_REQUEST_THRESHOLD = 1.0  # seconds

# Multipart recipe writes include the image upload to object storage
SLOW_UPLOAD_THRESHOLD = 5.0  # seconds


class TimingMiddleware(BaseHTTPMiddleware):
    """Report processing time in a response header and warn on slow requests.

    Multipart requests (recipe create/update with an image) are measured
    against ``upload_threshold``; everything else against ``slow_threshold``.
    """

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Process-Time",
        slow_threshold: float = SLOW_REQUEST_THRESHOLD,
        upload_threshold: float = SLOW_UPLOAD_THRESHOLD,
    ) -> None:
        super().__init__(app)
        self.header_name = header_name
        self.slow_threshold = slow_threshold
        self.upload_threshold = upload_threshold

    def threshold_for(self, request: Request) -> float:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith("multipart/form-data"):
            return self.upload_threshold
        return self.slow_threshold

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        elapsed_ms = round(elapsed * 1000, 2)

        response.headers[self.header_name] = f"{elapsed_ms}ms"

        threshold = self.threshold_for(request)
        if elapsed > threshold:
            logger.warning(
                "Slow request detected",
                method=request.method,
                path=request.url.path,
                process_time_ms=elapsed_ms,
                threshold_ms=threshold * 1000,
            )
        return response
