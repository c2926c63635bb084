"""HTTP middleware stack."""

from recipe_share.core.middleware.logging import LoggingMiddleware
from recipe_share.core.middleware.request_id import RequestIDMiddleware
from recipe_share.core.middleware.security_headers import SecurityHeadersMiddleware
from recipe_share.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimingMiddleware",
]
