"""Custom middleware components."""

from recipe_finder.core.middleware.csrf import CSRFMiddleware
from recipe_finder.core.middleware.logging import LoggingMiddleware
from recipe_finder.core.middleware.request_id import RequestIDMiddleware
from recipe_finder.core.middleware.security_headers import SecurityHeadersMiddleware
from recipe_finder.core.middleware.timing import TimingMiddleware


__all__ = [
    "CSRFMiddleware",
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimingMiddleware",
]
