"""
Request logging middleware - one log line per request.
"""

import logging
import time
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Middleware that logs method, path, status and duration of each request.

    Admin and static asset requests are not logged.
    """

    SKIP_PREFIXES = ("/admin/", "/static/")

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if request.path.startswith(self.SKIP_PREFIXES):
            return self.get_response(request)

        start_time = time.monotonic()
        response = self.get_response(request)
        duration_ms = int((time.monotonic() - start_time) * 1000)

        logger.info(
            "%s %s -> %d (%dms)",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
        )
        return response
