"""Health check endpoint."""

from datetime import UTC, datetime

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET


@require_GET
def health(_request: HttpRequest) -> JsonResponse:
    """GET /health - liveness probe."""
    return JsonResponse(
        {"status": "healthy", "timestamp": datetime.now(UTC).isoformat()}
    )
