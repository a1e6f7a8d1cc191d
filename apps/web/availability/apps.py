"""Django app configuration for ingredient availability sync."""

import atexit
import logging
import threading
from typing import TYPE_CHECKING

from django.apps import AppConfig
from django.conf import settings

if TYPE_CHECKING:
    from apps.web.availability.context import SyncContext

logger = logging.getLogger(__name__)


class AvailabilityConfig(AppConfig):
    """Availability app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.availability"
    verbose_name = "Ingredient Availability"

    _sync_context: "SyncContext | None" = None
    _sync_context_lock = threading.Lock()

    def ready(self) -> None:
        if settings.DELIVERY_PROVIDER == "uber_eats" and not (
            settings.UBER_EATS_STORE_ID and settings.UBER_EATS_ACCESS_TOKEN
        ):
            logger.warning(
                "Uber Eats credentials not configured - "
                "set UBER_EATS_STORE_ID and UBER_EATS_ACCESS_TOKEN"
            )

    @property
    def sync_context(self) -> "SyncContext":
        """
        The process-wide sync context, built on first use.

        Closed automatically at interpreter exit.
        """
        if self._sync_context is None:
            with self._sync_context_lock:
                if self._sync_context is None:
                    from apps.web.availability.context import (  # noqa: PLC0415
                        SyncContext,
                    )

                    context = SyncContext.from_settings()
                    atexit.register(context.close)
                    self._sync_context = context
        return self._sync_context
