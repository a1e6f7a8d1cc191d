"""Availability services - 86/restore, status queries, menu sync."""

from apps.web.availability.services.audit import record_action
from apps.web.availability.services.menu_sync import (
    MenuSyncResult,
    sync_menu_from_remote,
)
from apps.web.availability.services.status import StatusAggregator
from apps.web.availability.services.synchronizer import (
    AvailabilitySynchronizer,
    ItemOutcome,
    apply_availability,
    default_context,
    eighty_six_ingredient,
    normalize_ingredient_name,
    restore_ingredient,
)

__all__ = [
    "AvailabilitySynchronizer",
    "ItemOutcome",
    "MenuSyncResult",
    "StatusAggregator",
    "apply_availability",
    "default_context",
    "eighty_six_ingredient",
    "normalize_ingredient_name",
    "record_action",
    "restore_ingredient",
    "sync_menu_from_remote",
]
