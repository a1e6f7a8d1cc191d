"""Audit log writes for 86/restore actions."""

import logging

from eightysix_schemas import AvailabilityAction, CategorizedItemNames

from apps.web.availability.models import ActionLog

logger = logging.getLogger(__name__)

UNKNOWN_USER = "unknown"


def record_action(
    action: AvailabilityAction,
    ingredient: str,
    user: str | None,
    affected_items: CategorizedItemNames,
) -> ActionLog:
    """
    Append one ActionLog row for a completed 86/restore invocation.

    Args:
        action: 86 or restore.
        ingredient: Normalized ingredient name.
        user: Who asked for it; blank or None is recorded as "unknown".
        affected_items: Items that actually changed, by category.
    """
    entry = ActionLog.objects.create(
        action=action.value,
        ingredient=ingredient,
        user=(user or "").strip() or UNKNOWN_USER,
        affected_items=affected_items.model_dump(),
    )
    logger.debug("Recorded action log %s: %s", entry.pk, entry)
    return entry
