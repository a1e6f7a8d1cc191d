"""
Availability models - the audit trail of 86/restore actions.

ActionLog rows are append-only: once written they are never changed or
removed by the application.
"""

from typing import Any

from django.db import models
from django.utils import timezone

from eightysix_schemas import AvailabilityAction


class ActionType(models.TextChoices):
    """Bulk availability action."""

    EIGHTY_SIX = AvailabilityAction.EIGHTY_SIX.value, "86'd"
    RESTORE = AvailabilityAction.RESTORE.value, "Restored"


def _empty_affected_items() -> dict[str, list[str]]:
    return {"drinks": [], "toppings": []}


class ActionLog(models.Model):
    """
    One 86/restore invocation and the items it actually changed.

    affected_items is a snapshot ({"drinks": [...], "toppings": [...]}), so
    later renames don't rewrite history.
    """

    action = models.CharField(max_length=20, choices=ActionType.choices)
    ingredient = models.CharField(max_length=100)
    user = models.CharField(max_length=150, default="unknown")
    affected_items = models.JSONField(default=_empty_affected_items)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-timestamp", "-pk"]
        indexes = [
            models.Index(fields=["ingredient", "-timestamp"]),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.ingredient} by {self.user}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise ValueError("ActionLog entries are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args: Any, **kwargs: Any) -> tuple[int, dict[str, int]]:
        raise ValueError("ActionLog entries are append-only")
