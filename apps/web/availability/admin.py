"""Admin registration for the action log."""

from typing import Any

from django.contrib import admin
from django.http import HttpRequest

from apps.web.availability.models import ActionLog


@admin.register(ActionLog)
class ActionLogAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Read-only view of 86/restore history."""

    list_display = ["timestamp", "action", "ingredient", "user"]
    list_filter = ["action"]
    search_fields = ["ingredient", "user"]
    date_hierarchy = "timestamp"
    readonly_fields = ["action", "ingredient", "user", "affected_items", "timestamp"]

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(
        self, request: HttpRequest, obj: Any | None = None
    ) -> bool:
        return False

    def has_delete_permission(
        self, request: HttpRequest, obj: Any | None = None
    ) -> bool:
        return False
