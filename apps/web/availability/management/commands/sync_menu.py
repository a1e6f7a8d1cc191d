"""
Pull the full menu from the delivery platform into the catalog.

Usage:
    uv run python apps/web/manage.py sync_menu
"""

from typing import Any

from django.core.management.base import BaseCommand, CommandError

from apps.web.availability.services import default_context, sync_menu_from_remote
from apps.web.delivery.exceptions import DeliveryError


class Command(BaseCommand):
    help = "Sync menu items (names and availability) from the delivery platform"

    def handle(self, *_args: Any, **_options: Any) -> None:
        try:
            result = sync_menu_from_remote(default_context())
        except DeliveryError as e:
            raise CommandError(f"Menu sync failed: {e.message}") from e

        self.stdout.write(
            self.style.SUCCESS(
                f"Synced {result.total} item(s): {result.created} created, "
                f"{result.updated} updated, {result.unchanged} unchanged"
            )
        )
