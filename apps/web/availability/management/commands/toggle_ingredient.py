"""
86 or restore an ingredient from the command line.

Usage:
    uv run python apps/web/manage.py toggle_ingredient pearls
    uv run python apps/web/manage.py toggle_ingredient pearls --restore
    uv run python apps/web/manage.py toggle_ingredient pearls --user maria
"""

from typing import Any

from django.core.management.base import BaseCommand, CommandError

from apps.web.availability.exceptions import AvailabilityError
from apps.web.availability.services import apply_availability


class Command(BaseCommand):
    help = "86 (or restore) every menu item containing an ingredient"

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument("ingredient", help="Ingredient name (case-insensitive)")
        parser.add_argument(
            "--restore",
            action="store_true",
            help="Mark items available again instead of 86'ing them",
        )
        parser.add_argument(
            "--user",
            default=None,
            help="Name recorded in the action log (default: unknown)",
        )

    def handle(self, *_args: Any, **options: Any) -> None:
        restore = options["restore"]
        try:
            affected = apply_availability(
                options["ingredient"],
                desired_available=restore,
                acting_user=options["user"],
            )
        except AvailabilityError as e:
            raise CommandError(e.message) from e

        verb = "Restored" if restore else "86'd"
        self.stdout.write(self.style.SUCCESS(f"{verb} {affected.count()} item(s)"))
        for label, names in (
            ("Drinks", affected.drinks),
            ("Toppings", affected.toppings),
        ):
            if names:
                self.stdout.write(f"  {label}: {', '.join(names)}")
