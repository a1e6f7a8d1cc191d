"""
Show menu availability.

Usage:
    uv run python apps/web/manage.py menu_status
    uv run python apps/web/manage.py menu_status --ingredient pearls
    uv run python apps/web/manage.py menu_status --ingredients
    uv run python apps/web/manage.py menu_status --items --type topping
"""

from typing import Any

from django.core.management.base import BaseCommand, CommandError

from apps.web.availability.exceptions import AvailabilityError
from apps.web.availability.services import StatusAggregator, default_context
from apps.web.catalog.models import ItemCategory


class Command(BaseCommand):
    help = "Show availability for the whole menu or one ingredient"

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--ingredient",
            help="Show items containing this ingredient",
        )
        parser.add_argument(
            "--ingredients",
            action="store_true",
            help="List all ingredients",
        )
        parser.add_argument(
            "--items",
            action="store_true",
            help="List menu items with their availability",
        )
        parser.add_argument(
            "--type",
            choices=ItemCategory.values,
            help="With --items: only this category",
        )

    def handle(self, *_args: Any, **options: Any) -> None:
        aggregator = StatusAggregator(default_context().store)

        if options["ingredients"]:
            for name in aggregator.list_ingredients():
                self.stdout.write(name)
            return

        if options["items"]:
            for item in aggregator.list_menu_items(options["type"]):
                mark = "available" if item.is_available else "86'd"
                self.stdout.write(f"{item.name} ({item.category}): {mark}")
            return

        if options["ingredient"]:
            try:
                status = aggregator.status_for(options["ingredient"])
            except AvailabilityError as e:
                raise CommandError(e.message) from e
            for label, names in (
                ("Available", status.available),
                ("86'd", status.out_of_stock),
            ):
                self.stdout.write(f"{label}:")
                self.stdout.write(f"  Drinks: {', '.join(names.drinks) or '-'}")
                self.stdout.write(f"  Toppings: {', '.join(names.toppings) or '-'}")
            return

        overall = aggregator.overall_status()
        for label, counts in (
            ("Drinks", overall.drinks),
            ("Toppings", overall.toppings),
        ):
            self.stdout.write(
                f"{label}: {counts.available}/{counts.total} available, "
                f"{counts.out_of_stock} 86'd"
            )
