"""
Status aggregator - read-only views of menu availability.

Always reads the catalog directly (no cache), so results reflect the last
synchronizer write. Never calls the delivery platform.
"""

from eightysix_schemas import (
    CategorizedItemNames,
    CategoryCounts,
    IngredientStatus,
    OverallStatus,
)

from apps.web.availability.services.synchronizer import normalize_ingredient_name
from apps.web.catalog.models import MenuItem, bucket_for
from apps.web.catalog.store import CatalogStore


class StatusAggregator:
    """Availability queries over the catalog store."""

    def __init__(self, store: CatalogStore) -> None:
        self.store = store

    def status_for(self, ingredient_name: str | None) -> IngredientStatus:
        """
        Items containing the ingredient, split by their stored availability.

        An ingredient with no items gives an empty status, not an error.

        Raises:
            ValidationError: If the ingredient name is blank.
        """
        ingredient = normalize_ingredient_name(ingredient_name)
        available = CategorizedItemNames()
        out_of_stock = CategorizedItemNames()

        for item in self.store.items_for_ingredient(ingredient):
            target = available if item.is_available else out_of_stock
            getattr(target, item.bucket).append(item.name)

        return IngredientStatus(available=available, out_of_stock=out_of_stock)

    def overall_status(self) -> OverallStatus:
        """Total/available/out-of-stock counts for drinks and toppings."""
        status = OverallStatus()
        for category, counts in self.store.category_counts().items():
            bucket: CategoryCounts = getattr(status, bucket_for(category))
            bucket.total += counts["total"]
            bucket.available += counts["available"]
            bucket.out_of_stock += counts["out_of_stock"]
        return status

    def list_ingredients(self) -> list[str]:
        return self.store.list_ingredient_names()

    def list_menu_items(self, category_filter: str | None = None) -> list[MenuItem]:
        """Menu items by name; an unrecognized filter returns everything."""
        return list(self.store.list_menu_items(category_filter))
