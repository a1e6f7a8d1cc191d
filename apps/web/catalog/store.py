"""
Catalog store - the query layer over ingredients and menu items.

Everything that reads or writes catalog rows for the availability services
goes through CatalogStore, so the access patterns live in one place:

- resolve an ingredient to the items that contain it
- lock and update one item's availability
- list/aggregate items for status views
- reconcile items from the delivery platform's full menu
"""

import logging
from typing import Literal

from django.db import DatabaseError
from django.db.models import Count, Q, QuerySet
from django.db.models.functions import Lower
from django.utils import timezone

from apps.web.catalog.exceptions import LocalStoreError
from apps.web.catalog.models import Ingredient, ItemCategory, MenuItem

logger = logging.getLogger(__name__)

UpsertResult = Literal["created", "updated", "unchanged"]


class CatalogStore:
    """
    Stateless access layer for the catalog tables.

    One instance is shared by the synchronizer and the status aggregator
    (see SyncContext).
    """

    # =========================================================================
    # Resolution
    # =========================================================================

    def items_for_ingredient(self, ingredient_name: str) -> list[MenuItem]:
        """
        Menu items linked to an ingredient, matched case-insensitively.

        Exact match only - "pearl" does not match "pearls". Each item appears
        once even if it were linked twice.
        """
        return list(
            MenuItem.objects.filter(
                ingredient_links__ingredient__name__iexact=ingredient_name
            )
            .distinct()
            .order_by("name", "pk")
        )

    # =========================================================================
    # Availability writes
    # =========================================================================

    def lock_item(self, item_id: int) -> MenuItem:
        """
        Re-read a menu item holding a row lock.

        Must be called inside transaction.atomic(). The lock is released when
        the transaction ends.

        Raises:
            LocalStoreError: If the item is gone or cannot be locked.
        """
        try:
            return MenuItem.objects.select_for_update().get(pk=item_id)
        except MenuItem.DoesNotExist as e:
            raise LocalStoreError(f"Menu item {item_id} no longer exists") from e
        except DatabaseError as e:
            raise LocalStoreError(f"Could not lock menu item {item_id}: {e}") from e

    def set_item_availability(
        self,
        item: MenuItem,
        available: bool,
        remote_applied: bool = True,
    ) -> MenuItem:
        """
        Store an item's availability and stamp availability_updated_at.

        Args:
            item: The item to update.
            available: New availability flag.
            remote_applied: Whether the platform already has this state
                (carried on the error for logging).

        Returns:
            The item with updated fields.

        Raises:
            LocalStoreError: If the row could not be written.
        """
        now = timezone.now()
        try:
            updated = MenuItem.objects.filter(pk=item.pk).update(
                is_available=available,
                availability_updated_at=now,
                updated_at=now,
            )
        except DatabaseError as e:
            raise LocalStoreError(
                f"Failed to store availability for {item.external_id}: {e}",
                external_id=item.external_id,
                remote_applied=remote_applied,
            ) from e

        if not updated:
            raise LocalStoreError(
                f"Menu item {item.external_id} no longer exists",
                external_id=item.external_id,
                remote_applied=remote_applied,
            )

        item.is_available = available
        item.availability_updated_at = now
        item.updated_at = now
        return item

    # =========================================================================
    # Listing / aggregation
    # =========================================================================

    def list_ingredient_names(self) -> list[str]:
        """All ingredient names, sorted case-insensitively, without duplicates."""
        names: list[str] = []
        seen: set[str] = set()
        for name in Ingredient.objects.order_by(Lower("name"), "name").values_list(
            "name", flat=True
        ):
            key = name.lower()
            if key not in seen:
                seen.add(key)
                names.append(name)
        return names

    def list_menu_items(self, category: str | None = None) -> QuerySet[MenuItem]:
        """
        Menu items ordered by name.

        An unknown category is ignored and every item is returned.
        """
        items = MenuItem.objects.all()
        if category in ItemCategory.values:
            items = items.filter(category=category)
        return items.order_by("name", "pk")

    def category_counts(self) -> dict[str, dict[str, int]]:
        """
        Total/available/out-of-stock counts per stored category value.

        One grouped query over all menu items.
        """
        rows = (
            MenuItem.objects.order_by("category")
            .values("category")
            .annotate(
                total=Count("pk"),
                available=Count("pk", filter=Q(is_available=True)),
                out_of_stock=Count("pk", filter=Q(is_available=False)),
            )
        )
        return {
            row["category"]: {
                "total": row["total"],
                "available": row["available"],
                "out_of_stock": row["out_of_stock"],
            }
            for row in rows
        }

    # =========================================================================
    # Remote menu reconciliation
    # =========================================================================

    def upsert_remote_item(
        self,
        external_id: str,
        name: str,
        category: ItemCategory,
        is_available: bool,
    ) -> UpsertResult:
        """
        Create or update a menu item from the platform's menu.

        Must be called inside transaction.atomic() (the existing row is locked).
        Category is only set on creation; local reclassification wins.
        """
        existing = (
            MenuItem.objects.select_for_update().filter(external_id=external_id).first()
        )
        if existing is None:
            MenuItem.objects.create(
                external_id=external_id,
                name=name,
                category=category,
                is_available=is_available,
            )
            return "created"

        changed_fields: list[str] = []
        if existing.name != name:
            existing.name = name
            changed_fields.append("name")
        if existing.is_available != is_available:
            existing.is_available = is_available
            existing.availability_updated_at = timezone.now()
            changed_fields.extend(["is_available", "availability_updated_at"])

        if not changed_fields:
            return "unchanged"

        existing.save(update_fields=[*changed_fields, "updated_at"])
        logger.debug("Updated %s from remote menu: %s", external_id, changed_fields)
        return "updated"
