"""
Menu sync - reconcile the local catalog with the platform's full menu.

Items are matched by external_id. Names and availability follow the
platform; categories are only assigned to new items. Ingredient links are
local knowledge and are never touched here.
"""

import logging
from dataclasses import asdict, dataclass

from django.db import transaction

from apps.web.availability.context import SyncContext
from apps.web.catalog.models import ItemCategory

logger = logging.getLogger(__name__)


@dataclass
class MenuSyncResult:
    """How many local items a menu sync created, changed, or left alone."""

    created: int = 0
    updated: int = 0
    unchanged: int = 0

    @property
    def total(self) -> int:
        return self.created + self.updated + self.unchanged

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def category_from_remote(category_name: str) -> ItemCategory:
    """Toppings live in a platform category named like "Toppings"."""
    if "topping" in category_name.lower():
        return ItemCategory.TOPPING
    return ItemCategory.DRINK


def sync_menu_from_remote(context: SyncContext) -> MenuSyncResult:
    """
    Fetch the platform menu and upsert every item into the catalog.

    Raises:
        DeliveryError: If the menu could not be fetched. Nothing is written.
    """
    menu = context.run_gateway_call(context.gateway.get_menu())
    logger.info(
        "Fetched %d item(s) from %s menu", len(menu.items), menu.provider.value
    )

    result = MenuSyncResult()
    for remote_item in menu.items:
        with context.locks.hold(remote_item.external_id), transaction.atomic():
            outcome = context.store.upsert_remote_item(
                external_id=remote_item.external_id,
                name=remote_item.name,
                category=category_from_remote(remote_item.category_name),
                is_available=remote_item.is_available,
            )
        setattr(result, outcome, getattr(result, outcome) + 1)

    logger.info(
        "Menu sync complete: %d created, %d updated, %d unchanged",
        result.created,
        result.updated,
        result.unchanged,
    )
    return result
