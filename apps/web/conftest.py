"""
Pytest configuration for Django app tests.
"""

from django.apps import apps as django_apps

import pytest

from apps.web.availability.context import SyncContext
from apps.web.catalog.models import Ingredient, ItemCategory, MenuItem
from apps.web.catalog.store import CatalogStore
from apps.web.catalog.tests.factories import (
    IngredientFactory,
    ItemIngredientFactory,
    MenuItemFactory,
)
from apps.web.delivery.adapters import MockDeliveryAdapter


@pytest.fixture
def mock_gateway() -> MockDeliveryAdapter:
    """A mock delivery platform that accepts every change."""
    return MockDeliveryAdapter()


@pytest.fixture
def sync_context(mock_gateway: MockDeliveryAdapter) -> SyncContext:
    """Sync context wired to the mock gateway."""
    return SyncContext(
        store=CatalogStore(),
        gateway=mock_gateway,
        item_timeout=2.0,
    )


@pytest.fixture
def app_sync_context(sync_context: SyncContext, monkeypatch) -> SyncContext:
    """Install sync_context as the process-wide context (views, commands)."""
    config = django_apps.get_app_config("availability")
    monkeypatch.setattr(config, "_sync_context", sync_context)
    return sync_context


@pytest.fixture
def pearls_catalog(db) -> dict[str, Ingredient | MenuItem]:
    """
    "pearls" is in Pearl Milk Tea (drink) and Pearls (topping).

    Taro Milk Tea contains taro only.
    """
    pearls = IngredientFactory(name="pearls")
    taro = IngredientFactory(name="taro")

    pearl_milk_tea = MenuItemFactory(
        external_id="drink_pearl_milk_tea_001",
        name="Pearl Milk Tea",
        category=ItemCategory.DRINK,
    )
    pearls_topping = MenuItemFactory(
        external_id="topping_pearls_001",
        name="Pearls",
        category=ItemCategory.TOPPING,
    )
    taro_milk_tea = MenuItemFactory(
        external_id="drink_taro_milk_tea_001",
        name="Taro Milk Tea",
        category=ItemCategory.DRINK,
    )

    ItemIngredientFactory(menu_item=pearl_milk_tea, ingredient=pearls)
    ItemIngredientFactory(menu_item=pearls_topping, ingredient=pearls)
    ItemIngredientFactory(menu_item=taro_milk_tea, ingredient=taro)

    return {
        "pearls": pearls,
        "taro": taro,
        "pearl_milk_tea": pearl_milk_tea,
        "pearls_topping": pearls_topping,
        "taro_milk_tea": taro_milk_tea,
    }
