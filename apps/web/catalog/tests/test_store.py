"""
Tests for CatalogStore queries and writes.
"""

from datetime import timedelta

from django.db import transaction
from django.utils import timezone

import pytest

from apps.web.catalog.exceptions import LocalStoreError
from apps.web.catalog.models import ItemCategory, MenuItem
from apps.web.catalog.store import CatalogStore
from apps.web.catalog.tests.factories import (
    IngredientFactory,
    ItemIngredientFactory,
    MenuItemFactory,
)


@pytest.fixture
def store() -> CatalogStore:
    return CatalogStore()


@pytest.mark.django_db
class TestItemsForIngredient:
    def test_returns_linked_items_ordered_by_name(self, store, pearls_catalog):
        items = store.items_for_ingredient("pearls")
        assert [item.name for item in items] == ["Pearl Milk Tea", "Pearls"]

    def test_case_insensitive(self, store, pearls_catalog):
        assert store.items_for_ingredient("PEARLS") == store.items_for_ingredient(
            "pearls"
        )

    def test_exact_match_only(self, store, pearls_catalog):
        assert store.items_for_ingredient("pearl") == []
        assert store.items_for_ingredient("pearls and cream") == []

    def test_unknown_ingredient(self, store, pearls_catalog):
        assert store.items_for_ingredient("unicorn") == []

    def test_ingredient_without_items(self, store):
        IngredientFactory(name="grass jelly")
        assert store.items_for_ingredient("grass jelly") == []

    def test_item_with_several_ingredients_listed_once(self, store, pearls_catalog):
        milk = IngredientFactory(name="milk")
        ItemIngredientFactory(
            menu_item=pearls_catalog["pearl_milk_tea"], ingredient=milk
        )

        assert [item.name for item in store.items_for_ingredient("pearls")] == [
            "Pearl Milk Tea",
            "Pearls",
        ]


@pytest.mark.django_db
class TestSetItemAvailability:
    def test_updates_flag_and_timestamp(self, store):
        old = timezone.now() - timedelta(days=1)
        item = MenuItemFactory(availability_updated_at=old)

        store.set_item_availability(item, False)

        item.refresh_from_db()
        assert item.is_available is False
        assert item.availability_updated_at > old

    def test_updates_instance(self, store):
        item = MenuItemFactory()
        returned = store.set_item_availability(item, False)
        assert returned is item
        assert item.is_available is False

    def test_missing_item_raises(self, store):
        item = MenuItemFactory(external_id="item_gone")
        MenuItem.objects.filter(pk=item.pk).delete()

        with pytest.raises(LocalStoreError) as exc_info:
            store.set_item_availability(item, False, remote_applied=True)

        assert exc_info.value.external_id == "item_gone"
        assert exc_info.value.remote_applied is True


@pytest.mark.django_db
class TestLockItem:
    def test_returns_fresh_row(self, store):
        item = MenuItemFactory()
        MenuItem.objects.filter(pk=item.pk).update(name="Renamed")

        with transaction.atomic():
            locked = store.lock_item(item.pk)

        assert locked.name == "Renamed"

    def test_missing_item_raises(self, store):
        with pytest.raises(LocalStoreError), transaction.atomic():
            store.lock_item(999999)


@pytest.mark.django_db
class TestListings:
    def test_ingredient_names_sorted_case_insensitively(self, store):
        for name in ["taro", "Brown Sugar", "pearls", "aloe"]:
            IngredientFactory(name=name)

        assert store.list_ingredient_names() == [
            "aloe",
            "Brown Sugar",
            "pearls",
            "taro",
        ]

    def test_menu_items_by_category(self, store, pearls_catalog):
        toppings = store.list_menu_items(ItemCategory.TOPPING)
        assert [item.name for item in toppings] == ["Pearls"]

    def test_menu_items_unknown_category_ignored(self, store, pearls_catalog):
        items = store.list_menu_items("dessert")
        assert [item.name for item in items] == [
            "Pearl Milk Tea",
            "Pearls",
            "Taro Milk Tea",
        ]

    def test_category_counts(self, store, pearls_catalog):
        MenuItem.objects.filter(external_id="drink_taro_milk_tea_001").update(
            is_available=False
        )

        counts = store.category_counts()

        assert counts[ItemCategory.DRINK] == {
            "total": 2,
            "available": 1,
            "out_of_stock": 1,
        }
        assert counts[ItemCategory.TOPPING] == {
            "total": 1,
            "available": 1,
            "out_of_stock": 0,
        }

    def test_category_counts_empty_catalog(self, store):
        assert store.category_counts() == {}


@pytest.mark.django_db
class TestUpsertRemoteItem:
    def test_creates_new_item(self, store):
        with transaction.atomic():
            outcome = store.upsert_remote_item(
                "item_new", "Lychee Jelly", ItemCategory.TOPPING, True
            )

        assert outcome == "created"
        item = MenuItem.objects.get(external_id="item_new")
        assert item.name == "Lychee Jelly"
        assert item.category == ItemCategory.TOPPING

    def test_unchanged(self, store):
        MenuItemFactory(external_id="item_001", name="Pearls", is_available=True)

        with transaction.atomic():
            outcome = store.upsert_remote_item(
                "item_001", "Pearls", ItemCategory.TOPPING, True
            )

        assert outcome == "unchanged"

    def test_updates_name_and_availability_keeps_category(self, store):
        MenuItemFactory(
            external_id="item_001",
            name="Pearls",
            category=ItemCategory.TOPPING,
        )

        with transaction.atomic():
            outcome = store.upsert_remote_item(
                "item_001", "Boba Pearls", ItemCategory.DRINK, False
            )

        assert outcome == "updated"
        item = MenuItem.objects.get(external_id="item_001")
        assert item.name == "Boba Pearls"
        assert item.is_available is False
        assert item.category == ItemCategory.TOPPING
