"""Tests for UberEatsAdapter - mocked Uber Eats API."""

import json

import httpx
import pytest
import respx
from eightysix_schemas import DeliveryProvider

from apps.web.delivery.adapters import MockDeliveryAdapter, get_adapter
from apps.web.delivery.adapters.base import MenuGateway
from apps.web.delivery.adapters.uber_eats import UberEatsAdapter
from apps.web.delivery.exceptions import (
    DeliveryAPIError,
    DeliveryError,
    DeliveryTimeoutError,
    DeliveryTransportError,
)

BASE_URL = "https://api.uber.test/v2/eats"

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def adapter() -> UberEatsAdapter:
    """Uber Eats adapter with retries but no backoff sleep."""
    return UberEatsAdapter(
        store_id="store-123",
        access_token="token-abc",
        base_url=BASE_URL,
        retry_backoff=0,
    )


@pytest.fixture
def uber_menu_response() -> dict:
    """Sample Uber Eats menu document."""
    return {
        "menus": [
            {
                "id": "menu-1",
                "title": {"translations": {"en_us": "All Day"}},
                "category_ids": ["cat-milk-tea", "cat-toppings"],
            }
        ],
        "categories": [
            {
                "id": "cat-milk-tea",
                "title": {"translations": {"en_us": "Milk Tea"}},
                "entities": [
                    {"id": "drink_pearl_milk_tea_001", "type": "ITEM"},
                    {"id": "drink_taro_milk_tea_001", "type": "ITEM"},
                ],
            },
            {
                "id": "cat-toppings",
                "title": {"translations": {"en_us": "Toppings"}},
                "entities": [{"id": "topping_pearls_001", "type": "ITEM"}],
            },
        ],
        "items": [
            {
                "id": "drink_pearl_milk_tea_001",
                "title": {"translations": {"en_us": "Pearl Milk Tea"}},
            },
            {
                "id": "drink_taro_milk_tea_001",
                "title": {"translations": {"en_us": "Taro Milk Tea"}},
                "suspension_info": {
                    "suspension": {"suspend_until": 0, "reason": "OUT_OF_STOCK"}
                },
            },
            {
                "id": "topping_pearls_001",
                "title": {"translations": {"en_us": "Pearls"}},
                "suspension_info": None,
            },
        ],
    }


# =============================================================================
# Configuration
# =============================================================================


class TestUberEatsConfiguration:
    def test_provider(self, adapter):
        assert adapter.provider == DeliveryProvider.UBER_EATS

    def test_urls(self, adapter):
        assert adapter.menus_url == f"{BASE_URL}/stores/store-123/menus"
        assert adapter.items_url == f"{BASE_URL}/stores/store-123/menus/items"

    def test_implements_protocol(self, adapter):
        assert isinstance(adapter, MenuGateway)

    def test_default_base_url(self):
        assert UberEatsAdapter().base_url == UberEatsAdapter.BASE_URL

    def test_max_retries_at_least_one(self):
        assert UberEatsAdapter(max_retries=0).max_retries == 1

    @pytest.mark.asyncio
    async def test_unconfigured_adapter_fails_without_request(self):
        adapter = UberEatsAdapter(base_url=BASE_URL)

        with respx.mock(assert_all_called=False) as router:
            route = router.post(adapter.items_url)
            with pytest.raises(DeliveryError, match="not configured"):
                await adapter.set_item_availability("item_001", False)

        assert not route.called


# =============================================================================
# Availability
# =============================================================================


class TestUberEatsAvailability:
    @pytest.mark.asyncio
    @respx.mock
    async def test_suspend_item(self, adapter):
        route = respx.post(adapter.items_url).mock(
            return_value=httpx.Response(200, json={"status": "ok"})
        )

        ack = await adapter.set_item_availability("item_001", False)

        assert ack.provider == DeliveryProvider.UBER_EATS
        assert ack.item_id == "item_001"
        assert ack.is_available is False
        assert ack.raw == {"status": "ok"}

        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer token-abc"
        assert json.loads(request.content) == {
            "item_id": "item_001",
            "suspension_info": {"reason": "OUT_OF_STOCK", "suspended_until": None},
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_restore_item_clears_suspension(self, adapter):
        route = respx.post(adapter.items_url).mock(
            return_value=httpx.Response(200, json={})
        )

        ack = await adapter.set_item_availability("item_001", True)

        assert ack.is_available is True
        assert json.loads(route.calls.last.request.content) == {
            "item_id": "item_001",
            "suspension_info": None,
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_response_body(self, adapter):
        respx.post(adapter.items_url).mock(return_value=httpx.Response(204))

        ack = await adapter.set_item_availability("item_001", False)

        assert ack.raw == {}

    @pytest.mark.asyncio
    @respx.mock
    async def test_client_error_not_retried(self, adapter):
        route = respx.post(adapter.items_url).mock(
            return_value=httpx.Response(400, json={"message": "Invalid item"})
        )

        with pytest.raises(DeliveryAPIError) as exc_info:
            await adapter.set_item_availability("item_001", False)

        assert exc_info.value.status_code == 400
        assert str(exc_info.value) == "Uber Eats API error: 400 - Invalid item"
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_without_message(self, adapter):
        respx.post(adapter.items_url).mock(return_value=httpx.Response(404))

        with pytest.raises(DeliveryAPIError) as exc_info:
            await adapter.set_item_availability("item_001", False)

        assert str(exc_info.value) == "Uber Eats API error: 404 - Unknown error"

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_retried_then_succeeds(self, adapter):
        route = respx.post(adapter.items_url).mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json={}),
            ]
        )

        ack = await adapter.set_item_availability("item_001", False)

        assert ack.is_available is False
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_rate_limit_retried(self, adapter):
        route = respx.post(adapter.items_url).mock(
            side_effect=[
                httpx.Response(429, json={"message": "Too many requests"}),
                httpx.Response(200, json={}),
            ]
        )

        await adapter.set_item_availability("item_001", True)

        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_exhausts_retries(self, adapter):
        route = respx.post(adapter.items_url).mock(
            return_value=httpx.Response(500, json={"message": "Internal error"})
        )

        with pytest.raises(DeliveryAPIError) as exc_info:
            await adapter.set_item_availability("item_001", False)

        assert exc_info.value.status_code == 500
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_single_attempt_raises_last_error(self):
        adapter = UberEatsAdapter(
            store_id="store-123",
            access_token="token-abc",
            base_url=BASE_URL,
            max_retries=1,
        )
        route = respx.post(adapter.items_url).mock(
            return_value=httpx.Response(503, json={"message": "Busy"})
        )

        with pytest.raises(DeliveryAPIError) as exc_info:
            await adapter.set_item_availability("item_001", False)

        assert exc_info.value.status_code == 503
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_error(self, adapter):
        route = respx.post(adapter.items_url).mock(side_effect=httpx.ConnectError)

        with pytest.raises(DeliveryTransportError) as exc_info:
            await adapter.set_item_availability("item_001", False)

        assert not isinstance(exc_info.value, DeliveryTimeoutError)
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self, adapter):
        respx.post(adapter.items_url).mock(side_effect=httpx.ReadTimeout)

        with pytest.raises(DeliveryTimeoutError):
            await adapter.set_item_availability("item_001", False)

    @pytest.mark.asyncio
    @respx.mock
    async def test_injected_client_is_used_and_closed(self):
        respx.post(f"{BASE_URL}/stores/store-123/menus/items").mock(
            return_value=httpx.Response(200, json={})
        )
        client = httpx.AsyncClient()
        adapter = UberEatsAdapter(
            store_id="store-123",
            access_token="token-abc",
            base_url=BASE_URL,
            http_client=client,
        )

        await adapter.set_item_availability("item_001", False)
        await adapter.close()

        assert client.is_closed


# =============================================================================
# Menu
# =============================================================================


class TestUberEatsMenu:
    @pytest.mark.asyncio
    @respx.mock
    async def test_get_menu(self, adapter, uber_menu_response):
        respx.get(adapter.menus_url).mock(
            return_value=httpx.Response(200, json=uber_menu_response)
        )

        menu = await adapter.get_menu()

        assert menu.provider == DeliveryProvider.UBER_EATS
        assert menu.store_id == "store-123"
        assert [item.external_id for item in menu.items] == [
            "drink_pearl_milk_tea_001",
            "drink_taro_milk_tea_001",
            "topping_pearls_001",
        ]

    @pytest.mark.asyncio
    @respx.mock
    async def test_menu_items_parsed(self, adapter, uber_menu_response):
        respx.get(adapter.menus_url).mock(
            return_value=httpx.Response(200, json=uber_menu_response)
        )

        menu = await adapter.get_menu()
        items = {item.external_id: item for item in menu.items}

        pearl_milk_tea = items["drink_pearl_milk_tea_001"]
        assert pearl_milk_tea.name == "Pearl Milk Tea"
        assert pearl_milk_tea.category_name == "Milk Tea"
        assert pearl_milk_tea.is_available is True

        assert items["drink_taro_milk_tea_001"].is_available is False
        assert items["topping_pearls_001"].category_name == "Toppings"
        assert items["topping_pearls_001"].is_available is True

    @pytest.mark.asyncio
    @respx.mock
    async def test_plain_string_titles(self, adapter):
        respx.get(adapter.menus_url).mock(
            return_value=httpx.Response(
                200,
                json={
                    "categories": [],
                    "items": [{"id": "item_001", "title": "Jasmine Green Tea"}],
                },
            )
        )

        menu = await adapter.get_menu()

        assert menu.items[0].name == "Jasmine Green Tea"
        assert menu.items[0].category_name == ""

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_menu_error(self, adapter):
        respx.get(adapter.menus_url).mock(
            return_value=httpx.Response(401, json={"message": "Unauthorized"})
        )

        with pytest.raises(DeliveryAPIError) as exc_info:
            await adapter.get_menu()

        assert exc_info.value.status_code == 401


# =============================================================================
# Factory
# =============================================================================


class TestGetAdapter:
    def test_mock(self):
        assert isinstance(get_adapter(DeliveryProvider.MOCK), MockDeliveryAdapter)

    def test_uber_eats_with_kwargs(self):
        adapter = get_adapter(
            DeliveryProvider.UBER_EATS,
            store_id="store-9",
            access_token="t",
            base_url=BASE_URL,
        )
        assert isinstance(adapter, UberEatsAdapter)
        assert adapter.store_id == "store-9"

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported delivery provider"):
            get_adapter("doordash")  # type: ignore[arg-type]
