"""Mock delivery adapter for development and testing."""

import asyncio
from datetime import UTC, datetime

from eightysix_schemas import (
    DeliveryProvider,
    RemoteAck,
    RemoteMenu,
    RemoteMenuItem,
)

from apps.web.delivery.exceptions import DeliveryAPIError, DeliveryTransportError


def _default_menu_items() -> list[RemoteMenuItem]:
    """Generate a default bubble tea menu."""
    return [
        RemoteMenuItem(
            external_id="drink_pearl_milk_tea_001",
            name="Pearl Milk Tea",
            category_name="Milk Tea",
        ),
        RemoteMenuItem(
            external_id="drink_taro_milk_tea_001",
            name="Taro Milk Tea",
            category_name="Milk Tea",
        ),
        RemoteMenuItem(
            external_id="drink_mango_green_tea_001",
            name="Mango Green Tea",
            category_name="Fruit Tea",
        ),
        RemoteMenuItem(
            external_id="topping_pearls_001",
            name="Pearls",
            category_name="Toppings",
        ),
        RemoteMenuItem(
            external_id="topping_lychee_jelly_001",
            name="Lychee Jelly",
            category_name="Toppings",
        ),
    ]


class MockDeliveryAdapter:
    """
    Mock delivery adapter for development and testing.

    Provides configurable behavior for simulating:
    - Menu data
    - Per-item API failures and unreachable items
    - Slow API responses

    Every availability call is recorded in ``calls`` in order, including the
    ones that fail.

    Usage:
        adapter = MockDeliveryAdapter(
            failing_items={"topping_pearls_001"},
            api_delay_ms=50,
        )
    """

    def __init__(
        self,
        menu_items: list[RemoteMenuItem] | None = None,
        failing_items: set[str] | None = None,
        unreachable_items: set[str] | None = None,
        fail_menu: bool = False,
        api_delay_ms: int = 0,
    ) -> None:
        """
        Initialize mock adapter.

        Args:
            menu_items: Items returned by get_menu. Uses a default menu if None.
            failing_items: Item IDs the platform rejects (HTTP 500).
            unreachable_items: Item IDs whose calls fail to connect.
            fail_menu: If True, get_menu fails.
            api_delay_ms: Simulated API delay in milliseconds.
        """
        self._menu_items = (
            menu_items if menu_items is not None else _default_menu_items()
        )
        self._failing_items = set(failing_items or ())
        self._unreachable_items = set(unreachable_items or ())
        self._fail_menu = fail_menu
        self._api_delay_ms = api_delay_ms

        # Remote state as last set through this adapter
        self._availability: dict[str, bool] = {
            item.external_id: item.is_available for item in self._menu_items
        }
        self.calls: list[tuple[str, bool]] = []

    @property
    def provider(self) -> DeliveryProvider:
        """The delivery platform this adapter connects to."""
        return DeliveryProvider.MOCK

    # =========================================================================
    # Configuration methods (for test setup)
    # =========================================================================

    def set_item_failing(self, item_id: str) -> None:
        """Make availability calls for an item fail with an API error."""
        self._failing_items.add(item_id)

    def set_item_unreachable(self, item_id: str) -> None:
        """Make availability calls for an item fail to connect."""
        self._unreachable_items.add(item_id)

    def clear_failures(self) -> None:
        """Let every item succeed again."""
        self._failing_items.clear()
        self._unreachable_items.clear()
        self._fail_menu = False

    def set_api_delay(self, delay_ms: int) -> None:
        """Set simulated API delay."""
        self._api_delay_ms = delay_ms

    def is_available(self, item_id: str) -> bool:
        """Remote availability of an item (unknown items count as available)."""
        return self._availability.get(item_id, True)

    # =========================================================================
    # MenuGateway implementation
    # =========================================================================

    async def _simulate_delay(self) -> None:
        if self._api_delay_ms > 0:
            await asyncio.sleep(self._api_delay_ms / 1000)

    async def set_item_availability(self, item_id: str, available: bool) -> RemoteAck:
        """Record the call and apply it unless the item is set up to fail."""
        self.calls.append((item_id, available))
        await self._simulate_delay()

        if item_id in self._unreachable_items:
            raise DeliveryTransportError(
                f"Mock connection refused for {item_id}",
                provider=DeliveryProvider.MOCK.value,
            )
        if item_id in self._failing_items:
            raise DeliveryAPIError(
                "Mock API error: 500 - Simulated item failure",
                provider=DeliveryProvider.MOCK.value,
                status_code=500,
            )

        self._availability[item_id] = available
        return RemoteAck(
            provider=DeliveryProvider.MOCK,
            item_id=item_id,
            is_available=available,
            acknowledged_at=datetime.now(UTC),
        )

    async def get_menu(self) -> RemoteMenu:
        """Return the configured menu with availability as last set."""
        await self._simulate_delay()

        if self._fail_menu:
            raise DeliveryAPIError(
                "Mock API error: 503 - Menu unavailable",
                provider=DeliveryProvider.MOCK.value,
                status_code=503,
            )

        return RemoteMenu(
            provider=DeliveryProvider.MOCK,
            store_id="mock-store",
            items=[
                item.model_copy(
                    update={"is_available": self.is_available(item.external_id)}
                )
                for item in self._menu_items
            ],
            fetched_at=datetime.now(UTC),
        )

    async def close(self) -> None:
        """Nothing to release."""
