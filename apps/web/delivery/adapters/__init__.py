"""Delivery adapters - implementations for each delivery platform."""

from typing import Any

from eightysix_schemas import DeliveryProvider

from apps.web.delivery.adapters.base import MenuGateway
from apps.web.delivery.adapters.mock import MockDeliveryAdapter
from apps.web.delivery.adapters.uber_eats import UberEatsAdapter


def get_adapter(provider: DeliveryProvider, **kwargs: Any) -> MenuGateway:
    """
    Get a menu gateway instance for the specified delivery platform.

    This is the main entry point for obtaining adapters. Use this factory
    function rather than instantiating adapters directly.

    Args:
        provider: The delivery platform to get an adapter for.
        **kwargs: Additional arguments passed to the adapter constructor.
            For UberEatsAdapter: store_id, access_token, base_url, timeout,
            max_retries, retry_backoff.

    Returns:
        An adapter instance implementing the MenuGateway protocol.

    Raises:
        ValueError: If the provider is not supported.

    Example:
        adapter = get_adapter(
            DeliveryProvider.UBER_EATS, store_id="store-1", access_token="..."
        )
        ack = await adapter.set_item_availability("item_001", False)
    """
    if provider == DeliveryProvider.MOCK:
        return MockDeliveryAdapter()
    elif provider == DeliveryProvider.UBER_EATS:
        return UberEatsAdapter(**kwargs)
    else:
        supported = ", ".join(
            [DeliveryProvider.MOCK.value, DeliveryProvider.UBER_EATS.value]
        )
        raise ValueError(
            f"Unsupported delivery provider: {provider}. Supported: {supported}"
        )


__all__ = [
    "MenuGateway",
    "MockDeliveryAdapter",
    "UberEatsAdapter",
    "get_adapter",
]
