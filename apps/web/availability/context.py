"""
Sync context - the shared handles the availability services work with.

Built once per process by AvailabilityConfig (see apps.py) and passed
explicitly to the services; tests build their own around a mock gateway.
"""

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any, TypeVar

from django.conf import settings
from django.db import connections

from eightysix_schemas import DeliveryProvider

from apps.web.availability.locks import ItemLocks
from apps.web.catalog.store import CatalogStore
from apps.web.delivery.adapters import MenuGateway, get_adapter
from apps.web.delivery.exceptions import DeliveryTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_gateway() -> MenuGateway:
    """Create the configured delivery adapter from Django settings."""
    provider = DeliveryProvider(settings.DELIVERY_PROVIDER)
    kwargs: dict[str, Any] = {}
    if provider == DeliveryProvider.UBER_EATS:
        kwargs = {
            "store_id": settings.UBER_EATS_STORE_ID,
            "access_token": settings.UBER_EATS_ACCESS_TOKEN,
            "base_url": settings.UBER_EATS_BASE_URL,
            "timeout": settings.DELIVERY_HTTP_TIMEOUT_SECONDS,
            "max_retries": settings.DELIVERY_MAX_RETRIES,
            "retry_backoff": settings.DELIVERY_RETRY_BACKOFF_SECONDS,
        }
    return get_adapter(provider, **kwargs)


@dataclass
class SyncContext:
    """Catalog store, gateway, per-item timeout and per-item locks."""

    store: CatalogStore
    gateway: MenuGateway
    item_timeout: float = 30.0
    locks: ItemLocks = field(default_factory=ItemLocks)
    closed: bool = field(default=False, init=False)

    @classmethod
    def from_settings(cls) -> "SyncContext":
        return cls(
            store=CatalogStore(),
            gateway=build_gateway(),
            item_timeout=settings.DELIVERY_ITEM_TIMEOUT_SECONDS,
        )

    def run_gateway_call(self, call: Coroutine[Any, Any, T]) -> T:
        """
        Run one gateway coroutine to completion under the per-item timeout.

        Raises:
            DeliveryTimeoutError: If the call (retries included) outlasts
                item_timeout. The call is cancelled.
        """
        try:
            return asyncio.run(asyncio.wait_for(call, timeout=self.item_timeout))
        except TimeoutError as e:
            raise DeliveryTimeoutError(
                f"Delivery call timed out after {self.item_timeout:g}s",
                provider=self.gateway.provider.value,
            ) from e

    def close(self) -> None:
        """Release the gateway and this thread's database connections."""
        if self.closed:
            return
        self.closed = True
        try:
            asyncio.run(self.gateway.close())
        except Exception:
            logger.exception("Failed to close %s gateway", self.gateway.provider)
        connections.close_all()

    def __enter__(self) -> "SyncContext":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
