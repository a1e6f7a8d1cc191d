"""Uber Eats adapter - integration with the Uber Eats menu API."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import httpx
from eightysix_schemas import (
    DeliveryProvider,
    RemoteAck,
    RemoteMenu,
    RemoteMenuItem,
    SuspensionReason,
)

from apps.web.delivery.exceptions import (
    DeliveryAPIError,
    DeliveryError,
    DeliveryTimeoutError,
    DeliveryTransportError,
)

logger = logging.getLogger(__name__)


class UberEatsAdapter:
    """
    Uber Eats adapter implementing the MenuGateway protocol.

    Integrates with the Uber Eats store menu API for:
    - Item availability (suspend / restore, i.e. 86'd items)
    - Full menu fetch for reconciliation

    Each call opens its own short-lived HTTP client unless one is injected,
    so the adapter can be driven from separate event loops (asyncio.run per
    item in the synchronizer).

    API Reference: https://developer.uber.com/docs/eats/
    """

    BASE_URL = "https://api.uber.com/v2/eats"

    # Retry configuration
    MAX_RETRIES = 3
    RETRY_BACKOFF = 1.0  # Seconds before the first retry, doubled each attempt
    TIMEOUT = 10.0

    RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

    def __init__(
        self,
        store_id: str = "",
        access_token: str = "",
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_backoff: float | None = None,
    ) -> None:
        """
        Initialize the Uber Eats adapter.

        Args:
            store_id: Uber Eats store UUID.
            access_token: OAuth bearer token with eats.store scope.
            base_url: API root (defaults to the production v2 eats API).
            http_client: Optional HTTP client for dependency injection (testing).
            timeout: Per-request timeout in seconds.
            max_retries: Total attempts per request (>= 1).
            retry_backoff: Seconds before the first retry.
        """
        self.store_id = store_id
        self._access_token = access_token
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self._http_client = http_client
        self.timeout = self.TIMEOUT if timeout is None else timeout
        self.max_retries = max(
            1, self.MAX_RETRIES if max_retries is None else max_retries
        )
        self.retry_backoff = (
            self.RETRY_BACKOFF if retry_backoff is None else retry_backoff
        )

    @property
    def provider(self) -> DeliveryProvider:
        """The delivery platform this adapter connects to."""
        return DeliveryProvider.UBER_EATS

    @property
    def is_configured(self) -> bool:
        """Whether store ID and access token are both set."""
        return bool(self.store_id and self._access_token)

    @property
    def menus_url(self) -> str:
        return f"{self.base_url}/stores/{self.store_id}/menus"

    @property
    def items_url(self) -> str:
        return f"{self.base_url}/stores/{self.store_id}/menus/items"

    async def close(self) -> None:
        """Close the injected HTTP client, if any."""
        if self._http_client is not None:
            await self._http_client.aclose()

    # =========================================================================
    # HTTP Helpers
    # =========================================================================

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    def _api_error(self, response: httpx.Response) -> DeliveryAPIError:
        """Build a DeliveryAPIError from a non-success response."""
        detail = ""
        try:
            body = response.json()
            if isinstance(body, dict):
                detail = str(body.get("message", "") or body.get("error", ""))
        except ValueError:
            pass

        return DeliveryAPIError(
            f"Uber Eats API error: {response.status_code} - "
            f"{detail or 'Unknown error'}",
            provider=DeliveryProvider.UBER_EATS.value,
            status_code=response.status_code,
            response_body=response.text[:1000],
        )

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an authenticated HTTP request with bounded retry.

        Transport errors, timeouts, 429 and 5xx responses are retried with
        exponential backoff. Other non-success responses fail immediately.

        Raises:
            DeliveryAPIError: On a non-retryable response, or a retryable one
                on the last attempt.
            DeliveryTimeoutError: If the last attempt timed out.
            DeliveryTransportError: If the last attempt could not connect.
        """
        if not self.is_configured:
            raise DeliveryError(
                "Uber Eats store ID / access token not configured",
                provider=DeliveryProvider.UBER_EATS.value,
            )

        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
            **kwargs.pop("headers", {}),
        }

        last_error: DeliveryError | None = None

        for attempt in range(self.max_retries):
            try:
                async with self._client() as client:
                    response = await client.request(
                        method, url, headers=headers, **kwargs
                    )
            except httpx.TimeoutException as e:
                last_error = DeliveryTimeoutError(
                    f"Uber Eats request timed out: {e!r}",
                    provider=DeliveryProvider.UBER_EATS.value,
                )
            except httpx.RequestError as e:
                last_error = DeliveryTransportError(
                    f"Uber Eats request failed: {e!r}",
                    provider=DeliveryProvider.UBER_EATS.value,
                )
            else:
                if response.is_success:
                    return response
                error = self._api_error(response)
                if response.status_code not in self.RETRYABLE_STATUS_CODES:
                    raise error
                last_error = error

            if attempt < self.max_retries - 1:
                backoff = self.retry_backoff * (2**attempt)
                logger.warning(
                    "Uber Eats API failed (attempt %d/%d), retry in %.1fs: %s",
                    attempt + 1,
                    self.max_retries,
                    backoff,
                    last_error,
                )
                if backoff > 0:
                    await asyncio.sleep(backoff)

        # All retries exhausted
        if last_error is None:
            raise DeliveryError(
                "Uber Eats request failed after retries",
                provider=DeliveryProvider.UBER_EATS.value,
            )
        raise last_error

    # =========================================================================
    # Availability
    # =========================================================================

    async def set_item_availability(self, item_id: str, available: bool) -> RemoteAck:
        """
        Suspend or restore an item on Uber Eats.

        Suspension is indefinite (no suspended_until) with reason OUT_OF_STOCK;
        restoring clears suspension_info.

        Args:
            item_id: Uber Eats item ID.
            available: True to restore, False to suspend.

        Returns:
            Acknowledgement with the raw response body.
        """
        suspension_info = (
            None
            if available
            else {
                "reason": SuspensionReason.OUT_OF_STOCK.value,
                "suspended_until": None,
            }
        )

        response = await self._request_with_retry(
            "POST",
            self.items_url,
            json={"item_id": item_id, "suspension_info": suspension_info},
        )

        return RemoteAck(
            provider=DeliveryProvider.UBER_EATS,
            item_id=item_id,
            is_available=available,
            acknowledged_at=datetime.now(UTC),
            raw=self._json_body(response),
        )

    # =========================================================================
    # Menu
    # =========================================================================

    async def get_menu(self) -> RemoteMenu:
        """
        Fetch the store's full menu from Uber Eats.

        Returns:
            Flattened menu; each item carries the title of the category that
            lists it.
        """
        response = await self._request_with_retry("GET", self.menus_url)
        return self._parse_menu(self._json_body(response))

    # =========================================================================
    # Parsing Helpers
    # =========================================================================

    def _json_body(self, response: httpx.Response) -> dict[str, Any]:
        """Response JSON as a dict ({} for empty or non-object bodies)."""
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def _parse_menu(self, raw: dict[str, Any]) -> RemoteMenu:
        """Convert an Uber Eats menu document to a flat RemoteMenu."""
        category_by_item: dict[str, str] = {}
        for category in raw.get("categories", []):
            title = self._text(category.get("title"))
            for entity in category.get("entities", []):
                entity_id = entity.get("id", "")
                if entity_id and entity_id not in category_by_item:
                    category_by_item[entity_id] = title

        items = [
            RemoteMenuItem(
                external_id=item.get("id", ""),
                name=self._text(item.get("title")),
                category_name=category_by_item.get(item.get("id", ""), ""),
                is_available=not self._is_suspended(item),
            )
            for item in raw.get("items", [])
            if item.get("id")
        ]

        return RemoteMenu(
            provider=DeliveryProvider.UBER_EATS,
            store_id=self.store_id,
            items=items,
            fetched_at=datetime.now(UTC),
        )

    def _text(self, value: Any) -> str:
        """Extract display text from a plain string or a translations object."""
        if isinstance(value, str):
            return value
        if isinstance(value, dict):
            translations = value.get("translations", {})
            for key in ("en_us", "en"):
                if translations.get(key):
                    return str(translations[key])
            for text in translations.values():
                return str(text)
        return ""

    def _is_suspended(self, raw: dict[str, Any]) -> bool:
        """Whether an item carries an active suspension."""
        info = raw.get("suspension_info")
        if not info:
            return False
        # Menu documents nest the suspension; our own writes do not
        suspension = info.get("suspension", info)
        return bool(suspension)
