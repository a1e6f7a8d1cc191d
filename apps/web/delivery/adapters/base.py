"""Base menu gateway protocol - interface for all delivery platforms."""

from typing import Protocol, runtime_checkable

from eightysix_schemas import DeliveryProvider, RemoteAck, RemoteMenu


@runtime_checkable
class MenuGateway(Protocol):
    """
    Protocol defining the interface for delivery platform integrations.

    All adapters (Uber Eats, Mock) must implement this interface.
    Methods are async to support non-blocking I/O with external APIs.
    """

    @property
    def provider(self) -> DeliveryProvider:
        """The delivery platform this adapter connects to."""
        ...

    # =========================================================================
    # Availability (write)
    # =========================================================================

    async def set_item_availability(self, item_id: str, available: bool) -> RemoteAck:
        """
        Suspend or restore a single item on the platform.

        Args:
            item_id: Item identifier on the delivery platform.
            available: True to restore, False to suspend (86) indefinitely.

        Returns:
            Acknowledgement from the platform.

        Raises:
            DeliveryAPIError: If the platform rejects the change.
            DeliveryTransportError: If the platform cannot be reached.
        """
        ...

    # =========================================================================
    # Menu (read)
    # =========================================================================

    async def get_menu(self) -> RemoteMenu:
        """
        Fetch the store's full menu.

        Returns:
            Flattened menu with every item's category and availability.

        Raises:
            DeliveryAPIError: If the API request fails.
            DeliveryTransportError: If the platform cannot be reached.
        """
        ...

    async def close(self) -> None:
        """Release any connections held by the adapter."""
        ...
