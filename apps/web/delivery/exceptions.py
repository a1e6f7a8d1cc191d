"""Delivery platform integration exceptions."""


class DeliveryError(Exception):
    """Base exception for delivery platform errors."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.message = message
        self.provider = provider
        super().__init__(message)


class DeliveryAPIError(DeliveryError):
    """The delivery platform answered with a non-success response."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message, provider)
        self.status_code = status_code
        self.response_body = response_body


class DeliveryTransportError(DeliveryError):
    """The delivery platform could not be reached (DNS, connect, reset...)."""


class DeliveryTimeoutError(DeliveryTransportError):
    """The delivery platform did not answer in time."""
