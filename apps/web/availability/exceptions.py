"""Availability sync exceptions."""


class AvailabilityError(Exception):
    """Base exception for ingredient availability actions."""

    def __init__(self, message: str, ingredient: str | None = None) -> None:
        self.message = message
        self.ingredient = ingredient
        super().__init__(message)


class ValidationError(AvailabilityError):
    """The request is malformed (e.g., blank ingredient name)."""


class NotFoundError(AvailabilityError):
    """No menu items are linked to the ingredient."""
