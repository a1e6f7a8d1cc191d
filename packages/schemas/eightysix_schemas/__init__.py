"""Eighty-Six Schemas - Pydantic models for data contracts."""

from eightysix_schemas.availability import (
    AvailabilityAction,
    CategorizedItemNames,
    CategoryCounts,
    IngredientStatus,
    OverallStatus,
)
from eightysix_schemas.delivery import (
    DeliveryProvider,
    RemoteAck,
    RemoteMenu,
    RemoteMenuItem,
    SuspensionReason,
)

__all__ = [
    # Availability
    "AvailabilityAction",
    "CategorizedItemNames",
    "CategoryCounts",
    "IngredientStatus",
    "OverallStatus",
    # Delivery
    "DeliveryProvider",
    "RemoteAck",
    "RemoteMenu",
    "RemoteMenuItem",
    "SuspensionReason",
]
