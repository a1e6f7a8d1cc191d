"""Delivery platform schemas - data contracts for the remote menu gateway."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# =============================================================================
# Enums
# =============================================================================


class DeliveryProvider(str, Enum):
    """Supported delivery platforms."""

    UBER_EATS = "uber_eats"
    MOCK = "mock"


class SuspensionReason(str, Enum):
    """Why an item is suspended on the delivery platform."""

    OUT_OF_STOCK = "OUT_OF_STOCK"


# =============================================================================
# Availability
# =============================================================================


class RemoteAck(BaseModel):
    """Acknowledgement of an availability change by the delivery platform."""

    provider: DeliveryProvider
    item_id: str = Field(description="Item ID on the delivery platform")
    is_available: bool
    acknowledged_at: datetime
    raw: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Menu Data
# =============================================================================


class RemoteMenuItem(BaseModel):
    """A sellable item as the delivery platform sees it."""

    external_id: str = Field(description="Item ID on the delivery platform")
    name: str
    category_name: str = ""
    is_available: bool = True


class RemoteMenu(BaseModel):
    """Flattened view of a store's full menu on the delivery platform."""

    provider: DeliveryProvider
    store_id: str = ""
    items: list[RemoteMenuItem] = Field(default_factory=list)
    fetched_at: datetime
