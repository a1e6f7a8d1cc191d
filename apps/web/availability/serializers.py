"""
Pydantic schemas for the availability API.

Response keys follow the chat front end's contract (camelCase where it
expects camelCase).
"""

from datetime import datetime

from eightysix_schemas import CategorizedItemNames
from pydantic import BaseModel, ConfigDict, Field


class ToggleRequest(BaseModel):
    """Body of POST /api/86 and POST /api/restore."""

    ingredient: str = ""
    user: str | None = None


class ToggleResponse(BaseModel):
    """Result of an 86/restore action."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    ingredient: str
    affected_items: CategorizedItemNames = Field(alias="affectedItems")
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class IngredientListResponse(BaseModel):
    ingredients: list[str]


class MenuItemSchema(BaseModel):
    """A menu item with its stored availability."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    external_id: str
    name: str
    category: str
    is_available: bool
    availability_updated_at: datetime


class MenuItemListResponse(BaseModel):
    items: list[MenuItemSchema]


class MenuSyncResponse(BaseModel):
    """Result of a full menu sync from the delivery platform."""

    success: bool = True
    message: str
    created: int
    updated: int
    unchanged: int
