"""Availability schemas - results of 86/restore actions and menu status."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AvailabilityAction(str, Enum):
    """Kind of bulk availability action recorded in the audit log."""

    EIGHTY_SIX = "86"
    RESTORE = "restore"

    @classmethod
    def for_availability(cls, available: bool) -> "AvailabilityAction":
        """Action implied by the desired availability state."""
        return cls.RESTORE if available else cls.EIGHTY_SIX


class CategorizedItemNames(BaseModel):
    """Item names partitioned into the drinks and toppings buckets."""

    drinks: list[str] = Field(default_factory=list)
    toppings: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.drinks and not self.toppings

    def count(self) -> int:
        return len(self.drinks) + len(self.toppings)


class IngredientStatus(BaseModel):
    """Current stored availability of the items containing one ingredient."""

    model_config = ConfigDict(populate_by_name=True)

    available: CategorizedItemNames = Field(default_factory=CategorizedItemNames)
    out_of_stock: CategorizedItemNames = Field(
        default_factory=CategorizedItemNames, alias="outOfStock"
    )


class CategoryCounts(BaseModel):
    """Item counts for one menu category."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    available: int = 0
    out_of_stock: int = Field(default=0, alias="outOfStock")


class OverallStatus(BaseModel):
    """Item counts for the whole menu, per category."""

    drinks: CategoryCounts = Field(default_factory=CategoryCounts)
    toppings: CategoryCounts = Field(default_factory=CategoryCounts)
