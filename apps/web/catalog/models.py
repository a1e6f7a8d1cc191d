"""
Catalog models - ingredients, menu items, and which items contain what.

Menu items mirror the delivery platform's items (external_id is the
platform's item ID). The local is_available flag is our belief about the
remote state and is only changed after the platform accepted the change.
"""

from typing import Any, Literal

from django.db import models
from django.db.models.functions import Lower
from django.utils import timezone

from apps.web.core.models import TimestampedModel

Bucket = Literal["drinks", "toppings"]


class ItemCategory(models.TextChoices):
    """Menu item category."""

    DRINK = "drink", "Drink"
    TOPPING = "topping", "Topping"


def bucket_for(category: str) -> Bucket:
    """Output bucket for a category - anything that isn't a topping is a drink."""
    if category == ItemCategory.TOPPING:
        return "toppings"
    return "drinks"


class Ingredient(TimestampedModel):
    """
    A named component that menu items contain (e.g., "pearls", "taro").

    Names are unique case-insensitively; lookups use iexact.
    """

    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = [Lower("name")]
        constraints = [
            models.UniqueConstraint(
                Lower("name"),
                name="unique_ingredient_name_ci",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.name = self.name.strip()
        super().save(*args, **kwargs)


class MenuItem(TimestampedModel):
    """
    A drink or topping sold on the delivery platform.

    Tracks availability (86'd status) as last confirmed by the platform.
    """

    external_id = models.CharField(
        max_length=255,
        unique=True,
        help_text="Item ID on the delivery platform",
    )
    name = models.CharField(max_length=200)
    category = models.CharField(
        max_length=20,
        choices=ItemCategory.choices,
        default=ItemCategory.DRINK,
    )

    # Availability (86'd when False)
    is_available = models.BooleanField(
        default=True,
        help_text="False = 86'd (unavailable)",
    )
    availability_updated_at = models.DateTimeField(
        default=timezone.now,
        help_text="When availability was last confirmed by the platform",
    )

    ingredients = models.ManyToManyField(
        Ingredient,
        through="ItemIngredient",
        related_name="menu_items",
    )

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category"]),
            models.Index(fields=["is_available"]),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def bucket(self) -> Bucket:
        """Which output bucket (drinks/toppings) this item is reported in."""
        return bucket_for(self.category)


class ItemIngredient(models.Model):
    """Link between a menu item and an ingredient it contains."""

    menu_item = models.ForeignKey(
        MenuItem,
        on_delete=models.CASCADE,
        related_name="ingredient_links",
    )
    ingredient = models.ForeignKey(
        Ingredient,
        on_delete=models.CASCADE,
        related_name="item_links",
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["menu_item", "ingredient"],
                name="unique_item_ingredient",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.menu_item.name} contains {self.ingredient.name}"
