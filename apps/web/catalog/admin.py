"""Admin registration for catalog models."""

from django.contrib import admin

from apps.web.catalog.models import Ingredient, ItemIngredient, MenuItem


class ItemIngredientInline(admin.TabularInline):  # type: ignore[type-arg]
    """Inline for the ingredients an item contains."""

    model = ItemIngredient
    extra = 0
    autocomplete_fields = ["ingredient"]


@admin.register(Ingredient)
class IngredientAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin for ingredients."""

    list_display = ["name", "created_at"]
    search_fields = ["name"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """
    Admin for menu items.

    Availability is read-only here - it only changes through an 86/restore
    action or a menu sync, so the platform and the catalog stay in step.
    """

    list_display = [
        "name",
        "category",
        "external_id",
        "is_available",
        "availability_updated_at",
    ]
    list_filter = ["category", "is_available"]
    search_fields = ["name", "external_id", "ingredient_links__ingredient__name"]
    readonly_fields = [
        "is_available",
        "availability_updated_at",
        "created_at",
        "updated_at",
    ]
    inlines = [ItemIngredientInline]
    ordering = ["name"]
