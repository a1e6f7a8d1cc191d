"""
Availability API views - the endpoints the chat front end talks to.

- 86 / restore an ingredient
- Status per ingredient or for the whole menu
- Ingredient and menu item listings
- Full menu sync from the delivery platform
"""

import json
import logging
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from pydantic import ValidationError as PydanticValidationError

from apps.web.availability.exceptions import NotFoundError, ValidationError
from apps.web.availability.serializers import (
    ErrorResponse,
    IngredientListResponse,
    MenuItemListResponse,
    MenuItemSchema,
    MenuSyncResponse,
    ToggleRequest,
    ToggleResponse,
)
from apps.web.availability.services import (
    StatusAggregator,
    apply_availability,
    default_context,
    normalize_ingredient_name,
    sync_menu_from_remote,
)
from apps.web.delivery.exceptions import DeliveryError

logger = logging.getLogger(__name__)


def _json_response(data: dict[str, Any], status: int = 200) -> JsonResponse:
    return JsonResponse(data, status=status)


def _error_response(
    error: str, details: str | None = None, status: int = 400
) -> JsonResponse:
    body = ErrorResponse(error=error, details=details)
    return _json_response(body.model_dump(exclude_none=True), status=status)


def _parse_toggle_request(request: HttpRequest) -> ToggleRequest:
    """Read a toggle request from a JSON or form-encoded body."""
    if request.content_type == "application/json":
        try:
            body = json.loads(request.body or b"{}")
        except json.JSONDecodeError as e:
            raise ValidationError("Invalid JSON in request body") from e
        if not isinstance(body, dict):
            raise ValidationError("Invalid JSON in request body")
    else:
        body = request.POST.dict()

    try:
        return ToggleRequest.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError("Ingredient is required") from e


def _toggle(request: HttpRequest, desired_available: bool) -> JsonResponse:
    try:
        toggle = _parse_toggle_request(request)
        ingredient = normalize_ingredient_name(toggle.ingredient)
        affected = apply_availability(
            ingredient,
            desired_available,
            acting_user=toggle.user,
            context=default_context(),
        )
    except ValidationError as e:
        return _error_response(e.message)
    except NotFoundError as e:
        return _error_response(
            "Ingredient not found",
            details=e.message,
            status=404,
        )
    except Exception as e:
        logger.exception("Failed to apply availability")
        return _error_response("Internal server error", details=str(e), status=500)

    if desired_available:
        message = f"Successfully restored {ingredient} to menu"
    else:
        message = f"Successfully removed {ingredient} from menu"

    response = ToggleResponse(
        ingredient=ingredient,
        affected_items=affected,
        message=message,
    )
    return _json_response(response.model_dump(by_alias=True))


@csrf_exempt
@require_POST
def eighty_six(request: HttpRequest) -> JsonResponse:
    """
    POST /api/86

    Mark every item containing the ingredient unavailable.

    Request body: {"ingredient": "pearls", "user": "optional"}
    Response: ToggleResponse (200), 400 if ingredient missing, 404 if no
    items contain it.
    """
    return _toggle(request, desired_available=False)


@csrf_exempt
@require_POST
def restore(request: HttpRequest) -> JsonResponse:
    """
    POST /api/restore

    Mark every item containing the ingredient available again.
    """
    return _toggle(request, desired_available=True)


@require_GET
def status(request: HttpRequest) -> JsonResponse:
    """
    GET /api/status[?ingredient=pearls]

    With an ingredient: its items split into available / outOfStock.
    Without: total/available/outOfStock counts for drinks and toppings.
    """
    aggregator = StatusAggregator(default_context().store)
    ingredient = request.GET.get("ingredient", "").strip()

    try:
        if ingredient:
            result = aggregator.status_for(ingredient)
        else:
            result = aggregator.overall_status()
    except ValidationError as e:
        return _error_response(e.message)
    except Exception as e:
        logger.exception("Failed to compute status")
        return _error_response("Internal server error", details=str(e), status=500)

    return _json_response(result.model_dump(by_alias=True))


@require_GET
def ingredients(_request: HttpRequest) -> JsonResponse:
    """GET /api/ingredients"""
    aggregator = StatusAggregator(default_context().store)
    try:
        names = aggregator.list_ingredients()
    except Exception as e:
        logger.exception("Failed to list ingredients")
        return _error_response("Internal server error", details=str(e), status=500)

    response = IngredientListResponse(ingredients=names)
    return _json_response(response.model_dump())


@require_GET
def menu_items(request: HttpRequest) -> JsonResponse:
    """
    GET /api/menu-items[?type=drink|topping]

    Unknown types are ignored and every item is returned.
    """
    aggregator = StatusAggregator(default_context().store)
    try:
        items = aggregator.list_menu_items(request.GET.get("type"))
    except Exception as e:
        logger.exception("Failed to list menu items")
        return _error_response("Internal server error", details=str(e), status=500)

    response = MenuItemListResponse(
        items=[MenuItemSchema.model_validate(item) for item in items]
    )
    return _json_response(response.model_dump(mode="json"))


@csrf_exempt
@require_POST
def sync_menu(_request: HttpRequest) -> JsonResponse:
    """
    POST /api/admin/sync-menu

    Pull the full menu from the delivery platform into the catalog.
    """
    try:
        result = sync_menu_from_remote(default_context())
    except DeliveryError as e:
        logger.warning("Menu sync failed: %s", e)
        return _error_response("Menu sync failed", details=e.message, status=502)
    except Exception as e:
        logger.exception("Menu sync failed")
        return _error_response("Internal server error", details=str(e), status=500)

    response = MenuSyncResponse(
        message=f"Synced {result.total} menu item(s)",
        **result.as_dict(),
    )
    return _json_response(response.model_dump())
