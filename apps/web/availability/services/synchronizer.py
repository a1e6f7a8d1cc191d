"""
Availability synchronizer - bulk 86/restore of every item containing an
ingredient.

For each affected menu item:
1. Lock the item (process-local lock + row lock)
2. Push the new availability to the delivery platform
3. Store the new availability locally, only after the platform accepted it

Items fail independently: a rejected, unreachable or timed-out item is left
as it was and reported nowhere in the result, and the batch carries on.
One audit entry is written per invocation, after the batch.
"""

import logging
from dataclasses import dataclass
from typing import cast

from django.apps import apps as django_apps
from django.db import DatabaseError, transaction

from eightysix_schemas import AvailabilityAction, CategorizedItemNames

from apps.web.availability.context import SyncContext
from apps.web.availability.exceptions import NotFoundError, ValidationError
from apps.web.availability.services.audit import record_action
from apps.web.catalog.exceptions import LocalStoreError
from apps.web.catalog.models import MenuItem
from apps.web.delivery.exceptions import (
    DeliveryAPIError,
    DeliveryError,
    DeliveryTimeoutError,
)

logger = logging.getLogger(__name__)


def normalize_ingredient_name(name: str | None) -> str:
    """
    Trim and lower-case an ingredient name.

    Raises:
        ValidationError: If nothing is left after trimming.
    """
    normalized = (name or "").strip().lower()
    if not normalized:
        raise ValidationError("Ingredient is required")
    return normalized


def default_context() -> SyncContext:
    """The process-wide context owned by the availability app."""
    config = django_apps.get_app_config("availability")
    return cast(SyncContext, config.sync_context)  # type: ignore[attr-defined]


@dataclass(frozen=True)
class ItemOutcome:
    """What happened to one item in a batch."""

    item: MenuItem
    succeeded: bool
    error: Exception | None = None


class AvailabilitySynchronizer:
    """Applies an ingredient's availability to the platform and the catalog."""

    def __init__(self, context: SyncContext) -> None:
        self.context = context

    def apply_availability(
        self,
        ingredient_name: str | None,
        desired_available: bool,
        acting_user: str | None = None,
    ) -> CategorizedItemNames:
        """
        Set every item containing the ingredient to desired_available.

        Args:
            ingredient_name: Ingredient to act on (case-insensitive, exact).
            desired_available: False to 86, True to restore.
            acting_user: Recorded in the audit log.

        Returns:
            Names of the items that were actually changed, by category.
            Items that failed are left out; the call still succeeds.

        Raises:
            ValidationError: If the ingredient name is blank.
            NotFoundError: If no menu item contains the ingredient.
        """
        ingredient = normalize_ingredient_name(ingredient_name)
        action = AvailabilityAction.for_availability(desired_available)

        items = self.context.store.items_for_ingredient(ingredient)
        if not items:
            raise NotFoundError(
                f"No menu items found containing ingredient: {ingredient}",
                ingredient=ingredient,
            )

        logger.info(
            "Applying %s for %r to %d item(s) (user=%s)",
            action.value,
            ingredient,
            len(items),
            acting_user or "unknown",
        )

        outcomes = [self._apply_to_item(item, desired_available) for item in items]
        result = self._categorize(outcomes)

        failed = [outcome for outcome in outcomes if not outcome.succeeded]
        if failed:
            logger.warning(
                "%s for %r: %d of %d item(s) failed: %s",
                action.value,
                ingredient,
                len(failed),
                len(outcomes),
                ", ".join(outcome.item.external_id for outcome in failed),
            )

        try:
            record_action(action, ingredient, acting_user, result)
        except DatabaseError:
            # The platform has already changed; report the result regardless
            logger.exception(
                "Failed to write action log for %s %r", action.value, ingredient
            )

        return result

    def _apply_to_item(self, item: MenuItem, desired_available: bool) -> ItemOutcome:
        """Push one item's availability and store it; never raises."""
        gateway = self.context.gateway
        remote_applied = False
        try:
            with self.context.locks.hold(item.external_id):
                try:
                    with transaction.atomic():
                        locked = self.context.store.lock_item(item.pk)
                        self.context.run_gateway_call(
                            gateway.set_item_availability(
                                locked.external_id, desired_available
                            )
                        )
                        remote_applied = True
                        self.context.store.set_item_availability(
                            locked, desired_available, remote_applied=True
                        )
                except DatabaseError as e:
                    # Raised on entering or committing the transaction
                    raise LocalStoreError(
                        f"Failed to commit availability for {item.external_id}: {e}",
                        external_id=item.external_id,
                        remote_applied=remote_applied,
                    ) from e
        except DeliveryTimeoutError as e:
            logger.warning("Timed out updating %s: %s", item.external_id, e)
            return ItemOutcome(item=item, succeeded=False, error=e)
        except DeliveryAPIError as e:
            logger.warning(
                "Delivery platform rejected %s (status=%s): %s",
                item.external_id,
                e.status_code,
                e,
            )
            return ItemOutcome(item=item, succeeded=False, error=e)
        except DeliveryError as e:
            logger.warning("Could not reach platform for %s: %s", item.external_id, e)
            return ItemOutcome(item=item, succeeded=False, error=e)
        except LocalStoreError as e:
            if e.remote_applied:
                logger.error(
                    "%s changed on the platform but not locally, needs "
                    "reconciliation: %s",
                    item.external_id,
                    e,
                )
            else:
                logger.warning("Could not update %s locally: %s", item.external_id, e)
            return ItemOutcome(item=item, succeeded=False, error=e)
        except Exception as e:
            logger.exception("Unexpected error updating %s", item.external_id)
            return ItemOutcome(item=item, succeeded=False, error=e)

        return ItemOutcome(item=locked, succeeded=True)

    def _categorize(self, outcomes: list[ItemOutcome]) -> CategorizedItemNames:
        result = CategorizedItemNames()
        for outcome in outcomes:
            if outcome.succeeded:
                getattr(result, outcome.item.bucket).append(outcome.item.name)
        return result


def apply_availability(
    ingredient_name: str | None,
    desired_available: bool,
    acting_user: str | None = None,
    context: SyncContext | None = None,
) -> CategorizedItemNames:
    """Run one 86/restore with the given (or the process-wide) context."""
    synchronizer = AvailabilitySynchronizer(context or default_context())
    return synchronizer.apply_availability(
        ingredient_name, desired_available, acting_user
    )


def eighty_six_ingredient(
    ingredient_name: str | None,
    user: str | None = None,
    context: SyncContext | None = None,
) -> CategorizedItemNames:
    """Mark every item containing the ingredient unavailable."""
    return apply_availability(ingredient_name, False, user, context)


def restore_ingredient(
    ingredient_name: str | None,
    user: str | None = None,
    context: SyncContext | None = None,
) -> CategorizedItemNames:
    """Mark every item containing the ingredient available again."""
    return apply_availability(ingredient_name, True, user, context)
