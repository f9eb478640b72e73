"""Subscription collection with billing and cost shortcuts."""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from finance_tracker.application.use_cases.record_collection import (
    RecordCollection,
    StoreResult,
)
from finance_tracker.domain.constants import (
    DEFAULT_DUE_SOON_DAYS,
    DEFAULT_RENEWAL_WINDOW_DAYS,
)
from finance_tracker.domain.models import Subscription, SubscriptionDraft
from finance_tracker.domain.services.subscriptions import (
    advance_on_billing_event,
    due_soon,
    total_monthly_cost,
    upcoming_renewals,
)
from finance_tracker.domain.services.validation import (
    validate_subscription_changes,
    validate_subscription_draft,
)


class SubscriptionCollection(RecordCollection[Subscription, SubscriptionDraft]):
    """One owner's subscriptions."""

    entity_label = "subscription"

    async def process_next_billing(
        self,
        subscription_id: str,
    ) -> StoreResult[Subscription]:
        """Record a billing event by advancing the next billing date.

        The new date is computed from the stored next billing date while
        holding the subscription's lock, so two billing events processed
        back to back advance the schedule twice.

        Args:
            subscription_id: Id of a subscription in the collection.

        Returns:
            StoreResult: The updated subscription or the failure.
        """
        async with self._record_lock(subscription_id):
            current = self.get(subscription_id)
            if current is None:
                message = f"Subscription {subscription_id} is not loaded"
                self._error = message
                self._logger.warning(message)
                return StoreResult.failure(message)
            next_billing_date = advance_on_billing_event(current, self._logger)
            self._logger.info(
                f"Advancing subscription {subscription_id} from "
                f"{current.next_billing_date} to {next_billing_date}"
            )
            return await self._update_locked(
                subscription_id,
                {"next_billing_date": next_billing_date},
            )

    def monthly_cost(self) -> Decimal:
        """Return the monthly cost of the active subscriptions."""
        return total_monthly_cost(self._items, self._logger)

    def upcoming_renewals(
        self,
        window_days: int = DEFAULT_RENEWAL_WINDOW_DAYS,
        today: date | None = None,
    ) -> list[Subscription]:
        return upcoming_renewals(self._items, window_days, today)

    def due_soon(
        self,
        threshold_days: int = DEFAULT_DUE_SOON_DAYS,
        today: date | None = None,
    ) -> list[Subscription]:
        return due_soon(self._items, threshold_days, today)

    def _validate_draft(self, draft: SubscriptionDraft) -> dict[str, str]:
        return validate_subscription_draft(draft)

    def _validate_changes(
        self,
        changes: Mapping[str, Any],
        current: Subscription | None,
    ) -> dict[str, str]:
        return validate_subscription_changes(changes, current)


__all__ = ["SubscriptionCollection"]
