"""Domain services for subscription costs and renewals."""

from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal
from logging import Logger

from finance_tracker.domain.constants import (
    BILLING_CYCLE_MONTHS,
    DEFAULT_DUE_SOON_DAYS,
    DEFAULT_RENEWAL_WINDOW_DAYS,
)
from finance_tracker.domain.models import Subscription
from finance_tracker.domain.services.dates import (
    advance_billing_date,
    days_until,
    is_due_within,
    urgency_tier,
)
from finance_tracker.utils.decimal_utils import ZERO, coerce_decimal


def monthly_cost_of(
    subscription: Subscription,
    logger: Logger | None = None,
) -> Decimal:
    """Return the month-equivalent cost of a subscription.

    Args:
        subscription: Subscription to normalize.
        logger: Optional logger used to report unknown cycles.

    Returns:
        Decimal: Amount divided by the months in its cycle; 0 for an
        unknown cycle.
    """
    months = BILLING_CYCLE_MONTHS.get(subscription.billing_cycle)
    if months is None:
        if logger is not None:
            logger.warning(
                f"Subscription {subscription.id} has unknown billing cycle "
                f"'{subscription.billing_cycle}'; counted as 0 per month"
            )
        return ZERO
    return coerce_decimal(subscription.amount) / months


def total_monthly_cost(
    subscriptions: Iterable[Subscription],
    logger: Logger | None = None,
) -> Decimal:
    """Sum the monthly cost of active subscriptions."""
    return sum(
        (
            monthly_cost_of(subscription, logger)
            for subscription in subscriptions
            if subscription.is_active
        ),
        ZERO,
    )


def upcoming_renewals(
    subscriptions: Iterable[Subscription],
    window_days: int = DEFAULT_RENEWAL_WINDOW_DAYS,
    today: date | None = None,
) -> list[Subscription]:
    """Return active subscriptions renewing between today and the window end.

    Both bounds are inclusive; overdue subscriptions are left out, unlike
    ``due_soon``.

    Args:
        subscriptions: Subscriptions to scan.
        window_days: Length of the window after today.
        today: Reference date, defaults to the current date.

    Returns:
        list[Subscription]: Matches ordered by next billing date.
    """
    start = today or date.today()
    end = start + timedelta(days=window_days)
    renewals = [
        subscription
        for subscription in subscriptions
        if subscription.is_active
        and start <= subscription.next_billing_date <= end
    ]
    return sorted(renewals, key=lambda subscription: subscription.next_billing_date)


def due_soon(
    subscriptions: Iterable[Subscription],
    threshold_days: int = DEFAULT_DUE_SOON_DAYS,
    today: date | None = None,
) -> list[Subscription]:
    """Return active subscriptions due within the threshold, overdue included."""
    return [
        subscription
        for subscription in subscriptions
        if subscription.is_active
        and is_due_within(subscription.next_billing_date, threshold_days, today)
    ]


def renewal_urgency(subscription: Subscription, today: date | None = None) -> str:
    """Return the urgency tier of a subscription's next billing date."""
    return urgency_tier(days_until(subscription.next_billing_date, today))


def advance_on_billing_event(
    subscription: Subscription,
    logger: Logger | None = None,
) -> date:
    """Return the billing date following the current one.

    The advance starts from the stored next billing date rather than from
    today, so the schedule keeps its original cadence.
    """
    return advance_billing_date(
        subscription.next_billing_date,
        subscription.billing_cycle,
        logger,
    )


__all__ = [
    "monthly_cost_of",
    "total_monthly_cost",
    "upcoming_renewals",
    "due_soon",
    "renewal_urgency",
    "advance_on_billing_event",
]
