"""Calendar arithmetic for billing cycles, due dates, and periods.

Month arithmetic relies on ``dateutil.relativedelta``: when the source day
does not exist in the target month the result is clamped to that month's
last day (2025-01-31 plus one month is 2025-02-28). The clamp is applied on
every advance, so a schedule that once lands on the 28th stays there.
"""

import calendar
from datetime import date, timedelta
from logging import Logger

from dateutil.relativedelta import relativedelta

from finance_tracker.domain.constants import (
    BILLING_CYCLE_MONTHS,
    CRITICAL_DAYS,
    URGENCY_CRITICAL,
    URGENCY_NORMAL,
    URGENCY_WARNING,
    WARNING_DAYS,
)


def advance_billing_date(
    current: date,
    billing_cycle: str,
    logger: Logger | None = None,
) -> date:
    """Return ``current`` moved forward by one billing period.

    Args:
        current: Date to advance.
        billing_cycle: monthly, quarterly, biannual, or annual.
        logger: Optional logger used to report unknown cycles.

    Returns:
        date: Advanced date. Unknown cycles advance by one month.
    """
    months = BILLING_CYCLE_MONTHS.get(billing_cycle)
    if months is None:
        if logger is not None:
            logger.warning(
                f"Unknown billing cycle '{billing_cycle}', advancing one month"
            )
        months = 1
    return current + relativedelta(months=months)


def is_due_within(
    next_billing_date: date,
    threshold_days: int,
    today: date | None = None,
) -> bool:
    """Return True when the date falls at or before today + threshold.

    There is no lower bound: overdue dates are due as well.
    """
    reference = today or date.today()
    return next_billing_date <= reference + timedelta(days=threshold_days)


def days_until(next_billing_date: date, today: date | None = None) -> int:
    """Return the signed number of days from today to the date."""
    reference = today or date.today()
    return (next_billing_date - reference).days


def urgency_tier(days_left: int) -> str:
    """Map a day count to critical (<=3), warning (<=7), or normal."""
    if days_left <= CRITICAL_DAYS:
        return URGENCY_CRITICAL
    if days_left <= WARNING_DAYS:
        return URGENCY_WARNING
    return URGENCY_NORMAL


def month_key(value: date) -> str:
    """Return the ``YYYY-MM`` bucket key of a date."""
    return f"{value.year:04d}-{value.month:02d}"


def month_start(value: date, months_back: int = 0) -> date:
    """Return the first day of the month ``months_back`` months before."""
    return value.replace(day=1) - relativedelta(months=months_back)


def period_date_range(
    period: str,
    today: date | None = None,
) -> tuple[date | None, date | None]:
    """Return the inclusive date range of a named time period.

    Args:
        period: day, week, month, quarter, year, or all.
        today: Reference date, defaults to the current date.

    Returns:
        tuple[date | None, date | None]: Start and end dates, both None for
        ``all``.

    Raises:
        ValueError: If the period id is unknown.
    """
    reference = today or date.today()
    if period == "day":
        return reference, reference
    if period == "week":
        return reference - timedelta(days=7), reference
    if period == "month":
        last_day = calendar.monthrange(reference.year, reference.month)[1]
        return reference.replace(day=1), reference.replace(day=last_day)
    if period == "quarter":
        return reference - relativedelta(months=3), reference
    if period == "year":
        return reference - relativedelta(months=12), reference
    if period == "all":
        return None, None
    raise ValueError(
        f"Unsupported time period: {period}. "
        "Expected day, week, month, quarter, year, or all."
    )


__all__ = [
    "advance_billing_date",
    "is_due_within",
    "days_until",
    "urgency_tier",
    "month_key",
    "month_start",
    "period_date_range",
]
