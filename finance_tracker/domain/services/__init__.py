"""Domain services package."""

from .dates import (
    advance_billing_date,
    days_until,
    is_due_within,
    month_key,
    period_date_range,
    urgency_tier,
)
from .filtering import (
    apply_filters,
    filter_transactions,
    filters_for_period,
    sort_transactions,
)
from .finance import (
    calculate_net_total,
    compute_category_breakdown,
    compute_monthly_trends,
    compute_overview,
)
from .subscriptions import (
    advance_on_billing_event,
    due_soon,
    monthly_cost_of,
    renewal_urgency,
    total_monthly_cost,
    upcoming_renewals,
)
from .validation import (
    raise_for_errors,
    validate_subscription_changes,
    validate_subscription_draft,
    validate_transaction_changes,
    validate_transaction_draft,
)

__all__ = [
    "advance_billing_date",
    "days_until",
    "is_due_within",
    "month_key",
    "period_date_range",
    "urgency_tier",
    "apply_filters",
    "filter_transactions",
    "filters_for_period",
    "sort_transactions",
    "calculate_net_total",
    "compute_category_breakdown",
    "compute_monthly_trends",
    "compute_overview",
    "advance_on_billing_event",
    "due_soon",
    "monthly_cost_of",
    "renewal_urgency",
    "total_monthly_cost",
    "upcoming_renewals",
    "raise_for_errors",
    "validate_subscription_changes",
    "validate_subscription_draft",
    "validate_transaction_changes",
    "validate_transaction_draft",
]
