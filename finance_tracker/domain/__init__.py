"""Domain package for business rules and core models."""

from .errors import FinanceTrackerError, ValidationError
from .models import (
    Category,
    CategoryBreakdown,
    FinancialOverview,
    MonthlyTrend,
    Subscription,
    SubscriptionDraft,
    Transaction,
    TransactionDraft,
    TransactionFilters,
)
from .policies import list_categories, resolve_category
from .services import (
    advance_billing_date,
    advance_on_billing_event,
    apply_filters,
    compute_category_breakdown,
    compute_monthly_trends,
    compute_overview,
    days_until,
    due_soon,
    is_due_within,
    monthly_cost_of,
    total_monthly_cost,
    upcoming_renewals,
    urgency_tier,
)

__all__ = [
    "FinanceTrackerError",
    "ValidationError",
    "Category",
    "CategoryBreakdown",
    "FinancialOverview",
    "MonthlyTrend",
    "Subscription",
    "SubscriptionDraft",
    "Transaction",
    "TransactionDraft",
    "TransactionFilters",
    "list_categories",
    "resolve_category",
    "advance_billing_date",
    "advance_on_billing_event",
    "apply_filters",
    "compute_category_breakdown",
    "compute_monthly_trends",
    "compute_overview",
    "days_until",
    "due_soon",
    "is_due_within",
    "monthly_cost_of",
    "total_monthly_cost",
    "upcoming_renewals",
    "urgency_tier",
]
