"""Domain models package."""

from .filters import TransactionFilters
from .finance import CategoryBreakdown, FinancialOverview, MonthlyTrend
from .records import (
    Category,
    Subscription,
    SubscriptionDraft,
    Transaction,
    TransactionDraft,
)

__all__ = [
    "Category",
    "Transaction",
    "TransactionDraft",
    "Subscription",
    "SubscriptionDraft",
    "TransactionFilters",
    "FinancialOverview",
    "CategoryBreakdown",
    "MonthlyTrend",
]
