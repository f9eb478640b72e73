"""Domain models for derived financial aggregates."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class FinancialOverview:
    """Totals for a set of transactions plus subscription costs.

    Attributes:
        total_income: Sum of income transactions.
        total_expenses: Sum of expense transactions plus subscriptions.
        net_amount: Income minus total expenses.
        savings_rate: Net amount as a percentage of income (0 without income).
        subscriptions_total: Monthly subscription cost folded into expenses.
        period: Label of the period the figures cover.
    """

    total_income: Decimal
    total_expenses: Decimal
    net_amount: Decimal
    savings_rate: Decimal
    subscriptions_total: Decimal
    period: str = "current"


@dataclass(frozen=True)
class CategoryBreakdown:
    """Expense total for one category and its share of all expenses."""

    category_id: str
    category_name: str
    amount: Decimal
    percentage: Decimal
    color: str


@dataclass(frozen=True)
class MonthlyTrend:
    """Income and expense totals for one ``YYYY-MM`` month."""

    month: str
    income: Decimal
    expenses: Decimal

    @property
    def savings(self) -> Decimal:
        """Return income minus expenses."""
        return self.income - self.expenses


__all__ = ["FinancialOverview", "CategoryBreakdown", "MonthlyTrend"]
