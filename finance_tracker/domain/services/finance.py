"""Domain services for transaction aggregates."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from finance_tracker.domain.constants import (
    DEFAULT_TREND_MONTHS,
    EXPENSE,
    INCOME,
)
from finance_tracker.domain.models import (
    CategoryBreakdown,
    FinancialOverview,
    MonthlyTrend,
    Transaction,
)
from finance_tracker.domain.policies.categories import resolve_category
from finance_tracker.domain.services.dates import month_key, month_start
from finance_tracker.utils.decimal_utils import ZERO, coerce_decimal, percentage_of


def calculate_net_total(transactions: Iterable[Transaction]) -> Decimal:
    """Return income minus expenses as a single signed amount."""
    total = ZERO
    for transaction in transactions:
        amount = coerce_decimal(transaction.amount)
        if transaction.kind == INCOME:
            total += amount
        elif transaction.kind == EXPENSE:
            total -= amount
    return total


def compute_overview(
    transactions: Iterable[Transaction],
    subscriptions_total: Decimal = ZERO,
    period: str = "current",
) -> FinancialOverview:
    """Compute income, expenses, net amount, and savings rate.

    Args:
        transactions: Transactions of the period.
        subscriptions_total: Monthly subscription cost counted as expenses.
        period: Label of the period the figures cover.

    Returns:
        FinancialOverview: Totals; the savings rate is 0 without income.
    """
    total_income = ZERO
    transaction_expenses = ZERO
    for transaction in transactions:
        amount = coerce_decimal(transaction.amount)
        if transaction.kind == INCOME:
            total_income += amount
        elif transaction.kind == EXPENSE:
            transaction_expenses += amount

    subscriptions_total = coerce_decimal(subscriptions_total)
    total_expenses = transaction_expenses + subscriptions_total
    net_amount = total_income - total_expenses
    return FinancialOverview(
        total_income=total_income,
        total_expenses=total_expenses,
        net_amount=net_amount,
        savings_rate=percentage_of(net_amount, total_income),
        subscriptions_total=subscriptions_total,
        period=period,
    )


def compute_category_breakdown(
    transactions: Iterable[Transaction],
) -> list[CategoryBreakdown]:
    """Group expense transactions by category.

    Categories are ordered by amount, largest first; equal amounts keep the
    order in which their category first appeared.

    Args:
        transactions: Transactions of any kind; only expenses are counted.

    Returns:
        list[CategoryBreakdown]: One entry per expense category.
    """
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.kind != EXPENSE:
            continue
        amount = coerce_decimal(transaction.amount)
        totals[transaction.category] = totals.get(transaction.category, ZERO) + amount

    expense_total = sum(totals.values(), ZERO)
    breakdown = []
    for category_id, amount in totals.items():
        category = resolve_category(category_id)
        breakdown.append(
            CategoryBreakdown(
                category_id=category_id,
                category_name=category.name,
                amount=amount,
                percentage=percentage_of(amount, expense_total),
                color=category.color,
            )
        )
    return sorted(breakdown, key=lambda entry: entry.amount, reverse=True)


def compute_monthly_trends(
    transactions: Iterable[Transaction],
    window_months: int = DEFAULT_TREND_MONTHS,
    today: date | None = None,
) -> list[MonthlyTrend]:
    """Bucket transactions by calendar month.

    The ``window_months`` months ending at the current month always appear,
    with zero totals when empty. Transactions outside that window get their
    own bucket instead of being dropped.

    Args:
        transactions: Transactions to bucket.
        window_months: Number of months to pre-seed.
        today: Reference date, defaults to the current date.

    Returns:
        list[MonthlyTrend]: Buckets in ascending month order.
    """
    reference = today or date.today()
    buckets: dict[str, list[Decimal]] = {}
    for months_back in range(window_months - 1, -1, -1):
        buckets[month_key(month_start(reference, months_back))] = [ZERO, ZERO]

    for transaction in transactions:
        if transaction.kind not in (INCOME, EXPENSE):
            continue
        bucket = buckets.setdefault(month_key(transaction.date), [ZERO, ZERO])
        amount = coerce_decimal(transaction.amount)
        if transaction.kind == INCOME:
            bucket[0] += amount
        else:
            bucket[1] += amount

    return [
        MonthlyTrend(month=key, income=income, expenses=expenses)
        for key, (income, expenses) in sorted(buckets.items())
    ]


__all__ = [
    "calculate_net_total",
    "compute_overview",
    "compute_category_breakdown",
    "compute_monthly_trends",
]
