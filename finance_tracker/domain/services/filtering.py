"""In-memory filtering and ordering of transaction collections."""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import date

from finance_tracker.domain.constants import SORT_DIRECTIONS, SORT_FIELDS
from finance_tracker.domain.models import Transaction, TransactionFilters
from finance_tracker.domain.services.dates import period_date_range


def filter_transactions(
    transactions: Iterable[Transaction],
    filters: TransactionFilters,
) -> list[Transaction]:
    """Return the transactions matching every provided criterion.

    Args:
        transactions: Source collection, left untouched.
        filters: Criteria; unset fields impose no constraint.

    Returns:
        list[Transaction]: Matching transactions in input order.
    """
    categories = set(filters.categories) if filters.categories else None
    needle = filters.search.casefold() if filters.search else None
    kind = filters.kind if filters.kind not in (None, "all") else None
    return [
        transaction
        for transaction in transactions
        if _matches(transaction, filters, categories, kind, needle)
    ]


def sort_transactions(
    transactions: Iterable[Transaction],
    sort_by: str,
    sort_direction: str = "desc",
) -> list[Transaction]:
    """Return a stably sorted copy of the transactions.

    Ties keep their input order in both directions.

    Raises:
        ValueError: If the sort field or direction is unknown.
    """
    if sort_by not in SORT_FIELDS:
        raise ValueError(
            f"Unsupported sort field: {sort_by}. Expected one of {SORT_FIELDS}."
        )
    if sort_direction not in SORT_DIRECTIONS:
        raise ValueError(
            f"Unsupported sort direction: {sort_direction}. Expected asc or desc."
        )
    return sorted(
        transactions,
        key=lambda transaction: getattr(transaction, sort_by),
        reverse=sort_direction == "desc",
    )


def apply_filters(
    transactions: Sequence[Transaction],
    filters: TransactionFilters | None = None,
) -> list[Transaction]:
    """Filter then order transactions according to filter criteria.

    Empty or missing criteria return a copy of the input in the
    same order.
    """
    if filters is None or filters.is_empty():
        return list(transactions)
    matched = filter_transactions(transactions, filters)
    if filters.sort_by is None:
        return matched
    return sort_transactions(matched, filters.sort_by, filters.sort_direction)


def filters_for_period(
    period: str,
    filters: TransactionFilters | None = None,
    today: date | None = None,
) -> TransactionFilters:
    """Return filters whose date range covers a named time period.

    Args:
        period: One of the ids in ``TIME_PERIODS``.
        filters: Criteria to keep, defaults to no other constraint.
        today: Reference date, defaults to the current date.
    """
    start_date, end_date = period_date_range(period, today=today)
    return replace(
        filters or TransactionFilters(),
        start_date=start_date,
        end_date=end_date,
    )


def _matches(
    transaction: Transaction,
    filters: TransactionFilters,
    categories: set[str] | None,
    kind: str | None,
    needle: str | None,
) -> bool:
    if filters.start_date is not None and transaction.date < filters.start_date:
        return False
    if filters.end_date is not None and transaction.date > filters.end_date:
        return False
    if categories is not None and transaction.category not in categories:
        return False
    if kind is not None and transaction.kind != kind:
        return False
    if filters.min_amount is not None and transaction.amount < filters.min_amount:
        return False
    if filters.max_amount is not None and transaction.amount > filters.max_amount:
        return False
    if needle is not None and needle not in transaction.description.casefold():
        return False
    return True


__all__ = [
    "filter_transactions",
    "sort_transactions",
    "apply_filters",
    "filters_for_period",
]
