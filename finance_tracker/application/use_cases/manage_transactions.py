"""Transaction collection with validation and aggregation shortcuts."""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from finance_tracker.application.use_cases.record_collection import (
    RecordCollection,
    StoreResult,
)
from finance_tracker.domain.constants import DEFAULT_TREND_MONTHS
from finance_tracker.domain.models import (
    CategoryBreakdown,
    FinancialOverview,
    MonthlyTrend,
    Transaction,
    TransactionDraft,
    TransactionFilters,
)
from finance_tracker.domain.services.filtering import (
    apply_filters,
    filters_for_period,
)
from finance_tracker.domain.services.finance import (
    compute_category_breakdown,
    compute_monthly_trends,
    compute_overview,
)
from finance_tracker.domain.services.validation import (
    validate_transaction_changes,
    validate_transaction_draft,
)
from finance_tracker.utils.decimal_utils import ZERO


class TransactionCollection(RecordCollection[Transaction, TransactionDraft]):
    """One owner's transactions."""

    entity_label = "transaction"

    async def fetch_period(
        self,
        period: str,
        filters: TransactionFilters | None = None,
        today: date | None = None,
    ) -> StoreResult[tuple[Transaction, ...]]:
        """Fetch the transactions of a named time period.

        Args:
            period: day, week, month, quarter, year, or all.
            filters: Other criteria to pass to the store.
            today: Reference date, defaults to the current date.
        """
        return await self.fetch(filters_for_period(period, filters, today))

    def filtered(
        self,
        filters: TransactionFilters | None = None,
    ) -> list[Transaction]:
        """Return the snapshot filtered and ordered in memory."""
        return apply_filters(self._items, filters)

    def overview(
        self,
        subscriptions_total: Decimal = ZERO,
        period: str = "current",
    ) -> FinancialOverview:
        return compute_overview(self._items, subscriptions_total, period)

    def category_breakdown(self) -> list[CategoryBreakdown]:
        return compute_category_breakdown(self._items)

    def monthly_trends(
        self,
        window_months: int = DEFAULT_TREND_MONTHS,
        today: date | None = None,
    ) -> list[MonthlyTrend]:
        return compute_monthly_trends(self._items, window_months, today)

    def _validate_draft(self, draft: TransactionDraft) -> dict[str, str]:
        return validate_transaction_draft(draft)

    def _validate_changes(
        self,
        changes: Mapping[str, Any],
        current: Transaction | None,
    ) -> dict[str, str]:
        return validate_transaction_changes(changes)


__all__ = ["TransactionCollection"]
