"""Use case to assemble the dashboard view model."""

import asyncio
from dataclasses import dataclass, field
from datetime import date

from finance_tracker.application.use_cases.manage_subscriptions import (
    SubscriptionCollection,
)
from finance_tracker.application.use_cases.manage_transactions import (
    TransactionCollection,
)
from finance_tracker.domain.constants import (
    DEFAULT_DUE_SOON_DAYS,
    DEFAULT_RENEWAL_WINDOW_DAYS,
    DEFAULT_TREND_MONTHS,
)
from finance_tracker.domain.models import (
    CategoryBreakdown,
    FinancialOverview,
    MonthlyTrend,
    Subscription,
    Transaction,
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
from finance_tracker.infrastructure.logging.logger import get_app_logger

RECENT_TRANSACTIONS = 5


@dataclass(frozen=True)
class DashboardView:
    """Figures rendered by the dashboard.

    Attributes:
        overview: Totals for the selected period, subscriptions included.
        categories: Expense breakdown for the selected period.
        trends: Monthly series over every loaded transaction.
        upcoming_renewals: Active subscriptions renewing within the window.
        due_soon: Active subscriptions due within the threshold, overdue
            included.
        recent_transactions: Latest transactions of the period.
        errors: Messages of store calls that failed during the refresh.
    """

    overview: FinancialOverview
    categories: list[CategoryBreakdown]
    trends: list[MonthlyTrend]
    upcoming_renewals: list[Subscription]
    due_soon: list[Subscription]
    recent_transactions: list[Transaction]
    errors: list[str] = field(default_factory=list)


class GetDashboardUseCase:
    """Compute dashboard figures from an owner's collections."""

    def __init__(
        self,
        transactions: TransactionCollection,
        subscriptions: SubscriptionCollection,
        logger=None,
        trend_months: int = DEFAULT_TREND_MONTHS,
        renewal_window_days: int = DEFAULT_RENEWAL_WINDOW_DAYS,
        due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
    ) -> None:
        """Initialize the use case.

        Args:
            transactions: Collection of the owner's transactions.
            subscriptions: Collection of the owner's subscriptions.
            logger: Optional logger compatible with logging.Logger-like API.
            trend_months: Months pre-seeded in the trend series.
            renewal_window_days: Days ahead scanned for renewals.
            due_soon_days: Threshold for due-soon notifications.
        """
        self._transactions = transactions
        self._subscriptions = subscriptions
        self._logger = logger or get_app_logger()
        self._trend_months = trend_months
        self._renewal_window_days = renewal_window_days
        self._due_soon_days = due_soon_days

    async def execute(
        self,
        period: str = "all",
        today: date | None = None,
        refresh: bool = True,
    ) -> DashboardView:
        """Return the dashboard view.

        Args:
            period: Time period used for the overview and breakdown.
            today: Reference date, defaults to the current date.
            refresh: Reload both collections from the store first.

        Returns:
            DashboardView: Derived figures; failed refreshes leave the
            previous snapshots in use and are listed in ``errors``.
        """
        reference = today or date.today()
        errors: list[str] = []
        if refresh:
            results = await asyncio.gather(
                self._transactions.fetch(),
                self._subscriptions.fetch(),
            )
            errors = [result.error for result in results if not result.ok]

        all_transactions = self._transactions.items
        in_period = apply_filters(
            all_transactions,
            filters_for_period(period, today=reference),
        )
        monthly_cost = self._subscriptions.monthly_cost()
        overview = compute_overview(in_period, monthly_cost, period)
        recent = sorted(
            in_period,
            key=lambda transaction: transaction.date,
            reverse=True,
        )[:RECENT_TRANSACTIONS]

        view = DashboardView(
            overview=overview,
            categories=compute_category_breakdown(in_period),
            trends=compute_monthly_trends(
                all_transactions,
                self._trend_months,
                reference,
            ),
            upcoming_renewals=self._subscriptions.upcoming_renewals(
                self._renewal_window_days,
                reference,
            ),
            due_soon=self._subscriptions.due_soon(self._due_soon_days, reference),
            recent_transactions=recent,
            errors=errors,
        )
        self._logger.info(
            f"Dashboard computed for owner {self._transactions.owner_id}: "
            f"income={overview.total_income}, "
            f"expenses={overview.total_expenses}, "
            f"net={overview.net_amount}"
        )
        return view


__all__ = ["GetDashboardUseCase", "DashboardView"]
