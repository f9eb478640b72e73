"""CLI adapter printing an owner's dashboard summary."""

import argparse
import asyncio
import sys

from finance_tracker.application.use_cases.get_dashboard import DashboardView
from finance_tracker.domain.constants import TIME_PERIODS
from finance_tracker.domain.services.dates import days_until, urgency_tier
from finance_tracker.infrastructure.container import build_dashboard_use_case
from finance_tracker.infrastructure.logging.logger import get_app_logger


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a finance dashboard.")
    parser.add_argument("owner_id", help="Owner whose records are summarized.")
    parser.add_argument(
        "--period",
        default="month",
        choices=sorted(TIME_PERIODS),
        help="Time period for the overview and category breakdown.",
    )
    return parser.parse_args(argv)


def _render(view: DashboardView, period: str) -> None:
    overview = view.overview
    print(f"Overview ({TIME_PERIODS[period]})")
    print(
        f"  income={overview.total_income:.2f} "
        f"expenses={overview.total_expenses:.2f} "
        f"net={overview.net_amount:.2f} "
        f"savings_rate={overview.savings_rate:.1f}% "
        f"subscriptions={overview.subscriptions_total:.2f}"
    )
    print("Spending by category")
    for entry in view.categories:
        print(
            f"  {entry.category_name}: {entry.amount:.2f} "
            f"({entry.percentage:.1f}%)"
        )
    print("Monthly trends")
    for trend in view.trends:
        print(
            f"  {trend.month}: income={trend.income:.2f} "
            f"expenses={trend.expenses:.2f} savings={trend.savings:.2f}"
        )
    print("Upcoming renewals")
    for subscription in view.upcoming_renewals:
        days_left = days_until(subscription.next_billing_date)
        print(
            f"  {subscription.name}: {subscription.amount:.2f} on "
            f"{subscription.next_billing_date} "
            f"[{urgency_tier(days_left)}]"
        )
    print(f"Payments due soon: {len(view.due_soon)}")


def main(argv: list[str] | None = None) -> None:
    """Compute and print the dashboard for an owner."""
    args = _parse_args(argv)
    logger = get_app_logger()
    use_case = build_dashboard_use_case(args.owner_id)

    view = asyncio.run(use_case.execute(period=args.period))

    for message in view.errors:
        logger.error(message)
    _render(view, args.period)
    if view.errors:
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
