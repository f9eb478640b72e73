"""Composition root for wiring infrastructure adapters."""

from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.application.use_cases.get_dashboard import GetDashboardUseCase
from finance_tracker.application.use_cases.manage_subscriptions import (
    SubscriptionCollection,
)
from finance_tracker.application.use_cases.manage_transactions import (
    TransactionCollection,
)
from finance_tracker.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.infrastructure.record_store import (
    SqlAlchemySubscriptionStore,
    SqlAlchemyTransactionStore,
)
from finance_tracker.infrastructure.settings import FinanceSettings


def build_database_adapter(
    settings: FinanceSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    resolved = settings or FinanceSettings.from_env()
    return SqlAlchemyDatabaseEngineAdapter(resolved.db_url)


def build_transaction_collection(
    owner_id: str,
    db_port: DatabaseEnginePort | None = None,
) -> TransactionCollection:
    """Return the transaction collection for an owner."""
    resolved_db = db_port or build_database_adapter()
    return TransactionCollection(
        SqlAlchemyTransactionStore(resolved_db),
        owner_id,
        logger=get_app_logger(),
    )


def build_subscription_collection(
    owner_id: str,
    db_port: DatabaseEnginePort | None = None,
) -> SubscriptionCollection:
    """Return the subscription collection for an owner."""
    resolved_db = db_port or build_database_adapter()
    return SubscriptionCollection(
        SqlAlchemySubscriptionStore(resolved_db),
        owner_id,
        logger=get_app_logger(),
    )


def build_dashboard_use_case(
    owner_id: str,
    settings: FinanceSettings | None = None,
) -> GetDashboardUseCase:
    """Return the dashboard use case wired to the configured database."""
    resolved = settings or FinanceSettings.from_env()
    db_port = build_database_adapter(resolved)
    return GetDashboardUseCase(
        transactions=build_transaction_collection(owner_id, db_port),
        subscriptions=build_subscription_collection(owner_id, db_port),
        logger=get_app_logger(),
        trend_months=resolved.trend_months,
        renewal_window_days=resolved.renewal_window_days,
        due_soon_days=resolved.due_soon_days,
    )


__all__ = [
    "build_database_adapter",
    "build_transaction_collection",
    "build_subscription_collection",
    "build_dashboard_use_case",
]
