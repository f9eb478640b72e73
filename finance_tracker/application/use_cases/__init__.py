"""Application use cases package."""

from .get_dashboard import DashboardView, GetDashboardUseCase
from .manage_subscriptions import SubscriptionCollection
from .manage_transactions import TransactionCollection
from .record_collection import RecordCollection, StoreResult

__all__ = [
    "DashboardView",
    "GetDashboardUseCase",
    "RecordCollection",
    "StoreResult",
    "SubscriptionCollection",
    "TransactionCollection",
]
