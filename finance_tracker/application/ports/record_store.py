"""Port for the external record store.

The record store persists transactions and subscriptions for an owner. Every
call may suspend the caller; failures surface as ``RecordStoreError`` with a
human-readable message and no structured code.
"""

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from finance_tracker.domain.errors import FinanceTrackerError
from finance_tracker.domain.models import TransactionFilters

RecordT = TypeVar("RecordT", covariant=True)
DraftT = TypeVar("DraftT", contravariant=True)


class RecordStoreError(FinanceTrackerError):
    """Raised when the record store cannot complete a request."""


class RecordNotFoundError(RecordStoreError):
    """Raised when a record id does not exist in the store."""


class RecordStorePort(Protocol[RecordT, DraftT]):
    """Port exposing CRUD access to one kind of record."""

    async def list(
        self,
        owner_id: str,
        filters: TransactionFilters | None = None,
    ) -> list[RecordT]:
        """Return the owner's records in the store's own ordering."""

    async def create(self, owner_id: str, draft: DraftT) -> RecordT:
        """Persist a new record and return it with id and timestamps."""

    async def update(
        self,
        record_id: str,
        changes: Mapping[str, Any],
    ) -> RecordT:
        """Apply a partial update and return the stored record."""

    async def delete(self, record_id: str) -> None:
        """Remove a record."""


__all__ = [
    "RecordStoreError",
    "RecordNotFoundError",
    "RecordStorePort",
]
