"""Owned, versioned in-memory collections backed by the record store.

A ``RecordCollection`` holds one owner's records and is the only component
that mutates them. Readers get tuple snapshots. Store calls follow an
apply, then reconcile or roll back sequence and report the outcome as a
``StoreResult`` instead of raising:

* fetches take a new generation number; a fetch that resolves after a newer
  one started is discarded;
* updates and deletes are applied locally first, then confirmed by the
  store or rolled back when it fails, unless a newer fetch result has
  replaced the snapshot meanwhile;
* creates are prepended once the store has assigned an id;
* mutations of the same record id run one at a time.
"""

import asyncio
from collections.abc import Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from finance_tracker.application.ports.record_store import (
    RecordStoreError,
    RecordStorePort,
)
from finance_tracker.domain.models import TransactionFilters
from finance_tracker.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from finance_tracker.utils.decimal_utils import coerce_decimal

RecordT = TypeVar("RecordT")
DraftT = TypeVar("DraftT")
ValueT = TypeVar("ValueT")

SUPERSEDED_MESSAGE = "Superseded by a newer fetch"


@dataclass(frozen=True)
class StoreResult(Generic[ValueT]):
    """Outcome of a store-facing collection operation.

    Attributes:
        value: Returned entity, snapshot, or flag on success.
        error: Human-readable failure message, None on success.
        field_errors: Field-level validation messages, if any.
    """

    value: ValueT | None = None
    error: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Return True when the operation succeeded."""
        return self.error is None

    @classmethod
    def success(cls, value: ValueT) -> "StoreResult[ValueT]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        message: str,
        field_errors: Mapping[str, str] | None = None,
    ) -> "StoreResult[ValueT]":
        return cls(error=message, field_errors=dict(field_errors or {}))


class RecordCollection(Generic[RecordT, DraftT]):
    """In-memory collection of one owner's records.

    Subclasses provide validation through ``_validate_draft`` and
    ``_validate_changes``.
    """

    entity_label = "record"

    def __init__(
        self,
        store: RecordStorePort,
        owner_id: str,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the collection.

        Args:
            store: Port to the external record store.
            owner_id: Owner whose records the collection holds.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger for user actions.
        """
        self._store = store
        self._owner_id = owner_id
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._items: tuple[RecordT, ...] = ()
        self._generation = 0
        self._applied_generation = 0
        self._pending = 0
        self._error: str | None = None
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def items(self) -> tuple[RecordT, ...]:
        """Return a read-only snapshot of the records."""
        return self._items

    @property
    def generation(self) -> int:
        """Return the number of the most recently started fetch."""
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self._pending > 0

    @property
    def error(self) -> str | None:
        """Return the message of the last failed operation, if any."""
        return self._error

    def get(self, record_id: str) -> RecordT | None:
        """Return the record with the given id from the snapshot."""
        for record in self._items:
            if record.id == record_id:
                return record
        return None

    async def fetch(
        self,
        filters: TransactionFilters | None = None,
    ) -> StoreResult[tuple[RecordT, ...]]:
        """Reload the collection from the store.

        Args:
            filters: Optional criteria passed through to the store.

        Returns:
            StoreResult: The new snapshot, or a failure when the store
            fails or a newer fetch started meanwhile.
        """
        self._generation += 1
        generation = self._generation
        self._start()
        try:
            records = await self._store.list(self._owner_id, filters)
        except RecordStoreError as exc:
            if generation != self._generation:
                return StoreResult.failure(SUPERSEDED_MESSAGE)
            return self._fail(f"Failed to fetch {self.entity_label}s", exc)
        finally:
            self._finish()

        if generation != self._generation:
            self._logger.info(
                f"Discarded {self.entity_label} fetch generation {generation}; "
                f"generation {self._generation} is newer"
            )
            return StoreResult.failure(SUPERSEDED_MESSAGE)

        self._items = tuple(records)
        self._applied_generation = generation
        self._logger.info(
            f"Fetched {len(self._items)} {self.entity_label}s "
            f"for owner {self._owner_id}"
        )
        return StoreResult.success(self._items)

    async def create(self, draft: DraftT) -> StoreResult[RecordT]:
        """Validate and persist a new record, then prepend it locally."""
        field_errors = self._validate_draft(draft)
        if field_errors:
            return self._reject(field_errors)

        self._start()
        try:
            record = await self._store.create(self._owner_id, draft)
        except RecordStoreError as exc:
            return self._fail(f"Failed to create {self.entity_label}", exc)
        finally:
            self._finish()

        self._items = (record,) + self._items
        self._usage_logger.info(
            f"Owner {self._owner_id} created {self.entity_label} {record.id}"
        )
        return StoreResult.success(record)

    async def update(
        self,
        record_id: str,
        changes: Mapping[str, Any],
    ) -> StoreResult[RecordT]:
        """Apply a partial update locally, then confirm it with the store.

        On failure the previous version of the record is restored.
        """
        async with self._record_lock(record_id):
            return await self._update_locked(record_id, dict(changes))

    async def delete(self, record_id: str) -> StoreResult[bool]:
        """Remove a record locally, then confirm the removal with the store.

        On failure the record is put back at its previous position.
        """
        async with self._record_lock(record_id):
            index, current = self._locate(record_id)
            generation = self._applied_generation
            if current is not None:
                self._items = self._items[:index] + self._items[index + 1:]

            self._start()
            try:
                await self._store.delete(record_id)
            except RecordStoreError as exc:
                if current is not None and self._snapshot_is(generation):
                    position = min(index, len(self._items))
                    self._items = (
                        self._items[:position] + (current,) + self._items[position:]
                    )
                return self._fail(f"Failed to delete {self.entity_label}", exc)
            finally:
                self._finish()

        self._usage_logger.info(
            f"Owner {self._owner_id} deleted {self.entity_label} {record_id}"
        )
        return StoreResult.success(True)

    async def _update_locked(
        self,
        record_id: str,
        changes: dict[str, Any],
    ) -> StoreResult[RecordT]:
        current = self.get(record_id)
        field_errors = self._validate_changes(changes, current)
        if field_errors:
            return self._reject(field_errors)

        generation = self._applied_generation
        if current is not None:
            self._replace(record_id, self._apply_changes(current, changes))

        self._start()
        try:
            record = await self._store.update(record_id, changes)
        except RecordStoreError as exc:
            if current is not None and self._snapshot_is(generation):
                self._replace(record_id, current)
            return self._fail(f"Failed to update {self.entity_label}", exc)
        finally:
            self._finish()

        self._replace(record_id, record)
        self._usage_logger.info(
            f"Owner {self._owner_id} updated {self.entity_label} {record_id}: "
            f"{sorted(changes)}"
        )
        return StoreResult.success(record)

    @asynccontextmanager
    async def _record_lock(self, record_id: str):
        """Hold the lock of one record id; idle locks are dropped."""
        lock = self._locks.get(record_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[record_id] = lock
        self._lock_users[record_id] = self._lock_users.get(record_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._lock_users[record_id] - 1
            if remaining:
                self._lock_users[record_id] = remaining
            else:
                del self._lock_users[record_id]
                del self._locks[record_id]

    def _snapshot_is(self, generation: int) -> bool:
        """Return True when no fetch result was applied since ``generation``."""
        return generation == self._applied_generation

    def _locate(self, record_id: str) -> tuple[int, RecordT | None]:
        for index, record in enumerate(self._items):
            if record.id == record_id:
                return index, record
        return -1, None

    def _replace(self, record_id: str, record: RecordT) -> None:
        self._items = tuple(
            record if existing.id == record_id else existing
            for existing in self._items
        )

    @staticmethod
    def _apply_changes(current: RecordT, changes: Mapping[str, Any]) -> RecordT:
        values = dict(changes)
        if "amount" in values:
            values["amount"] = coerce_decimal(values["amount"])
        return replace(current, **values)

    def _validate_draft(self, draft: DraftT) -> dict[str, str]:
        return {}

    def _validate_changes(
        self,
        changes: Mapping[str, Any],
        current: RecordT | None,
    ) -> dict[str, str]:
        return {}

    def _start(self) -> None:
        self._pending += 1
        self._error = None

    def _finish(self) -> None:
        self._pending -= 1

    def _reject(self, field_errors: dict[str, str]) -> StoreResult:
        message = f"Invalid {self.entity_label}"
        self._error = message
        self._logger.warning(f"{message}: {field_errors}")
        return StoreResult.failure(message, field_errors)

    def _fail(self, message: str, exc: RecordStoreError) -> StoreResult:
        self._error = str(exc) or message
        self._logger.error(f"{message}: {exc}")
        return StoreResult.failure(self._error)


__all__ = ["StoreResult", "RecordCollection", "SUPERSEDED_MESSAGE"]
