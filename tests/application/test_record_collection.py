"""Tests for the optimistic, versioned record collections."""

import asyncio
from collections.abc import Mapping
from dataclasses import asdict, replace
from datetime import date
from decimal import Decimal
from typing import Any
from unittest.mock import MagicMock

import pytest

from finance_tracker.application.ports.record_store import (
    RecordNotFoundError,
    RecordStoreError,
    RecordStorePort,
)
from finance_tracker.application.use_cases.manage_transactions import (
    TransactionCollection,
)
from finance_tracker.application.use_cases.record_collection import (
    SUPERSEDED_MESSAGE,
)
from finance_tracker.domain.models import (
    Transaction,
    TransactionDraft,
    TransactionFilters,
)


def _transaction(record_id: str, amount: str = "10.00", **overrides) -> Transaction:
    values = dict(
        id=record_id,
        owner_id="owner-1",
        amount=Decimal(amount),
        kind="expense",
        description=f"Item {record_id}",
        category="groceries",
        date=date(2025, 3, 1),
    )
    values.update(overrides)
    return Transaction(**values)


def _draft(**overrides) -> TransactionDraft:
    values = dict(
        amount=Decimal("42.00"),
        kind="expense",
        description="Groceries",
        category="groceries",
        date=date(2025, 3, 2),
    )
    values.update(overrides)
    return TransactionDraft(**values)


class FakeTransactionStore(RecordStorePort):
    """In-memory store that can fail or pause on demand."""

    def __init__(self, records: list[Transaction] | None = None) -> None:
        self.records = {record.id: record for record in records or []}
        self.fail_with: str | None = None
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, Any]] = []
        self._next_id = 100

    async def _checkpoint(self, action: str) -> None:
        gate = self.gates.get(action)
        if gate is not None:
            await gate.wait()
        if self.fail_with:
            raise RecordStoreError(self.fail_with)

    async def list(
        self,
        owner_id: str,
        filters: TransactionFilters | None = None,
    ) -> list[Transaction]:
        self.calls.append(("list", filters))
        snapshot = [r for r in self.records.values() if r.owner_id == owner_id]
        await self._checkpoint("list")
        return snapshot

    async def create(self, owner_id: str, draft: TransactionDraft) -> Transaction:
        self.calls.append(("create", draft))
        await self._checkpoint("create")
        self._next_id += 1
        record = Transaction(id=f"t{self._next_id}", owner_id=owner_id, **asdict(draft))
        self.records[record.id] = record
        return record

    async def update(self, record_id: str, changes: Mapping[str, Any]) -> Transaction:
        self.calls.append(("update", dict(changes)))
        await self._checkpoint("update")
        if record_id not in self.records:
            raise RecordNotFoundError(f"Transaction {record_id} does not exist")
        values = dict(changes)
        if "amount" in values:
            values["amount"] = Decimal(str(values["amount"]))
        record = replace(self.records[record_id], **values)
        self.records[record_id] = record
        return record

    async def delete(self, record_id: str) -> None:
        self.calls.append(("delete", record_id))
        await self._checkpoint("delete")
        self.records.pop(record_id, None)


def _collection(store: FakeTransactionStore) -> TransactionCollection:
    return TransactionCollection(
        store,
        "owner-1",
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )


@pytest.mark.asyncio
async def test_fetch_replaces_items_in_store_order() -> None:
    store = FakeTransactionStore([_transaction("a"), _transaction("b")])
    collection = _collection(store)

    result = await collection.fetch()

    assert result.ok
    assert [t.id for t in collection.items] == ["a", "b"]
    assert collection.generation == 1
    assert not collection.is_loading


@pytest.mark.asyncio
async def test_fetch_failure_keeps_previous_items() -> None:
    store = FakeTransactionStore([_transaction("a")])
    collection = _collection(store)
    await collection.fetch()
    store.fail_with = "backend offline"

    result = await collection.fetch()

    assert not result.ok
    assert result.error == "backend offline"
    assert collection.error == "backend offline"
    assert [t.id for t in collection.items] == ["a"]


@pytest.mark.asyncio
async def test_stale_fetch_result_is_discarded() -> None:
    """A fetch resolving after a newer one started must not win."""
    store = FakeTransactionStore([_transaction("old")])
    collection = _collection(store)
    gate = asyncio.Event()
    store.gates["list"] = gate

    slow = asyncio.create_task(collection.fetch())
    await asyncio.sleep(0)
    store.gates.pop("list")
    store.records = {"new": _transaction("new")}
    fresh = await collection.fetch()
    gate.set()
    stale = await slow

    assert fresh.ok
    assert stale.error == SUPERSEDED_MESSAGE
    assert [t.id for t in collection.items] == ["new"]


@pytest.mark.asyncio
async def test_create_prepends_store_record() -> None:
    store = FakeTransactionStore([_transaction("a")])
    collection = _collection(store)
    await collection.fetch()

    result = await collection.create(_draft())

    assert result.ok
    assert [t.id for t in collection.items] == [result.value.id, "a"]
    assert result.value.owner_id == "owner-1"


@pytest.mark.asyncio
async def test_create_rejects_invalid_draft_without_store_call() -> None:
    store = FakeTransactionStore()
    collection = _collection(store)

    result = await collection.create(_draft(amount=Decimal("0"), description=""))

    assert not result.ok
    assert set(result.field_errors) == {"amount", "description"}
    assert store.calls == []
    assert collection.items == ()


@pytest.mark.asyncio
async def test_create_failure_leaves_collection_untouched() -> None:
    store = FakeTransactionStore([_transaction("a")])
    collection = _collection(store)
    await collection.fetch()
    store.fail_with = "quota exceeded"

    result = await collection.create(_draft())

    assert result.error == "quota exceeded"
    assert [t.id for t in collection.items] == ["a"]


@pytest.mark.asyncio
async def test_update_is_applied_optimistically_then_confirmed() -> None:
    store = FakeTransactionStore([_transaction("a"), _transaction("b")])
    collection = _collection(store)
    await collection.fetch()
    gate = asyncio.Event()
    store.gates["update"] = gate

    pending = asyncio.create_task(collection.update("b", {"amount": "99.50"}))
    await asyncio.sleep(0)
    assert collection.get("b").amount == Decimal("99.50")
    assert collection.is_loading
    gate.set()
    result = await pending

    assert result.ok
    assert [t.id for t in collection.items] == ["a", "b"]
    assert collection.get("b").amount == Decimal("99.50")


@pytest.mark.asyncio
async def test_update_failure_rolls_back() -> None:
    store = FakeTransactionStore([_transaction("a", "10.00")])
    collection = _collection(store)
    await collection.fetch()
    store.fail_with = "conflict"

    result = await collection.update("a", {"amount": Decimal("20.00")})

    assert result.error == "conflict"
    assert collection.get("a").amount == Decimal("10.00")


@pytest.mark.asyncio
async def test_update_rejects_invalid_changes() -> None:
    store = FakeTransactionStore([_transaction("a")])
    collection = _collection(store)
    await collection.fetch()

    result = await collection.update("a", {"kind": "transfer"})

    assert result.field_errors == {"kind": "Type must be income or expense"}
    assert ("update", {"kind": "transfer"}) not in store.calls


@pytest.mark.asyncio
async def test_delete_removes_then_restores_position_on_failure() -> None:
    store = FakeTransactionStore(
        [_transaction("a"), _transaction("b"), _transaction("c")]
    )
    collection = _collection(store)
    await collection.fetch()
    store.fail_with = "network down"

    result = await collection.delete("b")

    assert not result.ok
    assert [t.id for t in collection.items] == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_delete_success() -> None:
    store = FakeTransactionStore([_transaction("a"), _transaction("b")])
    collection = _collection(store)
    await collection.fetch()

    result = await collection.delete("a")

    assert result.value is True
    assert [t.id for t in collection.items] == ["b"]
    assert "a" not in store.records


@pytest.mark.asyncio
async def test_same_record_mutations_run_in_call_order() -> None:
    """The second update waits for the first to complete."""
    store = FakeTransactionStore([_transaction("a")])
    collection = _collection(store)
    await collection.fetch()
    gate = asyncio.Event()
    store.gates["update"] = gate

    first = asyncio.create_task(collection.update("a", {"description": "first"}))
    second = asyncio.create_task(collection.update("a", {"description": "second"}))
    await asyncio.sleep(0)
    assert [call for call in store.calls if call[0] == "update"] == [
        ("update", {"description": "first"}),
    ]
    gate.set()
    await asyncio.gather(first, second)

    assert collection.get("a").description == "second"
    assert store.records["a"].description == "second"


@pytest.mark.asyncio
async def test_filtered_and_aggregates_use_snapshot() -> None:
    store = FakeTransactionStore(
        [
            _transaction("a", "50"),
            _transaction("b", "10", kind="income", category="income"),
            _transaction("c", "30"),
        ]
    )
    collection = _collection(store)
    await collection.fetch()

    ordered = collection.filtered(
        TransactionFilters(kind="expense", sort_by="amount", sort_direction="asc")
    )
    overview = collection.overview(Decimal("5"))

    assert [t.id for t in ordered] == ["c", "a"]
    assert overview.total_expenses == Decimal("85")
    assert collection.category_breakdown()[0].amount == Decimal("80")
    assert len(collection.monthly_trends(6, today=date(2025, 3, 31))) == 6


@pytest.mark.asyncio
async def test_fetch_period_passes_date_range_to_store() -> None:
    store = FakeTransactionStore()
    collection = _collection(store)

    await collection.fetch_period("month", today=date(2025, 4, 18))

    _, filters = store.calls[0]
    assert filters.start_date == date(2025, 4, 1)
    assert filters.end_date == date(2025, 4, 30)


async def _fail_during_pending_fetch(store, collection, action, mutation):
    """Run a mutation that fails while a newer fetch is still in flight."""
    mutation_gate = asyncio.Event()
    list_gate = asyncio.Event()
    store.gates[action] = mutation_gate
    pending_mutation = asyncio.create_task(mutation)
    await asyncio.sleep(0)
    store.gates["list"] = list_gate
    pending_fetch = asyncio.create_task(collection.fetch())
    await asyncio.sleep(0)
    store.fail_with = "backend offline"
    mutation_gate.set()
    list_gate.set()
    return await asyncio.gather(pending_mutation, pending_fetch)


@pytest.mark.asyncio
async def test_failed_delete_is_restored_when_pending_fetch_fails_too() -> None:
    store = FakeTransactionStore([_transaction("a"), _transaction("b")])
    collection = _collection(store)
    await collection.fetch()

    deleted, fetched = await _fail_during_pending_fetch(
        store, collection, "delete", collection.delete("a")
    )

    assert not deleted.ok
    assert not fetched.ok
    assert [t.id for t in collection.items] == ["a", "b"]
    assert set(store.records) == {"a", "b"}


@pytest.mark.asyncio
async def test_failed_update_is_reverted_when_pending_fetch_fails_too() -> None:
    store = FakeTransactionStore([_transaction("a"), _transaction("b")])
    collection = _collection(store)
    await collection.fetch()

    updated, fetched = await _fail_during_pending_fetch(
        store,
        collection,
        "update",
        collection.update("a", {"description": "tentative"}),
    )

    assert not updated.ok
    assert not fetched.ok
    assert collection.get("a").description == "Item a"
    assert store.records["a"].description == "Item a"


@pytest.mark.asyncio
async def test_failed_delete_keeps_snapshot_of_newer_fetch() -> None:
    """A fetch applied while the delete was pending is not rolled back over."""
    store = FakeTransactionStore([_transaction("a"), _transaction("b")])
    collection = _collection(store)
    await collection.fetch()
    gate = asyncio.Event()
    store.gates["delete"] = gate

    pending = asyncio.create_task(collection.delete("a"))
    await asyncio.sleep(0)
    await collection.fetch()
    store.fail_with = "backend offline"
    gate.set()
    result = await pending

    assert not result.ok
    assert [t.id for t in collection.items] == ["a", "b"]


@pytest.mark.asyncio
async def test_record_locks_are_released_after_mutations() -> None:
    store = FakeTransactionStore([_transaction("a"), _transaction("b")])
    collection = _collection(store)
    await collection.fetch()

    await asyncio.gather(
        collection.update("a", {"description": "first"}),
        collection.update("a", {"description": "second"}),
        collection.delete("b"),
    )
    store.fail_with = "backend offline"
    await collection.update("a", {"description": "third"})

    assert collection._locks == {}
    assert collection._lock_users == {}
