"""Tests for the subscription collection."""

import asyncio
from collections.abc import Mapping
from dataclasses import asdict, replace
from datetime import date
from decimal import Decimal
from typing import Any
from unittest.mock import MagicMock

import pytest

from finance_tracker.application.ports.record_store import (
    RecordStoreError,
    RecordStorePort,
)
from finance_tracker.application.use_cases.manage_subscriptions import (
    SubscriptionCollection,
)
from finance_tracker.domain.models import Subscription, SubscriptionDraft


def _subscription(
    record_id: str,
    amount: str = "10.00",
    billing_cycle: str = "monthly",
    next_billing_date: date = date(2025, 1, 31),
    is_active: bool = True,
) -> Subscription:
    return Subscription(
        id=record_id,
        owner_id="owner-1",
        name=f"Service {record_id}",
        amount=Decimal(amount),
        billing_cycle=billing_cycle,
        category="entertainment",
        start_date=date(2024, 1, 31),
        next_billing_date=next_billing_date,
        is_active=is_active,
    )


class FakeSubscriptionStore(RecordStorePort):
    """In-memory subscription store."""

    def __init__(self, records: list[Subscription]) -> None:
        self.records = {record.id: record for record in records}
        self.updates: list[tuple[str, dict[str, Any]]] = []
        self.fail_updates = False

    async def list(self, owner_id: str, filters=None) -> list[Subscription]:
        return sorted(
            self.records.values(),
            key=lambda s: s.next_billing_date,
            reverse=True,
        )

    async def create(self, owner_id: str, draft: SubscriptionDraft) -> Subscription:
        record = Subscription(id="new", owner_id=owner_id, **asdict(draft))
        self.records[record.id] = record
        return record

    async def update(self, record_id: str, changes: Mapping[str, Any]) -> Subscription:
        self.updates.append((record_id, dict(changes)))
        await asyncio.sleep(0)
        if self.fail_updates:
            raise RecordStoreError("Failed to reach backend")
        record = replace(self.records[record_id], **changes)
        self.records[record_id] = record
        return record

    async def delete(self, record_id: str) -> None:
        self.records.pop(record_id)


def _collection(store: FakeSubscriptionStore) -> SubscriptionCollection:
    return SubscriptionCollection(
        store,
        "owner-1",
        logger=MagicMock(),
        usage_logger=MagicMock(),
    )


@pytest.mark.asyncio
async def test_process_next_billing_advances_from_stored_date() -> None:
    store = FakeSubscriptionStore([_subscription("s1")])
    collection = _collection(store)
    await collection.fetch()

    result = await collection.process_next_billing("s1")

    assert result.ok
    assert result.value.next_billing_date == date(2025, 2, 28)
    assert store.updates == [("s1", {"next_billing_date": date(2025, 2, 28)})]
    assert collection.get("s1").next_billing_date == date(2025, 2, 28)


@pytest.mark.asyncio
async def test_concurrent_billing_events_advance_twice() -> None:
    """Back-to-back billing events each move the schedule forward."""
    store = FakeSubscriptionStore(
        [_subscription("s1", next_billing_date=date(2025, 3, 15))]
    )
    collection = _collection(store)
    await collection.fetch()

    await asyncio.gather(
        collection.process_next_billing("s1"),
        collection.process_next_billing("s1"),
    )

    assert collection.get("s1").next_billing_date == date(2025, 5, 15)
    assert [changes for _, changes in store.updates] == [
        {"next_billing_date": date(2025, 4, 15)},
        {"next_billing_date": date(2025, 5, 15)},
    ]


@pytest.mark.asyncio
async def test_process_next_billing_failure_keeps_date() -> None:
    store = FakeSubscriptionStore([_subscription("s1")])
    collection = _collection(store)
    await collection.fetch()
    store.fail_updates = True

    result = await collection.process_next_billing("s1")

    assert not result.ok
    assert collection.error == "Failed to reach backend"
    assert collection.get("s1").next_billing_date == date(2025, 1, 31)


@pytest.mark.asyncio
async def test_process_next_billing_unknown_id() -> None:
    store = FakeSubscriptionStore([])
    collection = _collection(store)

    result = await collection.process_next_billing("missing")

    assert not result.ok
    assert store.updates == []


@pytest.mark.asyncio
async def test_create_rejects_billing_date_before_start() -> None:
    store = FakeSubscriptionStore([])
    collection = _collection(store)
    draft = SubscriptionDraft(
        name="Gym",
        amount=Decimal("30"),
        billing_cycle="monthly",
        category="healthcare",
        start_date=date(2025, 5, 1),
        next_billing_date=date(2025, 4, 1),
    )

    result = await collection.create(draft)

    assert "next_billing_date" in result.field_errors
    assert store.records == {}


@pytest.mark.asyncio
async def test_cost_and_renewal_views() -> None:
    today = date(2025, 6, 10)
    store = FakeSubscriptionStore(
        [
            _subscription("monthly", "15.00", next_billing_date=date(2025, 6, 12)),
            _subscription("annual", "120.00", "annual",
                          next_billing_date=date(2025, 6, 1)),
            _subscription("paused", "50.00", next_billing_date=date(2025, 6, 11),
                          is_active=False),
        ]
    )
    collection = _collection(store)
    await collection.fetch()

    assert collection.monthly_cost() == Decimal("25.00")
    assert [s.id for s in collection.upcoming_renewals(today=today)] == [
        "monthly"
    ]
    assert {s.id for s in collection.due_soon(today=today)} == {
        "monthly",
        "annual",
    }
