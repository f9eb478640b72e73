"""SQLAlchemy-backed record stores for transactions and subscriptions.

Blocking database work runs in a worker thread through ``asyncio.to_thread``
so callers on the event loop are never blocked.
"""

from abc import ABC, abstractmethod
import asyncio
from collections.abc import Mapping
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    MetaData,
    Numeric,
    String,
    Table,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.exc import SQLAlchemyError

from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.application.ports.record_store import (
    RecordNotFoundError,
    RecordStoreError,
)
from finance_tracker.domain.constants import AMOUNT_MAX_DIGITS, SORT_FIELDS
from finance_tracker.domain.models import (
    Subscription,
    Transaction,
    TransactionFilters,
)
from finance_tracker.utils.decimal_utils import coerce_decimal

metadata = MetaData()


def _amount_type() -> Numeric:
    return Numeric(AMOUNT_MAX_DIGITS + 2, 2, asdecimal=True)


transactions_table = Table(
    "transactions",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("owner_id", String(64), nullable=False, index=True),
    Column("amount", _amount_type(), nullable=False),
    Column("kind", String(16), nullable=False),
    Column("description", String(100), nullable=False),
    Column("category", String(64), nullable=False),
    Column("date", Date, nullable=False),
    Column("is_recurring", Boolean, nullable=False, default=False),
    Column("recurring_id", String(64)),
    Column("notes", String),
    Column("receipt_url", String),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

subscriptions_table = Table(
    "subscriptions",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("owner_id", String(64), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("amount", _amount_type(), nullable=False),
    Column("billing_cycle", String(16), nullable=False),
    Column("category", String(64), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("next_billing_date", Date, nullable=False),
    Column("notes", String),
    Column("website", String),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)


def ensure_schema(db_port: DatabaseEnginePort) -> None:
    """Create the record store tables if they do not exist.

    Args:
        db_port: Port providing access to the record store engine.

    Raises:
        RecordStoreError: If the database rejects the DDL.
    """
    try:
        metadata.create_all(db_port.get_engine())
    except SQLAlchemyError as exc:
        raise RecordStoreError(f"Could not create record store tables: {exc}") from exc


class SqlAlchemyRecordStore(ABC):
    """Shared CRUD plumbing over one table.

    Subclasses set ``table`` and ``entity_label`` and map rows to records in
    ``_to_record``.
    """

    table: Table
    entity_label = "record"

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the record store engine.
        """
        self._db_port = db_port

    async def list(
        self,
        owner_id: str,
        filters: TransactionFilters | None = None,
    ) -> list:
        return await self._run(
            f"list {self.entity_label}s",
            self._list_sync,
            owner_id,
            filters,
        )

    async def create(self, owner_id: str, draft) -> Any:
        return await self._run(
            f"create {self.entity_label}",
            self._create_sync,
            owner_id,
            draft,
        )

    async def update(self, record_id: str, changes: Mapping[str, Any]) -> Any:
        return await self._run(
            f"update {self.entity_label}",
            self._update_sync,
            record_id,
            dict(changes),
        )

    async def delete(self, record_id: str) -> None:
        await self._run(
            f"delete {self.entity_label}",
            self._delete_sync,
            record_id,
        )

    async def _run(self, action: str, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"Could not {action}: {exc}") from exc

    def _list_sync(
        self,
        owner_id: str,
        filters: TransactionFilters | None,
    ) -> list:
        query = (
            select(self.table)
            .where(self.table.c.owner_id == owner_id)
            .where(*self._filter_clauses(filters))
            .order_by(*self._ordering(filters))
        )
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [self._to_record(row) for row in rows]

    def _create_sync(self, owner_id: str, draft) -> Any:
        now = datetime.now(timezone.utc)
        values = asdict(draft)
        values["amount"] = coerce_decimal(values["amount"])
        values.update(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            conn.execute(insert(self.table).values(**values))
        return self._fetch_one(values["id"])

    def _update_sync(self, record_id: str, changes: dict[str, Any]) -> Any:
        unknown = sorted(
            name
            for name in changes
            if name not in self.table.c or name in ("id", "owner_id")
        )
        if unknown:
            raise RecordStoreError(
                f"Cannot update {self.entity_label} fields: {', '.join(unknown)}"
            )
        values = dict(changes)
        if "amount" in values:
            values["amount"] = coerce_decimal(values["amount"])
        values["updated_at"] = datetime.now(timezone.utc)
        statement = (
            update(self.table)
            .where(self.table.c.id == record_id)
            .values(**values)
        )
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            result = conn.execute(statement)
        if result.rowcount == 0:
            raise RecordNotFoundError(
                f"{self.entity_label.capitalize()} {record_id} does not exist"
            )
        return self._fetch_one(record_id)

    def _delete_sync(self, record_id: str) -> None:
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            result = conn.execute(
                delete(self.table).where(self.table.c.id == record_id)
            )
        if result.rowcount == 0:
            raise RecordNotFoundError(
                f"{self.entity_label.capitalize()} {record_id} does not exist"
            )

    def _fetch_one(self, record_id: str) -> Any:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            row = conn.execute(
                select(self.table).where(self.table.c.id == record_id)
            ).first()
        if row is None:
            raise RecordNotFoundError(
                f"{self.entity_label.capitalize()} {record_id} does not exist"
            )
        return self._to_record(row)

    def _filter_clauses(self, filters: TransactionFilters | None) -> list:
        return []

    def _ordering(self, filters: TransactionFilters | None) -> list:
        return [self.table.c.created_at.desc()]

    @abstractmethod
    def _to_record(self, row) -> Any:
        """Map a table row to a domain record."""


class SqlAlchemyTransactionStore(SqlAlchemyRecordStore):
    """Record store for transactions with filter push-down."""

    table = transactions_table
    entity_label = "transaction"

    def _filter_clauses(self, filters: TransactionFilters | None) -> list:
        if filters is None:
            return []
        columns = self.table.c
        clauses = []
        if filters.start_date is not None:
            clauses.append(columns.date >= filters.start_date)
        if filters.end_date is not None:
            clauses.append(columns.date <= filters.end_date)
        if filters.categories:
            clauses.append(columns.category.in_(list(filters.categories)))
        if filters.kind not in (None, "all"):
            clauses.append(columns.kind == filters.kind)
        if filters.min_amount is not None:
            clauses.append(columns.amount >= filters.min_amount)
        if filters.max_amount is not None:
            clauses.append(columns.amount <= filters.max_amount)
        if filters.search:
            clauses.append(
                columns.description.icontains(filters.search, autoescape=True)
            )
        return clauses

    def _ordering(self, filters: TransactionFilters | None) -> list:
        sort_by = filters.sort_by if filters and filters.sort_by else "date"
        direction = filters.sort_direction if filters else "desc"
        if sort_by not in SORT_FIELDS:
            raise RecordStoreError(f"Cannot sort transactions by {sort_by}")
        column = self.table.c[sort_by]
        primary = column.asc() if direction == "asc" else column.desc()
        return [primary, self.table.c.created_at.desc()]

    def _to_record(self, row) -> Transaction:
        return Transaction(
            id=row.id,
            owner_id=row.owner_id,
            amount=coerce_decimal(row.amount),
            kind=row.kind,
            description=row.description,
            category=row.category,
            date=row.date,
            is_recurring=bool(row.is_recurring),
            recurring_id=row.recurring_id,
            notes=row.notes,
            receipt_url=row.receipt_url,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class SqlAlchemySubscriptionStore(SqlAlchemyRecordStore):
    """Record store for subscriptions, newest billing date first."""

    table = subscriptions_table
    entity_label = "subscription"

    def _ordering(self, filters: TransactionFilters | None) -> list:
        return [
            self.table.c.next_billing_date.desc(),
            self.table.c.created_at.desc(),
        ]

    def _to_record(self, row) -> Subscription:
        return Subscription(
            id=row.id,
            owner_id=row.owner_id,
            name=row.name,
            amount=coerce_decimal(row.amount),
            billing_cycle=row.billing_cycle,
            category=row.category,
            start_date=row.start_date,
            next_billing_date=row.next_billing_date,
            notes=row.notes,
            website=row.website,
            is_active=bool(row.is_active),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


__all__ = [
    "metadata",
    "transactions_table",
    "subscriptions_table",
    "ensure_schema",
    "SqlAlchemyRecordStore",
    "SqlAlchemyTransactionStore",
    "SqlAlchemySubscriptionStore",
]
