"""Domain models for user-recorded transactions and subscriptions."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Category:
    """Display metadata for a transaction or subscription category."""

    id: str
    name: str
    color: str
    icon: str = "circle-dot"


@dataclass(frozen=True)
class TransactionDraft:
    """Payload used to create a transaction.

    Attributes:
        amount: Positive amount; the direction is carried by ``kind``.
        kind: Either ``income`` or ``expense``.
        description: Short label between 1 and 100 characters.
        category: Catalog id or free-form category string.
        date: Calendar date of the transaction.
    """

    amount: Decimal
    kind: str
    description: str
    category: str
    date: date
    is_recurring: bool = False
    recurring_id: str | None = None
    notes: str | None = None
    receipt_url: str | None = None


@dataclass(frozen=True)
class Transaction:
    """Stored transaction. Instances are replaced, never mutated."""

    id: str
    owner_id: str
    amount: Decimal
    kind: str
    description: str
    category: str
    date: date
    is_recurring: bool = False
    recurring_id: str | None = None
    notes: str | None = None
    receipt_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class SubscriptionDraft:
    """Payload used to create a subscription."""

    name: str
    amount: Decimal
    billing_cycle: str
    category: str
    start_date: date
    next_billing_date: date
    notes: str | None = None
    website: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class Subscription:
    """Stored subscription.

    Attributes:
        next_billing_date: Next unpaid occurrence; advancing it is the only
            way billing state changes.
    """

    id: str
    owner_id: str
    name: str
    amount: Decimal
    billing_cycle: str
    category: str
    start_date: date
    next_billing_date: date
    notes: str | None = None
    website: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "Category",
    "TransactionDraft",
    "Transaction",
    "SubscriptionDraft",
    "Subscription",
]
