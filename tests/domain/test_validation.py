"""Tests for field-level payload validation."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from finance_tracker.domain.errors import ValidationError
from finance_tracker.domain.models import (
    Subscription,
    SubscriptionDraft,
    TransactionDraft,
)
from finance_tracker.domain.services.validation import (
    raise_for_errors,
    validate_subscription_changes,
    validate_subscription_draft,
    validate_transaction_changes,
    validate_transaction_draft,
)


def _transaction_draft(**overrides) -> TransactionDraft:
    values = dict(
        amount=Decimal("12.50"),
        kind="expense",
        description="Lunch",
        category="dining",
        date=date(2025, 3, 1),
    )
    values.update(overrides)
    return TransactionDraft(**values)


def _subscription_draft(**overrides) -> SubscriptionDraft:
    values = dict(
        name="Streaming",
        amount=Decimal("9.99"),
        billing_cycle="monthly",
        category="entertainment",
        start_date=date(2025, 1, 1),
        next_billing_date=date(2025, 2, 1),
    )
    values.update(overrides)
    return SubscriptionDraft(**values)


def test_valid_transaction_draft_has_no_errors() -> None:
    assert validate_transaction_draft(_transaction_draft()) == {}


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), "abc",
                                    Decimal("NaN")])
def test_transaction_amount_must_be_positive_number(amount) -> None:
    errors = validate_transaction_draft(_transaction_draft(amount=amount))

    assert "amount" in errors


def test_transaction_description_length_bounds() -> None:
    assert "description" in validate_transaction_draft(
        _transaction_draft(description="   ")
    )
    assert "description" in validate_transaction_draft(
        _transaction_draft(description="x" * 101)
    )
    assert validate_transaction_draft(_transaction_draft(description="x")) == {}
    assert validate_transaction_draft(
        _transaction_draft(description="x" * 100)
    ) == {}


def test_transaction_reports_every_bad_field() -> None:
    errors = validate_transaction_draft(
        _transaction_draft(kind="transfer", category="", date=datetime(2025, 1, 1))
    )

    assert set(errors) == {"kind", "category", "date"}


def test_transaction_changes_reject_unknown_and_empty() -> None:
    assert validate_transaction_changes({}) == {"changes": "No fields to update"}
    assert validate_transaction_changes({"owner_id": "x"}) == {
        "owner_id": "Unknown field"
    }
    assert validate_transaction_changes({"amount": "15.00"}) == {}


def test_subscription_draft_checks_cycle_and_date_order() -> None:
    errors = validate_subscription_draft(
        _subscription_draft(
            billing_cycle="weekly",
            next_billing_date=date(2024, 12, 31),
        )
    )

    assert set(errors) == {"billing_cycle", "next_billing_date"}


def test_subscription_changes_use_stored_dates() -> None:
    """Changing one date is checked against the stored other date."""
    current = Subscription(
        id="s1",
        owner_id="owner-1",
        name="Streaming",
        amount=Decimal("9.99"),
        billing_cycle="monthly",
        category="entertainment",
        start_date=date(2025, 1, 1),
        next_billing_date=date(2025, 2, 1),
    )

    errors = validate_subscription_changes(
        {"next_billing_date": date(2024, 6, 1)},
        current,
    )

    assert "next_billing_date" in errors
    assert validate_subscription_changes(
        {"next_billing_date": date(2025, 3, 1)},
        current,
    ) == {}


def test_raise_for_errors() -> None:
    raise_for_errors({})

    with pytest.raises(ValidationError) as excinfo:
        raise_for_errors({"amount": "Amount must be positive"})

    assert excinfo.value.field_errors == {"amount": "Amount must be positive"}


@pytest.mark.parametrize(
    ("amount", "message"),
    [
        (Decimal("0.004"), "Amount must have at most 2 decimal places"),
        ("19.999", "Amount must have at most 2 decimal places"),
        (
            Decimal("1E+12"),
            "Amount must have at most 12 digits before the decimal point",
        ),
    ],
)
def test_transaction_amount_must_fit_the_stored_precision(amount, message) -> None:
    """Amounts the record store would round or overflow are rejected."""
    errors = validate_transaction_draft(_transaction_draft(amount=amount))

    assert errors == {"amount": message}


def test_transaction_amount_accepts_trailing_zeros() -> None:
    draft = _transaction_draft(amount=Decimal("12.5000"))

    assert validate_transaction_draft(draft) == {}
    assert validate_transaction_changes({"amount": "999999999999.99"}) == {}
