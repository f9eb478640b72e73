"""Field-level validation of record payloads.

Validators return a mapping of field name to message so callers can report
every problem at once; an empty mapping means the payload is valid.
"""

from collections.abc import Mapping
from dataclasses import asdict, fields
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from finance_tracker.domain.constants import (
    AMOUNT_MAX_DIGITS,
    BILLING_CYCLES,
    DESCRIPTION_MAX_LENGTH,
    TRANSACTION_KINDS,
)
from finance_tracker.domain.errors import ValidationError
from finance_tracker.domain.models import (
    Subscription,
    SubscriptionDraft,
    TransactionDraft,
)
from finance_tracker.utils.decimal_utils import coerce_decimal

TRANSACTION_FIELDS = tuple(field.name for field in fields(TransactionDraft))
SUBSCRIPTION_FIELDS = tuple(field.name for field in fields(SubscriptionDraft))
CENT = Decimal("0.01")


def _check_amount(value: Any) -> str | None:
    try:
        amount = coerce_decimal(value)
    except ValueError:
        return "Invalid number"
    if not amount.is_finite():
        return "Invalid number"
    if amount <= 0:
        return "Amount must be positive"
    if amount.adjusted() >= AMOUNT_MAX_DIGITS:
        return (
            f"Amount must have at most {AMOUNT_MAX_DIGITS} digits "
            "before the decimal point"
        )
    if amount != amount.quantize(CENT):
        return "Amount must have at most 2 decimal places"
    return None


def _check_kind(value: Any) -> str | None:
    if value not in TRANSACTION_KINDS:
        return "Type must be income or expense"
    return None


def _check_description(value: Any) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return "Description is required"
    if len(value.strip()) > DESCRIPTION_MAX_LENGTH:
        return (
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )
    return None


def _check_required_text(label: str):
    def check(value: Any) -> str | None:
        if not isinstance(value, str) or not value.strip():
            return f"{label} is required"
        return None

    return check


def _check_date(value: Any) -> str | None:
    if isinstance(value, datetime) or not isinstance(value, date):
        return "A calendar date is required"
    return None


def _check_billing_cycle(value: Any) -> str | None:
    if value not in BILLING_CYCLES:
        return "Billing cycle must be monthly, quarterly, biannual, or annual"
    return None


def _check_flag(value: Any) -> str | None:
    if not isinstance(value, bool):
        return "Must be true or false"
    return None


def _check_optional_text(value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        return "Must be text"
    return None


_TRANSACTION_CHECKS = {
    "amount": _check_amount,
    "kind": _check_kind,
    "description": _check_description,
    "category": _check_required_text("Category"),
    "date": _check_date,
    "is_recurring": _check_flag,
    "recurring_id": _check_optional_text,
    "notes": _check_optional_text,
    "receipt_url": _check_optional_text,
}

_SUBSCRIPTION_CHECKS = {
    "name": _check_required_text("Name"),
    "amount": _check_amount,
    "billing_cycle": _check_billing_cycle,
    "category": _check_required_text("Category"),
    "start_date": _check_date,
    "next_billing_date": _check_date,
    "notes": _check_optional_text,
    "website": _check_optional_text,
    "is_active": _check_flag,
}


def _run_checks(
    values: Mapping[str, Any],
    checks: Mapping[str, Any],
) -> dict[str, str]:
    errors: dict[str, str] = {}
    for name, value in values.items():
        check = checks.get(name)
        if check is None:
            errors[name] = "Unknown field"
            continue
        message = check(value)
        if message:
            errors[name] = message
    return errors


def _check_billing_order(
    start_date: Any,
    next_billing_date: Any,
    errors: dict[str, str],
) -> None:
    if "start_date" in errors or "next_billing_date" in errors:
        return
    if start_date is None or next_billing_date is None:
        return
    if next_billing_date < start_date:
        errors["next_billing_date"] = (
            "Next billing date must be on or after the start date"
        )


def validate_transaction_draft(draft: TransactionDraft) -> dict[str, str]:
    """Validate a transaction creation payload."""
    return _run_checks(asdict(draft), _TRANSACTION_CHECKS)


def validate_transaction_changes(changes: Mapping[str, Any]) -> dict[str, str]:
    """Validate the fields present in a partial transaction update."""
    if not changes:
        return {"changes": "No fields to update"}
    return _run_checks(changes, _TRANSACTION_CHECKS)


def validate_subscription_draft(draft: SubscriptionDraft) -> dict[str, str]:
    """Validate a subscription creation payload."""
    errors = _run_checks(asdict(draft), _SUBSCRIPTION_CHECKS)
    _check_billing_order(draft.start_date, draft.next_billing_date, errors)
    return errors


def validate_subscription_changes(
    changes: Mapping[str, Any],
    current: Subscription | None = None,
) -> dict[str, str]:
    """Validate a partial subscription update.

    Args:
        changes: Fields to update.
        current: Stored subscription, used to check the billing date order
            when only one of the two dates changes.

    Returns:
        dict[str, str]: Field errors, empty when valid.
    """
    if not changes:
        return {"changes": "No fields to update"}
    errors = _run_checks(changes, _SUBSCRIPTION_CHECKS)
    start_date = changes.get(
        "start_date",
        current.start_date if current is not None else None,
    )
    next_billing_date = changes.get(
        "next_billing_date",
        current.next_billing_date if current is not None else None,
    )
    _check_billing_order(start_date, next_billing_date, errors)
    return errors


def raise_for_errors(errors: Mapping[str, str]) -> None:
    """Raise ValidationError when the mapping holds any field error."""
    if errors:
        raise ValidationError(dict(errors))


__all__ = [
    "TRANSACTION_FIELDS",
    "SUBSCRIPTION_FIELDS",
    "validate_transaction_draft",
    "validate_transaction_changes",
    "validate_subscription_draft",
    "validate_subscription_changes",
    "raise_for_errors",
]
