"""Helpers for Decimal normalization and guarded arithmetic."""

from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Floats go through ``str`` so that 0.1 stays 0.1 instead of its binary
    expansion.

    Args:
        value: Raw numeric value from SQL rows, drafts, or adapters.

    Returns:
        Decimal: Normalized numeric value (0 for None).

    Raises:
        ValueError: If the value cannot be read as a number.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric amount: {value!r}")
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Not a numeric amount: {value!r}") from exc


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part`` as a percentage of ``whole``, or 0 when whole is 0."""
    if whole == 0:
        return ZERO
    return part / whole * HUNDRED


__all__ = ["ZERO", "HUNDRED", "coerce_decimal", "percentage_of"]
