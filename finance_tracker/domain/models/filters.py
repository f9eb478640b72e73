"""Declarative filter criteria for transaction queries."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class TransactionFilters:
    """Optional criteria combined with logical AND.

    Every field left as None imposes no constraint. ``kind="all"`` is the
    same as leaving ``kind`` unset. Sorting only happens when ``sort_by`` is
    set.
    """

    start_date: date | None = None
    end_date: date | None = None
    categories: tuple[str, ...] | None = None
    kind: str | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    search: str | None = None
    sort_by: str | None = None
    sort_direction: str = "desc"

    def is_empty(self) -> bool:
        """Return True when no criterion and no ordering is requested."""
        return (
            self.start_date is None
            and self.end_date is None
            and not self.categories
            and self.kind in (None, "all")
            and self.min_amount is None
            and self.max_amount is None
            and not self.search
            and self.sort_by is None
        )


__all__ = ["TransactionFilters"]
