"""Category catalog lookup with a fallback for unknown ids."""

from finance_tracker.domain.constants import (
    CATEGORY_CATALOG,
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
)
from finance_tracker.domain.models.records import Category


def resolve_category(category_id: str) -> Category:
    """Return catalog metadata for a category id.

    Unknown ids resolve to a category named after the raw id, painted with
    the default gray.

    Args:
        category_id: Category id stored on a record.

    Returns:
        Category: Catalog entry or fallback value.
    """
    entry = CATEGORY_CATALOG.get(category_id)
    if entry is None:
        return Category(
            id=category_id,
            name=category_id,
            color=DEFAULT_CATEGORY_COLOR,
            icon=DEFAULT_CATEGORY_ICON,
        )
    name, icon, color = entry
    return Category(id=category_id, name=name, color=color, icon=icon)


def list_categories() -> list[Category]:
    """Return the catalog in declaration order."""
    return [resolve_category(category_id) for category_id in CATEGORY_CATALOG]


__all__ = ["resolve_category", "list_categories"]
