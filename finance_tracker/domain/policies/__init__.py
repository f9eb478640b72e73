"""Domain policies package."""

from .categories import list_categories, resolve_category

__all__ = ["list_categories", "resolve_category"]
