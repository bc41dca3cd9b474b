from __future__ import annotations

from typing import Iterable

from src.app.domain.models import ALL_CATEGORIES, Operation


def _matches_category(operation: Operation, category: str) -> bool:
    return category == ALL_CATEGORIES or operation.category == category


def _matches_search(operation: Operation, needle: str) -> bool:
    if not needle:
        return True
    return needle in operation.name.lower() or needle in operation.category.value.lower()


def filter_operations(
    operations: Iterable[Operation],
    search_term: str = "",
    category: str = ALL_CATEGORIES,
) -> list[Operation]:
    """
    Narrow the catalog to what the user can add.

    An operation survives when its category matches (or category is "All")
    and the search term, case-insensitively, appears in its name or its
    category label. Input order is kept; nothing is mutated.
    """
    needle = (search_term or "").lower()
    return [
        operation
        for operation in operations
        if _matches_category(operation, category) and _matches_search(operation, needle)
    ]
