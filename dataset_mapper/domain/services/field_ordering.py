from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..entities.mapping import FieldDefinition


def resolve_order(declared: int | None, index: int) -> int:
    return index if declared is None else declared


def sort_fields(fields: Iterable[FieldDefinition]) -> list[FieldDefinition]:
    """Order fields by declared ``order``, ties broken by position in the input."""
    indexed = list(enumerate(fields))
    indexed.sort(key=lambda item: (item[1].order, item[0]))
    return [definition for _, definition in indexed]
