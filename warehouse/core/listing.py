"""Search, sort and pagination helpers for list views."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One slice of a listing."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    limit: int = 10
    offset: int = 0

    @property
    def has_next(self) -> bool:
        return self.offset + len(self.items) < self.total


def matches_query(query: str | None, *values: Any) -> bool:
    """Case-insensitive substring match against any of ``values``.

    An empty query matches everything. ``None`` values are ignored.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return True
    for value in values:
        if value is None:
            continue
        text = value.value if isinstance(value, Enum) else str(value)
        if needle in text.lower():
            return True
    return False


def sort_records(
    records: Iterable[T],
    key: str | Callable[[T], Any],
    order: str = "asc",
) -> list[T]:
    """Sort by an attribute name or key function.

    Records whose key is ``None`` go last regardless of ``order``.
    """
    if order not in ("asc", "desc"):
        raise ValueError(f"order must be 'asc' or 'desc', got {order!r}")

    getter = key if callable(key) else (lambda record: getattr(record, key))
    items = list(records)
    present = [r for r in items if getter(r) is not None]
    missing = [r for r in items if getter(r) is None]
    present.sort(key=getter, reverse=order == "desc")
    return present + missing


def paginate(records: Sequence[T], limit: int = 10, offset: int = 0) -> Page[T]:
    if limit <= 0:
        raise ValueError("limit must be positive")
    if offset < 0:
        raise ValueError("offset must not be negative")
    return Page(
        items=list(records[offset : offset + limit]),
        total=len(records),
        limit=limit,
        offset=offset,
    )
