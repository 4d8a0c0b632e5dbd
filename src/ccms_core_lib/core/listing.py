"""Record search and pagination for list views.

Purpose: narrow an already-fetched snapshot of records to the rows matching a
free-text query and slice out one page of them.

Key Functions:
- filter_records(): stable, case-insensitive substring filter
- paginate(): 1-indexed page slice with page count
- search(): both in one call

Matching rules:
- An empty query matches every record
- Otherwise each searchable field is checked independently; a record
  matches when the query is a substring of at least one of them
- Missing or None fields never match; enum fields match on their value

Everything here is a pure function over the input sequence.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a filtered record list.

    Attributes:
        items: Records on this page (empty when the page is past the end)
        page: 1-indexed page number that was requested (after clamping to >= 1)
        page_size: Maximum records per page
        total_items: Size of the filtered list
        total_pages: ceil(total_items / page_size)
    """

    items: List[T] = field(default_factory=list)
    page: int = 1
    page_size: int = 1
    total_items: int = 0
    total_pages: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def first_index(self) -> int:
        """1-based index of the first row shown (0 when nothing is shown)."""
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        """1-based index of the last row shown (0 when nothing is shown)."""
        if not self.items:
            return 0
        return self.first_index + len(self.items) - 1

    def summary(self) -> str:
        """'Showing X to Y of Z results' footer text."""
        return f"Showing {self.first_index} to {self.last_index} of {self.total_items} results"


def _field_text(record: Any, name: str) -> Optional[str]:
    if isinstance(record, dict):
        value = record.get(name)
    else:
        value = getattr(record, name, None)
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    return str(value)


def _search_fields(record: Any, fields: Optional[Sequence[str]]) -> Sequence[str]:
    if fields is not None:
        return fields
    return getattr(record, "search_fields", ())


def filter_records(
    records: Sequence[T], query: str, fields: Optional[Sequence[str]] = None
) -> List[T]:
    """Return the records matching ``query``, in their original order.

    Args:
        records: Snapshot of records (models or dicts)
        query: Free-text query; matched case-insensitively as a substring
        fields: Attribute/key names to search. Defaults to each record's
            ``search_fields``; dicts need explicit fields.

    Returns:
        New list; ``records`` itself is not modified
    """
    needle = (query or "").lower()
    if not needle:
        return list(records)

    matched = []
    for record in records:
        for name in _search_fields(record, fields):
            text = _field_text(record, name)
            if text is not None and needle in text.lower():
                matched.append(record)
                break
    return matched


def paginate(records: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice one 1-indexed page out of ``records``.

    A page past the last one yields an empty ``items`` list. Page numbers
    below 1 are treated as page 1.

    Raises:
        ValueError: If page_size is not positive
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")

    page = max(page, 1)
    total_items = len(records)
    start = (page - 1) * page_size
    return Page(
        items=list(records[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=math.ceil(total_items / page_size),
    )


def search(
    records: Sequence[T],
    query: str,
    page: int,
    page_size: int,
    fields: Optional[Sequence[str]] = None,
) -> Page[T]:
    """Filter ``records`` by ``query`` and return the requested page."""
    return paginate(filter_records(records, query, fields), page, page_size)
