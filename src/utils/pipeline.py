"""
Client-side table pipeline: filter -> sort -> paginate.

Every table screen owns one TablePipeline, parametrized by a TableSpec that
lists which fields can be searched, which can be sorted (and how to read
them), and how rows are projected for display and export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cmp_to_key
from math import ceil
from numbers import Number
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

T = TypeVar("T")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC

    @property
    def arrow(self) -> str:
        return "↑" if self is SortDirection.ASC else "↓"


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, complex)


def compare_values(a: Any, b: Any) -> int:
    """Ascending three-way comparison of two resolved field values."""
    if isinstance(a, str) and isinstance(b, str):
        a, b = a.lower(), b.lower()
    elif _is_number(a) and _is_number(b):
        diff = a - b
        return (diff > 0) - (diff < 0)
    else:
        # mixed or unexpected types
        a, b = str(a).lower(), str(b).lower()
    return (a > b) - (a < b)


def compare(
    a: T, b: T, key: Callable[[T], Any], direction: SortDirection = SortDirection.ASC
) -> int:
    """Compare two records on the value returned by key; DESC negates ASC."""
    result = compare_values(key(a), key(b))
    return -result if direction is SortDirection.DESC else result


def matches(record: T, query: str, searchable: Sequence[Callable[[T], Any]]) -> bool:
    """Case-insensitive substring match of query against any searchable field."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in str(get(record)).lower() for get in searchable)


def page_count(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return max(ceil(count / page_size), 1)


def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(page, total_pages))


def paginate(
    sequence: Sequence[T], page_size: int, page: int
) -> Tuple[List[T], int]:
    """Return (rows of the given 1-based page, total page count)."""
    total_pages = page_count(len(sequence), page_size)
    start = max(page - 1, 0) * page_size
    end = start + page_size
    return list(sequence[start:end]), total_pages


@dataclass(frozen=True)
class Column(Generic[T]):
    """A labelled projection of a record, for the table or an export."""

    label: str
    value: Callable[[T], Any]
    sort_field: Optional[Enum] = None


@dataclass(frozen=True)
class TableSpec(Generic[T]):
    entity: str
    title: str
    sort_keys: Mapping[Enum, Callable[[T], Any]]
    searchable: Sequence[Callable[[T], Any]]
    columns: Sequence[Column[T]]
    csv_columns: Sequence[Column[T]]
    report_columns: Sequence[Column[T]]
    default_sort: Enum
    default_direction: SortDirection = SortDirection.ASC

    def key_for(self, sort_field: Enum) -> Callable[[T], Any]:
        try:
            return self.sort_keys[sort_field]
        except KeyError:
            raise ValueError(
                f"{sort_field!r} is not a sortable field of {self.entity}"
            ) from None

    def compare(
        self, a: T, b: T, sort_field: Enum, direction: SortDirection
    ) -> int:
        return compare(a, b, self.key_for(sort_field), direction)


@dataclass
class TablePipeline(Generic[T]):
    """
    Derived view state of one table.

    `rows` is always a filtered, sorted copy of the last loaded records, and
    `page` always lies in [1, total_pages].
    """

    spec: TableSpec[T]
    page_size: int = 5
    records: List[T] = field(default_factory=list)
    query: str = ""
    sort_field: Optional[Enum] = None
    direction: Optional[SortDirection] = None
    page: int = 1
    rows: List[T] = field(default_factory=list)

    def __post_init__(self) -> None:
        page_count(0, self.page_size)
        if self.sort_field is None:
            self.sort_field = self.spec.default_sort
        if self.direction is None:
            self.direction = self.spec.default_direction
        self.spec.key_for(self.sort_field)
        self._recompute()

    # ---------------------------
    # State changes
    # ---------------------------

    def load(self, records: Sequence[T]) -> None:
        self.records = list(records)
        self._recompute()

    def search(self, query: str) -> None:
        self.query = query
        self._recompute()

    def sort_by(self, sort_field: Enum) -> None:
        """Toggle direction on the active field, otherwise sort ascending."""
        self.spec.key_for(sort_field)
        if sort_field == self.sort_field:
            self.direction = self.direction.flipped()
        else:
            self.sort_field = sort_field
            self.direction = SortDirection.ASC
        self._recompute()

    def go_to(self, page: int) -> int:
        self.page = clamp_page(page, self.total_pages)
        return self.page

    def next_page(self) -> int:
        return self.go_to(self.page + 1)

    def prev_page(self) -> int:
        return self.go_to(self.page - 1)

    def _recompute(self) -> None:
        key = self.spec.key_for(self.sort_field)
        direction = self.direction
        filtered = [r for r in self.records if matches(r, self.query, self.spec.searchable)]
        filtered.sort(key=cmp_to_key(lambda a, b: compare(a, b, key, direction)))
        self.rows = filtered
        self.page = 1

    # ---------------------------
    # Derived views
    # ---------------------------

    @property
    def total_pages(self) -> int:
        return page_count(len(self.rows), self.page_size)

    @property
    def page_rows(self) -> List[T]:
        rows, _ = paginate(self.rows, self.page_size, self.page)
        return rows

    @property
    def showing(self) -> Tuple[int, int, int]:
        """(first, last, total) row numbers of the current page, 1-based."""
        total = len(self.rows)
        if not total:
            return 0, 0, 0
        start = (self.page - 1) * self.page_size
        return start + 1, min(start + self.page_size, total), total

    def table_rows(self) -> List[List[Any]]:
        return [[col.value(r) for col in self.spec.columns] for r in self.page_rows]

    def csv_rows(self) -> List[Dict[str, Any]]:
        return [
            {col.label: col.value(r) for col in self.spec.csv_columns}
            for r in self.rows
        ]

    def report_rows(self) -> List[List[str]]:
        return [
            [_cell(col.value(r)) for col in self.spec.report_columns]
            for r in self.rows
        ]

    @property
    def csv_headers(self) -> List[str]:
        return [col.label for col in self.spec.csv_columns]

    @property
    def report_headers(self) -> List[str]:
        return [col.label for col in self.spec.report_columns]


def _cell(value: Any) -> str:
    return "" if value is None else str(value)
