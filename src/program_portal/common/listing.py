"""In-memory list helpers used by the dashboards.

Everything here works on rows that were already fetched: filtering, searching
and paging only change the visible subset and never trigger a request.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")

ALL = "all"


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size)) if self.page_size else 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def _value(v: Any) -> Any:
    return v.value if isinstance(v, Enum) else v


def filter_by_status(rows: Iterable[T], status: Optional[str], *, key: Callable[[T], Any] = lambda r: r.status) -> list[T]:
    """Keep rows whose status equals ``status``; ``None``/``"all"`` keeps everything."""

    rows = list(rows)
    if not status or status == ALL:
        return rows
    return [r for r in rows if _value(key(r)) == _value(status)]


def search(rows: Iterable[T], term: Optional[str], *, fields: Callable[[T], Sequence[Optional[str]]]) -> list[T]:
    """Case-insensitive substring match over the text ``fields`` of each row."""

    rows = list(rows)
    needle = (term or "").strip().lower()
    if not needle:
        return rows
    return [r for r in rows if any(needle in (f or "").lower() for f in fields(r))]


def paginate(rows: Sequence[T], page: int = 1, page_size: int = 10) -> Page:
    total = len(rows)
    page_size = max(1, int(page_size))
    last_page = max(1, math.ceil(total / page_size))
    page = min(max(1, int(page)), last_page)
    start = (page - 1) * page_size
    return Page(items=list(rows[start:start + page_size]), page=page, page_size=page_size, total=total)


def count_by(rows: Iterable[T], key: Callable[[T], Any], *, keys: Iterable[Any] = ()) -> dict[str, int]:
    """Count rows per key; every entry of ``keys`` is present even when zero."""

    counts = Counter(_value(key(r)) for r in rows)
    out = {_value(k): 0 for k in keys}
    out.update(counts)
    return dict(out)


def percentage(part: int, whole: int) -> float:
    if not whole:
        return 0.0
    return round(part * 100.0 / whole, 1)
