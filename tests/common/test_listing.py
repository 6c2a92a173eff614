from dataclasses import dataclass

from program_portal.common.listing import count_by, filter_by_status, paginate, percentage, search
from program_portal.core.enums import SessionStatus


@dataclass(frozen=True)
class Row:
    name: str
    status: SessionStatus


ROWS = [
    Row("Alpha", SessionStatus.ACTIVE),
    Row("Beta", SessionStatus.SCHEDULED),
    Row("Gamma", SessionStatus.ACTIVE),
]


def test_filter_keeps_order_and_does_not_touch_source():
    source = list(ROWS)

    assert filter_by_status(source, "active") == [ROWS[0], ROWS[2]]
    assert filter_by_status(source, SessionStatus.SCHEDULED) == [ROWS[1]]
    assert filter_by_status(source, "all") == ROWS
    assert filter_by_status(source, None) == ROWS
    assert source == ROWS


def test_search_is_case_insensitive():
    assert search(ROWS, "  AMM ", fields=lambda r: (r.name,)) == [ROWS[2]]
    assert search(ROWS, "", fields=lambda r: (r.name,)) == ROWS


def test_paginate_clamps_page():
    rows = list(range(23))

    last = paginate(rows, page=99, page_size=10)

    assert last.page == 3
    assert last.items == [20, 21, 22]
    assert last.total_pages == 3
    assert not last.has_next
    assert last.has_prev
    assert paginate([], page=1).total_pages == 1


def test_count_by_includes_zero_keys():
    counts = count_by(ROWS, lambda r: r.status, keys=list(SessionStatus))

    assert counts == {"scheduled": 1, "active": 2, "completed": 0, "cancelled": 0}


def test_percentage_of_nothing_is_zero():
    assert percentage(0, 0) == 0.0
    assert percentage(1, 3) == 33.3
