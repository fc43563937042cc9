#!/usr/bin/env python3
"""
Best-effort project start/end inference from item column values.

Rules:
- Only decoded date-like values count (see columns.py).
- Column titles containing "start"/"begin" feed the start bound (running min).
- Titles containing "end"/"due"/"deadline"/"finish" feed the end bound (running max).
- Any other date title feeds both bounds.
- A single known bound is widened to max(7, 2 * item_count) days.
- Status is judged against `today`: no-dates, completed, active, else planned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .boards import board_items
from .columns import (
    DATE_COLUMN_TYPES,
    ColumnValue,
    DateValue,
    LogValue,
    TimelineValue,
    decode_column_values,
)

STATUS_NO_DATES = "no-dates"
STATUS_PLANNED = "planned"
STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_DELAYED = "delayed"

STATUSES = (STATUS_NO_DATES, STATUS_PLANNED, STATUS_ACTIVE, STATUS_COMPLETED, STATUS_DELAYED)

START_KEYWORDS = ("start", "begin")
END_KEYWORDS = ("end", "due", "deadline", "finish")

MIN_DURATION_DAYS = 7
DAYS_PER_ITEM = 2


@dataclass
class ProjectDates:
    start: Optional[date]
    end: Optional[date]
    status: str
    item_count: int = 0
    estimated: bool = False
    date_columns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startDate": self.start.isoformat() if self.start else None,
            "endDate": self.end.isoformat() if self.end else None,
            "status": self.status,
            "itemCount": self.item_count,
            "hasEstimatedDates": self.estimated,
            "dateColumns": list(self.date_columns),
        }


def estimated_duration_days(item_count: int) -> int:
    return max(MIN_DURATION_DAYS, DAYS_PER_ITEM * int(item_count or 0))


def _title_role(title: str) -> str:
    t = (title or "").lower()
    if any(k in t for k in START_KEYWORDS):
        return "start"
    if any(k in t for k in END_KEYWORDS):
        return "end"
    return "both"


def _span(value: ColumnValue) -> Tuple[Optional[date], Optional[date]]:
    if isinstance(value, DateValue):
        return value.day, value.day
    if isinstance(value, TimelineValue):
        return value.start or value.end, value.end or value.start
    if isinstance(value, LogValue):
        return value.at, value.at
    return None, None


def scan_bounds(values: Iterable[ColumnValue]) -> Tuple[Optional[date], Optional[date]]:
    start: Optional[date] = None
    end: Optional[date] = None

    for value in values:
        lo, hi = _span(value)
        if lo is None:
            continue
        role = _title_role(value.title)
        if role in ("start", "both"):
            start = lo if start is None else min(start, lo)
        if role in ("end", "both"):
            end = hi if end is None else max(end, hi)
    return start, end


def fill_missing_bound(
    start: Optional[date], end: Optional[date], item_count: int
) -> Tuple[Optional[date], Optional[date], bool]:
    if start and not end:
        return start, start + timedelta(days=estimated_duration_days(item_count)), True
    if end and not start:
        return end - timedelta(days=estimated_duration_days(item_count)), end, True
    return start, end, False


def classify_status(start: Optional[date], end: Optional[date], today: date) -> str:
    if not start and not end:
        return STATUS_NO_DATES
    if end and end < today:
        return STATUS_COMPLETED
    if start and start <= today and (not end or end >= today):
        return STATUS_ACTIVE
    # TODO: emit STATUS_DELAYED for overdue-but-still-open projects once the
    # rule is agreed; today an overdue end date always reads as completed.
    return STATUS_PLANNED


def infer_dates(
    values: Iterable[ColumnValue], item_count: int, today: Optional[date] = None
) -> ProjectDates:
    today = today or date.today()
    start, end = scan_bounds(values)
    start, end, estimated = fill_missing_bound(start, end, item_count)
    return ProjectDates(
        start=start,
        end=end,
        status=classify_status(start, end, today),
        item_count=int(item_count or 0),
        estimated=estimated,
    )


def board_date_columns(board: dict) -> List[str]:
    return [
        f"{c.get('title')} ({c.get('type')})"
        for c in (board.get("columns") or [])
        if c.get("type") in DATE_COLUMN_TYPES
    ]


def iter_board_items(board: dict) -> List[dict]:
    """Items from every group when the board was read with groups, else from items_page."""
    grouped = [it for g in (board.get("groups") or []) for it in (g.get("items") or [])]
    return grouped or board_items(board)


def infer_board_dates(board: dict, today: Optional[date] = None) -> ProjectDates:
    items = iter_board_items(board)
    values: List[ColumnValue] = []
    for item in items:
        values.extend(decode_column_values(item.get("column_values") or []))

    result = infer_dates(values, len(items), today)
    result.date_columns = board_date_columns(board)
    return result
