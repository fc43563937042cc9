"""
Timeline layout: maps project date ranges onto a month grid as percentages.

  left%  = (start - window.start) / window.days * 100
  width% = (end - start) / window.days * 100, at least 2% so short bars stay visible
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .boards import board_items
from .dates import MIN_DURATION_DAYS, STATUS_NO_DATES, STATUSES, ProjectDates

MIN_BAR_WIDTH_PCT = 2.0
MONTHS_BACK = 6
MONTHS_FORWARD = 12
LABEL_MAX_CHARS = 15


@dataclass(frozen=True)
class Window:
    start: date
    end: date

    @property
    def days(self) -> int:
        return max(1, (self.end - self.start).days)


def _shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    idx = year * 12 + (month - 1) + delta
    return idx // 12, idx % 12 + 1


def _first_of(year: int, month: int) -> date:
    return date(year, month, 1)


def _last_of(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def default_window(today: date) -> Window:
    sy, sm = _shift_month(today.year, today.month, -MONTHS_BACK)
    ey, em = _shift_month(today.year, today.month, MONTHS_FORWARD - 1)
    return Window(_first_of(sy, sm), _last_of(ey, em))


def fit_window(dates: Iterable[Optional[date]], today: date) -> Window:
    """Default window, widened by a month of margin around any date that falls outside it."""
    window = default_window(today)
    known = [d for d in dates if d]
    if not known:
        return window

    start, end = window.start, window.end
    lo, hi = min(known), max(known)
    if lo < start:
        start = _first_of(*_shift_month(lo.year, lo.month, -1))
    if hi > end:
        end = _last_of(*_shift_month(hi.year, hi.month, 1))
    return Window(start, end)


def month_headers(window: Window) -> List[Dict[str, Any]]:
    months = []
    y, m = window.start.year, window.start.month
    while _first_of(y, m) <= window.end:
        first = _first_of(y, m)
        months.append({
            "name": first.strftime("%b %Y"),
            "date": first.isoformat(),
            "daysInMonth": calendar.monthrange(y, m)[1],
        })
        y, m = _shift_month(y, m, 1)
    return months


def layout_bar(start: date, end: date, window: Window) -> Tuple[float, float]:
    offset = max(0, (start - window.start).days)
    duration = (end - start).days
    left = offset / window.days * 100
    width = min(100 - left, duration / window.days * 100)
    return max(0.0, left), max(MIN_BAR_WIDTH_PCT, width)


def bar_label(name: str) -> str:
    name = name or ""
    return name[:LABEL_MAX_CHARS] + "..." if len(name) > LABEL_MAX_CHARS else name


def build_gantt(projects: List[Tuple[dict, ProjectDates]], today: Optional[date] = None) -> Dict[str, Any]:
    """`projects` pairs a (nested) board with its inferred dates."""
    today = today or date.today()
    window = fit_window((d for _, pd in projects for d in (pd.start, pd.end)), today)

    rows = []
    for board, pd in projects:
        row = {
            "id": board.get("id"),
            "name": board.get("name") or "",
            "label": bar_label(board.get("name") or ""),
            "boardKind": board.get("board_kind"),
            **pd.to_dict(),
            "leftPercent": None,
            "widthPercent": None,
        }
        if pd.status != STATUS_NO_DATES and pd.start and pd.end:
            row["leftPercent"], row["widthPercent"] = layout_bar(pd.start, pd.end, window)
        rows.append(row)

    legend = {s: sum(1 for _, pd in projects if pd.status == s) for s in STATUSES}
    return {
        "window": {"start": window.start.isoformat(), "end": window.end.isoformat(), "days": window.days},
        "months": month_headers(window),
        "rows": rows,
        "legend": legend,
    }


def generate_project_date_ranges(
    projects: Iterable[dict],
    start: date,
    end: date,
    column_id: str = "timeline",
) -> List[Dict[str, Any]]:
    """
    Spread projects evenly across [start, end] for seeding timeline columns.
    Each project gets a slot of max(7, total/n) days on its first item.
    Projects without items are skipped.
    """
    projects = list(projects or [])
    if not projects:
        return []

    total_days = (end - start).days
    slot = total_days / len(projects)
    duration = max(MIN_DURATION_DAYS, int(slot))

    out = []
    for i, project in enumerate(projects):
        items = board_items(project)
        if not items:
            continue
        p_start = start + timedelta(days=int(slot * i))
        p_end = p_start + timedelta(days=duration)
        out.append({
            "boardId": project.get("id"),
            "itemId": items[0].get("id"),
            "startDate": p_start.isoformat(),
            "endDate": p_end.isoformat(),
            "columnId": column_id,
        })
    return out
