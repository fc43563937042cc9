from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from .render import STATUS_COLORS

SHEET_TITLE = "Timeline"

# (header, row key, column width)
COLUMNS = [
    ("Project", "name", 40),
    ("Board ID", "id", 14),
    ("Type", "boardKind", 10),
    ("Items", "itemCount", 8),
    ("Start", "startDate", 12),
    ("End", "endDate", 12),
    ("Status", "status", 12),
    ("Estimated", "hasEstimatedDates", 10),
]


def _cell_value(row: Dict[str, Any], key: str) -> Any:
    val = row.get(key)
    if key in ("startDate", "endDate") and val:
        return date.fromisoformat(val)
    if key == "hasEstimatedDates":
        return "yes" if val else ""
    return val


def _write_header(ws: Worksheet) -> None:
    bold = Font(bold=True)
    for col, (header, _, width) in enumerate(COLUMNS, start=1):
        cell = ws.cell(1, col)
        cell.value = header
        cell.font = bold
        ws.column_dimensions[cell.column_letter].width = width
    ws.freeze_panes = "A2"


def _fill_rows(ws: Worksheet, rows: List[Dict[str, Any]]) -> None:
    status_col = [key for _, key, _ in COLUMNS].index("status") + 1
    for r, row in enumerate(rows, start=2):
        for col, (_, key, _) in enumerate(COLUMNS, start=1):
            cell = ws.cell(r, col)
            cell.value = _cell_value(row, key)
            if key in ("startDate", "endDate") and cell.value:
                cell.number_format = "yyyy-mm-dd"

        color = STATUS_COLORS.get(row.get("status") or "")
        if color:
            ws.cell(r, status_col).fill = PatternFill("solid", fgColor=color.lstrip("#").upper())


def write_timeline_workbook(chart: Dict[str, Any], out_path: Path | str, title: Optional[str] = None) -> None:
    """Write the rows of a build_gantt() chart to a single-sheet workbook."""
    out_path = Path(out_path)
    wb = Workbook()
    ws = wb.active
    ws.title = (title or SHEET_TITLE)[:31]

    _write_header(ws)
    _fill_rows(ws, chart.get("rows") or [])

    window = chart.get("window") or {}
    if window:
        note_row = len(chart.get("rows") or []) + 3
        ws.cell(note_row, 1).value = f"Window: {window.get('start')} to {window.get('end')}"

    out_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(out_path)
