"""
Writing timeline dates back to monday.com.

Bulk uploads run one mutation per project, in order, with a fixed pause after
each successful call. A failure is recorded and the loop moves on.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from .client import MondayClient
from .config import DEFAULT_BULK_UPLOAD_DELAY_S

log = logging.getLogger(__name__)

DEFAULT_TIMELINE_COLUMN = "timeline"


def timeline_column_values(column_id: Optional[str], start: Any, end: Any) -> Dict[str, Dict[str, Any]]:
    return {column_id or DEFAULT_TIMELINE_COLUMN: {"from": start, "to": end}}


def upload_timeline_dates(
    client: MondayClient,
    *,
    board_id: Any,
    item_id: Any,
    start: Any,
    end: Any,
    column_id: Optional[str] = None,
) -> Dict[str, Any]:
    values = timeline_column_values(column_id, start, end)
    item = client.set_timeline(board_id, item_id, values)
    return {"item": item, "dates": values}


@dataclass
class BulkUploadResult:
    results: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uploaded": len(self.results),
            "failed": len(self.errors),
            "results": self.results,
            "errors": self.errors,
        }


def upload_bulk_timeline_dates(
    client: MondayClient,
    project_dates: Iterable[Dict[str, Any]],
    *,
    delay_s: float = DEFAULT_BULK_UPLOAD_DELAY_S,
    sleep: Callable[[float], None] = time.sleep,
) -> BulkUploadResult:
    """`project_dates` entries: {boardId, itemId, startDate, endDate, columnId?}."""
    out = BulkUploadResult()
    for project in project_dates or []:
        if not isinstance(project, dict):
            log.warning(f"Skipping timeline upload entry that is not an object: {project!r}")
            out.errors.append({"project": project, "error": "Project entry must be an object"})
            continue
        try:
            uploaded = upload_timeline_dates(
                client,
                board_id=project.get("boardId"),
                item_id=project.get("itemId"),
                start=project.get("startDate"),
                end=project.get("endDate"),
                column_id=project.get("columnId"),
            )
            out.results.append({"success": True, **uploaded})
            sleep(delay_s)
        except Exception as e:
            log.warning(f"Timeline upload failed for item {project.get('itemId')}: {e}")
            out.errors.append({"project": project, "error": str(e)})

    log.info(f"Bulk timeline upload: {len(out.results)} uploaded, {len(out.errors)} failed")
    return out
