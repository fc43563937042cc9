"""HTML for the dashboard: the page shell and the fragments the script swaps in."""

from __future__ import annotations

from html import escape
from typing import Any, Dict, List

from .boards import board_items

STATUS_COLORS = {
    "no-dates": "#f59e0b",
    "planned": "#3b82f6",
    "active": "#10b981",
    "completed": "#64748b",
    "delayed": "#ef4444",
}

STATUS_LABELS = {
    "no-dates": "No Dates",
    "planned": "Planned",
    "active": "Active",
    "completed": "Completed",
    "delayed": "Delayed",
}


def _e(v: Any) -> str:
    return escape("" if v is None else str(v))


def _names(users: List[dict]) -> str:
    return ", ".join(_e(u.get("name")) for u in users or [])


def render_board_list(tree: List[dict]) -> str:
    parts = [f"<h4>Your Projects ({len(tree)} main boards)</h4>"]
    if not tree:
        parts.append("<p>No projects found for the selected user.</p>")
        return "".join(parts)

    for board in tree:
        bid = _e(board.get("id"))
        workspace = (board.get("workspace") or {}).get("name") or "Unknown"
        owners = board.get("owners") or []
        subscribers = board.get("subscribers") or []

        team = []
        if owners:
            team.append(f"Owners: {_names(owners)}")
        if subscribers:
            team.append(f"Subscribers: {_names(subscribers)}")

        parts.append('<div class="board-card">')
        parts.append('<div class="board-header">')
        if board.get("hasSubitems"):
            parts.append(f'<button class="toggle-btn" data-board-id="{bid}">&#9654;</button>')
        else:
            parts.append('<span class="toggle-spacer"></span>')
        parts.append(
            f'<a href="#" class="board-name" data-project-id="{bid}" '
            f'data-project-name="{_e(board.get("name"))}">{_e(board.get("name"))}</a>'
        )
        parts.append("</div>")
        parts.append(f"<p><strong>Description:</strong> {_e(board.get('description') or 'No description')}</p>")
        parts.append(
            f"<p><strong>Type:</strong> {_e(board.get('board_kind'))} | "
            f"<strong>Workspace:</strong> {_e(workspace)}</p>"
        )
        parts.append(f"<p><strong>Team:</strong> {' | '.join(team) or 'No assigned users'}</p>")

        parts.append('<div class="board-stats">')
        parts.append(f'<div class="stat">{_e(board.get("totalItems", 0))} total items</div>')
        parts.append(f'<div class="stat">{len(board.get("groups") or [])} groups</div>')
        parts.append(f'<div class="stat">ID {bid}</div>')
        if board.get("hasSubitems"):
            parts.append(f'<div class="stat">{len(board["subitems"])} subitems</div>')
        parts.append("</div>")

        if board.get("hasSubitems"):
            parts.append(f'<div class="subitems-container" id="subitems-{bid}"><h5>Subitems:</h5>')
            for sub in board["subitems"]:
                parts.append(
                    '<div class="subitem-card">'
                    f'<div class="subitem-name">{_e(sub.get("name"))}</div>'
                    f'<div class="subitem-stats"><span class="stat">{len(board_items(sub))} items</span>'
                    f'<span class="stat">ID {_e(sub.get("id"))}</span></div>'
                    "</div>"
                )
            parts.append("</div>")
        parts.append("</div>")
    return "".join(parts)


def render_gantt(chart: Dict[str, Any]) -> str:
    parts = ['<div class="gantt-container">', '<div class="gantt-header">']
    parts.append('<div class="gantt-header-left">Project Details</div><div class="gantt-header-right">')
    for month in chart["months"]:
        parts.append(f'<div class="gantt-month">{_e(month["name"])}</div>')
    parts.append("</div></div>")

    for row in chart["rows"]:
        info = f"Items: {_e(row.get('itemCount', 0))} | Type: {_e(row.get('boardKind'))}"
        if row.get("hasEstimatedDates"):
            info += " | Estimated dates"

        parts.append('<div class="gantt-row"><div class="gantt-project">')
        parts.append(f'<div class="gantt-project-name">{_e(row["name"])}</div>')
        parts.append(f'<div class="gantt-project-info">{info}</div>')
        if row["status"] != "no-dates":
            span = " | ".join(
                f"{label}: {_e(row[key])}"
                for label, key in (("Start", "startDate"), ("End", "endDate"))
                if row.get(key)
            )
            parts.append(f'<div class="gantt-dates">{span}</div>')
        parts.append("</div>")

        parts.append('<div class="gantt-timeline">')
        if row.get("leftPercent") is None:
            parts.append('<div class="gantt-no-dates">No dates set - add dates to see timeline</div>')
        else:
            title = f"{row['startDate']} &#8594; {row['endDate']}"
            if row.get("hasEstimatedDates"):
                title += " (estimated)"
            parts.append(
                f'<div class="gantt-bar status-{_e(row["status"])}" '
                f'style="left: {row["leftPercent"]:.2f}%; width: {row["widthPercent"]:.2f}%;" '
                f'title="{title}">{_e(row["label"])}</div>'
            )
        parts.append("</div></div>")
    parts.append("</div>")

    parts.append('<div class="gantt-legend">')
    for status, count in chart["legend"].items():
        parts.append(
            '<div class="gantt-legend-item">'
            f'<div class="gantt-legend-color" style="background: {STATUS_COLORS[status]};"></div>'
            f"{STATUS_LABELS[status]} ({count})</div>"
        )
    parts.append("</div>")
    return "".join(parts)


def render_breadcrumb(crumbs: List[Dict[str, Any]]) -> str:
    parts = []
    for i, crumb in enumerate(crumbs):
        if i:
            parts.append('<span class="breadcrumb-separator">&#8594;</span>')
        cls = "breadcrumb-item current" if crumb["current"] else "breadcrumb-item"
        parts.append(f'<div class="{cls}" data-level="{_e(crumb["level"])}">{_e(crumb["label"])}</div>')
    return "".join(parts)


PAGE_CSS = """
body { font-family: -apple-system, Segoe UI, sans-serif; margin: 0; background: #f5f6f8; color: #1f2937; }
.container { max-width: 1200px; margin: 0 auto; padding: 20px; }
.section { background: #fff; border-radius: 8px; padding: 16px; margin-bottom: 16px; }
.tab-button { padding: 8px 14px; border: 0; background: #e5e7eb; cursor: pointer; border-radius: 6px; }
.tab-button.active { background: #6161ff; color: #fff; }
.tab-content { display: none; } .tab-content.active { display: block; }
.status { padding: 8px; border-radius: 6px; margin: 8px 0; }
.status.connected { background: #d1fae5; } .status.disconnected { background: #fee2e2; }
.status.pending { background: #fef3c7; }
.result { white-space: pre; font-family: monospace; font-size: 12px; background: #f9fafb; padding: 10px; overflow: auto; max-height: 400px; }
.board-card { border: 1px solid #e5e7eb; border-radius: 8px; padding: 12px; margin: 10px 0; }
.board-header { display: flex; align-items: center; gap: 6px; }
.board-name { font-weight: 600; color: #1f2937; text-decoration: none; }
.toggle-btn { border: 0; background: none; cursor: pointer; width: 25px; }
.toggle-spacer { width: 25px; display: inline-block; }
.board-stats, .subitem-stats { display: flex; gap: 8px; flex-wrap: wrap; }
.stat { background: #eef2ff; padding: 2px 8px; border-radius: 10px; font-size: 12px; }
.subitems-container { display: none; margin-left: 25px; }
.subitem-card { border-left: 3px solid #6161ff; padding: 6px 10px; margin: 6px 0; background: #fafafa; }
.breadcrumb { display: none; margin: 10px 0; } .breadcrumb.visible { display: flex; gap: 6px; }
.breadcrumb-item { cursor: pointer; color: #6161ff; } .breadcrumb-item.current { cursor: default; color: #1f2937; font-weight: 600; }
.gantt-container { border: 1px solid #e5e7eb; border-radius: 8px; overflow-x: auto; }
.gantt-header, .gantt-row { display: flex; border-bottom: 1px solid #e5e7eb; }
.gantt-header-left, .gantt-project { width: 260px; flex-shrink: 0; padding: 8px; }
.gantt-header-right { display: flex; flex: 1; }
.gantt-month { flex: 1; min-width: 60px; font-size: 11px; padding: 8px 2px; text-align: center; border-left: 1px solid #f0f0f0; }
.gantt-timeline { position: relative; flex: 1; min-height: 40px; }
.gantt-bar { position: absolute; top: 10px; height: 20px; border-radius: 4px; color: #fff; font-size: 11px; padding: 0 4px; overflow: hidden; white-space: nowrap; }
.gantt-no-dates { font-size: 12px; color: #9ca3af; padding: 12px; }
.gantt-project-info, .gantt-dates { font-size: 11px; color: #6b7280; }
.status-planned { background: #3b82f6; } .status-active { background: #10b981; }
.status-completed { background: #64748b; } .status-delayed { background: #ef4444; }
.gantt-legend { display: flex; gap: 14px; margin-top: 10px; font-size: 12px; }
.gantt-legend-item { display: flex; align-items: center; gap: 4px; }
.gantt-legend-color { width: 12px; height: 12px; border-radius: 2px; }
"""

TABS = (
    ("boards", "Projects"),
    ("items", "Items"),
    ("users", "Users"),
    ("updates", "Updates"),
    ("analytics", "Analytics"),
    ("custom", "Custom Query"),
)


def render_page(has_token: bool) -> str:
    token = "Configured" if has_token else "Not configured"
    buttons = "".join(
        f'<button class="tab-button{" active" if i == 0 else ""}" data-tab="{key}">{label}</button>'
        for i, (key, label) in enumerate(TABS)
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Monday.com Dashboard</title>
<style>{PAGE_CSS}</style>
</head>
<body>
<div class="container">
  <div class="section">
    <h2>Monday.com Dashboard</h2>
    <p>API token: <span id="tokenStatus">{token}</span></p>
    <button id="btn-connect">Test Connection</button>
    <div id="connectionResult"></div>
  </div>
  <div class="section">{buttons}</div>

  <div class="section tab-content active" id="boards-tab">
    <div id="navigationBreadcrumb" class="breadcrumb"></div>
    <button id="btn-boards" disabled>Load Projects</button>
    <select id="userFilter" disabled></select>
    <button id="btn-back" disabled>Back</button>
    <button id="btn-board-details" disabled>Board Details</button>
    <button id="btn-create-board" disabled>Create Board</button>
    <p id="filterStatus"></p>
    <div id="boardsResult"></div>
    <div id="ganttSection">
      <h3>Project Timeline</h3>
      <button id="btn-gantt" disabled>Show Timeline</button>
      <button id="btn-upload-dates" disabled>Upload Sample Dates</button>
      <a id="btn-export" href="/api/export-timeline">Export .xlsx</a>
      <p id="ganttStatus"></p>
      <div id="ganttContainer"></div>
    </div>
  </div>

  <div class="section tab-content" id="items-tab">
    <button id="btn-items" disabled>Get Items</button>
    <button id="btn-create-item" disabled>Create Item</button>
    <button id="btn-update-item" disabled>Rename Item</button>
    <div id="itemsResult"></div>
  </div>

  <div class="section tab-content" id="users-tab">
    <button id="btn-users" disabled>Get Users</button>
    <button id="btn-teams" disabled>Get Teams</button>
    <button id="btn-activity" disabled>Activity</button>
    <div id="usersResult"></div>
  </div>

  <div class="section tab-content" id="updates-tab">
    <button id="btn-updates" disabled>Get Updates</button>
    <button id="btn-create-update" disabled>Post Update</button>
    <div id="updatesResult"></div>
  </div>

  <div class="section tab-content" id="analytics-tab">
    <button id="btn-stats" disabled>Workspace Stats</button>
    <button id="btn-logs" disabled>Activity Logs</button>
    <button id="btn-debug" disabled>Debug Info</button>
    <div id="analyticsResult"></div>
  </div>

  <div class="section tab-content" id="custom-tab">
    <textarea id="customQuery" rows="10" cols="80">query {{
  boards(limit: 5) {{
    id
    name
  }}
}}</textarea>
    <br>
    <button id="btn-custom" disabled>Execute Query</button>
    <div id="customResult"></div>
  </div>
</div>
<script src="/static/dashboard.js"></script>
</body>
</html>
"""
