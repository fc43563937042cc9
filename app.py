import logging
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool

from monday_dash.boards import build_board_tree, filter_boards_by_user, summarize_workspace
from monday_dash.client import MondayClient
from monday_dash.columns import parse_date
from monday_dash.config import load_settings
from monday_dash.dashboard import load_board_tree, load_timeline
from monday_dash.dates import infer_board_dates
from monday_dash.excel_writer import write_timeline_workbook
from monday_dash.gantt import generate_project_date_ranges
from monday_dash.navigation import NavigationState, apply_event, breadcrumb
from monday_dash.render import render_board_list, render_breadcrumb, render_gantt, render_page
from monday_dash.uploads import upload_bulk_timeline_dates, upload_timeline_dates

# -----------------------
# Setup
# -----------------------
load_dotenv()

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger("monday-dashboard")

settings = load_settings()

STATIC_DIR = Path(__file__).resolve().parent / "static"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

app = FastAPI(title="Monday.com Dashboard")
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# Reported by /api/debug only; nothing populates it.
_cache = {"boards": [], "users": [], "teams": [], "lastUpdated": None}

ENDPOINTS = [
    "GET /api/boards",
    "GET /api/boards/tree",
    "GET /api/board/:id",
    "GET /api/board-details/:id",
    "POST /api/create-board",
    "GET /api/items",
    "POST /api/create-item",
    "POST /api/update-item",
    "GET /api/users",
    "GET /api/teams",
    "GET /api/activity",
    "GET /api/updates",
    "POST /api/create-update",
    "GET /api/stats",
    "GET /api/logs",
    "POST /api/custom-query",
    "GET /api/gantt",
    "POST /api/navigate",
    "POST /api/sample-date-ranges",
    "POST /api/upload-timeline-dates",
    "POST /api/upload-bulk-timeline-dates",
    "POST /api/create-timeline-column",
    "GET /api/export-timeline",
]


def get_client() -> MondayClient:
    return MondayClient.from_settings(settings)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _fail(e: Exception, **extra) -> JSONResponse:
    log.exception(f"Request failed: {e}")
    return JSONResponse(status_code=500, content={"success": False, "error": str(e), **extra})


async def _json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        log.warning(f"{request.url.path}: body is not JSON, treating as empty")
        return {}
    return body if isinstance(body, dict) else {}


def _required_date(body: dict, key: str) -> date:
    d = parse_date(body.get(key))
    if d is None:
        raise ValueError(f"{key} is required (YYYY-MM-DD)")
    return d


# -----------------------
# Page + connection
# -----------------------
@app.get("/", response_class=HTMLResponse)
def index():
    return HTMLResponse(render_page(settings.has_token))


@app.post("/test-connection")
def test_connection(client: MondayClient = Depends(get_client)):
    log.info("Testing monday.com connection...")
    try:
        me = client.me()
    except Exception as e:
        return _fail(RuntimeError(f"Connection test failed: {e}"))

    if not me:
        log.warning("No user data in monday.com response")
        return {"success": False, "error": "No user data returned from API", "rawResponse": {"me": me}}

    return {"success": True, "user": me, "message": "Connection successful"}


@app.get("/connection-status")
def connection_status():
    return {"hasToken": settings.has_token, "apiUrl": settings.api_url, "apiVersion": settings.api_version}


# -----------------------
# Boards
# -----------------------
@app.get("/api/boards")
def get_boards(client: MondayClient = Depends(get_client)):
    try:
        boards = client.boards()
        log.info(f"Fetched {len(boards)} boards")
        return {"success": True, "boards": boards, "count": len(boards)}
    except Exception as e:
        return _fail(e, details="Failed to fetch boards - this might be due to API limits or query complexity")


@app.get("/api/boards/tree")
def get_board_tree(userId: Optional[str] = None, client: MondayClient = Depends(get_client)):
    try:
        data = load_board_tree(client, userId)
        return {"success": True, **data, "html": render_board_list(data["boards"])}
    except Exception as e:
        return _fail(e)


@app.get("/api/board/{board_id}")
def get_board(board_id: str, client: MondayClient = Depends(get_client)):
    try:
        return {"success": True, "board": client.board(board_id)}
    except Exception as e:
        return _fail(e)


@app.get("/api/board-details/{board_id}")
def get_board_details(board_id: str, client: MondayClient = Depends(get_client)):
    try:
        board = client.board_dates(board_id)
        dates = infer_board_dates(board).to_dict() if board else None
        return {"success": True, "board": board, "dates": dates}
    except Exception as e:
        return _fail(e)


@app.post("/api/create-board")
async def create_board(request: Request, client: MondayClient = Depends(get_client)):
    body = await _json_body(request)
    try:
        board = client.create_board(body.get("name"), body.get("description"), body.get("boardKind"))
        log.info(f"Created board {board}")
        return {"success": True, "board": board}
    except Exception as e:
        return _fail(e)


# -----------------------
# Items
# -----------------------
@app.get("/api/items")
def get_items(client: MondayClient = Depends(get_client)):
    try:
        items = client.items()
        return {"success": True, "items": items, "count": len(items)}
    except Exception as e:
        return _fail(e)


@app.post("/api/create-item")
async def create_item(request: Request, client: MondayClient = Depends(get_client)):
    body = await _json_body(request)
    try:
        item = client.create_item(body.get("boardId"), body.get("itemName"), body.get("groupId"))
        return {"success": True, "item": item}
    except Exception as e:
        return _fail(e)


@app.post("/api/update-item")
async def update_item(request: Request, client: MondayClient = Depends(get_client)):
    body = await _json_body(request)
    try:
        item = client.update_item(body.get("itemId"), name=body.get("name"), column_values=body.get("columnValues"))
        return {"success": True, "item": item}
    except Exception as e:
        return _fail(e)


# -----------------------
# Users, teams, activity, updates
# -----------------------
@app.get("/api/users")
def get_users(client: MondayClient = Depends(get_client)):
    try:
        users = client.users()
        return {"success": True, "users": users, "count": len(users)}
    except Exception as e:
        return _fail(e)


@app.get("/api/teams")
def get_teams(client: MondayClient = Depends(get_client)):
    try:
        teams = client.teams()
        return {"success": True, "teams": teams, "count": len(teams)}
    except Exception as e:
        return _fail(e)


@app.get("/api/activity")
def get_activity(client: MondayClient = Depends(get_client)):
    try:
        logs = client.activity_logs(limit=50)
        return {"success": True, "logs": logs, "count": len(logs)}
    except Exception as e:
        return _fail(e)


@app.get("/api/logs")
def get_logs(client: MondayClient = Depends(get_client)):
    try:
        logs = client.activity_logs(limit=100)
        return {"success": True, "logs": logs, "count": len(logs)}
    except Exception as e:
        return _fail(e)


@app.get("/api/updates")
def get_updates(client: MondayClient = Depends(get_client)):
    try:
        updates = client.updates()
        return {"success": True, "updates": updates, "count": len(updates)}
    except Exception as e:
        return _fail(e)


@app.post("/api/create-update")
async def create_update(request: Request, client: MondayClient = Depends(get_client)):
    body = await _json_body(request)
    try:
        update = client.create_update(body.get("itemId"), body.get("text"))
        return {"success": True, "update": update}
    except Exception as e:
        return _fail(e)


@app.get("/api/stats")
def get_stats(client: MondayClient = Depends(get_client)):
    try:
        data = client.workspace_stats()
        stats = summarize_workspace(data.get("boards"), data.get("users"), data.get("teams"))
        return {"success": True, "statistics": stats, "generatedAt": _now_iso()}
    except Exception as e:
        return _fail(e)


@app.post("/api/custom-query")
async def custom_query(request: Request, client: MondayClient = Depends(get_client)):
    body = await _json_body(request)
    query = body.get("query")
    variables = body.get("variables") or {}
    try:
        if not query:
            raise ValueError("Query is required")
        data = client.execute(query, variables)
        return {"success": True, "data": data, "query": query, "variables": variables}
    except Exception as e:
        return _fail(e, query=query)


# -----------------------
# Timeline
# -----------------------
@app.get("/api/gantt")
def get_gantt(userId: Optional[str] = None, client: MondayClient = Depends(get_client)):
    try:
        chart = load_timeline(client, userId)
        return {"success": True, "chart": chart, "html": render_gantt(chart)}
    except Exception as e:
        return _fail(e)


@app.get("/api/export-timeline")
def export_timeline(userId: Optional[str] = None, client: MondayClient = Depends(get_client)):
    try:
        chart = load_timeline(client, userId)
        filename = f"timeline_{date.today().isoformat()}.xlsx"
        with tempfile.TemporaryDirectory() as td:
            out_path = Path(td) / filename
            write_timeline_workbook(chart, out_path)
            file_bytes = out_path.read_bytes()
        log.info(f"Exported timeline with {len(chart['rows'])} projects")
        return Response(
            content=file_bytes,
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    except Exception as e:
        return _fail(e)


@app.post("/api/navigate")
async def navigate(request: Request):
    body = await _json_body(request)
    try:
        state = apply_event(NavigationState.from_dict(body.get("state")), body.get("event") or {})
        crumbs = breadcrumb(state)
        return {"success": True, "state": state.to_dict(), "breadcrumb": crumbs, "html": render_breadcrumb(crumbs)}
    except Exception as e:
        return _fail(e)


@app.post("/api/sample-date-ranges")
async def sample_date_ranges(request: Request, client: MondayClient = Depends(get_client)):
    body = await _json_body(request)
    try:
        start = _required_date(body, "startDate")
        end = _required_date(body, "endDate")
        if end <= start:
            raise ValueError("endDate must be after startDate")
        tree = build_board_tree(filter_boards_by_user(client.boards(), body.get("userId")))
        project_dates = generate_project_date_ranges(tree, start, end, body.get("columnId") or "timeline")
        return {"success": True, "projectDates": project_dates, "count": len(project_dates)}
    except Exception as e:
        return _fail(e)


@app.post("/api/upload-timeline-dates")
async def upload_dates(request: Request, client: MondayClient = Depends(get_client)):
    body = await _json_body(request)
    try:
        uploaded = upload_timeline_dates(
            client,
            board_id=body.get("boardId"),
            item_id=body.get("itemId"),
            start=body.get("startDate"),
            end=body.get("endDate"),
            column_id=body.get("columnId"),
        )
        return {
            "success": True,
            "item": uploaded["item"],
            "uploaded": uploaded["dates"],
            "message": f"Timeline dates uploaded: {body.get('startDate')} to {body.get('endDate')}",
        }
    except Exception as e:
        return _fail(e)


@app.post("/api/upload-bulk-timeline-dates")
async def upload_bulk_dates(request: Request, client: MondayClient = Depends(get_client)):
    body = await _json_body(request)
    try:
        project_dates = body.get("projectDates")
        if not isinstance(project_dates, list):
            raise ValueError("projectDates must be a list")
        result = await run_in_threadpool(
            upload_bulk_timeline_dates, client, project_dates, delay_s=settings.bulk_upload_delay_s
        )
        return {"success": True, **result.to_dict()}
    except Exception as e:
        return _fail(e)


@app.post("/api/create-timeline-column")
async def create_timeline_column(request: Request, client: MondayClient = Depends(get_client)):
    body = await _json_body(request)
    title = body.get("columnTitle") or "Project Timeline"
    try:
        column = client.create_column(
            body.get("boardId"),
            title,
            body.get("columnDescription") or "Project start and end dates",
        )
        return {"success": True, "column": column, "message": f"Timeline column '{title}' created successfully"}
    except Exception as e:
        return _fail(e)


# -----------------------
# Diagnostics
# -----------------------
@app.get("/api/debug")
def debug():
    return {
        "timestamp": _now_iso(),
        "config": {
            "apiUrl": settings.api_url,
            "apiVersion": settings.api_version,
            "hasToken": settings.has_token,
            "rateLimit": settings.rate_limit,
        },
        "cache": {
            "boardsCount": len(_cache["boards"]),
            "usersCount": len(_cache["users"]),
            "teamsCount": len(_cache["teams"]),
            "lastUpdated": _cache["lastUpdated"],
        },
        "endpoints": ENDPOINTS,
    }


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "timestamp": _now_iso(),
        "hasApiToken": settings.has_token,
        "service": "Monday.com Dashboard",
    }


if __name__ == "__main__":
    import uvicorn

    log.info(f"Dashboard: http://localhost:{settings.port}")
    log.info(f"GraphQL API: {settings.api_url}")
    if not settings.has_token:
        log.warning("Please set MONDAY_API_TOKEN (monday.com -> Profile -> Developer -> My Access Tokens)")
    uvicorn.run("app:app", host="0.0.0.0", port=settings.port, reload=True)
