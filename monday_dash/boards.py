"""
Board list helpers: subitem nesting, user filtering and workspace statistics.

monday exposes subitems as separate boards named "Subitems of <main board>".
There is no parent reference in the API, so the tree is rebuilt by exact,
case-sensitive name match. A "Subitems of X" board with no main board named X
is left out of the tree.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

SUBITEMS_PREFIX = "Subitems of "

ALL_USERS = "ALL"


def board_items(board: dict) -> List[dict]:
    """Items of a board from either `items_page.items` or a bare `items` list."""
    page = board.get("items_page")
    if isinstance(page, dict) and isinstance(page.get("items"), list):
        return page["items"]
    items = board.get("items")
    return items if isinstance(items, list) else []


def is_subitem_board(board: dict) -> bool:
    return str(board.get("name") or "").startswith(SUBITEMS_PREFIX)


def build_board_tree(boards: Iterable[dict]) -> List[dict]:
    main_boards: List[dict] = []
    subitem_boards: List[dict] = []
    for b in boards or []:
        (subitem_boards if is_subitem_board(b) else main_boards).append(b)

    tree: List[dict] = []
    for main in main_boards:
        wanted = SUBITEMS_PREFIX + str(main.get("name") or "")
        subs = [s for s in subitem_boards if s.get("name") == wanted]
        total = len(board_items(main)) + sum(len(board_items(s)) for s in subs)

        node = dict(main)
        node["hasSubitems"] = bool(subs)
        node["subitems"] = subs
        node["totalItems"] = total
        tree.append(node)
    return tree


def _member_ids(board: dict, key: str) -> set:
    return {str(u.get("id")) for u in (board.get(key) or []) if isinstance(u, dict)}


def filter_boards_by_user(boards: Iterable[dict], user_id: Optional[Any]) -> List[dict]:
    """Boards the user owns or subscribes to. No user (or "ALL") keeps everything."""
    boards = list(boards or [])
    if user_id is None or str(user_id).strip() in ("", ALL_USERS):
        return boards

    uid = str(user_id)
    return [b for b in boards if uid in _member_ids(b, "owners") or uid in _member_ids(b, "subscribers")]


def user_filter_options(boards: Iterable[dict], users: Iterable[dict]) -> List[Dict[str, Any]]:
    boards = list(boards or [])
    total = len(build_board_tree(boards))
    options = [{"value": ALL_USERS, "label": f"ALL USERS ({total} main boards)", "mainBoards": total}]

    for user in users or []:
        if not user.get("enabled"):
            continue
        count = len(build_board_tree(filter_boards_by_user(boards, user.get("id"))))
        if count == 0:
            continue
        options.append({
            "value": str(user.get("id")),
            "label": f"{user.get('name') or 'Unknown'} ({count} main boards)",
            "mainBoards": count,
        })
    return options


def summarize_workspace(boards: Iterable[dict], users: Iterable[dict], teams: Iterable[dict]) -> Dict[str, Any]:
    boards = list(boards or [])
    users = list(users or [])
    teams = list(teams or [])
    items = [it for b in boards for it in board_items(b)]

    return {
        "boards": {
            "total": len(boards),
            "active": sum(1 for b in boards if b.get("state") == "active"),
            "archived": sum(1 for b in boards if b.get("state") == "archived"),
            "public": sum(1 for b in boards if b.get("board_kind") == "public"),
            "private": sum(1 for b in boards if b.get("board_kind") == "private"),
        },
        "items": {
            "total": len(items),
            "active": sum(1 for it in items if it.get("state") == "active"),
            "done": sum(1 for it in items if it.get("state") == "done"),
        },
        "users": {
            "total": len(users),
            "active": sum(1 for u in users if u.get("enabled")),
            "admins": sum(1 for u in users if u.get("is_admin")),
            "guests": sum(1 for u in users if u.get("is_guest")),
        },
        "teams": {
            "total": len(teams),
        },
    }
