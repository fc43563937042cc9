"""Composes client reads with the tree/date/layout helpers for the app and scripts."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from .boards import build_board_tree, filter_boards_by_user, user_filter_options
from .client import MondayClient
from .dates import STATUS_NO_DATES, ProjectDates, infer_board_dates
from .gantt import build_gantt

log = logging.getLogger(__name__)


def load_board_tree(client: MondayClient, user_id: Optional[Any] = None) -> Dict[str, Any]:
    boards = client.boards()
    users = client.users()
    filtered = filter_boards_by_user(boards, user_id)
    tree = build_board_tree(filtered)
    return {
        "boards": tree,
        "count": len(tree),
        "flatCount": len(filtered),
        "userOptions": user_filter_options(boards, users),
    }


def load_project_dates(
    client: MondayClient, tree: List[dict], today: Optional[date] = None
) -> List[Tuple[dict, ProjectDates]]:
    """One detail read per main board, in order."""
    out = []
    for board in tree:
        detail = client.board(board.get("id"))
        if detail is None:
            log.warning(f"Board {board.get('id')} returned no detail; showing it without dates")
            out.append((board, ProjectDates(start=None, end=None, status=STATUS_NO_DATES)))
            continue
        out.append((board, infer_board_dates(detail, today)))
    return out


def load_timeline(client: MondayClient, user_id: Optional[Any] = None, today: Optional[date] = None) -> Dict[str, Any]:
    boards = filter_boards_by_user(client.boards(), user_id)
    tree = build_board_tree(boards)
    return build_gantt(load_project_dates(client, tree, today), today)
