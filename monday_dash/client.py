"""
monday.com GraphQL client.

One POST per call, no retries:
- non-2xx            -> MondayHTTPError
- "errors" in body   -> MondayGraphQLError (all messages joined)
- otherwise          -> the "data" payload
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from . import queries
from .config import DEFAULT_API_URL, DEFAULT_API_VERSION, Settings

log = logging.getLogger(__name__)

_FIRST_FIELD = re.compile(r"\{\s*(\w+)")


class MondayAPIError(RuntimeError):
    pass


class MondayHTTPError(MondayAPIError):
    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"HTTP {status_code}: {self.reason}".rstrip())


class MondayGraphQLError(MondayAPIError):
    def __init__(self, errors: List[Any]) -> None:
        self.errors = list(errors)
        messages = []
        for e in self.errors:
            if isinstance(e, dict):
                messages.append(str(e.get("message", e)))
            else:
                messages.append(str(e))
        super().__init__(", ".join(messages))


def _operation_label(query: str) -> str:
    m = _FIRST_FIELD.search(query or "")
    return m.group(1) if m else "query"


@dataclass
class MondayClient:
    api_token: str
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    timeout_s: int = 60
    # Anything with requests.Session.post's signature; None uses requests directly.
    session: Any = None

    @classmethod
    def from_settings(cls, settings: Settings, session: Any = None) -> "MondayClient":
        return cls(
            api_token=settings.api_token,
            api_url=settings.api_url,
            api_version=settings.api_version,
            session=session,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.api_token,
            "API-Version": self.api_version,
            "Content-Type": "application/json",
        }

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not (self.api_token or "").strip():
            raise MondayAPIError("MONDAY_API_TOKEN missing/invalid")

        label = _operation_label(query)
        log.info(f"monday request: {label}")

        transport = self.session if self.session is not None else requests
        resp = transport.post(
            self.api_url,
            headers=self._headers(),
            json={"query": query, "variables": variables or {}},
            timeout=self.timeout_s,
        )

        if not 200 <= resp.status_code < 300:
            log.error(f"monday HTTP error on {label}: {resp.status_code} {resp.reason}")
            raise MondayHTTPError(resp.status_code, resp.reason)

        try:
            payload = resp.json()
        except ValueError:
            raise MondayAPIError(f"monday: non-JSON response {resp.status_code}: {resp.text[:500]}")

        errors = payload.get("errors")
        if errors:
            log.error(f"monday graphql errors on {label}: {errors}")
            raise MondayGraphQLError(errors)

        return payload.get("data") or {}

    # -----------------------
    # Catalog
    # -----------------------
    def me(self) -> Optional[dict]:
        return self.execute(queries.ME).get("me")

    def boards(self) -> List[dict]:
        return self.execute(queries.BOARDS).get("boards") or []

    def board(self, board_id: Any) -> Optional[dict]:
        boards = self.execute(queries.BOARD_DETAIL, {"boardId": board_id}).get("boards") or []
        return boards[0] if boards else None

    def board_dates(self, board_id: Any) -> Optional[dict]:
        boards = self.execute(queries.BOARD_DATES, {"boardId": board_id}).get("boards") or []
        return boards[0] if boards else None

    def create_board(self, name: Any, description: Any = None, board_kind: Any = None) -> Optional[dict]:
        variables = {
            "boardName": name,
            "boardKind": board_kind or "public",
            "description": description or None,
        }
        return self.execute(queries.CREATE_BOARD, variables).get("create_board")

    def items(self) -> List[dict]:
        return self.execute(queries.ITEMS).get("items") or []

    def create_item(self, board_id: Any, item_name: Any, group_id: Any = None) -> Optional[dict]:
        variables = {"boardId": board_id, "itemName": item_name, "groupId": group_id or None}
        return self.execute(queries.CREATE_ITEM, variables).get("create_item")

    def update_item(self, item_id: Any, name: Any = None, column_values: Any = None) -> Optional[dict]:
        """Rename when `name` is given, otherwise write `column_values` (a column_id -> value map)."""
        if name:
            data = self.execute(queries.RENAME_ITEM, {"itemId": item_id, "itemName": name})
            return data.get("change_simple_column_value")
        if column_values:
            variables = {"itemId": item_id, "columnValues": json.dumps(column_values)}
            data = self.execute(queries.CHANGE_COLUMN_VALUES, variables)
            return data.get("change_multiple_column_values")
        raise MondayAPIError("update-item needs either name or columnValues")

    def users(self) -> List[dict]:
        return self.execute(queries.USERS).get("users") or []

    def teams(self) -> List[dict]:
        return self.execute(queries.TEAMS).get("teams") or []

    def activity_logs(self, limit: int = 50) -> List[dict]:
        return self.execute(queries.ACTIVITY_LOGS, {"limit": int(limit)}).get("activity_logs") or []

    def updates(self) -> List[dict]:
        return self.execute(queries.UPDATES).get("updates") or []

    def create_update(self, item_id: Any, text: Any) -> Optional[dict]:
        return self.execute(queries.CREATE_UPDATE, {"itemId": item_id, "body": text}).get("create_update")

    def workspace_stats(self) -> Dict[str, Any]:
        return self.execute(queries.WORKSPACE_STATS)

    def set_timeline(self, board_id: Any, item_id: Any, column_values: Dict[str, Any]) -> Optional[dict]:
        variables = {"boardId": board_id, "itemId": item_id, "columnValues": json.dumps(column_values)}
        return self.execute(queries.SET_TIMELINE, variables).get("change_multiple_column_values")

    def create_column(
        self,
        board_id: Any,
        title: str,
        description: Optional[str] = None,
        column_type: str = "timeline",
    ) -> Optional[dict]:
        variables = {
            "boardId": board_id,
            "columnType": column_type,
            "title": title,
            "description": description,
        }
        return self.execute(queries.CREATE_COLUMN, variables).get("create_column")
