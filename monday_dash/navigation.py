"""
Dashboard drill-down state: all -> user -> project.

The browser keeps a serialized NavigationState and posts it back together with
one event; the server answers with the next state and its breadcrumb.

Events:
  {"type": "select_user", "userId": "123", "userLabel": "Ada"}   ("ALL"/empty resets)
  {"type": "open_project", "projectId": "9", "projectName": "Launch"}
  {"type": "back"}
  {"type": "reset"}
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

LEVEL_ALL = "all"
LEVEL_USER = "user"
LEVEL_PROJECT = "project"
LEVELS = (LEVEL_ALL, LEVEL_USER, LEVEL_PROJECT)


class NavigationError(ValueError):
    pass


@dataclass(frozen=True)
class NavigationState:
    level: str = LEVEL_ALL
    user_id: Optional[str] = None
    user_label: Optional[str] = None
    project_id: Optional[str] = None
    project_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "userId": self.user_id,
            "userLabel": self.user_label,
            "projectId": self.project_id,
            "projectName": self.project_name,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "NavigationState":
        data = data or {}
        level = data.get("level") or LEVEL_ALL
        if level not in LEVELS:
            raise NavigationError(f"Unknown navigation level: {level!r}")
        state = cls(
            level=level,
            user_id=_opt_str(data.get("userId")),
            user_label=_opt_str(data.get("userLabel")),
            project_id=_opt_str(data.get("projectId")),
            project_name=_opt_str(data.get("projectName")),
        )
        if level == LEVEL_USER and state.user_id is None:
            raise NavigationError("user level needs a userId")
        if level == LEVEL_PROJECT and state.project_id is None:
            raise NavigationError("project level needs a projectId")
        return state


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def select_user(state: NavigationState, user_id: Any, user_label: Any = None) -> NavigationState:
    uid = _opt_str(user_id)
    if uid is None or uid == "ALL":
        return NavigationState()
    return NavigationState(level=LEVEL_USER, user_id=uid, user_label=_opt_str(user_label))


def open_project(state: NavigationState, project_id: Any, project_name: Any = None) -> NavigationState:
    pid = _opt_str(project_id)
    if pid is None:
        raise NavigationError("open_project needs a projectId")
    return replace(state, level=LEVEL_PROJECT, project_id=pid, project_name=_opt_str(project_name))


def back(state: NavigationState) -> NavigationState:
    if state.level == LEVEL_PROJECT:
        if state.user_id:
            return replace(state, level=LEVEL_USER, project_id=None, project_name=None)
        return NavigationState()
    # user -> all, and all stays put
    return NavigationState()


def apply_event(state: NavigationState, event: Dict[str, Any]) -> NavigationState:
    kind = (event or {}).get("type")
    if kind == "select_user":
        return select_user(state, event.get("userId"), event.get("userLabel"))
    if kind == "open_project":
        return open_project(state, event.get("projectId"), event.get("projectName"))
    if kind == "back":
        return back(state)
    if kind == "reset":
        return NavigationState()
    raise NavigationError(f"Unknown navigation event: {kind!r}")


def breadcrumb(state: NavigationState) -> List[Dict[str, Any]]:
    crumbs = [{"level": LEVEL_ALL, "label": "All Users", "current": state.level == LEVEL_ALL}]
    if state.level in (LEVEL_USER, LEVEL_PROJECT) and state.user_id:
        crumbs.append({
            "level": LEVEL_USER,
            "label": state.user_label or state.user_id,
            "current": state.level == LEVEL_USER,
        })
    if state.level == LEVEL_PROJECT:
        crumbs.append({
            "level": LEVEL_PROJECT,
            "label": state.project_name or state.project_id,
            "current": True,
        })
    return crumbs
