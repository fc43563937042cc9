#!/usr/bin/env python3
"""
Decoding of monday.com column values.

monday ships column payloads as JSON-in-a-string keyed by a loose `type` tag.
They are decoded once here into a small tagged union so consumers never
re-parse raw `value` strings:

  date          {"date": "2025-01-10", "time": null}    -> DateValue
  timeline      {"from": "2025-01-01", "to": "..."}     -> TimelineValue
  creation_log  {"created_at": "2025-01-01T10:00:00Z"}  -> LogValue
  last_updated  {"updated_at": "..."}                   -> LogValue
  anything else, empty values and the "{}" placeholder  -> UnknownValue

Malformed JSON is logged and decoded as UnknownValue.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Union

log = logging.getLogger(__name__)

DATE_COLUMN_TYPES = ("date", "timeline", "creation_log", "last_updated")

EMPTY_PLACEHOLDER = "{}"


@dataclass(frozen=True)
class DateValue:
    column_id: str
    title: str
    day: date


@dataclass(frozen=True)
class TimelineValue:
    column_id: str
    title: str
    start: Optional[date]
    end: Optional[date]


@dataclass(frozen=True)
class LogValue:
    column_id: str
    title: str
    at: date


@dataclass(frozen=True)
class UnknownValue:
    column_id: str
    title: str
    type: str
    text: str = ""


ColumnValue = Union[DateValue, TimelineValue, LogValue, UnknownValue]


def parse_date(val: Any) -> Optional[date]:
    """Parse a monday date string (plain date, ISO timestamp, or log text) into a date."""
    if val is None or (isinstance(val, str) and not val.strip()):
        return None
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    if not isinstance(val, str):
        return None

    s = val.strip()
    for candidate in (s, s[:10]):
        for fmt in ("%Y-%m-%d", "%m/%d/%Y", "%d/%m/%Y"):
            try:
                return datetime.strptime(candidate, fmt).date()
            except ValueError:
                continue
    return None


def _load_payload(cv: dict) -> Optional[Any]:
    raw = cv.get("value")
    if raw is None:
        return None
    if isinstance(raw, dict):
        return raw
    raw = str(raw).strip()
    if not raw or raw == EMPTY_PLACEHOLDER or raw == "null":
        return None
    return json.loads(raw)


def decode_column_value(cv: dict) -> ColumnValue:
    col_id = str(cv.get("id") or "")
    title = str(cv.get("title") or "")
    col_type = str(cv.get("type") or "")
    text = str(cv.get("text") or "")
    unknown = UnknownValue(column_id=col_id, title=title, type=col_type, text=text)

    if col_type not in DATE_COLUMN_TYPES:
        return unknown

    try:
        payload = _load_payload(cv)
    except ValueError as e:
        log.warning(f"Skipping malformed {col_type} value in column {title!r}: {e}")
        return unknown

    if payload is not None and not isinstance(payload, dict):
        log.warning(f"Skipping unexpected {col_type} payload in column {title!r}: {payload!r}")
        return unknown
    payload = payload or {}

    if col_type == "date":
        day = parse_date(payload.get("date"))
        return DateValue(col_id, title, day) if day else unknown

    if col_type == "timeline":
        start = parse_date(payload.get("from"))
        end = parse_date(payload.get("to"))
        if not start and not end:
            return unknown
        return TimelineValue(col_id, title, start, end)

    # creation_log / last_updated: value is often null, the display text still carries the date
    key = "created_at" if col_type == "creation_log" else "updated_at"
    at = parse_date(payload.get(key)) or parse_date(text)
    return LogValue(col_id, title, at) if at else unknown


def decode_column_values(column_values: Iterable[dict]) -> List[ColumnValue]:
    return [decode_column_value(cv) for cv in (column_values or []) if isinstance(cv, dict)]
