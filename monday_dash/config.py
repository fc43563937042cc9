"""
Environment-driven settings for the dashboard proxy.

Env:
  MONDAY_API_TOKEN    (bearer token, may be empty; /connection-status reports it)
  MONDAY_API_URL      (default https://api.monday.com/v2)
  MONDAY_API_VERSION  (default 2023-04)
  PORT                (default 3000)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict

DEFAULT_API_URL = "https://api.monday.com/v2"
DEFAULT_API_VERSION = "2023-04"
DEFAULT_PORT = 3000
DEFAULT_BULK_UPLOAD_DELAY_S = 0.1


def require_env(name: str) -> str:
    val = os.getenv(name, "").strip()
    if not val:
        raise RuntimeError(f"{name} missing/invalid")
    return val


@dataclass(frozen=True)
class Settings:
    api_token: str = ""
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    port: int = DEFAULT_PORT
    bulk_upload_delay_s: float = DEFAULT_BULK_UPLOAD_DELAY_S
    # Informational only, nothing enforces it.
    rate_limit: Dict[str, Any] = field(default_factory=lambda: {"requests": 5000, "period": 60})

    @property
    def has_token(self) -> bool:
        return bool(self.api_token)


def load_settings() -> Settings:
    port_raw = os.getenv("PORT", "").strip()
    try:
        port = int(port_raw) if port_raw else DEFAULT_PORT
    except ValueError:
        raise RuntimeError(f"PORT missing/invalid: {port_raw!r}")

    return Settings(
        api_token=os.getenv("MONDAY_API_TOKEN", "").strip(),
        api_url=os.getenv("MONDAY_API_URL", "").strip() or DEFAULT_API_URL,
        api_version=os.getenv("MONDAY_API_VERSION", "").strip() or DEFAULT_API_VERSION,
        port=port,
    )
