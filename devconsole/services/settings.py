"""
Persistent console settings stored in %APPDATA%/DeploymentConsole/settings.json
(``~/DeploymentConsole`` elsewhere).

This module intentionally has no project imports besides config to avoid
circular dependencies.
"""

import json
import os
from typing import Optional

from devconsole.config import DEFAULT_API_URL, ACCESS_TOKEN

_SETTINGS_DIR = os.path.join(
    os.environ.get("APPDATA", os.path.expanduser("~")),
    "DeploymentConsole",
)
_SETTINGS_FILE = os.path.join(_SETTINGS_DIR, "settings.json")

_cache: dict | None = None


def _load() -> dict:
    global _cache
    if os.path.isfile(_SETTINGS_FILE):
        with open(_SETTINGS_FILE, "r", encoding="utf-8") as f:
            _cache = json.load(f)
    else:
        _cache = {}
    return _cache


def _save(data: dict) -> None:
    global _cache
    os.makedirs(_SETTINGS_DIR, exist_ok=True)
    with open(_SETTINGS_FILE, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    _cache = data


def load() -> dict:
    if _cache is None:
        return _load()
    return _cache


def get_all() -> dict:
    """Return a copy of all settings."""
    return dict(load())


# -- API base URL -------------------------------------------------------------

def get_api_url() -> str:
    """Return the console API base URL (no trailing slash)."""
    return (load().get("api_url") or DEFAULT_API_URL).rstrip("/")


def set_api_url(url: str) -> None:
    s = load()
    s["api_url"] = url.rstrip("/")
    _save(s)


# -- Access token -------------------------------------------------------------
# Only affects request headers; obtaining the token is the identity provider's job.

_session_token: Optional[str] = None


def use_access_token(token: Optional[str]) -> None:
    """Use *token* for this process only; nothing is written to disk."""
    global _session_token
    _session_token = token or None


def get_access_token() -> str:
    return _session_token or load().get("access_token") or ACCESS_TOKEN


def set_access_token(token: Optional[str]) -> None:
    s = load()
    if token:
        s["access_token"] = token
    else:
        s.pop("access_token", None)
    _save(s)


def auth_headers() -> dict:
    """Headers every console request carries."""
    token = get_access_token()
    return {"Authorization": f"Bearer {token}"} if token else {}


# -- Log viewer ---------------------------------------------------------------

def get_auto_scroll() -> bool:
    """True if the log viewer should follow the tail (default on)."""
    return bool(load().get("auto_scroll", True))


def set_auto_scroll(enabled: bool) -> None:
    s = load()
    s["auto_scroll"] = bool(enabled)
    _save(s)
