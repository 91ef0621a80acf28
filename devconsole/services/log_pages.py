"""
Paginated source – rebuild a deployment's full transcript by pulling pages
from the REST endpoint until the server stops returning a continuation token.
"""

import logging
import threading
from typing import Callable, Optional

import requests

from devconsole.config import REST_TIMEOUT
from devconsole.services.log_buffer import LogLine, parse_lines

log = logging.getLogger(__name__)


class LogFetchError(Exception):
    """A page request failed; the run stops without retrying."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def fetch_page(
    url: str,
    continuation_token: Optional[str] = None,
    headers: Optional[dict] = None,
    timeout: float = REST_TIMEOUT,
) -> dict:
    """GET one page.  Returns the decoded body, raises LogFetchError otherwise."""
    params = {"continuationToken": continuation_token} if continuation_token else None
    try:
        resp = requests.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise LogFetchError(f"Failed to fetch logs: {exc}") from exc

    if not resp.ok:
        raise LogFetchError(f"Failed to fetch logs: {resp.text}", status_code=resp.status_code)

    try:
        data = resp.json()
    except ValueError as exc:
        raise LogFetchError(f"Failed to fetch logs: invalid JSON ({exc})", resp.status_code) from exc
    if not isinstance(data, dict):
        raise LogFetchError("Failed to fetch logs: unexpected response shape", resp.status_code)
    return data


class PaginatedSource:
    """
    One fetch run.  Pages are requested strictly one after another and each
    page's lines are handed to ``on_page`` as soon as it arrives.

    ``on_done`` receives ``None`` on success or the error message on failure.
    After ``cancel()`` neither callback fires again and no further page is
    requested.
    """

    def __init__(
        self,
        url: str,
        headers: Optional[dict] = None,
        on_page: Optional[Callable[[list[LogLine]], None]] = None,
        on_done: Optional[Callable[[Optional[str]], None]] = None,
        fetch: Callable[..., dict] = fetch_page,
    ):
        self.url = url
        self._headers = headers or {}
        self._on_page = on_page
        self._on_done = on_done
        self._fetch = fetch
        self._cancelled = threading.Event()
        self.pages_fetched = 0

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def run(self) -> None:
        """Drain every page.  Blocks; call ``start()`` for a background thread."""
        token = None
        try:
            while not self.cancelled:
                data = self._fetch(self.url, token, headers=self._headers)
                if self.cancelled:
                    return
                self.pages_fetched += 1
                if self._on_page:
                    self._on_page(parse_lines(data.get("lines")))
                token = data.get("nextToken") or None
                if token is None:
                    break
        except LogFetchError as exc:
            log.warning("Log fetch from %s failed: %s", self.url, exc)
            if not self.cancelled and self._on_done:
                self._on_done(str(exc))
            return
        except Exception as exc:
            log.exception("Unexpected error while fetching logs from %s", self.url)
            if not self.cancelled and self._on_done:
                self._on_done(f"Failed to fetch logs: {exc}")
            return
        if not self.cancelled and self._on_done:
            self._on_done(None)

    def start(self) -> threading.Thread:
        t = threading.Thread(target=self.run, daemon=True)
        t.start()
        return t
