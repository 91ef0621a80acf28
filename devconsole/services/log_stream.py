"""
Stream source – one WebSocket connection pushing log batches for a deployment.

The socket runs on a daemon thread (same model as the other background
workers in the console); every event is reported through the callbacks given
to the constructor.  Once ``close()`` has been called no callback fires again,
so a late frame from a torn-down connection can never reach a newer buffer.
"""

import json
import logging
import threading
from typing import Callable, Optional

import websocket

from devconsole.services.log_buffer import LogLine, parse_lines

log = logging.getLogger(__name__)


class StreamSource:
    def __init__(
        self,
        url: str,
        headers: Optional[dict] = None,
        on_open: Optional[Callable[[], None]] = None,
        on_lines: Optional[Callable[[list[LogLine]], None]] = None,
        on_failure: Optional[Callable[[str], None]] = None,
        on_error: Optional[Callable[[str], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
        app_factory: Callable = websocket.WebSocketApp,
    ):
        self.url = url
        self._headers = headers or {}
        self._on_open = on_open
        self._on_lines = on_lines
        self._on_failure = on_failure
        self._on_error = on_error
        self._on_close = on_close
        self._app_factory = app_factory
        self._app = None
        self._thread: Optional[threading.Thread] = None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------

    def start(self) -> threading.Thread:
        """Open the connection in a background thread.  Never raises."""

        def _worker():
            try:
                app = self._app_factory(
                    self.url,
                    header=self._headers,
                    on_open=self._handle_open,
                    on_message=self._handle_message,
                    on_error=self._handle_error,
                    on_close=self._handle_close,
                )
                with self._lock:
                    if self._closed:
                        return
                    self._app = app
                app.run_forever()
            except Exception as exc:
                log.warning("Log stream %s failed to open: %s", self.url, exc)
                self._handle_error(None, exc)

        t = threading.Thread(target=_worker, daemon=True)
        self._thread = t
        t.start()
        return t

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the connection thread to finish (it runs until the socket closes)."""
        if self._thread is not None:
            self._thread.join(timeout)

    def close(self) -> None:
        """Tear the connection down and silence it.  Safe to call repeatedly."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            app = self._app
        if app is not None:
            try:
                app.close()
            except Exception as exc:
                log.debug("Ignoring error while closing %s: %s", self.url, exc)

    def _shut(self, ws) -> None:
        if ws is None:
            return
        try:
            ws.close()
        except Exception as exc:
            log.debug("Ignoring error while closing %s: %s", self.url, exc)

    # ------------------------------------------------------------------
    # WebSocketApp callbacks
    # ------------------------------------------------------------------

    def _handle_open(self, ws) -> None:
        if self._closed:
            # close() landed before run_forever() connected
            self._shut(ws)
            return
        log.debug("Log stream open: %s", self.url)
        if self._on_open:
            self._on_open()

    def _handle_message(self, ws, message) -> None:
        if self._closed:
            self._shut(ws)
            return
        try:
            data = json.loads(message)
        except (TypeError, ValueError) as exc:
            log.warning("Discarding unparseable log stream message: %s", exc)
            return
        if not isinstance(data, dict):
            log.warning("Discarding log stream message of type %s", type(data).__name__)
            return

        if data.get("error"):
            if self._on_failure:
                self._on_failure(str(data["error"]))
            return

        if isinstance(data.get("lines"), list) and self._on_lines:
            self._on_lines(parse_lines(data["lines"]))

    def _handle_error(self, ws, error) -> None:
        if self._closed:
            return
        log.warning("Log stream error on %s: %s", self.url, error)
        if self._on_error:
            self._on_error(str(error) or "WebSocket connection error")

    def _handle_close(self, ws, status_code=None, reason=None) -> None:
        if self._closed:
            return
        log.debug("Log stream closed: %s (%s %s)", self.url, status_code, reason)
        if self._on_close:
            self._on_close()
