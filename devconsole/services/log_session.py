"""
Deployment log session – owns the transcript buffer for one deployment and
decides which transport feeds it.

A session opens the WebSocket stream as soon as it has a complete key.  When
the stream is gone, ``refresh()`` rebuilds the transcript from the paginated
REST endpoint.  Transports report from background threads; their results are
applied through ``dispatch`` (``widget.after(0, fn)`` in the UI, inline by
default) and only if they still belong to the current stream or fetch run.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, NamedTuple, Optional

from devconsole.services.log_buffer import LogBuffer, LogLine
from devconsole.services.log_pages import PaginatedSource
from devconsole.services.log_stream import StreamSource
from devconsole.utils.endpoints import logs_url, logs_ws_url

log = logging.getLogger(__name__)


class SessionKey(NamedTuple):
    organization: str
    project: str
    stack: str
    deployment_id: str

    @property
    def is_complete(self) -> bool:
        return all(self)

    def __str__(self) -> str:
        return f"{self.organization}/{self.project}/{self.stack}#{self.deployment_id}"


class ConnectionState(Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    LIVE = "live"
    DISCONNECTED = "disconnected"
    FAILED = "failed"


@dataclass(frozen=True)
class ConnectionStatus:
    state: ConnectionState
    reason: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.state is ConnectionState.LIVE

    @property
    def is_terminal(self) -> bool:
        return self.state in (ConnectionState.DISCONNECTED, ConnectionState.FAILED)

    @classmethod
    def failed(cls, reason: str) -> "ConnectionStatus":
        return cls(ConnectionState.FAILED, reason)


IDLE = ConnectionStatus(ConnectionState.IDLE)
CONNECTING = ConnectionStatus(ConnectionState.CONNECTING)
LIVE = ConnectionStatus(ConnectionState.LIVE)
DISCONNECTED = ConnectionStatus(ConnectionState.DISCONNECTED)

# Listener events: ("append", lines) / ("replace", lines) / ("status", ConnectionStatus)
# / ("loading", bool).  Line payloads are tuples.
Listener = Callable[[str, object], None]


def _run_inline(fn: Callable[[], None]) -> None:
    fn()


class SessionController:
    def __init__(
        self,
        key: Optional[tuple] = None,
        api_url: str = "",
        headers: Optional[dict] = None,
        dispatch: Callable[[Callable[[], None]], None] = _run_inline,
        stream_factory: Callable[..., StreamSource] = StreamSource,
        pages_factory: Callable[..., PaginatedSource] = PaginatedSource,
    ):
        self._api_url = api_url
        self._headers = dict(headers or {})
        self._dispatch = dispatch
        self._stream_factory = stream_factory
        self._pages_factory = pages_factory

        self._buffer = LogBuffer()
        self._status = IDLE
        self._loading = False
        self._key: Optional[SessionKey] = None
        self._stream: Optional[StreamSource] = None
        self._run: Optional[PaginatedSource] = None
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()
        self._closed = False

        if key is not None:
            self.set_key(key)

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------

    @property
    def key(self) -> Optional[SessionKey]:
        return self._key

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def loading(self) -> bool:
        """True while a fetch run is in flight or the stream is still connecting."""
        return self._loading or self._status.state is ConnectionState.CONNECTING

    @property
    def lines(self) -> tuple[LogLine, ...]:
        return self._buffer.snapshot()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def set_key(self, key: tuple) -> None:
        """Point the session at a deployment.  Any field change starts over."""
        key = SessionKey(*key)
        with self._lock:
            if self._closed or key == self._key:
                return
            self._teardown()
            self._key = key
            self._buffer.clear()
            self._emit("replace", ())
            if not key.is_complete:
                self._set_status(IDLE)
                return
            self._open_stream()

    def refresh(self) -> Optional[threading.Thread]:
        """Rebuild the transcript from the paginated endpoint.

        Starts from an empty buffer every time and supersedes a run that is
        still in flight.  Does not touch the stream.
        """
        with self._lock:
            if self._closed or self._key is None or not self._key.is_complete:
                return None
            if self._run is not None:
                self._run.cancel()

            self._buffer.clear()
            self._emit("replace", ())
            if self._status.state is ConnectionState.FAILED:
                self._set_status(DISCONNECTED)
            self._set_loading(True)

            run = None

            def on_page(lines):
                self._post(lambda: self._run is run, self._page_received, lines)

            def on_done(error):
                self._post(lambda: self._run is run, self._fetch_finished, error)

            run = self._pages_factory(
                logs_url(self._api_url, self._key),
                headers=self._headers,
                on_page=on_page,
                on_done=on_done,
            )
            self._run = run
            log.debug("Fetching logs for %s via REST", self._key)
            return run.start()

    def close(self) -> None:
        """Abandon the session.  Late results from either transport are dropped."""
        with self._lock:
            if self._closed:
                return
            self._teardown()
            self._closed = True
            self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _teardown(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        if self._run is not None:
            self._run.cancel()
            self._run = None
        self._set_loading(False)

    def _open_stream(self) -> None:
        self._set_status(CONNECTING)
        stream = None

        def current():
            return self._stream is stream and not stream.closed

        stream = self._stream_factory(
            logs_ws_url(self._api_url, self._key),
            headers=self._headers,
            on_open=lambda: self._post(current, self._stream_opened),
            on_lines=lambda lines: self._post(current, self._stream_lines, lines),
            on_failure=lambda reason: self._post(current, self._stream_failed, reason),
            on_error=lambda msg: self._post(current, self._stream_dropped, msg),
            on_close=lambda: self._post(current, self._stream_dropped, None),
        )
        self._stream = stream
        log.debug("Opening log stream for %s", self._key)
        stream.start()

    def _post(self, still_current: Callable[[], bool], handler, *args) -> None:
        def _apply():
            with self._lock:
                if self._closed or not still_current():
                    return
                handler(*args)

        self._dispatch(_apply)

    def _stream_opened(self) -> None:
        self._set_status(LIVE)

    def _stream_lines(self, lines) -> None:
        self._buffer.append(lines)
        self._emit("append", tuple(lines))

    def _stream_failed(self, reason: str) -> None:
        self._set_status(ConnectionStatus.failed(reason))

    def _stream_dropped(self, message: Optional[str]) -> None:
        if message:
            log.info("Log stream for %s dropped: %s", self._key, message)
        if self._status.state is not ConnectionState.FAILED:
            self._set_status(DISCONNECTED)

    def _page_received(self, lines) -> None:
        self._buffer.append(lines)
        self._emit("append", tuple(lines))

    def _fetch_finished(self, error: Optional[str]) -> None:
        self._run = None
        self._set_loading(False)
        if error:
            self._set_status(ConnectionStatus.failed(error))

    def _set_status(self, status: ConnectionStatus) -> None:
        if status == self._status:
            return
        self._status = status
        self._emit("status", status)

    def _set_loading(self, loading: bool) -> None:
        if loading == self._loading:
            return
        self._loading = loading
        self._emit("loading", loading)

    def _emit(self, event: str, payload) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception:
                log.exception("Log session listener failed on %r", event)
