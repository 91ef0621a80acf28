from __future__ import annotations

import threading

import pytest

from devconsole.services import settings
from devconsole.services.log_buffer import LogLine
from devconsole.services.log_pages import LogFetchError
from devconsole.services.log_stream import StreamSource


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the settings store at a throwaway directory."""
    settings_dir = tmp_path / "settings"
    monkeypatch.setattr(settings, "_SETTINGS_DIR", str(settings_dir))
    monkeypatch.setattr(settings, "_SETTINGS_FILE", str(settings_dir / "settings.json"))
    monkeypatch.setattr(settings, "_cache", None)
    monkeypatch.setattr(settings, "_session_token", None)
    return settings_dir


def text(*values: str) -> list[LogLine]:
    return [LogLine(line=v) for v in values]


class FakeWebSocketApp:
    """Stands in for websocket.WebSocketApp; tests fire the callbacks by hand."""

    def __init__(self, url, header=None, on_open=None, on_message=None, on_error=None, on_close=None):
        self.url = url
        self.header = header
        self.on_open = on_open
        self.on_message = on_message
        self.on_error = on_error
        self.on_close = on_close
        self.ran = False
        self.close_calls = 0

    def run_forever(self):
        self.ran = True

    def close(self):
        self.close_calls += 1

    # helpers
    def open(self):
        self.on_open(self)

    def send(self, message: str):
        self.on_message(self, message)

    def fail(self, error="connection refused"):
        self.on_error(self, error)

    def hang_up(self):
        self.on_close(self, 1000, "bye")


class FakeStreams:
    """stream_factory for SessionController that keeps every socket it opened."""

    def __init__(self):
        self.sources: list[StreamSource] = []
        self.apps: list[FakeWebSocketApp] = []

    def __call__(self, url, **kwargs):
        source = StreamSource(url, app_factory=self._make_app, **kwargs)
        self.sources.append(source)
        return source

    def _make_app(self, url, **kwargs):
        app = FakeWebSocketApp(url, **kwargs)
        self.apps.append(app)
        return app

    def latest(self) -> FakeWebSocketApp:
        self.sources[-1].join(timeout=5)
        return self.apps[-1]


class FakeLogPages:
    """Page fetcher keyed by continuation token.

    ``pages`` maps token (None for the first page) to ``(lines, next_token)``;
    ``failures`` maps token to an HTTP status.  ``gates`` holds an Event per
    1-based call number that the call waits on before answering.
    """

    def __init__(self, pages=None, failures=None):
        self.pages = pages or {}
        self.failures = failures or {}
        self.gates: dict[int, threading.Event] = {}
        self.calls: list = []
        self.entered = threading.Event()
        self._lock = threading.Lock()

    def hold(self, call_number: int) -> threading.Event:
        gate = threading.Event()
        self.gates[call_number] = gate
        return gate

    def __call__(self, url, continuation_token=None, headers=None):
        with self._lock:
            self.calls.append(continuation_token)
            number = len(self.calls)
        self.entered.set()
        gate = self.gates.get(number)
        if gate is not None:
            gate.wait(5)
        if continuation_token in self.failures:
            raise LogFetchError("Failed to fetch logs: boom", self.failures[continuation_token])
        lines, next_token = self.pages[continuation_token]
        body = {"lines": [line.to_dict() for line in lines]}
        if next_token:
            body["nextToken"] = next_token
        return body


@pytest.fixture
def streams() -> FakeStreams:
    return FakeStreams()
