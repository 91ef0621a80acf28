from __future__ import annotations

import pytest
import requests

from conftest import FakeLogPages

from devconsole.services import log_pages
from devconsole.services.log_buffer import LogLine
from devconsole.services.log_pages import LogFetchError, PaginatedSource, fetch_page


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no body")
        return self._body


def test_fetch_page_passes_token_and_headers(monkeypatch) -> None:
    seen = {}

    def fake_get(url, params=None, headers=None, timeout=None):
        seen.update(url=url, params=params, headers=headers)
        return FakeResponse(body={"lines": [], "nextToken": "t2"})

    monkeypatch.setattr(log_pages.requests, "get", fake_get)

    data = fetch_page("http://h/logs", "t1", headers={"Authorization": "Bearer x"})
    assert data == {"lines": [], "nextToken": "t2"}
    assert seen["params"] == {"continuationToken": "t1"}
    assert seen["headers"] == {"Authorization": "Bearer x"}

    fetch_page("http://h/logs")
    assert seen["params"] is None


def test_fetch_page_raises_on_http_error(monkeypatch) -> None:
    monkeypatch.setattr(
        log_pages.requests, "get",
        lambda *a, **kw: FakeResponse(status_code=500, text="upstream exploded"),
    )
    with pytest.raises(LogFetchError) as excinfo:
        fetch_page("http://h/logs")
    assert excinfo.value.status_code == 500
    assert str(excinfo.value) == "Failed to fetch logs: upstream exploded"


def test_fetch_page_wraps_network_errors(monkeypatch) -> None:
    def boom(*a, **kw):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(log_pages.requests, "get", boom)
    with pytest.raises(LogFetchError):
        fetch_page("http://h/logs")


def test_run_drains_pages_in_order() -> None:
    fetch = FakeLogPages({
        None: ([LogLine(line="a"), LogLine(line="b")], "t1"),
        "t1": ([LogLine(line="c")], None),
    })
    pages, done = [], []
    source = PaginatedSource("http://h/logs", on_page=pages.append, on_done=done.append, fetch=fetch)
    source.run()

    assert pages == [[LogLine(line="a"), LogLine(line="b")], [LogLine(line="c")]]
    assert done == [None]
    assert fetch.calls == [None, "t1"]
    assert source.pages_fetched == 2


def test_run_stops_at_first_failure() -> None:
    fetch = FakeLogPages(
        {None: ([LogLine(line="a")], "t1"), "t2": ([LogLine(line="never")], None)},
        failures={"t1": 500},
    )
    pages, done = [], []
    PaginatedSource("http://h/logs", on_page=pages.append, on_done=done.append, fetch=fetch).run()

    assert pages == [[LogLine(line="a")]]
    assert done == ["Failed to fetch logs: boom"]
    assert fetch.calls == [None, "t1"]


def test_cancel_stops_delivery() -> None:
    fetch = FakeLogPages({None: ([LogLine(line="a")], "t1"), "t1": ([LogLine(line="b")], None)})
    gate = fetch.hold(1)
    pages, done = [], []
    source = PaginatedSource("http://h/logs", on_page=pages.append, on_done=done.append, fetch=fetch)

    thread = source.start()
    assert fetch.entered.wait(5)
    source.cancel()
    gate.set()
    thread.join(timeout=5)

    assert pages == []
    assert done == []
    assert fetch.calls == [None]
