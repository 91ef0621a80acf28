from __future__ import annotations

from devconsole.utils.endpoints import logs_url, logs_ws_url

KEY = ("acme", "web", "prod", "42")


def test_rest_url() -> None:
    assert logs_url("http://localhost:8080/", KEY) == (
        "http://localhost:8080/api/workloads/acme/web/prod/deployments/42/logs"
    )


def test_ws_url_follows_http_scheme() -> None:
    assert logs_ws_url("https://console.example.com", KEY) == (
        "wss://console.example.com/api/workloads/ws/acme/web/prod/deployments/42/logs"
    )
    assert logs_ws_url("http://localhost:8080", KEY).startswith("ws://localhost:8080/api/workloads/ws/")


def test_ws_url_keeps_base_path() -> None:
    assert logs_ws_url("https://example.com/console", KEY) == (
        "wss://example.com/console/api/workloads/ws/acme/web/prod/deployments/42/logs"
    )


def test_key_parts_are_escaped() -> None:
    assert "/my%20stack/" in logs_url("http://h", ("acme", "web", "my stack", "42"))
