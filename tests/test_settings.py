from __future__ import annotations

import json

from devconsole.config import DEFAULT_API_URL
from devconsole.services import settings


def test_defaults_without_settings_file() -> None:
    assert settings.get_api_url() == DEFAULT_API_URL.rstrip("/")
    assert settings.get_auto_scroll() is True


def test_api_url_is_persisted_without_trailing_slash(isolated_settings) -> None:
    settings.set_api_url("https://console.example.com/")
    assert settings.get_api_url() == "https://console.example.com"

    saved = json.loads((isolated_settings / "settings.json").read_text(encoding="utf-8"))
    assert saved["api_url"] == "https://console.example.com"


def test_auth_headers(monkeypatch) -> None:
    monkeypatch.setattr(settings, "ACCESS_TOKEN", "")
    assert settings.auth_headers() == {}
    settings.set_access_token("abc")
    assert settings.auth_headers() == {"Authorization": "Bearer abc"}
    settings.set_access_token(None)
    assert "access_token" not in settings.get_all()


def test_run_only_token_is_never_saved(isolated_settings, monkeypatch) -> None:
    monkeypatch.setattr(settings, "ACCESS_TOKEN", "")
    settings.set_access_token("saved")

    settings.use_access_token("one-off")
    assert settings.auth_headers() == {"Authorization": "Bearer one-off"}

    saved = json.loads((isolated_settings / "settings.json").read_text(encoding="utf-8"))
    assert saved["access_token"] == "saved"

    settings.use_access_token(None)
    assert settings.auth_headers() == {"Authorization": "Bearer saved"}


def test_cli_token_is_used_but_not_persisted(isolated_settings, monkeypatch) -> None:
    import sys
    import types

    from devconsole import main as entry

    seen = {}

    class FakeApp:
        def show(self, view):
            seen["view"] = view

        def mainloop(self):
            seen["headers"] = settings.auth_headers()

    monkeypatch.setitem(sys.modules, "devconsole.app", types.SimpleNamespace(App=FakeApp))
    monkeypatch.setitem(
        sys.modules,
        "devconsole.ui.deployment_logs_view",
        types.SimpleNamespace(DeploymentLogsView=lambda app, key: key),
    )

    entry.main(["acme", "web", "prod", "42", "--token", "one-off"])

    assert seen["view"] == ("acme", "web", "prod", "42")
    assert seen["headers"] == {"Authorization": "Bearer one-off"}
    assert not (isolated_settings / "settings.json").exists()


def test_auto_scroll_toggle() -> None:
    settings.set_auto_scroll(False)
    assert settings.get_auto_scroll() is False
