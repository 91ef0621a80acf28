"""
Deployment logs view – live transcript of one deployment with a REST refresh
fallback when the stream is gone.
"""

import customtkinter as ctk

from devconsole.config import CONSOLE_HEIGHT
from devconsole.services import settings
from devconsole.services.log_session import ConnectionState, SessionController
from devconsole.ui.base_view import BaseView
from devconsole.ui.components import SectionTitle, StatusBadge, LogConsole

_BADGES = {
    ConnectionState.IDLE: ("Idle", "neutral"),
    ConnectionState.CONNECTING: ("Connecting...", "info"),
    ConnectionState.LIVE: ("Live", "ok"),
    ConnectionState.DISCONNECTED: ("Disconnected", "neutral"),
    ConnectionState.FAILED: ("Failed", "error"),
}


class DeploymentLogsView(BaseView):
    def __init__(self, parent, key=None):
        super().__init__(parent)
        self._session = SessionController(
            api_url=settings.get_api_url(),
            headers=settings.auth_headers(),
            dispatch=lambda fn: self.after(0, fn),
        )
        self._showing_lines = False
        self._build_ui()
        self._session.subscribe(self._on_session_event)
        if key is not None:
            self.show_deployment(key)

    def _build_ui(self):
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        header = ctk.CTkFrame(self, fg_color="transparent")
        header.grid(row=0, column=0, sticky="we", padx=24, pady=(24, 0))
        header.grid_columnconfigure(0, weight=1)

        self._title = SectionTitle(header, text="Deployment Logs")
        self._title.grid(row=0, column=0, sticky="w")

        self._auto_scroll = ctk.BooleanVar(value=settings.get_auto_scroll())
        ctk.CTkCheckBox(
            header,
            text="Auto-scroll",
            variable=self._auto_scroll,
            command=self._on_auto_scroll,
        ).grid(row=0, column=1, sticky="e", padx=(0, 12))

        self._badge = StatusBadge(header, "Idle", "neutral")
        self._badge.grid(row=0, column=2, sticky="e", padx=(0, 12))

        self._refresh_btn = ctk.CTkButton(
            header,
            text="Refresh",
            font=ctk.CTkFont(size=13),
            height=32,
            width=90,
            corner_radius=8,
            fg_color="transparent",
            border_width=1,
            text_color=("gray10", "gray90"),
            command=self._on_refresh,
        )
        self._refresh_btn.grid(row=0, column=3, sticky="e")

        self._console = LogConsole(self, height=CONSOLE_HEIGHT)
        self._console.follow_tail = self._auto_scroll.get()
        self._console.grid(row=1, column=0, sticky="nswe", padx=24, pady=(12, 24))
        self._render()

    # ------------------------------------------------------------------

    def show_deployment(self, key) -> None:
        """Switch to another deployment (organization, project, stack, deployment id)."""
        self._session.set_key(key)
        self._title.configure(text=f"Deployment Logs – {self._session.key}")

    def on_destroy(self):
        self._session.close()

    # ------------------------------------------------------------------

    def _on_refresh(self):
        if self._session.status.is_live:
            return
        self._session.refresh()

    def _on_auto_scroll(self):
        enabled = bool(self._auto_scroll.get())
        self._console.follow_tail = enabled
        settings.set_auto_scroll(enabled)
        if enabled:
            self._console.see("end")

    def _on_session_event(self, event, payload):
        if event == "append" and self._showing_lines:
            self._console.append_lines(payload)
            return
        self._render()

    def _render(self):
        status = self._session.status
        text, variant = _BADGES[status.state]
        self._badge.set(text, variant)
        if status.is_live:
            self._refresh_btn.grid_remove()
        else:
            self._refresh_btn.grid()

        lines = self._session.lines
        self._showing_lines = False
        if self._session.loading and not lines:
            self._console.show_notice("Loading logs...")
        elif status.state is ConnectionState.FAILED:
            self._console.show_notice(f"Error: {status.reason}", tag="error")
        elif not lines:
            self._console.show_notice("No logs available")
        else:
            self._console.clear()
            self._console.append_lines(lines)
            self._showing_lines = True
