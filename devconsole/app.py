"""
Main application window – hosts the deployment logs view.
"""

import customtkinter as ctk

from devconsole.config import APP_NAME, CONSOLE_VERSION, WINDOW_WIDTH, WINDOW_HEIGHT
from devconsole.ui.base_view import BaseView


class App(ctk.CTk):
    """Root application window."""

    def __init__(self):
        super().__init__()

        self.title(f"{APP_NAME} v{CONSOLE_VERSION}")
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(800, 500)
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._view: BaseView | None = None
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def show(self, view: BaseView) -> None:
        """Make *view* the content pane, tearing down the previous one."""
        if self._view is not None:
            self._view.on_destroy()
            self._view.destroy()
        self._view = view
        view.grid(row=0, column=0, sticky="nswe")
        view.on_appear()

    def _on_close(self):
        if self._view is not None:
            self._view.on_destroy()
        self.destroy()
