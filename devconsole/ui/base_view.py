"""
Abstract base class for all views.  Every view is a CTkFrame that can be
shown/hidden, refreshed when it becomes visible, and torn down on exit.
"""

import customtkinter as ctk


class BaseView(ctk.CTkFrame):
    """
    Subclass this for every page in the app.

    Subclasses must call ``super().__init__(parent)`` and build their
    widgets inside ``__init__``.

    Override ``on_appear()`` to refresh data every time the view is shown and
    ``on_destroy()`` to release connections before the window closes.
    """

    def __init__(self, parent: ctk.CTkFrame):
        super().__init__(parent, fg_color="transparent")

    def on_appear(self) -> None:
        """Called each time this view becomes the visible content pane."""
        pass

    def on_destroy(self) -> None:
        """Called once before the view is destroyed."""
        pass
