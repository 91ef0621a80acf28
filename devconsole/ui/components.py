"""
Reusable UI widgets used across views.
"""

import customtkinter as ctk

from devconsole.utils.formatting import render_log_line


class StatusBadge(ctk.CTkLabel):
    """A small coloured badge showing a status string."""

    COLORS = {
        "ok": ("#2ecc71", "#27ae60"),
        "warning": ("#f39c12", "#e67e22"),
        "error": ("#e74c3c", "#c0392b"),
        "info": ("#3498db", "#2980b9"),
        "neutral": ("#636e72", "#2d3436"),
    }

    def __init__(self, parent, text: str = "", variant: str = "neutral", **kwargs):
        colors = self.COLORS.get(variant, self.COLORS["neutral"])
        super().__init__(
            parent,
            text=f"  {text}  ",
            fg_color=colors[1],
            text_color="#ffffff",
            corner_radius=6,
            font=ctk.CTkFont(size=12, weight="bold"),
            **kwargs,
        )

    def set(self, text: str, variant: str = "neutral"):
        colors = self.COLORS.get(variant, self.COLORS["neutral"])
        self.configure(text=f"  {text}  ", fg_color=colors[1])


class LogConsole(ctk.CTkTextbox):
    """A read-only terminal-style text area for deployment log lines."""

    def __init__(self, parent, **kwargs):
        super().__init__(
            parent,
            state="disabled",
            font=ctk.CTkFont(family="Consolas", size=13),
            wrap="word",
            fg_color=("gray15", "gray10"),
            text_color="#f1f2f6",
            **kwargs,
        )
        self.follow_tail = True
        self.tag_config("header", foreground="#818cf8")
        self.tag_config("notice", foreground="#95a5a6")
        self.tag_config("error", foreground="#e74c3c")

    def append_lines(self, entries) -> None:
        self.configure(state="normal")
        for entry in entries:
            for i, row in enumerate(render_log_line(entry)):
                tag = "header" if entry.header and i == 0 else None
                self.insert("end", row + "\n", tag)
        if self.follow_tail:
            self.see("end")
        self.configure(state="disabled")

    def show_notice(self, text: str, tag: str = "notice") -> None:
        """Replace the contents with a single placeholder message."""
        self.clear()
        self.configure(state="normal")
        self.insert("end", text, tag)
        self.configure(state="disabled")

    def clear(self) -> None:
        self.configure(state="normal")
        self.delete("1.0", "end")
        self.configure(state="disabled")


class SectionTitle(ctk.CTkLabel):
    """A styled section heading."""

    def __init__(self, parent, text: str, **kwargs):
        super().__init__(
            parent,
            text=text,
            font=ctk.CTkFont(size=20, weight="bold"),
            anchor="w",
            **kwargs,
        )
