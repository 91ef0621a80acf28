"""
Deployment log transcript: the LogLine record and the ordered buffer holding
one session's lines.
"""

import threading
from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class LogLine:
    """One renderable unit – a section header, a text line, or both."""

    header: Optional[str] = None
    line: Optional[str] = None
    timestamp: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "LogLine":
        """Build from the wire shape; unknown keys are ignored."""
        return cls(
            header=data.get("header") or None,
            line=data.get("line"),
            timestamp=data.get("timestamp") or None,
        )

    def to_dict(self) -> dict:
        out = {}
        if self.header is not None:
            out["header"] = self.header
        if self.line is not None:
            out["line"] = self.line
        if self.timestamp is not None:
            out["timestamp"] = self.timestamp
        return out


def parse_lines(raw) -> list[LogLine]:
    """Convert a wire ``lines`` array into LogLines, skipping non-object entries."""
    if not isinstance(raw, list):
        return []
    return [LogLine.from_dict(item) for item in raw if isinstance(item, dict)]


class LogBuffer:
    """Append-only transcript.  Insertion order is display order; no de-duplication."""

    def __init__(self):
        self._lines: list[LogLine] = []
        self._lock = threading.Lock()

    def append(self, batch: Iterable[LogLine]) -> None:
        """Add *batch* at the tail in the given order."""
        with self._lock:
            self._lines.extend(batch)

    def replace_all(self, batch: Iterable[LogLine]) -> None:
        """Discard current contents and install *batch*."""
        new_lines = list(batch)
        with self._lock:
            self._lines = new_lines

    def clear(self) -> None:
        self.replace_all(())

    def snapshot(self) -> tuple[LogLine, ...]:
        """Immutable copy of the current contents."""
        with self._lock:
            return tuple(self._lines)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)
