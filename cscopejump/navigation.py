"""Navigation primitives: jump positions, history, and the sink protocol.

This module intentionally has no UI concerns.
History uses browser-style semantics: a single list with a 1-based cursor,
where recording a new jump discards everything after the cursor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class JumpPosition:
    """Caret location inside one file (``file_path`` is ``None`` for unsaved buffers)."""

    file_path: str | None
    offset: int = 0


class NavigationSink(Protocol):
    """Host hooks that display a file and move the caret."""

    def open_file(self, path: str) -> None: ...

    def goto_offset(self, offset: int) -> None: ...

    def goto_line(self, line: int) -> None: ...


class JumpHistory:
    """Linear jump history with a movable cursor.

    ``pos`` is 1-based: ``0`` means no entry is current and ``len(entries)``
    means the newest entry is current. ``0 <= pos <= len(entries)`` holds
    after every operation.
    """

    def __init__(self) -> None:
        self.entries: list[JumpPosition] = []
        self.pos = 0

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def current(self) -> JumpPosition | None:
        if self.pos <= 0:
            return None
        return self.entries[self.pos - 1]

    @property
    def can_go_back(self) -> bool:
        return self.pos > 1

    @property
    def can_go_forward(self) -> bool:
        return self.pos < len(self.entries)

    def begin_jump(self, departure: JumpPosition | None) -> None:
        """Drop redo entries and record where the jump starts from.

        The departure is skipped when it equals the newest entry, so jumping
        twice from the same place leaves a single slot behind.
        """
        if self.pos < len(self.entries):
            del self.entries[self.pos :]
        if departure is None:
            return
        if not self.entries or self.entries[-1] != departure:
            self.entries.append(departure)
            self.pos = len(self.entries)

    def finish_jump(self, arrival: JumpPosition) -> None:
        """Record the arrival position and make it current."""
        self.entries.append(arrival)
        self.pos = len(self.entries)

    def record_and_jump(
        self,
        target: JumpPosition,
        departure: JumpPosition | None,
        sink: NavigationSink,
    ) -> None:
        self.begin_jump(departure)
        _move(sink, target)
        self.finish_jump(target)

    def back(self, sink: NavigationSink) -> JumpPosition | None:
        """Step one entry back and move there; ``None`` at the oldest entry."""
        if self.pos <= 1:
            return None
        self.pos -= 1
        target = self.entries[self.pos - 1]
        _move(sink, target)
        return target

    def forward(self, sink: NavigationSink) -> JumpPosition | None:
        """Step one entry forward and move there; ``None`` at the newest entry."""
        if self.pos >= len(self.entries):
            return None
        self.pos += 1
        target = self.entries[self.pos - 1]
        _move(sink, target)
        return target


def _move(sink: NavigationSink, target: JumpPosition) -> None:
    if target.file_path is not None:
        sink.open_file(target.file_path)
    sink.goto_offset(target.offset)


__all__ = ["JumpHistory", "JumpPosition", "NavigationSink"]
