"""Headless editing context backed by a file on disk.

Implements both the editing-context and navigation-sink hooks so the tag
navigator can run without a host editor (CLI, shell, tests). Offsets are
character offsets into the decoded text.
"""

from __future__ import annotations

import bisect
import re
from pathlib import Path

from .navigation import JumpPosition
from .syntax import read_text

_WORD_CHAR_RE = re.compile(r"\w")


class TextBuffer:
    """One open file plus a caret."""

    def __init__(self, path: str | None = None) -> None:
        self.file_path: str | None = None
        self.text = ""
        self.caret_offset = 0
        self._line_starts: list[int] = [0]
        if path is not None:
            self.open_file(path)

    def _set_text(self, text: str) -> None:
        self.text = text
        self._line_starts = [0]
        for idx, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(idx + 1)

    def open_file(self, path: str) -> None:
        """Load ``path`` unless it is already the current file.

        Missing files open as empty buffers so a stale index cannot crash a jump.
        """
        if path == self.file_path:
            return
        target = Path(path)
        try:
            text = read_text(target)
        except OSError:
            text = ""
        self.file_path = path
        self._set_text(text)
        self.caret_offset = 0

    def goto_offset(self, offset: int) -> None:
        self.caret_offset = max(0, min(offset, len(self.text)))

    def goto_line(self, line: int) -> None:
        """Move the caret to the start of 0-based ``line``, clamped to the last line."""
        index = max(0, min(line, len(self._line_starts) - 1))
        self.caret_offset = self._line_starts[index]

    @property
    def line_number(self) -> int:
        """1-based line containing the caret."""
        return bisect.bisect_right(self._line_starts, self.caret_offset)

    def word_at(self, offset: int) -> str:
        """Return the identifier touching ``offset``, or ``""`` between words."""
        text = self.text
        offset = max(0, min(offset, len(text)))
        start = offset
        while start > 0 and _WORD_CHAR_RE.match(text[start - 1]):
            start -= 1
        end = offset
        while end < len(text) and _WORD_CHAR_RE.match(text[end]):
            end += 1
        return text[start:end]

    def current_position(self) -> JumpPosition:
        return JumpPosition(self.file_path, self.caret_offset)


__all__ = ["TextBuffer"]
