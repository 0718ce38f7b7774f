"""Tag navigation for one editor session.

``TagNavigator.goto_tag`` is the single entry point hosts bind to: it either
looks a tag up and jumps to the chosen definition, or replays the jump
history. Every expected failure (no index, no match, cancelled prompt,
history boundary) is a silent no-op reported through the return value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from .lookup import CscopeLookup, MatchRecord
from .navigation import JumpHistory, JumpPosition, NavigationSink
from .resolver import IndexResolver
from .selector import Chooser, select_match

logger = logging.getLogger(__name__)


class EditingContext(Protocol):
    file_path: str | None
    caret_offset: int

    def word_at(self, offset: int) -> str: ...

    def current_position(self) -> JumpPosition: ...


class TagNavigator:
    """Wire index resolution, lookup, selection, and jump history together."""

    def __init__(
        self,
        context: EditingContext,
        sink: NavigationSink,
        chooser: Chooser,
        resolver: IndexResolver | None = None,
        lookup: CscopeLookup | None = None,
        history: JumpHistory | None = None,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        self.context = context
        self.sink = sink
        self.chooser = chooser
        self.resolver = resolver if resolver is not None else IndexResolver()
        self.lookup = lookup if lookup is not None else CscopeLookup()
        self.history = history if history is not None else JumpHistory()
        self.notify = notify

    def default_tag(self) -> str:
        return self.context.word_at(self.context.caret_offset)

    def find_matches(self, tag: str) -> list[MatchRecord]:
        sources = self.resolver.resolve(self.context.file_path)
        if not sources:
            logger.debug("no index files for %s", self.context.file_path)
            return []
        result = self.lookup.find_tags(tag, sources)
        if result.notice and self.notify is not None:
            self.notify(result.notice)
        return result.matches

    def jump_to_match(self, match: MatchRecord) -> JumpPosition:
        """Record the departure, move to ``match``, and record the arrival."""
        departure = self.context.current_position() if self.context.file_path else None
        self.history.begin_jump(departure)
        self.sink.open_file(match.file_path)
        self.sink.goto_line(match.line_number - 1)
        arrival = self.context.current_position()
        self.history.finish_jump(arrival)
        return arrival

    def goto_tag(self, tag: str | None = None, prev: bool | None = None) -> bool:
        """Jump to ``tag``, the word under the caret, or through history.

        With no tag and ``prev`` left as ``None`` the word under the caret is
        looked up. With no tag and ``prev`` set, the history moves back
        (``True``) or forward (``False``). Returns whether the caret moved.
        """
        if not tag and prev is not None:
            if prev:
                return self.history.back(self.sink) is not None
            return self.history.forward(self.sink) is not None

        if not tag:
            tag = self.default_tag()
            if not tag:
                return False

        match = select_match(self.find_matches(tag), self.chooser)
        if match is None:
            return False
        self.jump_to_match(match)
        return True

    def jump_back(self) -> bool:
        return self.goto_tag(None, prev=True)

    def jump_forward(self) -> bool:
        return self.goto_tag(None, prev=False)


__all__ = ["EditingContext", "TagNavigator"]
