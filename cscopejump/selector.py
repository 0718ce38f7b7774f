"""Pick exactly one match, prompting only when there is a real choice."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .lookup import MatchRecord

MATCH_COLUMNS: tuple[str, ...] = ("Name", "File", "Line:", "Extra Information")
FILE_COLUMN = 1


@dataclass(frozen=True)
class ChooserResult:
    """Outcome of a chooser prompt; ``selected_index`` is ``None`` when dismissed."""

    selected_index: int | None = None

    @property
    def cancelled(self) -> bool:
        return self.selected_index is None


class Chooser(Protocol):
    def choose_one(
        self,
        columns: Sequence[str],
        rows: Sequence[tuple[str, ...]],
        search_column: int,
    ) -> ChooserResult: ...


def match_rows(matches: Sequence[MatchRecord]) -> list[tuple[str, ...]]:
    return [(m.kind, m.file_path, str(m.line_number), m.line_text) for m in matches]


def select_match(matches: Sequence[MatchRecord], chooser: Chooser) -> MatchRecord | None:
    """Return the chosen match, or ``None`` when there is nothing to pick or the user cancels."""
    if not matches:
        return None
    if len(matches) == 1:
        return matches[0]

    result = chooser.choose_one(MATCH_COLUMNS, match_rows(matches), FILE_COLUMN)
    index = result.selected_index
    if index is None or not 0 <= index < len(matches):
        return None
    return matches[index]


__all__ = ["Chooser", "ChooserResult", "FILE_COLUMN", "MATCH_COLUMNS", "match_rows", "select_match"]
