"""Line-oriented terminal chooser for multiple matches.

Rows are printed with a 1-based number. Typing a number selects that row;
typing anything else narrows the list on the search column and re-prompts.
An empty answer, ``q``, or end of input dismisses the prompt.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from .fuzzy import filter_labels
from .selector import FILE_COLUMN, MATCH_COLUMNS, ChooserResult
from .syntax import DEFAULT_STYLE, colorize_line, sanitize_terminal_text


class TerminalChooser:
    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output: TextIO | None = None,
        color: bool = False,
        style: str = DEFAULT_STYLE,
    ) -> None:
        self.input_fn = input_fn
        self.output = output if output is not None else sys.stdout
        self.color = color
        self.style = style

    def _format_row(self, number: int, row: tuple[str, ...]) -> str:
        cells = [sanitize_terminal_text(cell) for cell in row]
        if self.color and len(row) == len(MATCH_COLUMNS):
            cells[-1] = colorize_line(row[-1], row[FILE_COLUMN], self.style)
        return f"{number:>3}  " + "  ".join(cells)

    def _render(self, columns: Sequence[str], rows: Sequence[tuple[str, ...]], visible: list[int]) -> None:
        self.output.write("     " + "  ".join(columns) + "\n")
        for number, row_idx in enumerate(visible, start=1):
            self.output.write(self._format_row(number, rows[row_idx]) + "\n")
        self.output.flush()

    def choose_one(
        self,
        columns: Sequence[str],
        rows: Sequence[tuple[str, ...]],
        search_column: int,
    ) -> ChooserResult:
        visible = list(range(len(rows)))
        while True:
            self._render(columns, rows, visible)
            try:
                answer = self.input_fn(f"Go to [1-{len(visible)}, filter, q]: ").strip()
            except EOFError:
                return ChooserResult()
            if not answer or answer.lower() == "q":
                return ChooserResult()

            if answer.isdigit():
                number = int(answer)
                if 1 <= number <= len(visible):
                    return ChooserResult(visible[number - 1])
                self.output.write(f"No row {number}.\n")
                continue

            labels = [rows[idx][search_column] for idx in visible]
            narrowed = [visible[idx] for idx in filter_labels(answer, labels)]
            if not narrowed:
                self.output.write(f"No rows match {answer!r}.\n")
                continue
            if len(narrowed) == 1:
                return ChooserResult(narrowed[0])
            visible = narrowed


__all__ = ["TerminalChooser"]
