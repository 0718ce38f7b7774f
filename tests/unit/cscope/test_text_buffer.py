"""Tests for the headless file-backed editing context."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from cscopejump.buffer import TextBuffer
from cscopejump.navigation import JumpPosition


class TextBufferTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.source = self.root / "main.c"
        self.source.write_text("int main(void)\n{\n    return helper_fn(1);\n}\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_empty_buffer_has_no_file(self) -> None:
        buffer = TextBuffer()
        self.assertIsNone(buffer.file_path)
        self.assertEqual(buffer.current_position(), JumpPosition(None, 0))
        self.assertEqual(buffer.word_at(0), "")

    def test_goto_line_moves_to_line_start(self) -> None:
        buffer = TextBuffer(str(self.source))
        buffer.goto_line(2)
        self.assertEqual(buffer.caret_offset, len("int main(void)\n{\n"))
        self.assertEqual(buffer.line_number, 3)

    def test_goto_line_clamps_past_end(self) -> None:
        buffer = TextBuffer(str(self.source))
        buffer.goto_line(99)
        self.assertEqual(buffer.caret_offset, len(buffer.text))
        buffer.goto_line(-5)
        self.assertEqual(buffer.caret_offset, 0)

    def test_goto_offset_clamps(self) -> None:
        buffer = TextBuffer(str(self.source))
        buffer.goto_offset(10_000)
        self.assertEqual(buffer.caret_offset, len(buffer.text))
        buffer.goto_offset(-3)
        self.assertEqual(buffer.caret_offset, 0)

    def test_word_at_extracts_identifier_around_caret(self) -> None:
        buffer = TextBuffer(str(self.source))
        offset = buffer.text.index("helper_fn") + 3
        self.assertEqual(buffer.word_at(offset), "helper_fn")
        self.assertEqual(buffer.word_at(buffer.text.index("helper_fn")), "helper_fn")
        self.assertEqual(buffer.word_at(buffer.text.index("(1)")), "helper_fn")
        self.assertEqual(buffer.word_at(buffer.text.index("{")), "")

    def test_open_same_file_keeps_caret(self) -> None:
        buffer = TextBuffer(str(self.source))
        buffer.goto_offset(5)
        buffer.open_file(str(self.source))
        self.assertEqual(buffer.caret_offset, 5)

    def test_open_other_file_resets_caret(self) -> None:
        other = self.root / "other.c"
        other.write_text("x\n", encoding="utf-8")
        buffer = TextBuffer(str(self.source))
        buffer.goto_offset(5)
        buffer.open_file(str(other))
        self.assertEqual(buffer.caret_offset, 0)
        self.assertEqual(buffer.current_position(), JumpPosition(str(other), 0))

    def test_missing_file_opens_empty(self) -> None:
        buffer = TextBuffer(str(self.root / "gone.c"))
        self.assertEqual(buffer.text, "")
        buffer.goto_line(4)
        self.assertEqual(buffer.caret_offset, 0)


if __name__ == "__main__":
    unittest.main()
