"""Source loading, sanitization, and syntax highlighting of match previews.

Neutralizes terminal control bytes before anything reaches the terminal.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


@lru_cache(maxsize=32)
def _formatter_for_style(style: str) -> TerminalFormatter:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_STYLE
    return TerminalFormatter(style=style)


def _lexer_for_path(file_path: str) -> Lexer:
    try:
        return get_lexer_for_filename(Path(file_path).name)
    except ClassNotFound:
        return TextLexer()


def colorize_line(text: str, file_path: str, style: str = DEFAULT_STYLE) -> str:
    """Highlight a single source line with the lexer picked from ``file_path``."""
    clean = sanitize_terminal_text(text)
    if not clean:
        return clean
    rendered = highlight(clean, _lexer_for_path(file_path), _formatter_for_style(style))
    return rendered.rstrip("\n")


__all__ = ["DEFAULT_STYLE", "colorize_line", "read_text", "sanitize_terminal_text"]
