"""Cscope invocation and line-oriented output parsing.

Each index file gets one ``cscope -dL -f <index> -0 <tag>`` run. Output lines
have the form ``<kind> <file> <line> <text...>`` where the trailing text may
contain spaces. Failures are contained per index so one broken database never
hides matches from the others.
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_CSCOPE = "cscope"
DEFAULT_TIMEOUT_SECONDS = 10.0

_MATCH_LINE_RE = re.compile(r"^(\S*) (\S+) ([0-9]+) (.*)$")
_ROOTED_PATH_RE = re.compile(r"^(?:[A-Za-z]:)?[/\\]")
_DIRECTORY_RE = re.compile(r"^.+[/\\]")


@dataclass(frozen=True)
class MatchRecord:
    kind: str
    file_path: str
    line_number: int  # 1-based
    line_text: str


@dataclass
class LookupResult:
    """Aggregated matches plus per-index failure bookkeeping."""

    matches: list[MatchRecord] = field(default_factory=list)
    searched: int = 0
    failed: list[str] = field(default_factory=list)

    @property
    def notice(self) -> str | None:
        """One user-facing message when every searched index failed."""
        if self.searched == 0 or len(self.failed) < self.searched:
            return None
        if self.searched == 1:
            return f"cscope lookup failed for {self.failed[0]}"
        return f"cscope lookup failed for all {self.searched} index files"


def index_directory(index_path: str) -> str:
    """Return the directory part of ``index_path`` including its trailing separator."""
    match = _DIRECTORY_RE.match(index_path)
    return match.group(0) if match else ""


def rebase_match_path(file_path: str, index_path: str) -> str:
    """Join a relative output path onto the directory of its index file.

    Absolute paths, backslash-rooted paths, and drive-qualified paths such as
    ``C:/x/foo.c`` are returned unchanged.
    """
    if _ROOTED_PATH_RE.match(file_path):
        return file_path
    return index_directory(index_path) + file_path


def parse_match_line(line: str, index_path: str) -> MatchRecord | None:
    """Parse one output line, returning ``None`` when it does not fit the grammar."""
    match = _MATCH_LINE_RE.match(line.rstrip("\r\n"))
    if match is None:
        return None
    kind, file_path, line_number, line_text = match.groups()
    return MatchRecord(
        kind=kind,
        file_path=rebase_match_path(file_path, index_path),
        line_number=int(line_number),
        line_text=line_text,
    )


def parse_match_lines(lines: Iterable[str], index_path: str) -> list[MatchRecord]:
    """Parse tool output in emission order, skipping malformed lines."""
    matches: list[MatchRecord] = []
    for line in lines:
        if not line.strip():
            continue
        record = parse_match_line(line, index_path)
        if record is None:
            logger.debug("skipping malformed cscope line from %s: %r", index_path, line)
            continue
        matches.append(record)
    return matches


def build_command(executable: str, index_path: str, tag: str) -> list[str]:
    return [executable, "-dL", "-f", index_path, "-0", tag]


class CscopeLookup:
    """Run cscope over a sequence of index files and collect matches."""

    def __init__(self, executable: str = DEFAULT_CSCOPE, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.executable = executable
        self.timeout_seconds = timeout_seconds

    def _run(self, tag: str, index_path: str) -> list[MatchRecord] | None:
        """Return matches for one index, or ``None`` when the invocation failed."""
        cmd = build_command(self.executable, index_path, tag)
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except (OSError, ValueError) as exc:
            # ValueError: embedded NUL in the tag or index path.
            logger.warning("failed to run %s on %s: %s", self.executable, index_path, exc)
            return None

        try:
            stdout_text, stderr_text = proc.communicate(timeout=self.timeout_seconds)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.communicate()
            logger.warning("cscope timed out after %.1fs on %s", self.timeout_seconds, index_path)
            return None

        matches = parse_match_lines((stdout_text or "").splitlines(), index_path)
        if proc.returncode != 0 and not matches:
            err = (stderr_text or "").strip() or f"exit code {proc.returncode}"
            logger.warning("cscope failed on %s: %s", index_path, err)
            return None
        return matches

    def find_tags(self, tag: str, sources: Sequence[str]) -> LookupResult:
        result = LookupResult()
        for index_path in sources:
            result.searched += 1
            matches = self._run(tag, index_path)
            if matches is None:
                result.failed.append(index_path)
                continue
            result.matches.extend(matches)
        logger.debug(
            "tag %r: %d match(es) from %d index file(s), %d failed",
            tag,
            len(result.matches),
            result.searched,
            len(result.failed),
        )
        return result


def find_tags(
    tag: str,
    sources: Sequence[str],
    executable: str = DEFAULT_CSCOPE,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> list[MatchRecord]:
    """Search all ``sources`` for ``tag`` and return matches in source order."""
    return CscopeLookup(executable, timeout_seconds).find_tags(tag, sources).matches


__all__ = [
    "CscopeLookup",
    "DEFAULT_CSCOPE",
    "DEFAULT_TIMEOUT_SECONDS",
    "LookupResult",
    "MatchRecord",
    "build_command",
    "find_tags",
    "index_directory",
    "parse_match_line",
    "parse_match_lines",
    "rebase_match_path",
]
