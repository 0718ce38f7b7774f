"""Index-file discovery for the current editing context.

Every applicable tier contributes, in order: the file's own directory, the
project root, per-project configured indexes, then global configured indexes.
Results are concatenated as-is; an index configured twice is searched twice.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

INDEX_FILENAME = "cscope.out"
PROJECT_ROOT_TIMEOUT_SECONDS = 0.5
VCS_MARKERS = (".git", ".hg", ".svn", ".bzr")


@dataclass
class IndexConfig:
    """Explicitly configured index files.

    ``project_indexes`` maps an exact project-root string to one index path
    or a list of them. ``global_indexes`` apply to every lookup.
    """

    global_indexes: list[str] = field(default_factory=list)
    project_indexes: dict[str, str | list[str]] = field(default_factory=dict)

    def indexes_for_project(self, root: str) -> list[str]:
        value = self.project_indexes.get(root)
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return list(value)
        return []


def _git_toplevel(directory: str, timeout_seconds: float) -> str | None:
    try:
        proc = subprocess.run(
            ["git", "-C", directory, "rev-parse", "--show-toplevel"],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git root probe failed for %s: %s", directory, exc)
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout.strip() or None


def _marker_root(directory: str) -> str | None:
    while True:
        for marker in VCS_MARKERS:
            if os.path.exists(os.path.join(directory, marker)):
                return directory
        parent = os.path.dirname(directory)
        if parent == directory:
            return None
        directory = parent


def find_project_root(path: str, timeout_seconds: float = PROJECT_ROOT_TIMEOUT_SECONDS) -> str | None:
    """Return the version-control root directory containing ``path``.

    Asks ``git rev-parse --show-toplevel`` first, then walks up from the
    file's directory to the nearest one holding a ``.git``, ``.hg``,
    ``.svn`` or ``.bzr`` entry. Returns ``None`` when neither finds a root.
    """
    directory = os.path.dirname(os.path.abspath(path))
    return _git_toplevel(directory, timeout_seconds) or _marker_root(directory)


def _directory_prefix(path: str | None) -> str:
    if path:
        head = os.path.dirname(path)
        if head:
            return head
    return os.getcwd()


class IndexResolver:
    """Resolve the ordered list of index files to search for one file."""

    def __init__(
        self,
        config: IndexConfig | None = None,
        project_root_of: Callable[[str], str | None] | None = None,
        exists: Callable[[str], bool] = os.path.exists,
    ) -> None:
        self.config = config if config is not None else IndexConfig()
        self.project_root_of = project_root_of if project_root_of is not None else find_project_root
        self.exists = exists

    def resolve(self, current_file_path: str | None) -> list[str]:
        sources: list[str] = []

        local_index = os.path.join(_directory_prefix(current_file_path), INDEX_FILENAME)
        if self.exists(local_index):
            sources.append(local_index)

        if current_file_path:
            root = self.project_root_of(current_file_path)
            if root:
                root_index = os.path.join(root, INDEX_FILENAME)
                if self.exists(root_index):
                    sources.append(root_index)
                sources.extend(self.config.indexes_for_project(root))

        sources.extend(self.config.global_indexes)
        logger.debug("resolved %d index file(s) for %s", len(sources), current_file_path)
        return sources


__all__ = ["INDEX_FILENAME", "IndexConfig", "IndexResolver", "find_project_root"]
