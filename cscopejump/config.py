"""Persistent JSON config helpers.

Stores the cscope executable, lookup timeout, and configured index files.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .lookup import DEFAULT_CSCOPE, DEFAULT_TIMEOUT_SECONDS
from .resolver import IndexConfig

logger = logging.getLogger(__name__)

APP_NAME = "cscopejump"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]


def load_index_config() -> IndexConfig:
    """Build an ``IndexConfig`` from the ``indexes`` and ``projects`` keys.

    Project entries accept a single path string or a list of path strings;
    anything else is dropped.
    """
    data = load_config()
    projects: dict[str, str | list[str]] = {}
    raw_projects = data.get("projects")
    if isinstance(raw_projects, dict):
        for root, value in raw_projects.items():
            if not isinstance(root, str) or not root:
                continue
            if isinstance(value, str) and value:
                projects[root] = value
            elif isinstance(value, list):
                paths = _string_list(value)
                if paths:
                    projects[root] = paths
    return IndexConfig(global_indexes=_string_list(data.get("indexes")), project_indexes=projects)


def load_cscope_executable() -> str:
    value = load_config().get("cscope")
    if not isinstance(value, str):
        return DEFAULT_CSCOPE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_CSCOPE


def load_timeout_seconds() -> float:
    """Return the per-index lookup timeout; booleans and non-positive values are invalid."""
    value = load_config().get("timeout_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_TIMEOUT_SECONDS
    return float(value)


def add_global_index(path: str) -> None:
    config = load_config()
    indexes = _string_list(config.get("indexes"))
    indexes.append(path)
    config["indexes"] = indexes
    save_config(config)


def add_project_index(root: str, path: str) -> None:
    """Register ``path`` for project ``root``, keeping earlier registrations."""
    config = load_config()
    projects = config.get("projects")
    if not isinstance(projects, dict):
        projects = {}
    existing = projects.get(root)
    if isinstance(existing, str) and existing:
        projects[root] = [existing, path]
    elif isinstance(existing, list):
        projects[root] = [*_string_list(existing), path]
    else:
        projects[root] = path
    config["projects"] = projects
    save_config(config)
