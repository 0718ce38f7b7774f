"""Cscope-backed go-to-definition with browser-style jump history."""

from __future__ import annotations

from .lookup import CscopeLookup, LookupResult, MatchRecord, find_tags
from .navigation import JumpHistory, JumpPosition
from .resolver import IndexConfig, IndexResolver
from .selector import ChooserResult, select_match
from .session import TagNavigator

__all__ = [
    "ChooserResult",
    "CscopeLookup",
    "IndexConfig",
    "IndexResolver",
    "JumpHistory",
    "JumpPosition",
    "LookupResult",
    "MatchRecord",
    "TagNavigator",
    "find_tags",
    "select_match",
]
