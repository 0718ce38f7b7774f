"""Subsequence matching of chooser filters against file paths."""

from __future__ import annotations

_BOUNDARY_CHARS = frozenset("/\\_-.")


def _rightmost_positions(query: str, candidate: str) -> list[int] | None:
    # Matching from the end keeps hits in the basename where possible.
    positions: list[int] = []
    end = len(candidate)
    for ch in reversed(query):
        idx = candidate.rfind(ch, 0, end)
        if idx < 0:
            return None
        positions.append(idx)
        end = idx
    positions.reverse()
    return positions


def path_score(query: str, path: str) -> int | None:
    """Score ``query`` as a case-insensitive subsequence of ``path``.

    Basename hits count double, adjacent hits and hits right after a
    separator earn bonuses, and every directory level costs a point.
    Returns ``None`` when ``query`` is not a subsequence.
    """
    if not query:
        return 0
    folded = path.casefold()
    positions = _rightmost_positions(query.casefold(), folded)
    if positions is None:
        return None

    basename_start = max(folded.rfind("/"), folded.rfind("\\")) + 1
    score = 0
    prev = -2
    for idx in positions:
        score += 2 if idx >= basename_start else 1
        if idx == prev + 1:
            score += 3
        if idx == 0 or folded[idx - 1] in _BOUNDARY_CHARS:
            score += 2
        prev = idx
    return score - folded.count("/") - folded.count("\\")


def filter_labels(query: str, labels: list[str]) -> list[int]:
    """Return indexes of ``labels`` matching ``query``, best first.

    Substring hits win outright and keep their original relative order so
    match lists stay in cscope emission order; subsequence scoring is only
    used when no label contains the query.
    """
    if not query:
        return list(range(len(labels)))
    query_folded = query.casefold()
    substring_hits = [idx for idx, label in enumerate(labels) if query_folded in label.casefold()]
    if substring_hits:
        return substring_hits

    scored: list[tuple[int, int]] = []
    for idx, label in enumerate(labels):
        score = path_score(query, label)
        if score is None:
            continue
        scored.append((score, idx))
    scored.sort(key=lambda item: (-item[0], item[1]))
    return [idx for _, idx in scored]
