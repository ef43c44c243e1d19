"""Fuzzy name search ranked by Jaro-Winkler similarity."""

from __future__ import annotations

import functools
import heapq
from collections.abc import Iterable
from dataclasses import dataclass

_SCORE_THRESHOLD = 800


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class SearchResult:
    """A scored candidate; a higher score orders first."""

    score: int
    value: str

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SearchResult):
            return NotImplemented
        return self.score > other.score


def _jaro(a: str, b: str) -> float:
    a_len, b_len = len(a), len(b)
    if not a_len and not b_len:
        return 1.0
    if not a_len or not b_len:
        return 0.0

    search_range = max(0, max(a_len, b_len) // 2 - 1)
    a_flags = [False] * a_len
    b_flags = [False] * b_len
    matches = 0
    for i, a_char in enumerate(a):
        low = max(0, i - search_range)
        high = min(b_len, i + search_range + 1)
        for j in range(low, high):
            if not b_flags[j] and b[j] == a_char:
                a_flags[i] = b_flags[j] = True
                matches += 1
                break

    if not matches:
        return 0.0

    matched_a = (c for c, flag in zip(a, a_flags) if flag)
    matched_b = (c for c, flag in zip(b, b_flags) if flag)
    transpositions = sum(x != y for x, y in zip(matched_a, matched_b)) // 2
    return (matches / a_len + matches / b_len + (matches - transpositions) / matches) / 3.0


def jaro_winkler(a: str, b: str) -> float:
    """Jaro-Winkler similarity between 0 and 1, boosting a shared prefix of up to 4 characters."""
    similarity = _jaro(a, b)
    if similarity <= 0.7:
        return similarity
    prefix = 0
    for x, y in zip(a[:4], b):
        if x != y:
            break
        prefix += 1
    return min(1.0, similarity + 0.1 * prefix * (1.0 - similarity))


def _score(candidate: str, query: str) -> int:
    if candidate == query:
        modifier = 4_000
    elif candidate.startswith(query):
        modifier = 3_000
    elif candidate.endswith(query):
        modifier = 2_000
    elif query in candidate:
        modifier = 1_000
    else:
        modifier = 0
    return int(jaro_winkler(candidate, query) * 1000.0) + modifier


def search(names: Iterable[str], query: str, num_results: int) -> list[str]:
    """Return up to ``num_results`` of ``names`` that best match ``query``, best first.

    Matching ignores case; only candidates scoring above 800 are returned.
    Among equal scores, names seen earlier are preferred.
    """
    if num_results <= 0:
        return []
    query = query.lower()
    kept: list[tuple[int, int, str]] = []
    for index, name in enumerate(names):
        entry = (_score(name.lower(), query), -index, name)
        if len(kept) < num_results:
            heapq.heappush(kept, entry)
        else:
            heapq.heappushpop(kept, entry)
    ranked = sorted(kept, reverse=True)
    return [name for score, _, name in ranked if score > _SCORE_THRESHOLD]