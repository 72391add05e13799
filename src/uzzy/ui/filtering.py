"""Fuzzy filtering for picker lists."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class PickerItem:
    label: str
    value: str


_SUBSTRING_BONUS = 10_000


def fuzzy_score(query: str, text: str) -> int | None:
    """Score how well ``query`` matches ``text``; ``None`` means no match.

    Matching is case-insensitive. A contiguous substring always outranks a
    scattered subsequence, and earlier/tighter matches score higher.
    """
    needle = query.lower()
    haystack = text.lower()
    if not needle:
        return 0

    position = haystack.find(needle)
    if position >= 0:
        return _SUBSTRING_BONUS - position

    score = 0
    cursor = 0
    previous = -1
    for char in needle:
        found = haystack.find(char, cursor)
        if found < 0:
            return None
        if found == previous + 1:
            score += 5
        elif found > 0 and haystack[found - 1] in "/-_. ":
            score += 3
        else:
            score -= found - cursor
        previous = found
        cursor = found + 1
    return score


def filter_items(items: Sequence[PickerItem], query: str) -> tuple[PickerItem, ...]:
    if not query:
        return tuple(items)
    scored: list[tuple[int, int, PickerItem]] = []
    for index, item in enumerate(items):
        score = fuzzy_score(query, item.label)
        if score is not None:
            scored.append((-score, index, item))
    scored.sort(key=lambda entry: (entry[0], entry[1]))
    return tuple(item for _, _, item in scored)
