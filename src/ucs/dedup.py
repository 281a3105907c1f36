"""Suppress repeated (query, target) pairs within one pass."""

from __future__ import annotations

from enum import Enum


class PairObservation(str, Enum):
    FIRST_SEEN = "first_seen"
    DUPLICATE = "duplicate"


class DuplicateFilter:
    """Remember every emitted pair and count the repeats it suppresses.

    Pairs compare by exact text; identifiers are expected to be normalized
    before they get here.
    """

    def __init__(self) -> None:
        self._seen: set[tuple[str, str]] = set()
        self.duplicates = 0

    def observe(self, query: str, target: str) -> PairObservation:
        key = (query, target)
        if key in self._seen:
            self.duplicates += 1
            return PairObservation.DUPLICATE
        self._seen.add(key)
        return PairObservation.FIRST_SEEN

    @property
    def unique_pairs(self) -> int:
        return len(self._seen)

    def __contains__(self, pair: object) -> bool:
        return pair in self._seen

    def __len__(self) -> int:
        return len(self._seen)
