"""Group records by query and keep queries that reach several targets."""

from __future__ import annotations

from collections.abc import Iterator

from ucs.models import MapRecord, UCRecord


class MultiTargetAggregator:
    """Collect the distinct targets of every query until the input ends.

    The whole query-to-targets map stays in memory for the run, so memory grows
    with unique queries times targets per query. The first record seen for a
    (query, target) pair is the one emitted.
    """

    def __init__(self) -> None:
        self._targets: dict[str, dict[str, UCRecord | MapRecord]] = {}

    def add(self, record: UCRecord | MapRecord) -> None:
        targets = self._targets.setdefault(record.query, {})
        targets.setdefault(record.target, record)

    def targets_for(self, query: str) -> set[str]:
        return set(self._targets.get(query, {}))

    def multi_mapped_count(self) -> int:
        return sum(1 for targets in self._targets.values() if len(targets) > 1)

    def iter_multi_mapped(self) -> Iterator[UCRecord | MapRecord]:
        """Yield records of multi-target queries ordered by query, then target."""

        for query in sorted(self._targets):
            targets = self._targets[query]
            if len(targets) < 2:
                continue
            for target in sorted(targets):
                yield targets[target]

    def __len__(self) -> int:
        return len(self._targets)
