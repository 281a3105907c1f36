"""Single-pass summary statistics over a UC stream."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ucs.config import UCSOptions
from ucs.decoder import decode_map_record
from ucs.dedup import DuplicateFilter, PairObservation
from ucs.models import ABSENT


_RED = "\033[31m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class SummaryStatistic:
    label: str
    value: int
    warn: bool = False


@dataclass(frozen=True)
class SummaryReport:
    """Aggregate cardinalities of one UC input."""

    lines: int
    unique_queries: int
    unique_targets: int
    duplicates: int
    multi_mapped: int

    def statistics(self) -> list[SummaryStatistic]:
        """Statistics in their fixed reporting order."""

        return [
            SummaryStatistic("Total lines in the file:", self.lines),
            SummaryStatistic("Unique query sequences:", self.unique_queries),
            SummaryStatistic("Unique target sequences:", self.unique_targets),
            SummaryStatistic("Duplicate query-target pairs:", self.duplicates, warn=True),
            SummaryStatistic("Queries mapped to multiple targets:", self.multi_mapped, warn=True),
        ]

    def to_dict(self) -> dict[str, int]:
        return {
            "lines": self.lines,
            "unique_queries": self.unique_queries,
            "unique_targets": self.unique_targets,
            "duplicates": self.duplicates,
            "multi_mapped": self.multi_mapped,
        }


class SummaryAccumulator:
    """Count lines, distinct queries/targets, duplicates and multi-mapped queries.

    Every line counts toward the line total, including malformed and ``C``
    lines. Duplicate pairs are always detected here, whatever the dedup
    setting of the emission path, and contribute nothing beyond the duplicate
    count. A literal ``*`` target never enters the target set.
    """

    def __init__(self, options: UCSOptions) -> None:
        self.split_identifiers = options.split_identifiers
        self.lines = 0
        self._pairs = DuplicateFilter()
        self._queries: set[str] = set()
        self._targets: set[str] = set()
        self._query_targets: dict[str, set[str]] = {}

    def consume(self, line: str) -> None:
        self.lines += 1

        record = decode_map_record(line, self.split_identifiers)
        if record is None:
            return

        if self._pairs.observe(record.query, record.target) is PairObservation.DUPLICATE:
            return

        self._queries.add(record.query)
        targets = self._query_targets.setdefault(record.query, set())
        if record.target != ABSENT:
            self._targets.add(record.target)
            targets.add(record.target)

    def consume_all(self, lines: Iterable[str]) -> "SummaryAccumulator":
        for line in lines:
            self.consume(line)
        return self

    def report(self) -> SummaryReport:
        multi_mapped = sum(1 for targets in self._query_targets.values() if len(targets) > 1)
        return SummaryReport(
            lines=self.lines,
            unique_queries=len(self._queries),
            unique_targets=len(self._targets),
            duplicates=self._pairs.duplicates,
            multi_mapped=multi_mapped,
        )


def format_summary(report: SummaryReport, *, highlight: bool = False) -> str:
    """Render labels and right-aligned values as an aligned text block."""

    rows = report.statistics()
    label_width = max(len(row.label) for row in rows)
    value_width = max(len(str(row.value)) for row in rows)

    lines: list[str] = []
    for row in rows:
        text = f"{row.label:<{label_width}} {row.value:>{value_width}d}"
        if highlight and row.warn and row.value > 0:
            text = f"{_RED}{text}{_RESET}"
        lines.append(text)
    return "\n".join(lines) + "\n"
