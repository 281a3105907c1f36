"""Single-pass UC conversion orchestrator."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ucs.aggregate import MultiTargetAggregator
from ucs.config import UCSOptions
from ucs.decoder import UCRecordDecoder
from ucs.dedup import DuplicateFilter, PairObservation
from ucs.errors import UCSError
from ucs.summary import SummaryAccumulator, SummaryReport
from ucs.writers.base import RecordWriter


logger = logging.getLogger("ucs.pipeline")


@dataclass
class UCSRunReport:
    """Execution summary for a conversion run."""

    lines_read: int = 0
    records_decoded: int = 0
    skipped_lines: int = 0
    duplicates: int = 0
    rows_written: int = 0
    multi_mapped_queries: int = 0


class UCSPipeline:
    """Decode, deduplicate, optionally aggregate, and hand records to a writer.

    Without multi-mapped mode every surviving record is written as soon as it
    is decoded. In multi-mapped mode records are buffered per query and only
    queries with at least two distinct targets are written at end of input.
    """

    def __init__(self, *, options: UCSOptions, writer: RecordWriter) -> None:
        self.options = options
        self.writer = writer
        self.decoder = UCRecordDecoder(options)
        self.duplicates = DuplicateFilter() if options.remove_duplicates else None
        self.aggregator = MultiTargetAggregator() if options.multi_mapped else None

    def run(self, lines: Iterable[str]) -> UCSRunReport:
        report = UCSRunReport()

        for line_number, line in enumerate(lines, start=1):
            report.lines_read = line_number

            record = self.decoder.decode(line)
            if record is None:
                report.skipped_lines += 1
                logger.debug("Skipping line %d", line_number)
                continue
            report.records_decoded += 1

            if self.duplicates is not None:
                if self.duplicates.observe(record.query, record.target) is PairObservation.DUPLICATE:
                    continue

            if self.aggregator is not None:
                self.aggregator.add(record)
                continue

            try:
                self.writer.write(record)
            except (OSError, ValueError) as exc:
                raise UCSError("IO", f"failed to write record at line {line_number}", exc) from exc
            report.rows_written += 1

        if self.aggregator is not None:
            report.multi_mapped_queries = self.aggregator.multi_mapped_count()
            for record in self.aggregator.iter_multi_mapped():
                try:
                    self.writer.write(record)
                except (OSError, ValueError) as exc:
                    raise UCSError(
                        "IO", f"failed to write multi-mapped record for query {record.query}", exc
                    ) from exc
                report.rows_written += 1

        if self.duplicates is not None:
            report.duplicates = self.duplicates.duplicates

        return report


def summarize(lines: Iterable[str], options: UCSOptions) -> SummaryReport:
    """Run the summary accumulator over ``lines``."""

    return SummaryAccumulator(options).consume_all(lines).report()
