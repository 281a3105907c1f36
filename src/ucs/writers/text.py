"""Tab-separated text output."""

from __future__ import annotations

from typing import IO

from ucs.config import UCSOptions
from ucs.models import MapRecord, UCRecord
from ucs.writers.base import RecordWriter


class TsvRecordWriter(RecordWriter):
    """Write records as a headed TSV table in ``chunksize`` batches.

    Fields are written verbatim. Decoded fields never contain a tab or a
    newline, so no quoting is applied.
    """

    name = "tsv"

    def __init__(self, *, stream: IO[str], options: UCSOptions) -> None:
        super().__init__()
        self.stream = stream
        self.header = tuple(options.text_header)
        self.chunksize = options.chunksize
        self._pending: list[tuple[str, ...]] = []
        self._wrote_header = False

    def write(self, record: UCRecord | MapRecord) -> None:
        self._pending.append(record.to_text_row())
        if len(self._pending) >= self.chunksize:
            self._flush()

    def close(self) -> None:
        if self.closed:
            return
        self._flush()
        if not self._wrote_header:
            # Empty input still produces a headed table.
            self._write_header()
        self.stream.flush()
        self.closed = True

    def _write_header(self) -> None:
        self.stream.write("\t".join(self.header) + "\n")
        self._wrote_header = True

    def _flush(self) -> None:
        if not self._pending:
            return

        if not self._wrote_header:
            self._write_header()
        self.stream.writelines("\t".join(row) + "\n" for row in self._pending)
        self.rows_written += len(self._pending)
        self._pending = []
