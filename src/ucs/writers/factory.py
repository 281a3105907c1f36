"""Pick the writer implied by the output destination."""

from __future__ import annotations

from typing import IO

from ucs.config import OutputFormat, UCSOptions
from ucs.streams import expand_path
from ucs.writers.base import RecordWriter
from ucs.writers.duckdb_parquet import DuckDBParquetWriter
from ucs.writers.text import TsvRecordWriter


def writer_name_for(options: UCSOptions) -> str:
    if options.output_format is OutputFormat.PARQUET:
        return DuckDBParquetWriter.name
    return TsvRecordWriter.name


def create_writer(options: UCSOptions, *, stream: IO[str] | None = None) -> RecordWriter:
    """Build a Parquet writer for ``.parquet`` destinations, else a TSV writer on ``stream``."""

    if options.output_format is OutputFormat.PARQUET:
        return DuckDBParquetWriter(parquet_path=expand_path(options.output_path), options=options)
    if stream is None:
        raise ValueError("Text output requires an open stream")
    return TsvRecordWriter(stream=stream, options=options)
