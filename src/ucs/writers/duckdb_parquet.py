"""DuckDB-backed Parquet output."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from ucs.config import UCSOptions
from ucs.errors import UCSError
from ucs.models import MapRecord, UCRecord
from ucs.writers.base import RecordWriter

try:
    import duckdb
except ImportError:  # pragma: no cover - exercised only when dependency missing
    duckdb = None


logger = logging.getLogger("ucs.writers.parquet")

TABLE_NAME = "uc_records"

_MAP_SCHEMA = """
CREATE TABLE uc_records (
    query VARCHAR,
    target VARCHAR
)
"""

_FULL_SCHEMA = """
CREATE TABLE uc_records (
    record_type VARCHAR,
    cluster_number UINTEGER,
    size UINTEGER,
    identity DOUBLE,
    strand VARCHAR,
    unused_1 VARCHAR,
    unused_2 VARCHAR,
    cigar VARCHAR,
    query VARCHAR,
    target VARCHAR
)
"""

_MAP_INSERT = "INSERT INTO uc_records SELECT query, target FROM chunk_frame"

# Absent identities arrive from pandas as NaN and must land as NULL.
_FULL_INSERT = """
INSERT INTO uc_records
SELECT
    record_type,
    CAST(cluster_number AS UINTEGER),
    CAST(size AS UINTEGER),
    CASE WHEN isnan(identity) THEN NULL ELSE identity END,
    strand,
    unused_1,
    unused_2,
    cigar,
    query,
    target
FROM chunk_frame
"""

_COMPRESSIONS = {"zstd", "snappy", "gzip", "lz4", "brotli", "uncompressed"}


class DuckDBParquetWriter(RecordWriter):
    """Stage rows in an in-memory DuckDB table and export one Parquet file.

    Rows are appended in pandas batches of ``chunksize``. The Parquet file is
    produced on ``close`` with the configured codec.
    """

    name = "parquet"

    def __init__(self, *, parquet_path: str | Path, options: UCSOptions) -> None:
        super().__init__()
        if duckdb is None:
            raise RuntimeError(
                "duckdb is not installed. Install ucs requirements before writing Parquet output."
            )

        compression = options.parquet_compression.strip().lower()
        if compression not in _COMPRESSIONS:
            raise ValueError(f"Unsupported Parquet compression: {options.parquet_compression}")

        self.parquet_path = Path(parquet_path)
        self.columns = list(options.columns)
        self.map_only = options.map_only
        self.chunksize = options.chunksize
        self.compression = compression
        self.compression_level = int(options.parquet_compression_level)
        self._pending: list[dict] = []

        self.connection = duckdb.connect(":memory:")
        self.connection.execute(_MAP_SCHEMA if self.map_only else _FULL_SCHEMA)

    def write(self, record: UCRecord | MapRecord) -> None:
        self._pending.append(record.to_row())
        if len(self._pending) >= self.chunksize:
            self._flush()

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._flush()
            self._export()
        finally:
            self.connection.close()
            self.closed = True

    def _flush(self) -> None:
        if not self._pending:
            return

        frame = pd.DataFrame(self._pending, columns=self.columns)
        if not self.map_only:
            frame["identity"] = pd.to_numeric(frame["identity"], errors="coerce").astype("float64")

        self.connection.register("chunk_frame", frame)
        try:
            self.connection.execute(_MAP_INSERT if self.map_only else _FULL_INSERT)
        except duckdb.Error as exc:
            raise UCSError("IO", "failed to stage Parquet rows", exc) from exc
        finally:
            self.connection.unregister("chunk_frame")

        self.rows_written += len(self._pending)
        self._pending = []

    def _export(self) -> None:
        self.parquet_path.parent.mkdir(parents=True, exist_ok=True)
        if self.parquet_path.exists():
            self.parquet_path.unlink()

        options = ["FORMAT PARQUET", f"COMPRESSION {self.compression.upper()}"]
        if self.compression == "zstd":
            options.append(f"COMPRESSION_LEVEL {self.compression_level}")

        parquet_target = self.parquet_path.as_posix().replace("'", "''")
        try:
            self.connection.execute(
                f"COPY {TABLE_NAME} TO '{parquet_target}' ({', '.join(options)})"
            )
        except duckdb.Error as exc:
            raise UCSError("IO", f"failed to write Parquet file {self.parquet_path}", exc) from exc
        logger.debug(
            "Wrote %d rows to %s (compression=%s)",
            self.rows_written,
            self.parquet_path,
            self.compression,
        )
