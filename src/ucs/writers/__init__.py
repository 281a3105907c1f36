"""Record serialization backends."""

from .base import RecordWriter
from .duckdb_parquet import DuckDBParquetWriter
from .factory import create_writer, writer_name_for
from .text import TsvRecordWriter

__all__ = ["RecordWriter", "DuckDBParquetWriter", "TsvRecordWriter", "create_writer", "writer_name_for"]
