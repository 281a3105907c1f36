"""USEARCH/VSEARCH cluster-format (UC) parsing and conversion.

The package decodes UC records, resolves each line to an effective
query/target pair, removes duplicate pairs, optionally keeps only queries that
map to several targets, and serializes the result as TSV or Parquet. A summary
mode reports cardinalities of the input instead.
"""

__version__ = "0.8.0"

from .aggregate import MultiTargetAggregator
from .config import (
    FULL_COLUMNS,
    MAP_COLUMNS,
    OutputFormat,
    RunConfigLoader,
    SummaryFormat,
    UCSOptions,
    resolve_options,
)
from .decoder import UCRecordDecoder, decode_map_record, decode_record, normalize_identifier
from .dedup import DuplicateFilter, PairObservation
from .errors import UCSConfigError, UCSError
from .models import MapRecord, RecordType, Strand, UCRecord
from .pipeline import UCSPipeline, UCSRunReport, summarize
from .writers import create_writer
from .summary import SummaryAccumulator, SummaryReport, format_summary

__all__ = [
    "__version__",
    "FULL_COLUMNS",
    "MAP_COLUMNS",
    "DuplicateFilter",
    "MapRecord",
    "MultiTargetAggregator",
    "OutputFormat",
    "PairObservation",
    "RecordType",
    "RunConfigLoader",
    "Strand",
    "SummaryAccumulator",
    "SummaryFormat",
    "SummaryReport",
    "UCRecord",
    "UCRecordDecoder",
    "UCSConfigError",
    "UCSError",
    "UCSOptions",
    "UCSPipeline",
    "UCSRunReport",
    "create_writer",
    "decode_map_record",
    "decode_record",
    "format_summary",
    "normalize_identifier",
    "resolve_options",
    "summarize",
]
