"""Configuration contracts for UC conversion runs."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from jsonschema import FormatChecker
from jsonschema.validators import validator_for

from ucs.errors import UCSConfigError


MIN_UC_FIELDS = 10

MAP_COLUMNS: tuple[str, ...] = ("query", "target")

FULL_COLUMNS: tuple[str, ...] = (
    "record_type",
    "cluster_number",
    "size",
    "identity",
    "strand",
    "unused_1",
    "unused_2",
    "cigar",
    "query",
    "target",
)

MAP_TEXT_HEADER: tuple[str, ...] = ("Query", "Target")

FULL_TEXT_HEADER: tuple[str, ...] = (
    "recordType",
    "clusterNumber",
    "size",
    "identity",
    "strand",
    "unused1",
    "unused2",
    "cigar",
    "query",
    "target",
)

STDIO_PATH = "-"

# ZSTD levels accepted by the Parquet writer.
MIN_COMPRESSION_LEVEL = 1
MAX_COMPRESSION_LEVEL = 22

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "run_config.schema.json"


class OutputFormat(str, Enum):
    """Serialization selected from the output destination."""

    TEXT = "text"
    PARQUET = "parquet"


class SummaryFormat(str, Enum):
    """Presentation of summary statistics."""

    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class UCSOptions:
    """Immutable settings shared by every component of one run."""

    input_path: str = STDIO_PATH
    output_path: str = STDIO_PATH
    summary: bool = False
    map_only: bool = True
    split_identifiers: bool = True
    remove_duplicates: bool = True
    multi_mapped: bool = False
    parquet_compression: str = "zstd"
    parquet_compression_level: int = 9
    summary_format: SummaryFormat = SummaryFormat.TEXT
    chunksize: int = 100_000

    def __post_init__(self) -> None:
        if self.chunksize < 1:
            raise UCSConfigError(f"chunksize must be positive, got {self.chunksize}")
        if not MIN_COMPRESSION_LEVEL <= self.parquet_compression_level <= MAX_COMPRESSION_LEVEL:
            raise UCSConfigError(
                f"parquet_compression_level must be between {MIN_COMPRESSION_LEVEL} and "
                f"{MAX_COMPRESSION_LEVEL}, got {self.parquet_compression_level}"
            )
        if not isinstance(self.summary_format, SummaryFormat):
            object.__setattr__(self, "summary_format", SummaryFormat(self.summary_format))

    @property
    def output_format(self) -> OutputFormat:
        if self.output_path.lower().endswith(".parquet"):
            return OutputFormat.PARQUET
        return OutputFormat.TEXT

    @property
    def columns(self) -> tuple[str, ...]:
        return MAP_COLUMNS if self.map_only else FULL_COLUMNS

    @property
    def text_header(self) -> tuple[str, ...]:
        return MAP_TEXT_HEADER if self.map_only else FULL_TEXT_HEADER

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "UCSOptions":
        """Build options from a plain mapping such as a parsed JSON config."""

        known = {item.name for item in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise UCSConfigError(f"Unknown option(s): {', '.join(unknown)}")
        try:
            return cls(**dict(payload))
        except ValueError as exc:
            raise UCSConfigError(str(exc)) from exc

    def with_overrides(self, overrides: Mapping[str, Any]) -> "UCSOptions":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return UCSOptions.from_mapping({**self._as_mapping(), **changes})

    def _as_mapping(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


class RunConfigLoader:
    """Load JSON run configurations validated against the bundled schema."""

    def __init__(self, schema_path: str | Path | None = None) -> None:
        self.schema_path = Path(schema_path) if schema_path is not None else DEFAULT_SCHEMA_PATH
        schema = json.loads(self.schema_path.read_text(encoding="utf-8"))
        validator_cls = validator_for(schema)
        validator_cls.check_schema(schema)
        self._validator = validator_cls(schema, format_checker=FormatChecker())

    def load(self, path: str | Path) -> UCSOptions:
        """Parse ``path`` into options, reporting every schema violation at once."""

        config_path = Path(path)
        try:
            payload = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise UCSConfigError(
                f"{config_path}: invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}"
            ) from exc

        errors = sorted(
            self._validator.iter_errors(payload),
            key=lambda err: [str(part) for part in err.path],
        )
        if errors:
            details = "; ".join(
                f"/{'/'.join(str(part) for part in err.path)}: {err.message}" for err in errors
            )
            raise UCSConfigError(f"{config_path}: {details}")

        return UCSOptions.from_mapping(payload)


def resolve_options(
    *,
    config_path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> UCSOptions:
    """Combine defaults, an optional config file and explicit overrides."""

    options = RunConfigLoader().load(config_path) if config_path else UCSOptions()
    if overrides:
        options = options.with_overrides(overrides)
    return options

