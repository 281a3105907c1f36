import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from ucs import (  # noqa: E402
    FULL_COLUMNS,
    MAP_COLUMNS,
    OutputFormat,
    RunConfigLoader,
    SummaryFormat,
    UCSConfigError,
    UCSOptions,
    resolve_options,
)


def test_defaults_match_command_line_defaults() -> None:
    options = UCSOptions()

    assert options.input_path == "-"
    assert options.output_path == "-"
    assert options.map_only is True
    assert options.split_identifiers is True
    assert options.remove_duplicates is True
    assert options.multi_mapped is False
    assert options.summary is False
    assert options.output_format is OutputFormat.TEXT
    assert options.columns == MAP_COLUMNS
    assert UCSOptions(map_only=False).columns == FULL_COLUMNS


def test_parquet_output_is_selected_by_extension() -> None:
    assert UCSOptions(output_path="clusters.parquet").output_format is OutputFormat.PARQUET
    assert UCSOptions(output_path="clusters.tsv").output_format is OutputFormat.TEXT


def test_from_mapping_rejects_unknown_keys_and_bad_values() -> None:
    with pytest.raises(UCSConfigError):
        UCSOptions.from_mapping({"map_only": True, "colour": "red"})
    with pytest.raises(UCSConfigError):
        UCSOptions.from_mapping({"summary_format": "yaml"})
    with pytest.raises(UCSConfigError):
        UCSOptions.from_mapping({"chunksize": 0})

    assert UCSOptions.from_mapping({"summary_format": "json"}).summary_format is SummaryFormat.JSON


def test_run_config_loader_reads_valid_config(tmp_path: Path) -> None:
    config_path = tmp_path / "run.json"
    config_path.write_text(
        json.dumps({"input_path": "clusters.uc.gz", "map_only": False, "multi_mapped": True})
    )

    options = RunConfigLoader().load(config_path)

    assert options.input_path == "clusters.uc.gz"
    assert options.map_only is False
    assert options.multi_mapped is True


def test_run_config_loader_reports_every_violation(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.json"
    config_path.write_text(json.dumps({"map_only": "yes", "bogus": 1}))

    with pytest.raises(UCSConfigError) as excinfo:
        RunConfigLoader().load(config_path)

    message = str(excinfo.value)
    assert "/map_only" in message
    assert "bogus" in message


def test_run_config_loader_reports_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "broken.json"
    config_path.write_text("{not json")

    with pytest.raises(UCSConfigError, match="invalid JSON"):
        RunConfigLoader().load(config_path)


def test_command_line_overrides_config_values(tmp_path: Path) -> None:
    config_path = tmp_path / "run.json"
    config_path.write_text(json.dumps({"map_only": False, "multi_mapped": True}))

    options = resolve_options(
        config_path=config_path,
        overrides={"map_only": True, "input_path": None, "summary": None},
    )

    assert options.map_only is True
    assert options.multi_mapped is True
    assert options.input_path == "-"


def test_compression_level_outside_zstd_range_is_rejected() -> None:
    for level in (0, 23):
        with pytest.raises(UCSConfigError, match="parquet_compression_level"):
            UCSOptions(parquet_compression_level=level)
        with pytest.raises(UCSConfigError):
            UCSOptions().with_overrides({"parquet_compression_level": level})

    assert UCSOptions(parquet_compression_level=22).parquet_compression_level == 22
