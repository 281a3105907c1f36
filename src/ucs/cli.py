"""Command line entry point for the UC parser and converter."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from ucs import __version__
from ucs.config import OutputFormat, SummaryFormat, UCSOptions, resolve_options
from ucs.errors import UCSError
from ucs.pipeline import UCSPipeline, summarize
from ucs.streams import iter_lines, open_input, open_output
from ucs.summary import format_summary
from ucs.writers import create_writer


logger = logging.getLogger("ucs.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ucs",
        description=f"ucs {__version__} - USEARCH/VSEARCH cluster format parser and converter",
        epilog="For more information, visit https://github.com/vmikk/ucs",
    )
    parser.add_argument("-i", "--input", default=None, help="Input file (default: stdin)")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file (default: stdout). A .parquet suffix writes Parquet.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        action="store_true",
        default=None,
        help="Print summary statistics instead of records.",
    )
    parser.add_argument(
        "-m",
        "--map-only",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Output only the Query-Target mapping (default: true).",
    )
    parser.add_argument(
        "-S",
        "--split-id",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Split sequence IDs at the first semicolon (default: true).",
    )
    parser.add_argument(
        "-d",
        "--rm-dups",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Remove duplicate Query-Target pairs (default: true).",
    )
    parser.add_argument(
        "-M",
        "--multi-mapped",
        action="store_true",
        default=None,
        help="Output only queries mapped to multiple targets.",
    )
    parser.add_argument(
        "--compression-level",
        type=int,
        default=None,
        help="ZSTD level for Parquet output (default: 9).",
    )
    parser.add_argument(
        "--summary-format",
        choices=[item.value for item in SummaryFormat],
        default=None,
        help="Summary presentation (default: text).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional JSON run configuration; command line flags take precedence.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"ucs {__version__}")
    return parser


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "input_path": args.input,
        "output_path": args.output,
        "summary": args.summary,
        "map_only": args.map_only,
        "split_identifiers": args.split_id,
        "remove_duplicates": args.rm_dups,
        "multi_mapped": args.multi_mapped,
        "parquet_compression_level": args.compression_level,
        "summary_format": args.summary_format,
    }


def _announce_duplicates(count: int) -> None:
    """Tell the user about removed pairs on stderr, whatever the log level."""

    if count <= 0:
        return
    message = f"ucs: removed {count} duplicate entries"
    if sys.stderr.isatty():
        message = f"\033[31m{message}\033[0m"
    sys.stderr.write(message + "\n")
    sys.stderr.flush()


def run_summary(options: UCSOptions) -> None:
    # Input opens before the output is created or truncated.
    with open_input(options.input_path) as stream:
        report = summarize(iter_lines(stream, source=options.input_path), options)

    with open_output(options.output_path) as output:
        try:
            if options.summary_format is SummaryFormat.JSON:
                output.write(json.dumps(report.to_dict(), indent=2) + "\n")
            else:
                output.write(format_summary(report, highlight=output.isatty()))
        except OSError as exc:
            raise UCSError("IO", "failed to write summary", exc) from exc


def run_conversion(options: UCSOptions) -> None:
    if options.output_format is OutputFormat.PARQUET:
        with open_input(options.input_path) as stream, create_writer(options) as writer:
            report = UCSPipeline(options=options, writer=writer).run(
                iter_lines(stream, source=options.input_path)
            )
    else:
        with open_input(options.input_path) as stream, open_output(
            options.output_path
        ) as output, create_writer(options, stream=output) as writer:
            report = UCSPipeline(options=options, writer=writer).run(
                iter_lines(stream, source=options.input_path)
            )

    _announce_duplicates(report.duplicates)
    logger.info(
        "Processing complete: lines=%d records=%d skipped=%d duplicates=%d rows_written=%d",
        report.lines_read,
        report.records_decoded,
        report.skipped_lines,
        report.duplicates,
        report.rows_written,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    raw_args = list(sys.argv[1:] if argv is None else argv)
    if not raw_args and sys.stdin.isatty():
        sys.stderr.write("Error: no arguments provided\n\n")
        parser.print_help(sys.stderr)
        return 1

    args = parser.parse_args(raw_args)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        options = resolve_options(config_path=args.config, overrides=_overrides(args))
        logger.info(
            "Processing UC data: input=%s output=%s summary=%s map_only=%s multi_mapped=%s",
            options.input_path,
            options.output_path,
            options.summary,
            options.map_only,
            options.multi_mapped,
        )
        if options.summary:
            run_summary(options)
        else:
            run_conversion(options)
    except (OSError, RuntimeError, ValueError) as exc:
        logger.error("Error: %s", exc)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
