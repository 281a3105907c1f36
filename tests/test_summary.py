import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from ucs import UCSOptions  # noqa: E402
from ucs.pipeline import summarize  # noqa: E402
from ucs.summary import SummaryAccumulator, SummaryReport, format_summary  # noqa: E402


def _hit(query: str, target: str) -> str:
    return f"H\t0\t100\t99.0\t+\t*\t*\t100M\t{query}\t{target}"


def _seed(query: str) -> str:
    return f"S\t0\t100\t*\t*\t*\t*\t*\t{query}\t*"


def _synthetic_file() -> list[str]:
    lines = [_seed(f"t{index}") for index in range(10)]
    for index in range(10):
        lines.append(_hit(f"m{index}", "t0"))
        lines.append(_hit(f"m{index}", "t1"))
    singles = [_hit(f"q{index}", f"t{index % 10}") for index in range(920)]
    lines.extend(singles)
    lines.extend(singles[:50])
    return lines


def test_summary_over_synthetic_file() -> None:
    lines = _synthetic_file()
    assert len(lines) == 1000

    report = summarize(lines, UCSOptions())

    assert report.lines == 1000
    assert report.unique_queries == 940
    assert report.unique_targets == 10
    assert report.duplicates == 50
    assert report.multi_mapped == 10
    assert report.lines >= report.unique_queries


def test_malformed_and_cluster_lines_only_count_as_lines() -> None:
    lines = [
        "H\t1\t2\t3\t+\t*\t*\tq9",
        "C\t0\t3\t*\t*\t*\t*\t*\tq1\t*",
        _seed("q1"),
        "",
    ]

    report = summarize(lines, UCSOptions())

    assert report.lines == 4
    assert report.unique_queries == 1
    assert report.unique_targets == 1


def test_star_target_contributes_no_target() -> None:
    report = summarize([_hit("q1", "*"), _hit("q1", "t1")], UCSOptions())

    assert report.unique_queries == 1
    assert report.unique_targets == 1
    assert report.multi_mapped == 0


def test_summary_counts_duplicates_even_without_dedup_option() -> None:
    options = UCSOptions(remove_duplicates=False)
    accumulator = SummaryAccumulator(options).consume_all([_hit("q1", "t1"), _hit("q1;size=3", "t1")])

    assert accumulator.report().duplicates == 1


def test_split_disabled_keeps_distinct_queries() -> None:
    lines = [_hit("q1;size=3", "t1"), _hit("q1;size=5", "t1")]

    report = summarize(lines, UCSOptions(split_identifiers=False))

    assert report.unique_queries == 2
    assert report.duplicates == 0


def test_statistics_keep_fixed_order() -> None:
    report = SummaryReport(lines=5, unique_queries=4, unique_targets=3, duplicates=2, multi_mapped=1)

    assert [item.value for item in report.statistics()] == [5, 4, 3, 2, 1]
    assert list(report.to_dict()) == [
        "lines",
        "unique_queries",
        "unique_targets",
        "duplicates",
        "multi_mapped",
    ]


def test_format_summary_aligns_labels_and_values() -> None:
    report = SummaryReport(
        lines=25329,
        unique_queries=24953,
        unique_targets=376,
        duplicates=0,
        multi_mapped=0,
    )

    rendered = format_summary(report).splitlines()

    assert rendered[0].startswith("Total lines in the file:")
    assert rendered[0].endswith(" 25329")
    assert rendered[2].endswith("   376")
    assert rendered[4].startswith("Queries mapped to multiple targets:")
    assert {len(line) for line in rendered} == {41}
    assert "\033[" not in "".join(rendered)


def test_format_summary_highlights_nonzero_warnings() -> None:
    report = SummaryReport(lines=3, unique_queries=1, unique_targets=1, duplicates=2, multi_mapped=0)

    rendered = format_summary(report, highlight=True).splitlines()

    assert rendered[3].startswith("\033[31m")
    assert rendered[3].endswith("\033[0m")
    assert not rendered[4].startswith("\033[31m")
    assert not rendered[0].startswith("\033[31m")
