import csv

import pytest

from abc_metrics.collect.metrics_collector import FileResult, MetricsCollector, write_csv
from abc_metrics.errors import GoParseError, UnsupportedFileError
from abc_metrics.metrics import ABCMetrics

SIMPLE = "package main\n\nfunc f() {\n\tx := g()\n\tif x {\n\t}\n}\n"


@pytest.fixture
def collector():
    return MetricsCollector()


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "b.go").write_text(SIMPLE)
    (tmp_path / "a.go").write_text("package main\n")
    (tmp_path / "notes.txt").write_text("not go")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.go").write_text(SIMPLE)
    (tmp_path / "vendor").mkdir()
    (tmp_path / "vendor" / "dep.go").write_text(SIMPLE)
    return tmp_path


def test_expand_walks_directories_sorted(tree) -> None:
    files = MetricsCollector.expand([tree])
    assert [f.relative_to(tree).as_posix() for f in files] == ["a.go", "b.go", "sub/c.go"]


def test_expand_keeps_explicit_files(tree) -> None:
    files = MetricsCollector.expand([tree / "notes.txt", tree / "sub"])
    assert files == [tree / "notes.txt", tree / "sub" / "c.go"]


def test_collect_in_input_order(collector, tree) -> None:
    results = collector.collect([tree / "b.go", tree / "a.go"])
    assert [r.path.name for r in results] == ["b.go", "a.go"]
    assert all(r.ok for r in results)
    b = results[0].metrics
    assert (b.assignments, b.branches, b.conditions) == (1, 1, 1)


def test_failures_do_not_stop_other_files(tree) -> None:
    (tree / "broken.go").write_text("package main\nfunc (\n")
    seen = []
    collector = MetricsCollector(on_error=lambda path, exc: seen.append((path.name, type(exc))))
    results = collector.collect([tree / "broken.go", tree / "notes.txt", tree / "b.go"])
    assert [r.ok for r in results] == [False, False, True]
    assert isinstance(results[0].error, GoParseError)
    assert isinstance(results[1].error, UnsupportedFileError)
    assert results[0].metrics is None
    assert seen == [("broken.go", GoParseError), ("notes.txt", UnsupportedFileError)]


def test_combined_concatenates_successes(collector, tree) -> None:
    results = collector.collect([tree / "b.go", tree / "missing.go", tree / "sub" / "c.go"])
    total = MetricsCollector.combined(results)
    assert (total.assignments, total.branches, total.conditions) == (2, 2, 2)
    assert [e.line for e in total.branch_list] == [4, 4]


def test_combined_of_nothing_is_empty() -> None:
    assert MetricsCollector.combined([]) == ABCMetrics()


def test_write_csv(collector, tree, tmp_path) -> None:
    results = collector.collect([tree / "b.go", tree / "notes.txt"])
    out = tmp_path / "report.csv"
    write_csv(results, out)
    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["File"] == str(tree / "b.go")
    assert (rows[0]["A"], rows[0]["B"], rows[0]["C"]) == ("1", "1", "1")
    assert rows[0]["ABC"] == "1.73"
    assert rows[0]["Severity"] == "Low"
    assert rows[0]["Error"] == ""
    assert rows[1]["A"] == ""
    assert rows[1]["Error"].startswith("unsupported file type")


def test_file_result_ok() -> None:
    assert FileResult(path=None, metrics=ABCMetrics()).ok
