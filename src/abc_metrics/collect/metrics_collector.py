import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional

from abc_metrics.analyzers import get_analyzer_for_file, is_supported
from abc_metrics.config import CSV_FIELDS, EXCLUDED_DIRS
from abc_metrics.errors import AnalysisError, PathLike
from abc_metrics.metrics import ABCMetrics, combine_metrics

logger = logging.getLogger(__name__)

ErrorSink = Callable[[Path, AnalysisError], None]


@dataclass
class FileResult:
    path: Path
    metrics: Optional[ABCMetrics] = None
    error: Optional[AnalysisError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MetricsCollector:
    """
    Runs one independent analysis per file and keeps the results in input
    order, so that combining them is deterministic.
    """

    def __init__(self, on_error: Optional[ErrorSink] = None) -> None:
        """
        Args:
            on_error (callable, optional): called with (path, error) for every
                file whose analysis was abandoned.
        """
        self.on_error = on_error

    @staticmethod
    def expand(paths: Iterable[PathLike]) -> List[Path]:
        """
        Expand directories into the supported files below them.

        Files given explicitly are kept as-is, even when unsupported, so the
        failure is reported for them. Directory contents are sorted.

        Args:
            paths (Iterable): Files and/or directories.

        Returns:
            list: Files to analyze, in input order.
        """
        files: List[Path] = []
        for raw in paths:
            path = Path(raw)
            if not path.is_dir():
                files.append(path)
                continue
            found = sorted(
                p
                for p in path.rglob("*")
                if p.is_file()
                and is_supported(p)
                and not EXCLUDED_DIRS.intersection(p.relative_to(path).parts[:-1])
            )
            logger.debug("%s: %d supported files", path, len(found))
            files.extend(found)
        return files

    def analyze(self, path: Path) -> FileResult:
        try:
            metrics = get_analyzer_for_file(path).analyze_file(path)
        except AnalysisError as exc:
            logger.debug("skipping %s: %s", path, exc)
            if self.on_error is not None:
                self.on_error(path, exc)
            return FileResult(path=path, error=exc)
        return FileResult(path=path, metrics=metrics)

    def iter_collect(self, paths: Iterable[PathLike]) -> Iterator[FileResult]:
        for path in self.expand(paths):
            yield self.analyze(path)

    def collect(self, paths: Iterable[PathLike]) -> List[FileResult]:
        return list(self.iter_collect(paths))

    @staticmethod
    def combined(results: Iterable[FileResult]) -> ABCMetrics:
        """Combine the successful results in the order given."""
        return combine_metrics(*(r.metrics for r in results if r.metrics is not None))


def write_csv(results: Iterable[FileResult], output: PathLike) -> None:
    """One row per file; failed files carry the error and empty metric columns."""
    with open(output, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(CSV_FIELDS))
        writer.writeheader()
        for r in results:
            row = {"File": str(r.path), "Error": "" if r.ok else str(r.error)}
            if r.metrics is not None:
                score = r.metrics.score()
                row.update(
                    {
                        "A": r.metrics.assignments,
                        "B": r.metrics.branches,
                        "C": r.metrics.conditions,
                        "ABC": f"{score:.2f}",
                        "Severity": str(r.metrics.severity()),
                    }
                )
            writer.writerow(row)
