import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from abc_metrics.collect.metrics_collector import FileResult, MetricsCollector, write_csv
from abc_metrics.config import LOG_FORMAT, LOG_LEVEL
from abc_metrics.errors import UnsupportedFileError
from abc_metrics.metrics import ABCMetrics

DESCRIPTION = """\
ABC metrics tool analyzes source code and calculates the Assignment, Branch, Condition
complexity metrics. These metrics provide an indication of code complexity
based on the number of assignments, branches, and conditions in the code.

The ABC score is calculated as sqrt(A² + B² + C²) where:
- A: number of assignments
- B: number of branches (function calls, method calls)
- C: number of conditions (if, else, switch, case, for, while, etc.)"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abc",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command")
    analyze = sub.add_parser(
        "analyze",
        help="Analyze a file for ABC metrics",
        description="Analyze source files and calculate their ABC metrics.",
    )
    analyze.add_argument("paths", nargs="*", type=Path, help="Files or directories to analyze")
    analyze.add_argument("-f", "--file", type=Path, help="Path to the file for analysis")
    analyze.add_argument(
        "--show",
        action="store_true",
        help="Show detailed list of assignments, branches, and conditions",
    )
    analyze.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    analyze.add_argument("--csv", type=Path, help="Also write per-file results to this CSV file")
    analyze.set_defaults(handler=run_analyze, command_parser=analyze)
    return parser


def _report(metrics: ABCMetrics, show: bool) -> None:
    print(metrics.render())
    print(f"Complexity: {metrics.severity()}")
    if show:
        print(metrics.render_details())


def _report_error(result: FileResult) -> None:
    if isinstance(result.error, UnsupportedFileError):
        print(f"Error: {result.error}", file=sys.stderr)
    else:
        print(f"Error analyzing file: {result.error}", file=sys.stderr)


def run_analyze(args: argparse.Namespace) -> int:
    paths: List[Path] = ([args.file] if args.file else []) + list(args.paths)
    if not paths:
        print("Error: file path is required")
        args.command_parser.print_help()
        return 1

    collector = MetricsCollector()
    results: List[FileResult] = []
    for result in collector.iter_collect(paths):
        results.append(result)
        if len(results) > 1:
            print()
        print(f"Analyzing file: {result.path}")
        if result.ok:
            _report(result.metrics, args.show)
        else:
            _report_error(result)

    succeeded = [r for r in results if r.ok]
    if len(succeeded) > 1:
        print(f"\nTotal ({len(succeeded)} files):")
        _report(collector.combined(succeeded), show=False)

    if args.csv is not None:
        write_csv(results, args.csv)
        logging.getLogger(__name__).info("wrote %d rows to %s", len(results), args.csv)

    if not results:
        print("Error: no supported files found", file=sys.stderr)
        return 1
    return 0 if len(succeeded) == len(results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.DEBUG if getattr(args, "verbose", False) else LOG_LEVEL
    logging.basicConfig(level=level, format=LOG_FORMAT)

    if args.command is None:
        parser.print_help()
        return 0
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
