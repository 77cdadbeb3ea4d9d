#!/usr/bin/env python3
"""
Entry point for the npminspector CLI.

Supports scanning:
  - A node_modules directory (every package inside, scoped ones included)
  - A single package directory

Usage examples:
  npminspector
  npminspector path/to/node_modules -f json -o report.json
  npminspector node_modules/left-pad -f html
"""

import argparse
import os
import sys
from typing import List

from npminspector import __version__
from npminspector.analyzer import Analyzer
from npminspector.banner import print_banner
from npminspector.config import OUTPUT_FORMATS, Config
from npminspector.errors import PathNotFound
from npminspector.loader import discover_packages, is_dependency_dir
from npminspector.reporter.csv_reporter import CsvReporter
from npminspector.reporter.html_reporter import HtmlReporter
from npminspector.reporter.json_reporter import JSONReporter
from npminspector.reporter.text_reporter import TextReporter
from npminspector.utils.file_utils import write_text_file
from npminspector.utils.logger import get_logger, set_level
from npminspector.utils.metadata import PackageAssessment
from npminspector.utils.settings import (
    DEFAULT_HTML_REPORT,
    DEFAULT_TARGET,
    ENV_DISABLE_COLORS,
    FAILING_LEVELS,
)

LOG = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="npminspector",
        description=(
            "Offline heuristic malware scanner for installed npm packages.\n\n"
            "TARGET can be:\n"
            "  • A node_modules directory (default: ./node_modules)\n"
            "  • A single package directory"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=DEFAULT_TARGET,
        help=f"node_modules directory or package directory (default: {DEFAULT_TARGET})",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to config file (TOML/YAML/INI). If omitted, will search in cwd for npminspector.toml, etc.",
    )
    parser.add_argument(
        "-f", "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: text, or output_format from config)",
    )
    parser.add_argument(
        "-o", "--output",
        help=(
            "Write report to file.\n"
            "• For text, JSON or CSV: if omitted, prints to stdout.\n"
            f"• For HTML: if omitted, writes to ./{DEFAULT_HTML_REPORT}."
        ),
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        default=None,
        help="Number of packages scanned in parallel (default: 1)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")
    parser.add_argument("--banner", action="store_true", help="Print the ASCII-art banner first")
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v: INFO, -vv: DEBUG)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def exit_status(assessments: List[PackageAssessment]) -> int:
    """
    1 if any package reached HIGH or CRITICAL, else 0.
    """
    return 1 if any(a.risk_level in FAILING_LEVELS for a in assessments) else 0


def render(assessments: List[PackageAssessment], fmt: str, color: bool) -> str:
    if fmt == "json":
        return JSONReporter().format(assessments)
    if fmt == "csv":
        return CsvReporter().format(assessments)
    if fmt == "html":
        return HtmlReporter().format(assessments)
    return TextReporter(color=color).format(assessments)


def main(argv: List[str] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.verbose >= 2:
        set_level("DEBUG")
    elif args.verbose == 1:
        set_level("INFO")

    color = not args.no_color and not os.getenv(ENV_DISABLE_COLORS)

    if args.banner:
        print_banner(color=color)

    try:
        config = Config.load(args.config)
    except (OSError, ValueError) as e:
        LOG.error("Error loading configuration: %s", e)
        sys.exit(2)

    fmt = args.format or config.output_format
    jobs = args.jobs if args.jobs is not None else config.jobs
    # Text output to a file never carries colour codes
    color = color and not (fmt == "text" and args.output)

    try:
        packages = discover_packages(args.target)
    except PathNotFound as e:
        LOG.error("%s", e)
        print(f"❌ Path not found: {args.target}", file=sys.stderr)
        sys.exit(1)

    if is_dependency_dir(args.target):
        LOG.info("Analyzing %d package(s) under %s", len(packages), args.target)

    analyzer = Analyzer(config)
    assessments = analyzer.analyze_packages(packages, jobs=jobs)

    report = render(assessments, fmt, color)
    output = args.output
    if fmt == "html" and not output:
        output = DEFAULT_HTML_REPORT
    if output:
        LOG.info("Writing %s report to %s", fmt, output)
        write_text_file(output, report)
        print(f"Report written to {os.path.abspath(output)}", file=sys.stderr)
    else:
        print(report)

    sys.exit(exit_status(assessments))


if __name__ == "__main__":
    main()
