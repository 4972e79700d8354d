"""
Command line entry point: ``c-style-check {kr,allman} TARGET``.

Exit status is 0 when no file has diagnostics, 1 when any does and 2 when
an input could not be read.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from . import __version__
from .context import DEFAULT_MAX_LINE_LENGTH, StyleMode
from .errors import SourceReadError
from .issue import Diagnostic
from .main_checker import StyleChecker
from .reporter import ReportGenerator
from .utils import collect_source_files, read_source, split_lines

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_ISSUES = 1
EXIT_READ_ERROR = 2


def default_output_dir() -> Path:
    """JSON report directory: CSTYLE_OUTPUT_DIR, else out."""
    return Path(os.environ.get("CSTYLE_OUTPUT_DIR", "").strip() or "out")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="c-style-check",
        description="Check C source files against the K&R or Allman house style.",
    )
    parser.add_argument("style", choices=[mode.value for mode in StyleMode],
                        help="brace placement convention")
    parser.add_argument("target", type=Path, help="a C file or a directory searched for *.c files")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("-j", "--json", action="store_true",
                        help="print JSON records and write a JSON report file")
    parser.add_argument("-o", "--output-dir", type=Path, default=default_output_dir(),
                        help="directory for the JSON report (default: %(default)s)")
    parser.add_argument("--max-line-length", type=int, default=DEFAULT_MAX_LINE_LENGTH,
                        help="maximum line length (default: %(default)s)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    style = StyleMode.parse(args.style)
    checker = StyleChecker(style, args.max_line_length)
    files = collect_source_files(args.target)
    if not files:
        print(f"No C source files found under {args.target}", file=sys.stderr)
        return EXIT_CLEAN

    results: Dict[Path, List[Diagnostic]] = {}
    read_failed = False
    for file_path in files:
        try:
            text = read_source(file_path)
        except SourceReadError as e:
            print(str(e), file=sys.stderr)
            read_failed = True
            continue
        diagnostics = checker.check_source(text, file_path)
        results[file_path] = diagnostics
        if not args.json:
            print(ReportGenerator.generate_text_report(diagnostics, file_path, split_lines(text)))

    if args.json:
        records = []
        for file_path, diagnostics in results.items():
            records.extend(ReportGenerator.to_json_records(diagnostics, file_path))
        print(json.dumps(records, indent=2, ensure_ascii=False))
        target = ReportGenerator.write_json_report(results, style, args.output_dir)
        logger.info("JSON report written to %s", target)

    if read_failed:
        return EXIT_READ_ERROR
    if any(results.values()):
        return EXIT_ISSUES
    return EXIT_CLEAN


if __name__ == "__main__":
    sys.exit(main())
