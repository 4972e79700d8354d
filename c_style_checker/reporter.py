"""
Report generation for the C style checker.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .context import StyleMode
from .issue import Diagnostic, count_by_severity

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Generate reports from diagnostics."""

    @staticmethod
    def context_lines(lines: List[str], diagnostic: Diagnostic) -> List[str]:
        """The offending line between its neighbours, with the span underlined."""
        out = []
        start = max(diagnostic.line - 2, 0)
        end = min(diagnostic.line, len(lines) - 1)
        for i in range(start, end + 1):
            out.append(f"{i + 1:3d} | {lines[i]}")
            if i == diagnostic.line - 1:
                column = min(diagnostic.column, len(lines[i]))
                width = max(min(diagnostic.length, len(lines[i]) - column), 1)
                out.append("    | " + " " * column + "^" * width)
        return out

    @staticmethod
    def generate_text_report(diagnostics: List[Diagnostic], file_path: Path,
                             lines: Optional[List[str]] = None) -> str:
        """Generate a text report."""
        if not diagnostics:
            return f"No style issues found in {file_path}\n"

        report = [f"\n{'='*80}"]
        report.append(f"C Style Report: {file_path}")
        report.append(f"{'='*80}\n")

        for number, diagnostic in enumerate(diagnostics, 1):
            report.append("-" * 80)
            report.append(f"#{number} [{diagnostic.severity.value}]: {diagnostic.message}\n")
            report.append(f"{file_path}:{diagnostic.line}:{diagnostic.column + 1}")
            if lines:
                report.extend(ReportGenerator.context_lines(lines, diagnostic))
            report.append("")

        errors, warnings = count_by_severity(diagnostics)
        report.append("-" * 80)
        report.append(f"Total: {errors} error(s) & {warnings} warning(s)")
        report.append("="*80)

        return "\n".join(report)

    @staticmethod
    def generate_summary(diagnostics: List[Diagnostic]) -> Dict[str, int]:
        """Generate a summary count by diagnostic kind."""
        summary: Dict[str, int] = {}
        for diagnostic in diagnostics:
            summary[diagnostic.kind] = summary.get(diagnostic.kind, 0) + 1
        return summary

    @staticmethod
    def to_json_records(diagnostics: List[Diagnostic], file_path: Path) -> List[Dict[str, Any]]:
        """One record per diagnostic; ``column`` is 1-based."""
        return [
            {
                "error_num": number,
                "file": str(file_path),
                "level": diagnostic.severity.value,
                "line": diagnostic.line,
                "column": diagnostic.column + 1,
                "error_msg": diagnostic.message,
            }
            for number, diagnostic in enumerate(diagnostics, 1)
        ]

    @staticmethod
    def write_json_report(results: Dict[Path, List[Diagnostic]], style: StyleMode,
                          output_dir: Path, now: Optional[datetime] = None) -> Path:
        """Write every file's records to ``errors_<style>_<timestamp>.json``."""
        now = now or datetime.now()
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        target = output_dir / f"errors_{style.value}_{now.strftime('%Y%m%d_%H%M%S')}.json"

        records: List[Dict[str, Any]] = []
        for file_path, diagnostics in results.items():
            records.extend(ReportGenerator.to_json_records(diagnostics, file_path))
        with open(target, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
        logger.debug("Wrote %d record(s) to %s", len(records), target)
        return target
