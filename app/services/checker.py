"""Checker service: wraps c_style_checker and maps to API models."""

from pathlib import Path
from typing import List, Optional

from c_style_checker.context import StyleMode
from c_style_checker.issue import Diagnostic
from c_style_checker.main_checker import StyleChecker

from ..config import get_default_style, get_max_line_length
from ..schemas import IssueOut


def _issue_to_out(d: Diagnostic, file_path: Optional[str] = None) -> IssueOut:
    return IssueOut(
        severity=d.severity.value,
        line_number=d.line,
        column=d.column,
        length=d.length,
        message=d.message,
        kind=d.kind,
        file_path=file_path,
    )


class CheckerService:
    """Wraps StyleChecker for use by the API."""

    def _checker(self, style: Optional[StyleMode]) -> StyleChecker:
        return StyleChecker(style or get_default_style(), get_max_line_length())

    def analyze_code(self, code: str, filename: str = "input.c",
                     style: Optional[StyleMode] = None) -> List[IssueOut]:
        """Check posted source text. No temp file: the engine works on text."""
        diagnostics = self._checker(style).check_source(code, filename)
        return [_issue_to_out(d, filename) for d in diagnostics]

    def analyze_file(self, file_path: Path, style: Optional[StyleMode] = None) -> List[IssueOut]:
        """Check a file path. Raises SourceReadError when it cannot be read."""
        diagnostics = self._checker(style).check_file(file_path)
        return [_issue_to_out(d, str(file_path)) for d in diagnostics]
