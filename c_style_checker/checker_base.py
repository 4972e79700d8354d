"""
Base checker class for C style checks.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from .issue import Diagnostic
from .masker import LiteralMasker, MaskedLine
from .rules import ErrorKind, Finding, make_diagnostic
from .utils import split_lines


@dataclass
class SourceFile:
    """The text of one file, read once and shared by every checker."""
    path: Path
    content: str
    lines: List[str] = field(default_factory=list)
    masked: List[MaskedLine] = field(default_factory=list)

    @classmethod
    def from_text(cls, path: Path, content: str) -> "SourceFile":
        lines = split_lines(content)
        return cls(path, content, lines, LiteralMasker().mask_lines(lines))

    @property
    def is_header(self) -> bool:
        return self.path.suffix == ".h"


class BaseChecker:
    """Base class for all checkers."""

    def __init__(self):
        self.issues: List[Diagnostic] = []
        self.source: Optional[SourceFile] = None

    def check(self, source: SourceFile) -> List[Diagnostic]:
        """Run checks on the given file."""
        self.source = source
        self.issues = []
        self._run_checks()
        return self.issues

    @property
    def lines(self) -> List[str]:
        return self.source.lines if self.source else []

    @property
    def masked(self) -> List[MaskedLine]:
        return self.source.masked if self.source else []

    def _run_checks(self):
        """Override in subclasses to implement specific checks."""
        pass

    def _add_issue(self, kind: ErrorKind, line_num: int, col: int, length: int, *args: Any):
        """Add an issue to the list."""
        self.issues.append(make_diagnostic(kind, line_num, col, length, *args))

    def _add_findings(self, line_num: int, findings: List[Finding]):
        self.issues.extend(finding.to_diagnostic(line_num) for finding in findings)
