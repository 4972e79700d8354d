"""
Main checker class that coordinates all checkers.
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

from .checker_base import SourceFile
from .checkers import FunctionChecker, IncludeChecker, LayoutChecker, LineStyleChecker
from .context import DEFAULT_MAX_LINE_LENGTH, StyleMode
from .issue import Diagnostic, dedupe_diagnostics
from .utils import read_source

logger = logging.getLogger(__name__)


class StyleChecker:
    """Runs every checker over one file and returns its deduplicated diagnostics."""

    def __init__(self, style: Union[StyleMode, str] = StyleMode.KR,
                 max_line_length: int = DEFAULT_MAX_LINE_LENGTH):
        if not isinstance(style, StyleMode):
            style = StyleMode.parse(style)
        self.style = style
        self.max_line_length = max_line_length

        # order matters only for the order of diagnostics in the report
        self.checkers = [
            IncludeChecker(),
            LayoutChecker(),
            LineStyleChecker(style, max_line_length),
            FunctionChecker(),
        ]

    def check_source(self, text: str, path: Union[Path, str] = "input.c") -> List[Diagnostic]:
        """Check source text; ``path`` only feeds the header-guard and include checks."""
        source = SourceFile.from_text(Path(path), text)
        logger.debug("Checking %s (%d lines, style=%s)", source.path, len(source.lines), self.style.value)

        diagnostics: List[Diagnostic] = []
        for checker in self.checkers:
            diagnostics.extend(checker.check(source))

        unique = dedupe_diagnostics(diagnostics)
        logger.debug("%s: %d diagnostic(s), %d duplicate(s) dropped",
                     source.path, len(unique), len(diagnostics) - len(unique))
        return unique

    def check_file(self, file_path: Union[Path, str]) -> List[Diagnostic]:
        """Check a file. Raises SourceReadError when it cannot be read."""
        file_path = Path(file_path)
        return self.check_source(read_source(file_path), file_path)

    def check_files(self, file_paths: List[Path]) -> Dict[Path, List[Diagnostic]]:
        """Check multiple files.

        Args:
            file_paths: List of file paths to check

        Returns:
            Dictionary mapping file path to list of diagnostics found in that file
        """
        results: Dict[Path, List[Diagnostic]] = {}
        for file_path in file_paths:
            results[file_path] = self.check_file(file_path)
        return results
