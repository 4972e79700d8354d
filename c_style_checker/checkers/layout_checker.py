"""
Whole-file layout checks: end of file and spacing between functions.
"""

from ..checker_base import BaseChecker
from ..rules import ErrorKind
from .function_checker import find_function_definitions


class LayoutChecker(BaseChecker):
    """Checks the file ending and the blank lines separating functions."""

    def _run_checks(self):
        self._check_eof_newline()
        self._check_trailing_blank_lines()
        self._check_function_spacing()

    def _check_eof_newline(self):
        content = self.source.content
        if not content or content.endswith("\n"):
            return
        last = self.lines[-1] if self.lines else ""
        self._add_issue(ErrorKind.MISSING_EOF_NEWLINE, len(self.lines), len(last) - 1, 1)

    def _check_trailing_blank_lines(self):
        count = 0
        for line in reversed(self.lines):
            if line.strip():
                break
            count += 1
        if count and count < len(self.lines):
            self._add_issue(ErrorKind.TRAILING_BLANK_LINES, len(self.lines), 0, 0, count)

    def _check_function_spacing(self):
        functions = find_function_definitions(self.masked)
        for previous, following in zip(functions, functions[1:]):
            between = self.lines[previous.close_line + 1:following.header_line]
            if any(line.strip() for line in between):
                continue
            blanks = len(between)
            if blanks == 0:
                self._add_issue(ErrorKind.MISSING_BLANK_AFTER_FUNCTION, previous.close_line + 1, 0, 0)
            elif blanks > 1:
                self._add_issue(
                    ErrorKind.TOO_MANY_BLANKS_BETWEEN_FUNCTIONS, previous.close_line + 2, 0, 0, blanks)
