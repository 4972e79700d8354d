"""
Per-line scan: drives the trackers and the rule table over one file.
"""

import logging
from typing import Iterator

from .. import patterns
from ..checker_base import BaseChecker, SourceFile
from ..context import DEFAULT_MAX_LINE_LENGTH, CommentState, ScannerContext, StyleMode
from ..line_rules import LineView, Phase, run_rules
from ..masker import MaskedLine
from ..rules import ErrorKind
from ..trackers import (
    CaseBlockAnalyzer,
    IndentTracker,
    InlineBlockValidator,
    ParamBlockTracker,
    TypeContextTracker,
    is_inline_control,
)
from ..utils import leading_whitespace

logger = logging.getLogger(__name__)


class LineStyleChecker(BaseChecker):
    """Checks indentation, braces, naming and spacing line by line."""

    def __init__(self, style: StyleMode = StyleMode.KR, max_line_length: int = DEFAULT_MAX_LINE_LENGTH):
        super().__init__()
        self.style = style
        self.max_line_length = max_line_length
        self.ctx = ScannerContext(style=style, max_line_length=max_line_length)

    def _run_checks(self):
        for _ in self.scan(self.source):
            pass
        logger.debug("line scan finished with indent depth %d", self.ctx.depth)

    def scan(self, source: SourceFile) -> Iterator[int]:
        """Scan ``source`` one line at a time.

        Yields each line index once every tracker has settled its state for
        that line, so ``self.ctx`` can be inspected between lines.
        """
        self.source = source
        self.issues = []
        self.ctx = ScannerContext(style=self.style, max_line_length=self.max_line_length)
        lines = self.masked
        self.cases = CaseBlockAnalyzer(self.ctx, lines)
        self.params = ParamBlockTracker(self.ctx)
        self.indent = IndentTracker(self.ctx, lines, self.cases, self.params)
        self.types = TypeContextTracker(self.ctx)
        self.inline = InlineBlockValidator()

        for index, line in enumerate(lines):
            self._check_line(index, line)
            self.cases.close_finished(index)
            self.ctx.comment_state = line.state_after
            yield index

    def _check_line(self, index: int, line: MaskedLine):
        ctx = self.ctx
        line_num = index + 1
        view = LineView(index, line, ctx, self.masked)

        if line.is_blank:
            if line.state_before is CommentState.BLOCK_COMMENT:
                return
            ctx.blank_run += 1
            if line.raw:
                self._add_issue(ErrorKind.BLANK_LINE_INDENTED, line_num, 0, len(line.raw))
            return

        if ctx.blank_run > 1:
            self._add_issue(ErrorKind.TOO_MANY_BLANK_LINES, index, 0, 0, ctx.blank_run)
        ctx.blank_run = 0

        self._add_findings(line_num, run_rules(Phase.RAW, view))
        if line.skip:
            return

        code = line.code
        is_include = bool(patterns.INCLUDE.match(line.raw))
        if not is_include:
            self._add_findings(line_num, run_rules(Phase.CONTENT, view))

        if ctx.param_block is not None:
            self._add_findings(line_num, self.params.continue_block(line.raw, code))
            return

        if view.is_preprocessor or ctx.in_macro_continuation:
            if is_include and leading_whitespace(line.raw):
                self._add_issue(ErrorKind.INCLUDE_INDENTED, line_num, 0, leading_whitespace(line.raw))
            ctx.in_macro_continuation = line.raw.rstrip().endswith("\\")
            return

        if self._check_label(line_num, line):
            return

        findings, opened_block = self.indent.process(index, view.prev_code)
        self._add_findings(line_num, findings)
        if opened_block:
            return

        if is_inline_control(code):
            self._add_findings(line_num, self.inline.check(code))
            return

        closed = self.types.process(index, code)
        if closed is not None:
            self.issues.extend(closed)
            return

        self._add_findings(line_num, run_rules(Phase.STATEMENT, view))

    def _check_label(self, line_num: int, line: MaskedLine) -> bool:
        """goto labels sit outside the indent machinery."""
        m = patterns.LABEL.match(line.code)
        if not m:
            return False
        name = m.group(1)
        if name == "default" or name in patterns.C_KEYWORDS:
            return False
        if m.start(1):
            self._add_issue(ErrorKind.LABEL_INDENTED, line_num, 0, m.start(1))
        if not patterns.SNAKE.match(name):
            self._add_issue(ErrorKind.LABEL_NOT_SNAKE, line_num, m.start(1), len(name), name)
        if m.group(2):
            self._add_issue(ErrorKind.COLON_NOT_ATTACHED, line_num, m.start(2), len(m.group(2)) + 1)
        return True
