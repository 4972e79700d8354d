"""
Brace/indent state machine.

The expected indentation of a line is the top of ``ctx.indent_stack``,
or the one-shot ``ctx.next_indent`` right after a brace-less control
statement. A mismatch is reported, and bookkeeping continues from the
expected value so one bad line does not shift everything after it.
"""

from typing import List, Optional, Tuple

from .. import patterns
from ..context import INDENT_UNIT, ScannerContext
from ..masker import MaskedLine
from ..rules import ErrorKind, Finding
from ..utils import get_indent, leading_whitespace
from .case_block import CaseBlockAnalyzer, next_code_index
from .inline_block import is_inline_control
from .param_block import ParamBlockTracker, opens_param_block


class IndentTracker:

    def __init__(self, ctx: ScannerContext, lines: List[MaskedLine],
                 cases: CaseBlockAnalyzer, params: ParamBlockTracker):
        self.ctx = ctx
        self.lines = lines
        self.cases = cases
        self.params = params

    def expected_indent(self, stripped: str) -> int:
        if self.ctx.next_indent is not None and not stripped.startswith(("{", "}")):
            return self.ctx.next_indent
        return self.ctx.top

    def process(self, index: int, prev_code: str = "") -> Tuple[List[Finding], bool]:
        """Check one code line and update the stack.

        Returns the findings and whether the line opened a parameter block,
        in which case no further rules apply to it.
        """
        ctx = self.ctx
        line = self.lines[index]
        code = line.code
        stripped = line.stripped
        findings: List[Finding] = []

        starts_close = stripped.startswith("}")
        if starts_close:
            ctx.pop()

        expected = self.expected_indent(stripped)
        ctx.next_indent = None
        actual = get_indent(line.raw)
        if actual != expected:
            findings.append(Finding(
                ErrorKind.INDENTATION_MISMATCH, 0, leading_whitespace(line.raw), (expected, actual)))

        if self.cases.is_case_label(code):
            findings.extend(self.cases.analyze(index, expected))

        if is_inline_control(code):
            return findings, False

        if opens_param_block(code):
            findings.extend(self.params.open(code, expected, prev_code))
            return findings, True

        body = stripped[1:] if starts_close else stripped
        net = body.count("{") - body.count("}")
        if net > 0:
            ctx.push(self._block_indent(index, expected))
        elif net < 0:
            for _ in range(-net):
                ctx.pop()
        elif self._opens_braceless_body(stripped, code):
            ctx.next_indent = expected + INDENT_UNIT
        return findings, False

    def _block_indent(self, index: int, indent: int) -> int:
        nxt: Optional[int] = next_code_index(self.lines, index)
        if nxt is not None and self.lines[nxt].stripped == "}":
            return indent
        return indent + INDENT_UNIT

    @staticmethod
    def _opens_braceless_body(stripped: str, code: str) -> bool:
        if stripped.endswith(";") or not patterns.BRACE_CONTROL.match(stripped):
            return False
        return code.count("(") == code.count(")")
