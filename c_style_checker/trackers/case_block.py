"""
Switch/case analyzer layered on the indent stack.

Each ``case``/``default`` label with a body gets one indent frame at
label indent + unit. The frame is popped after its last body line: the
``break;`` that ends it, or the last code line before the next label or the
switch's closing brace.
"""

import logging
from typing import List, Optional

from .. import patterns
from ..context import INDENT_UNIT, CaseState, ScannerContext
from ..masker import MaskedLine
from ..rules import ErrorKind, Finding

logger = logging.getLogger(__name__)


def next_code_index(lines: List[MaskedLine], index: int) -> Optional[int]:
    for j in range(index + 1, len(lines)):
        if lines[j].has_code:
            return j
    return None


class CaseBlockAnalyzer:

    def __init__(self, ctx: ScannerContext, lines: List[MaskedLine]):
        self.ctx = ctx
        self.lines = lines

    def is_case_label(self, code: str) -> bool:
        return bool(patterns.CASE_START.match(code.strip())) and bool(patterns.CASE_LABEL.match(code))

    def analyze(self, index: int, base_indent: int) -> List[Finding]:
        line = self.lines[index]
        code = line.code
        m = patterns.CASE_LABEL.match(code)
        if not m:
            return []
        findings: List[Finding] = []
        label = " ".join(m.group(1).split())
        colon = m.end(2)
        rest = m.group(3).strip()

        if m.group(2):
            findings.append(Finding(ErrorKind.COLON_NOT_ATTACHED, m.start(2), len(m.group(2)) + 1))

        nxt = next_code_index(self.lines, index)
        next_code = self.lines[nxt].stripped if nxt is not None else ""
        if not rest and nxt is not None and patterns.CASE_START.match(next_code):
            # stacked labels share the body of the last one
            return findings

        if rest.startswith("{"):
            findings.append(Finding(ErrorKind.CASE_BLOCK_BRACES, code.index("{", colon), 1))
            return findings
        if not rest and next_code.startswith("{"):
            findings.append(Finding(ErrorKind.CASE_BLOCK_BRACES, self.lines[nxt].code.index("{"), 1))
            return findings

        fall_through = patterns.FALL_THROUGH_MARKER in line.comment_text
        statements = [part.strip() for part in rest.split(";") if part.strip()]
        if statements and statements[-1] == "break":
            # whole case on one line
            return findings

        end_line, has_break, marked = self._scan_body(index)
        fall_through = fall_through or marked
        if not has_break and not fall_through:
            findings.append(Finding(ErrorKind.CASE_MISSING_BREAK, colon, 1, (label,)))
        if end_line is not None:
            frame_indent = base_indent + INDENT_UNIT
            self.ctx.push(frame_indent)
            self.ctx.case_stack.append(CaseState(end_line, frame_indent))
            logger.debug("'%s' frame at %d until line %d", label, frame_indent, end_line + 1)
        return findings

    def _scan_body(self, index: int):
        """Return (last body line, ended by break, fall-through marker seen)."""
        depth = 0
        last_body = None
        marked = False
        for j in range(index + 1, len(self.lines)):
            line = self.lines[j]
            if line.has_code:
                text = line.stripped
                if depth == 0 and (patterns.CASE_START.match(text) or text.startswith("}")):
                    break
                last_body = j
                if depth == 0 and patterns.BREAK_STMT.match(text):
                    return j, True, marked
                depth += text.count("{") - text.count("}")
                if depth < 0:
                    break
            if patterns.FALL_THROUGH_MARKER in line.comment_text:
                marked = True
        return last_body, False, marked

    def close_finished(self, index: int):
        """Pop every case frame whose last body line is ``index``."""
        while self.ctx.case_stack and self.ctx.case_stack[-1].end_line == index:
            state = self.ctx.case_stack.pop()
            self.ctx.pop()
            logger.debug("case frame at %d closed after line %d", state.indent, index + 1)
