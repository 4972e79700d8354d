"""
Struct/enum/union scope tracking and the naming rules tied to it.
"""

import logging
from typing import List, Optional

from .. import patterns
from ..context import PendingType, ScannerContext, TypeContext
from ..issue import Diagnostic
from ..rules import ErrorKind, Finding, make_diagnostic

logger = logging.getLogger(__name__)


def member_findings(kind: str, code: str, offset: int = 0) -> List[Finding]:
    """Naming rules for one struct field or enum element."""
    findings: List[Finding] = []
    if kind == "enum":
        m = patterns.ENUM_ELEMENT.match(code)
        if m and not patterns.SCREAMING_SNAKE.match(m.group(1)):
            findings.append(Finding(
                ErrorKind.ENUM_ELEMENT_NOT_SCREAMING, offset + m.start(1), len(m.group(1)),
                (m.group(1),)))
        return findings

    m = patterns.STRUCT_FIELD.match(code)
    if m is None:
        m = patterns.FUNC_POINTER_NAME.search(code)
    if m and not patterns.SNAKE.match(m.group(1)):
        findings.append(Finding(
            ErrorKind.FIELD_NAME_NOT_SNAKE, offset + m.start(1), len(m.group(1)),
            (kind, m.group(1))))
    return findings


class TypeContextTracker:
    """Pushes and pops ``ScannerContext.type_stack`` frames."""

    def __init__(self, ctx: ScannerContext):
        self.ctx = ctx

    def process(self, index: int, code: str) -> Optional[List[Diagnostic]]:
        """Update the stack for one code line.

        Returns the diagnostics of a closing line (possibly empty) when the
        line closed a type context, otherwise None.
        """
        stripped = code.strip()
        pending = self.ctx.pending_type
        if pending is not None and pending.line != index:
            self.ctx.pending_type = None
            if stripped.startswith("{"):
                self._push(pending.kind, pending.is_typedef, pending.tag,
                           pending.tag_line, pending.tag_column)
                return None

        m = patterns.TYPE_START.match(code)
        if m:
            self.ctx.pending_type = PendingType(
                kind=m.group(2),
                is_typedef=bool(m.group(1)),
                tag=m.group(3),
                tag_line=index + 1,
                tag_column=m.start(3) if m.group(3) else 0,
                line=index,
            )
            return None

        m = patterns.TYPE_START_BRACE.match(code)
        if m:
            opened = TypeContext(
                kind=m.group(2),
                is_typedef=bool(m.group(1)),
                tag=m.group(3),
                tag_line=index + 1,
                tag_column=m.start(3) if m.group(3) else 0,
                stack_depth=self.ctx.depth,
            )
            close = code.rfind("}")
            if close > m.end() - 1:
                return self._one_line(index, code, m.end(), close, opened)
            self.ctx.type_stack.append(opened)
            logger.debug("%s context opened at line %d", opened.kind, index + 1)
            return None

        current = self.ctx.current_type
        if current is not None and stripped.startswith("}") and self.ctx.depth == current.stack_depth - 1:
            self.ctx.type_stack.pop()
            m = patterns.TYPE_CLOSE.match(code)
            if m is None:
                # attributes and other declarator forms: close without name checks
                logger.debug("%s context closed at line %d", current.kind, index + 1)
                return []
            return self._closing(index, code, m, current)
        return None

    def _push(self, kind, is_typedef, tag, tag_line, tag_column):
        self.ctx.type_stack.append(TypeContext(
            kind=kind,
            is_typedef=is_typedef,
            tag=tag,
            tag_line=tag_line,
            tag_column=tag_column,
            stack_depth=self.ctx.depth,
        ))

    def _one_line(self, index: int, code: str, body_start: int, close: int,
                  opened: TypeContext) -> List[Diagnostic]:
        line_no = index + 1
        diagnostics: List[Diagnostic] = []
        separator = "," if opened.is_enum else ";"
        pos = body_start
        for part in code[body_start:close].split(separator):
            if part.strip():
                text = part if opened.is_enum else part + ";"
                diagnostics.extend(
                    f.to_diagnostic(line_no) for f in member_findings(opened.kind, text, pos))
            pos += len(part) + 1
        closing = " " * close + code[close:]
        m = patterns.TYPE_CLOSE.match(closing)
        if m is not None:
            diagnostics.extend(self._closing(index, closing, m, opened))
        return diagnostics

    def _closing(self, index: int, code: str, m, closed: TypeContext) -> List[Diagnostic]:
        line_no = index + 1
        diagnostics: List[Diagnostic] = []
        brace = code.index("}")
        name = m.group(1)

        if name and m.start(1) == brace + 1:
            diagnostics.append(make_diagnostic(ErrorKind.SPACE_AFTER_CLOSING_BRACE, line_no, brace + 1, 1))

        if closed.is_typedef:
            if not name:
                diagnostics.append(make_diagnostic(
                    ErrorKind.TYPEDEF_NAME_MISSING, line_no, brace, 1, closed.kind))
            elif not patterns.SNAKE_TYPEDEF.match(name):
                diagnostics.append(make_diagnostic(
                    ErrorKind.TYPEDEF_TYPE_NAME, line_no, m.start(1), len(name), closed.kind, name))
        elif name:
            if not patterns.SNAKE.match(name):
                diagnostics.append(make_diagnostic(
                    ErrorKind.INSTANCE_NOT_SNAKE, line_no, m.start(1), len(name), closed.kind, name))
            if name.endswith("_t"):
                diagnostics.append(make_diagnostic(
                    ErrorKind.INSTANCE_ENDS_WITH_T, line_no, m.start(1), len(name), closed.kind, name))

        if closed.tag and not patterns.CAMEL.match(closed.tag):
            diagnostics.append(make_diagnostic(
                ErrorKind.TYPE_TAG_NOT_CAMEL, closed.tag_line, closed.tag_column, len(closed.tag),
                closed.kind, closed.tag))
        logger.debug("%s context closed at line %d", closed.kind, line_no)
        return diagnostics
