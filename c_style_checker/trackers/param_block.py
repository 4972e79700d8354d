"""
Multi-line parameter and argument lists.

A line that opens more parentheses than it closes and ends with ``,``
starts a block. Every continuation line is aligned just past the opening
parenthesis (rounded to the indent unit) and ends with ``,`` until the
parentheses balance again.
"""

import re
from typing import List, Optional

from .. import patterns
from ..context import INDENT_UNIT, ParamBlockState, ScannerContext
from ..rules import ErrorKind, Finding
from ..utils import get_indent

_PARAM_NAME = re.compile(r"(" + patterns.IDENT + r")\s*(?:\[[^\]]*\]\s*)*$")


def opens_param_block(code: str) -> bool:
    stripped = code.strip()
    return "(" in code and stripped.endswith(",") and code.count("(") > code.count(")")


def declaration_match(code: str, regex=patterns.FUNC_HEADER) -> Optional[re.Match]:
    """Match a function header (``type name(``) whose prefix is not a statement."""
    m = regex.match(code)
    if not m:
        return None
    words = re.findall(patterns.IDENT, m.group(1))
    if not words or any(w in patterns.STATEMENT_KEYWORDS for w in words):
        return None
    if m.group(2) in patterns.C_KEYWORDS:
        return None
    return m


def is_bare_return_type(code: str) -> bool:
    """True for a line holding only a return type, e.g. ``static int``."""
    text = code.strip()
    if not patterns.ONLY_TYPE.match(text):
        return False
    return text.split()[0].rstrip("*") not in patterns.STATEMENT_KEYWORDS


def function_name_findings(name: str, column: int, space: str) -> List[Finding]:
    findings: List[Finding] = []
    if space:
        findings.append(Finding(ErrorKind.FUNCTION_NAME_SPACE_BEFORE_PAREN, column + len(name), len(space)))
    if name != "main" and not patterns.MODULE_CAMEL.match(name):
        findings.append(Finding(ErrorKind.FUNCTION_NAME_NOT_MODULE_CAMEL, column, len(name), (name,)))
    return findings


def param_name_findings(code: str, start: int, end: int) -> List[Finding]:
    """Check every parameter declared in ``code[start:end]``."""
    findings: List[Finding] = []
    pos = start
    for chunk in code[start:end].split(","):
        chunk_start = pos
        pos += len(chunk) + 1
        text = chunk.strip()
        if not text or text in ("void", "...") or "(" in text or ")" in text:
            continue
        # an unnamed parameter is a single type word, or ends with '*'
        if len(text.replace("*", " * ").split()) < 2:
            continue
        m = _PARAM_NAME.search(text)
        if not m:
            continue
        name = m.group(1)
        if name in patterns.C_KEYWORDS or name.endswith("_t"):
            continue
        if not patterns.SNAKE.match(name):
            column = chunk_start + chunk.find(text) + m.start(1)
            findings.append(Finding(ErrorKind.PARAM_NAME_NOT_SNAKE, column, len(name), (name,)))
    return findings


class ParamBlockTracker:
    """Drives ``ScannerContext.param_block``."""

    def __init__(self, ctx: ScannerContext):
        self.ctx = ctx

    def open(self, code: str, base_indent: int, prev_code: str = "") -> List[Finding]:
        findings: List[Finding] = []
        decl = declaration_match(code)
        split_name = None
        if decl is None and prev_code and is_bare_return_type(prev_code):
            split_name = patterns.FUNC_NAME_ONLY.match(code)
        if decl is not None:
            findings.extend(function_name_findings(decl.group(2), decl.start(2), decl.group(3)))
            findings.extend(param_name_findings(code, decl.end(), len(code)))
        elif split_name is not None:
            name = split_name.group(1)
            space = code[split_name.end(1):code.index("(", split_name.end(1))]
            findings.extend(function_name_findings(name, split_name.start(1), space))
            findings.extend(param_name_findings(code, code.index("(") + 1, len(code)))

        paren = code.index("(")
        self.ctx.param_block = ParamBlockState(
            required_indent=((paren + 2) // INDENT_UNIT) * INDENT_UNIT,
            base_indent=base_indent,
            depth=code.count("(") - code.count(")"),
            is_definition=(decl is not None or split_name is not None) and self.ctx.depth == 0,
            is_control=bool(patterns.BRACE_CONTROL.match(code.strip())),
        )
        return findings

    def continue_block(self, raw: str, code: str) -> List[Finding]:
        block = self.ctx.param_block
        findings: List[Finding] = []
        indent = get_indent(raw)
        stripped = code.strip()
        if indent != block.required_indent:
            findings.append(Finding(
                ErrorKind.PARAM_LINE_INDENT, 0, len(raw) - len(raw.lstrip()),
                (block.required_indent, indent),
            ))
        block.depth += code.count("(") - code.count(")")
        closed = block.depth <= 0
        if block.is_definition:
            end = len(code)
            if closed:
                end = code.rfind(")")
            findings.extend(param_name_findings(code, 0, end))
        if not closed:
            if not stripped.endswith(","):
                findings.append(Finding(ErrorKind.PARAM_LINE_NO_COMMA, max(len(code.rstrip()) - 1, 0), 1))
            return findings

        self.ctx.param_block = None
        if stripped.endswith("{"):
            if block.is_definition:
                findings.append(Finding(ErrorKind.FUNCTION_BRACE_OWN_LINE, code.rfind("{"), 1))
            self.ctx.push(block.base_indent + INDENT_UNIT)
        elif block.is_control and not stripped.endswith(";"):
            self.ctx.next_indent = block.base_indent + INDENT_UNIT
        return findings
