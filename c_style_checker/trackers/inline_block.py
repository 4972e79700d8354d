"""
One-line control statements: ``if (x) { y(); }`` and ``if (x) y();``.

Such a line is validated as a whole and then left out of the brace/indent
bookkeeping: it neither pushes nor pops a frame.
"""

from dataclasses import dataclass
from typing import List, Optional

from .. import patterns
from ..rules import ErrorKind, Finding


@dataclass
class ControlSplit:
    keyword: str
    keyword_end: int
    paren_open: Optional[int]
    paren_close: Optional[int]
    body_start: int


def split_control(code: str) -> Optional[ControlSplit]:
    """Locate keyword, condition parens and body start in a control line.

    Returns None when the line does not start with a control keyword or the
    condition parenthesis is not closed on this line.
    """
    offset = len(code) - len(code.lstrip())
    text = code[offset:]
    m = patterns.INLINE_KEYWORD.match(text)
    if not m:
        return None
    keyword = " ".join(m.group(1).split())
    keyword_end = offset + m.end()
    if keyword in ("else", "do"):
        return ControlSplit(keyword, keyword_end, None, None, keyword_end)
    open_pos = code.find("(", keyword_end)
    if open_pos < 0 or code[keyword_end:open_pos].strip():
        return None
    depth = 0
    for pos in range(open_pos, len(code)):
        ch = code[pos]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return ControlSplit(keyword, keyword_end, open_pos, pos, pos + 1)
    return None


def is_inline_control(code: str) -> bool:
    """True for a control statement carrying its whole body on this line."""
    split = split_control(code)
    if split is None:
        return False
    body = code[split.body_start:].strip()
    if not body:
        return False
    if body.startswith("{"):
        return body.endswith("}") and body.count("{") == body.count("}")
    if "{" in body or "}" in body:
        return False
    if split.keyword == "else" and patterns.INLINE_KEYWORD.match(body):
        return is_inline_control(body)
    return body.endswith(";")


class InlineBlockValidator:
    """Rules for a single-line control statement."""

    def check(self, code: str) -> List[Finding]:
        split = split_control(code)
        if split is None:
            return []
        findings: List[Finding] = []

        if split.paren_close is not None:
            after = split.paren_close + 1
            if after < len(code) and not code[after].isspace():
                findings.append(Finding(ErrorKind.INLINE_SPACE_AFTER_PAREN, after, 1))

        open_brace = code.find("{", split.body_start)
        if open_brace >= 0:
            close_brace = code.rfind("}")
            inner_offset = open_brace + 1
            inner = code[inner_offset:close_brace]
            if inner == "":
                findings.append(Finding(ErrorKind.INLINE_EMPTY_BRACES, open_brace, 2))
                return findings
            if not inner[0].isspace():
                findings.append(Finding(ErrorKind.SPACE_AFTER_OPENING_BRACE, inner_offset, 1))
            if not inner[-1].isspace():
                findings.append(Finding(ErrorKind.SPACE_BEFORE_CLOSING_BRACE, close_brace - 1, 1))
            nested = min((i for i in (inner.find("{"), inner.find("}")) if i >= 0), default=-1)
            if nested >= 0:
                findings.append(Finding(ErrorKind.INLINE_NESTED_BRACES, inner_offset + nested, 1))
        else:
            inner_offset = split.body_start
            inner = code[inner_offset:].rstrip()

        if inner.strip():
            statements = [part for part in inner.split(";") if part.strip()]
            if len(statements) != 1:
                findings.append(
                    Finding(ErrorKind.INLINE_ONE_STATEMENT, inner_offset, len(inner)))

        inner_control = patterns.INNER_CONTROL.search(inner)
        if inner_control:
            findings.append(Finding(
                ErrorKind.INLINE_CONTROL_STATEMENT,
                inner_offset + inner_control.start(),
                inner_control.end() - inner_control.start(),
            ))
        return findings
