"""
Pointer/operator classification.

A ``*`` is a pointer marker when it falls inside one of the pointer-shaped
spans found on the line; every other ``*`` is multiplication and has to obey
the operator spacing rule like ``+`` or ``==``.
"""

from typing import List, Tuple

from .. import patterns
from ..rules import ErrorKind, Finding

Span = Tuple[int, int]

# Characters after which +, - and * are unary.
_UNARY_CONTEXT = set("([{,;=!~?:&|^<>+-*/%")
_ALWAYS_EXEMPT = ("++", "--", "->", "?", ":")


def pointer_ranges(code: str) -> List[Span]:
    spans: List[Span] = []
    for regex in patterns.POINTER_MARKERS:
        spans.extend(m.span() for m in regex.finditer(code))
    return spans


def in_ranges(spans: List[Span], start: int, end: int) -> bool:
    return any(s <= start and end <= e for s, e in spans)


def _previous_token(code: str, index: int) -> Tuple[str, str]:
    """Return (previous non-space char, text before it) for ``code[:index]``."""
    before = code[:index].rstrip()
    if not before:
        return "", ""
    return before[-1], before


def is_unary(code: str, start: int, op: str) -> bool:
    if op not in ("+", "-", "*"):
        return False
    prev, before = _previous_token(code, start)
    if not prev:
        return True
    if prev in _UNARY_CONTEXT:
        return True
    if patterns.UNARY_KEYWORD_BEFORE.search(before):
        return True
    # 1e-5, 2.5E+3
    if op in ("+", "-") and patterns.EXPONENT_BEFORE.search(code[:start]):
        return True
    return False


def operator_findings(code: str) -> List[Finding]:
    """Spacing around binary operators; ``code`` is the masked line."""
    findings: List[Finding] = []
    spans = pointer_ranges(code)
    for m in patterns.OPERATOR.finditer(code):
        op = m.group(0)
        start, end = m.span()
        if op in _ALWAYS_EXEMPT:
            continue
        if op == "*" and in_ranges(spans, start, end):
            continue
        if is_unary(code, start, op):
            continue
        if start > 0 and not code[start - 1].isspace():
            findings.append(Finding(ErrorKind.OPERATOR_SPACE_BEFORE, start, len(op), (op,)))
        if end < len(code) and not code[end].isspace():
            findings.append(Finding(ErrorKind.OPERATOR_SPACE_AFTER, start, len(op), (op,)))
    return findings


def pointer_format_findings(code: str) -> List[Finding]:
    findings: List[Finding] = []
    for regex in (patterns.POINTER_TYPE_STAR_ATTACHED, patterns.POINTER_SPACED_DECL):
        for m in regex.finditer(code):
            findings.append(Finding(ErrorKind.POINTER_FORMAT, m.start(), m.end() - m.start()))
    for m in patterns.POINTER_CAST_DETACHED.finditer(code):
        findings.append(Finding(ErrorKind.POINTER_CAST_DETACHED, m.start(), m.end() - m.start()))
    return findings
