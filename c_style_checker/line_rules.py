"""
Per-line rule table.

Every rule is a plain function registered with the phase it runs in and the
error kinds it can emit. The line checker runs a whole phase at once:

- RAW rules see every non-blank line, comments included.
- CONTENT rules see the literal-masked text of every code line.
- STATEMENT rules run last, once the trackers have updated the scanner
  context, and may consult it (type context, style, neighbouring lines).
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from . import patterns
from .context import ScannerContext, StyleMode
from .masker import MaskedLine
from .rules import ErrorKind, Finding
from .trackers.param_block import (
    declaration_match,
    function_name_findings,
    is_bare_return_type,
    param_name_findings,
)
from .trackers.pointers import operator_findings, pointer_format_findings
from .trackers.type_context import member_findings
from .utils import get_indent, leading_whitespace


class Phase(Enum):
    RAW = "raw"
    CONTENT = "content"
    STATEMENT = "statement"


@dataclass
class LineView:
    """What a rule may look at for the line being checked."""
    index: int
    line: MaskedLine
    ctx: ScannerContext
    lines: List[MaskedLine]

    @property
    def raw(self) -> str:
        return self.line.raw

    @property
    def masked(self) -> str:
        return self.line.masked

    @property
    def code(self) -> str:
        return self.line.code

    @property
    def stripped(self) -> str:
        return self.line.stripped

    @property
    def indent(self) -> int:
        return get_indent(self.line.raw)

    @property
    def is_define(self) -> bool:
        return bool(patterns.DEFINE.match(self.code))

    @property
    def is_preprocessor(self) -> bool:
        return self.stripped.startswith("#")

    @property
    def is_case_or_label(self) -> bool:
        return bool(patterns.CASE_LABEL.match(self.code) or patterns.LABEL.match(self.code))

    def prev_code_line(self) -> Optional[MaskedLine]:
        for j in range(self.index - 1, -1, -1):
            if self.lines[j].has_code:
                return self.lines[j]
        return None

    def next_code_line(self) -> Optional[MaskedLine]:
        for j in range(self.index + 1, len(self.lines)):
            if self.lines[j].has_code:
                return self.lines[j]
        return None

    @property
    def prev_code(self) -> str:
        prev = self.prev_code_line()
        return prev.code if prev else ""


@dataclass(frozen=True)
class LineRule:
    name: str
    phase: Phase
    kinds: Tuple[ErrorKind, ...]
    check: Callable[[LineView], Iterable[Finding]]


RULES: List[LineRule] = []


def line_rule(phase: Phase, *kinds: ErrorKind):
    def register(func):
        RULES.append(LineRule(func.__name__, phase, kinds, func))
        return func
    return register


def rules_for(phase: Phase) -> List[LineRule]:
    return [rule for rule in RULES if rule.phase is phase]


def run_rules(phase: Phase, view: LineView) -> List[Finding]:
    findings: List[Finding] = []
    for rule in rules_for(phase):
        findings.extend(rule.check(view))
    return findings


def _spans(regex, text: str, kind: ErrorKind, group: int = 0) -> List[Finding]:
    return [Finding(kind, m.start(group), m.end(group) - m.start(group)) for m in regex.finditer(text)]


# --- raw -----------------------------------------------------------------


@line_rule(Phase.RAW, ErrorKind.LINE_TOO_LONG)
def line_length(view: LineView):
    limit = view.ctx.max_line_length
    length = len(view.raw)
    if length > limit:
        return [Finding(ErrorKind.LINE_TOO_LONG, limit, length - limit, (limit, length))]
    return []


@line_rule(Phase.RAW, ErrorKind.TRAILING_WHITESPACE)
def trailing_whitespace(view: LineView):
    return _spans(patterns.TRAILING_WHITESPACE, view.raw, ErrorKind.TRAILING_WHITESPACE)


@line_rule(Phase.RAW, ErrorKind.TODO_COMMENT)
def todo_comment(view: LineView):
    findings = []
    for column, text in view.line.comments:
        m = patterns.TODO.search(text)
        if m:
            findings.append(Finding(ErrorKind.TODO_COMMENT, column + m.start(), m.end() - m.start()))
    return findings


# --- content -------------------------------------------------------------


@line_rule(Phase.CONTENT, ErrorKind.SPACE_BEFORE_SEMICOLON)
def semicolon_space(view: LineView):
    return _spans(patterns.SEMICOLON_SPACE, view.masked, ErrorKind.SPACE_BEFORE_SEMICOLON)


@line_rule(Phase.CONTENT, ErrorKind.SPACE_INSIDE_PARENS)
def paren_space(view: LineView):
    return _spans(patterns.BAD_PAREN_SPACE, view.masked, ErrorKind.SPACE_INSIDE_PARENS)


@line_rule(Phase.CONTENT, ErrorKind.SPACE_INSIDE_BRACKETS)
def bracket_space(view: LineView):
    return _spans(patterns.BAD_BRACKET_SPACE, view.masked, ErrorKind.SPACE_INSIDE_BRACKETS)


@line_rule(Phase.CONTENT, ErrorKind.COMMA_SPACING)
def comma_spacing(view: LineView):
    return _spans(patterns.BAD_COMMA, view.masked, ErrorKind.COMMA_SPACING)


@line_rule(Phase.CONTENT, ErrorKind.MULTIPLE_SPACES)
def multiple_spaces(view: LineView):
    return _spans(patterns.MULTI_SPACE, view.masked, ErrorKind.MULTIPLE_SPACES, group=1)


@line_rule(Phase.CONTENT, ErrorKind.POINTER_FORMAT, ErrorKind.POINTER_CAST_DETACHED)
def pointer_format(view: LineView):
    return pointer_format_findings(view.masked)


@line_rule(Phase.CONTENT, ErrorKind.OPERATOR_SPACE_BEFORE, ErrorKind.OPERATOR_SPACE_AFTER)
def operator_spacing(view: LineView):
    return operator_findings(view.masked)


@line_rule(Phase.CONTENT,
           ErrorKind.TERNARY_QUESTION_SPACE_BEFORE, ErrorKind.TERNARY_QUESTION_SPACE_AFTER,
           ErrorKind.TERNARY_COLON_SPACE_BEFORE, ErrorKind.TERNARY_COLON_SPACE_AFTER)
def ternary_spacing(view: LineView):
    text = view.masked
    findings = []
    checks = [("?", ErrorKind.TERNARY_QUESTION_SPACE_BEFORE, ErrorKind.TERNARY_QUESTION_SPACE_AFTER)]
    if not view.is_case_or_label:
        checks.append((":", ErrorKind.TERNARY_COLON_SPACE_BEFORE, ErrorKind.TERNARY_COLON_SPACE_AFTER))
    for char, before, after in checks:
        for pos, ch in enumerate(text):
            if ch != char:
                continue
            if pos > 0 and not text[pos - 1].isspace():
                findings.append(Finding(before, pos, 1))
            if pos + 1 < len(text) and not text[pos + 1].isspace():
                findings.append(Finding(after, pos, 1))
    return findings


@line_rule(Phase.CONTENT, ErrorKind.KEYWORD_SPACE_BEFORE_PAREN)
def keyword_space_before_paren(view: LineView):
    return _spans(patterns.KEYWORD_NO_SPACE, view.masked, ErrorKind.KEYWORD_SPACE_BEFORE_PAREN, group=1)


@line_rule(Phase.CONTENT, ErrorKind.MAGIC_NUMBER)
def magic_number(view: LineView):
    if view.is_define or view.ctx.in_enum or re.search(r"\benum\b", view.code):
        return []
    findings = []
    for m in patterns.MAGIC_NUMBER.finditer(view.masked):
        if int(m.group(1)) >= 2:
            findings.append(Finding(ErrorKind.MAGIC_NUMBER, m.start(1), len(m.group(1)), (m.group(1),)))
    return findings


@line_rule(Phase.CONTENT, ErrorKind.INSECURE_FUNCTION)
def insecure_function(view: LineView):
    findings = []
    for m in patterns.UNSAFE_CALL.finditer(view.masked):
        name = m.group(1)
        findings.append(Finding(
            ErrorKind.INSECURE_FUNCTION, m.start(1), len(name),
            (name, patterns.UNSAFE_FUNCTIONS[name])))
    return findings


@line_rule(Phase.CONTENT, ErrorKind.ALLOC_NOT_CAST)
def alloc_cast(view: LineView):
    findings = []
    for m in patterns.ALLOC_CALL.finditer(view.masked):
        if not patterns.CAST_SUFFIX.search(view.masked[:m.start()]):
            findings.append(Finding(ErrorKind.ALLOC_NOT_CAST, m.start(1), len(m.group(1)), (m.group(1),)))
    return findings


@line_rule(Phase.CONTENT, ErrorKind.SPACE_BEFORE_CALL_PAREN)
def call_space(view: LineView):
    if view.is_preprocessor:
        return []
    declared = declaration_match(view.code) or declaration_match(view.code, patterns.FUNC_DECL)
    findings = []
    for m in patterns.IDENT_SPACE_PAREN.finditer(view.masked):
        name = m.group(1)
        if name in patterns.C_KEYWORDS or name.endswith("_t"):
            continue
        if declared is not None and declared.start(2) == m.start(1):
            continue
        findings.append(Finding(ErrorKind.SPACE_BEFORE_CALL_PAREN, m.start(1), len(name)))
    return findings


@line_rule(Phase.CONTENT, ErrorKind.NON_ASCII_CHARACTER)
def non_ascii(view: LineView):
    code = view.code
    for pos, ch in enumerate(view.raw):
        if ord(ch) > 127 and pos < len(code) and code[pos] != " ":
            return [Finding(ErrorKind.NON_ASCII_CHARACTER, pos, 1, (ord(ch),))]
    return []


@line_rule(Phase.CONTENT,
           ErrorKind.MACRO_NAME_NOT_SCREAMING, ErrorKind.MACRO_PARAM_NOT_SNAKE,
           ErrorKind.MACRO_BODY_NO_SPACE, ErrorKind.MACRO_BODY_NOT_PARENTHESIZED,
           ErrorKind.MACRO_BODY_IDENT_NOT_SNAKE)
def macro_definition(view: LineView):
    code = view.code
    m = patterns.DEFINE.match(code)
    if not m:
        return []
    findings = []
    name = m.group(1)
    if not patterns.SCREAMING_SNAKE.match(name):
        findings.append(Finding(ErrorKind.MACRO_NAME_NOT_SCREAMING, m.start(1), len(name), (name,)))

    fm = patterns.FUNC_MACRO.match(code)
    if not fm:
        return findings

    params = []
    pos = fm.start(2)
    for chunk in fm.group(2).split(","):
        param = chunk.strip()
        if param and param != "...":
            params.append(param)
            if not patterns.SNAKE.match(param):
                column = pos + chunk.find(param)
                findings.append(Finding(ErrorKind.MACRO_PARAM_NOT_SNAKE, column, len(param), (param,)))
        pos += len(chunk) + 1

    if patterns.MACRO_NO_SPACE.match(code):
        findings.append(Finding(ErrorKind.MACRO_BODY_NO_SPACE, fm.end(2), 1))

    body = fm.group(3).strip()
    if body and not body.endswith("\\") and not (body.startswith("(") and body.endswith(")")):
        findings.append(Finding(
            ErrorKind.MACRO_BODY_NOT_PARENTHESIZED, code.index(body, fm.start(3)), len(body)))

    body_text = fm.group(3)
    for im in re.finditer(patterns.IDENT, body_text):
        ident = im.group(0)
        if ident == name or ident in params or ident in patterns.C_KEYWORDS:
            continue
        if ident.startswith("__") or patterns.SCREAMING_SNAKE.match(ident):
            continue
        if body_text[im.end():].lstrip().startswith("("):
            continue
        if im.start() > 0 and body_text[im.start() - 1].isdigit():
            continue
        if not patterns.SNAKE.match(ident):
            findings.append(Finding(
                ErrorKind.MACRO_BODY_IDENT_NOT_SNAKE, fm.start(3) + im.start(), len(ident), (ident,)))
    return findings


# --- statement -----------------------------------------------------------


def function_match(code: str):
    """Single-line function prototype or definition header."""
    return declaration_match(code, patterns.FUNC_DECL)


@line_rule(Phase.STATEMENT,
           ErrorKind.FUNCTION_NAME_NOT_MODULE_CAMEL, ErrorKind.FUNCTION_NAME_SPACE_BEFORE_PAREN,
           ErrorKind.PARAM_NAME_NOT_SNAKE, ErrorKind.FUNCTION_BRACE_OWN_LINE)
def function_declaration(view: LineView):
    code = view.code
    m = function_match(code)
    if m:
        findings = function_name_findings(m.group(2), m.start(2), m.group(3))
        findings.extend(param_name_findings(code, m.start(4), m.end(4)))
        if m.group(5) == "{":
            findings.append(Finding(ErrorKind.FUNCTION_BRACE_OWN_LINE, m.start(5), 1))
        return findings

    # name on the line after a bare return type
    split = patterns.FUNC_NAME_ONLY.match(code)
    if split and is_bare_return_type(view.prev_code) and split.group(1) not in patterns.C_KEYWORDS:
        name = split.group(1)
        paren = code.index("(", split.end(1))
        findings = function_name_findings(name, split.start(1), code[split.end(1):paren])
        close = code.rfind(")")
        if close > paren:
            findings.extend(param_name_findings(code, paren + 1, close))
        if view.stripped.endswith("{"):
            findings.append(Finding(ErrorKind.FUNCTION_BRACE_OWN_LINE, code.rfind("{"), 1))
        return findings
    return []


@line_rule(Phase.STATEMENT, ErrorKind.RETURN_TYPE_SEPARATE_LINE)
def return_type_line(view: LineView):
    if not is_bare_return_type(view.code):
        return []
    nxt = view.next_code_line()
    if nxt is None or not patterns.FUNC_NAME_ONLY.match(nxt.code):
        return []
    start = leading_whitespace(view.raw)
    return [Finding(ErrorKind.RETURN_TYPE_SEPARATE_LINE, start, len(view.stripped))]


@line_rule(Phase.STATEMENT, ErrorKind.KR_ELSE_SAME_LINE)
def kr_else(view: LineView):
    if view.ctx.style is not StyleMode.KR or not re.match(r"else\b", view.stripped):
        return []
    prev = view.prev_code_line()
    if prev is None or prev.stripped != "}":
        return []
    return [Finding(ErrorKind.KR_ELSE_SAME_LINE, view.code.index("else"), len("else"))]


@line_rule(Phase.STATEMENT, ErrorKind.KR_SPACE_BEFORE_BRACE, ErrorKind.KR_BRACE_SAME_LINE)
def kr_brace(view: LineView):
    if view.ctx.style is not StyleMode.KR:
        return []
    findings = []
    code = view.code
    if patterns.CONTROL_START.match(view.stripped):
        for m in re.finditer(r"(?:\)|\belse)\{", code):
            findings.append(Finding(ErrorKind.KR_SPACE_BEFORE_BRACE, m.end() - 1, 1))
    if view.stripped == "{":
        prev = view.prev_code_line()
        if prev is not None and not prev.stripped.endswith(";"):
            pm = patterns.CONTROL_START.match(prev.stripped)
            if pm:
                findings.append(Finding(ErrorKind.KR_BRACE_SAME_LINE, code.index("{"), 1, (pm.group(1),)))
    return findings


@line_rule(Phase.STATEMENT, ErrorKind.ALLMAN_BRACE_OWN_LINE)
def allman_brace(view: LineView):
    if view.ctx.style is not StyleMode.ALLMAN:
        return []
    m = patterns.CONTROL_START.match(view.stripped)
    if not m or not view.stripped.endswith("{"):
        return []
    return [Finding(ErrorKind.ALLMAN_BRACE_OWN_LINE, view.code.rfind("{"), 1, (m.group(1),))]


@line_rule(Phase.STATEMENT, ErrorKind.CLOSING_BRACE_OWN_LINE)
def closing_brace_own_line(view: LineView):
    text = view.stripped
    if text.startswith("}") or text.count("}") <= text.count("{"):
        return []
    return [Finding(ErrorKind.CLOSING_BRACE_OWN_LINE, view.code.index("}"), 1)]


def _declaration_words(m) -> List[str]:
    return re.findall(patterns.IDENT, m.group(1))


def _is_statement(words: List[str]) -> bool:
    return any(w in patterns.STATEMENT_KEYWORDS for w in words)


@line_rule(Phase.STATEMENT, ErrorKind.UNINITIALIZED_DECLARATION)
def uninitialized_declaration(view: LineView):
    if view.ctx.current_type is not None:
        return []
    m = patterns.UNINIT_DECL.match(view.code)
    if not m:
        return []
    return [Finding(ErrorKind.UNINITIALIZED_DECLARATION, m.start(1), len(m.group(1)), (m.group(1),))]


@line_rule(Phase.STATEMENT, ErrorKind.VARIABLE_ENDS_WITH_T, ErrorKind.VARIABLE_NOT_SNAKE)
def variable_naming(view: LineView):
    if view.ctx.current_type is not None or view.stripped.startswith("typedef"):
        return []
    m = patterns.VAR_DECL.match(view.code)
    if not m or _is_statement(_declaration_words(m)):
        return []
    name = m.group(2)
    if name.endswith("_t"):
        return [Finding(ErrorKind.VARIABLE_ENDS_WITH_T, m.start(2), len(name), (name,))]
    if not patterns.SNAKE.match(name):
        return [Finding(ErrorKind.VARIABLE_NOT_SNAKE, m.start(2), len(name), (name,))]
    return []


@line_rule(Phase.STATEMENT, ErrorKind.MULTIPLE_DECLARATIONS)
def multiple_declarations(view: LineView):
    if view.stripped.startswith("typedef"):
        return []
    m = patterns.MULTI_VAR_DECL.match(view.code)
    if not m:
        return []
    words = re.findall(patterns.IDENT, view.code[:m.end()])
    if _is_statement(words):
        return []
    return [Finding(ErrorKind.MULTIPLE_DECLARATIONS, m.end() - 1, 1)]


@line_rule(Phase.STATEMENT, ErrorKind.TYPEDEF_FUNC_PTR_NAME, ErrorKind.TYPEDEF_ALIAS_NAME)
def typedef_names(view: LineView):
    code = view.code
    if not view.stripped.startswith("typedef") or "{" in code or "}" in code:
        return []
    m = patterns.TYPEDEF_FUNC_PTR.match(code)
    kind = ErrorKind.TYPEDEF_FUNC_PTR_NAME
    if m is None:
        m = patterns.TYPEDEF_ALIAS.match(code)
        kind = ErrorKind.TYPEDEF_ALIAS_NAME
    if m is None or patterns.SNAKE_TYPEDEF.match(m.group(1)):
        return []
    return [Finding(kind, m.start(1), len(m.group(1)), (m.group(1),))]


@line_rule(Phase.STATEMENT, ErrorKind.ENUM_ELEMENT_NOT_SCREAMING, ErrorKind.FIELD_NAME_NOT_SNAKE)
def type_members(view: LineView):
    current = view.ctx.current_type
    if current is None:
        return []
    if patterns.TYPE_START.match(view.code) or patterns.TYPE_START_BRACE.match(view.code):
        return []
    return member_findings(current.kind, view.code)
