"""
Error catalog: every diagnostic kind with its fixed severity and message template.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Tuple

from .issue import Diagnostic, Severity


class ErrorKind(Enum):
    """All diagnostic kinds the checker can emit."""
    # file level
    RECURSIVE_INCLUSION = auto()
    SYSTEM_INCLUDES_FIRST = auto()
    SYSTEM_INCLUDES_UNSORTED = auto()
    PROJECT_INCLUDES_UNSORTED = auto()
    INCLUDE_INDENTED = auto()
    PRAGMA_ONCE_AND_GUARD = auto()
    MISSING_HEADER_GUARD = auto()
    MISSING_EOF_NEWLINE = auto()
    TRAILING_BLANK_LINES = auto()
    MISSING_BLANK_AFTER_FUNCTION = auto()
    TOO_MANY_BLANKS_BETWEEN_FUNCTIONS = auto()
    POINTER_COULD_BE_CONST = auto()
    # whitespace and layout
    LINE_TOO_LONG = auto()
    TOO_MANY_BLANK_LINES = auto()
    BLANK_LINE_INDENTED = auto()
    TRAILING_WHITESPACE = auto()
    NON_ASCII_CHARACTER = auto()
    TODO_COMMENT = auto()
    INDENTATION_MISMATCH = auto()
    # spacing
    SPACE_BEFORE_SEMICOLON = auto()
    SPACE_INSIDE_PARENS = auto()
    SPACE_INSIDE_BRACKETS = auto()
    COMMA_SPACING = auto()
    MULTIPLE_SPACES = auto()
    OPERATOR_SPACE_BEFORE = auto()
    OPERATOR_SPACE_AFTER = auto()
    TERNARY_QUESTION_SPACE_BEFORE = auto()
    TERNARY_QUESTION_SPACE_AFTER = auto()
    TERNARY_COLON_SPACE_BEFORE = auto()
    TERNARY_COLON_SPACE_AFTER = auto()
    KEYWORD_SPACE_BEFORE_PAREN = auto()
    SPACE_BEFORE_CALL_PAREN = auto()
    FUNCTION_NAME_SPACE_BEFORE_PAREN = auto()
    # pointers and allocation
    POINTER_FORMAT = auto()
    POINTER_CAST_DETACHED = auto()
    ALLOC_NOT_CAST = auto()
    # safety
    INSECURE_FUNCTION = auto()
    MAGIC_NUMBER = auto()
    # macros
    MACRO_NAME_NOT_SCREAMING = auto()
    MACRO_PARAM_NOT_SNAKE = auto()
    MACRO_BODY_IDENT_NOT_SNAKE = auto()
    MACRO_BODY_NO_SPACE = auto()
    MACRO_BODY_NOT_PARENTHESIZED = auto()
    # functions and parameters
    FUNCTION_NAME_NOT_MODULE_CAMEL = auto()
    PARAM_NAME_NOT_SNAKE = auto()
    PARAM_LINE_INDENT = auto()
    PARAM_LINE_NO_COMMA = auto()
    RETURN_TYPE_SEPARATE_LINE = auto()
    FUNCTION_BRACE_OWN_LINE = auto()
    # labels
    LABEL_INDENTED = auto()
    LABEL_NOT_SNAKE = auto()
    COLON_NOT_ATTACHED = auto()
    # braces
    ALLMAN_BRACE_OWN_LINE = auto()
    KR_SPACE_BEFORE_BRACE = auto()
    KR_BRACE_SAME_LINE = auto()
    KR_ELSE_SAME_LINE = auto()
    CLOSING_BRACE_OWN_LINE = auto()
    SPACE_AFTER_CLOSING_BRACE = auto()
    # switch / case
    CASE_BLOCK_BRACES = auto()
    CASE_MISSING_BREAK = auto()
    # inline blocks
    INLINE_EMPTY_BRACES = auto()
    INLINE_NESTED_BRACES = auto()
    INLINE_ONE_STATEMENT = auto()
    INLINE_CONTROL_STATEMENT = auto()
    INLINE_SPACE_AFTER_PAREN = auto()
    SPACE_AFTER_OPENING_BRACE = auto()
    SPACE_BEFORE_CLOSING_BRACE = auto()
    # types and declarations
    INSTANCE_NOT_SNAKE = auto()
    INSTANCE_ENDS_WITH_T = auto()
    TYPE_TAG_NOT_CAMEL = auto()
    TYPEDEF_TYPE_NAME = auto()
    TYPEDEF_NAME_MISSING = auto()
    TYPEDEF_FUNC_PTR_NAME = auto()
    TYPEDEF_ALIAS_NAME = auto()
    ENUM_ELEMENT_NOT_SCREAMING = auto()
    FIELD_NAME_NOT_SNAKE = auto()
    UNINITIALIZED_DECLARATION = auto()
    VARIABLE_ENDS_WITH_T = auto()
    VARIABLE_NOT_SNAKE = auto()
    MULTIPLE_DECLARATIONS = auto()


@dataclass(frozen=True)
class ErrorInfo:
    severity: Severity
    template: str


_E = Severity.ERROR
_W = Severity.WARNING

ERROR_INFOS: Dict[ErrorKind, ErrorInfo] = {
    ErrorKind.RECURSIVE_INCLUSION: ErrorInfo(_E, "recursive inclusion of '%s' detected"),
    ErrorKind.SYSTEM_INCLUDES_FIRST: ErrorInfo(
        _E, "system includes (<...>) should come before project includes (\"%s\")"),
    ErrorKind.SYSTEM_INCLUDES_UNSORTED: ErrorInfo(
        _E, "system includes (<...>) are not in alphabetical order"),
    ErrorKind.PROJECT_INCLUDES_UNSORTED: ErrorInfo(
        _E, "project includes (\"%s\") are not in alphabetical order"),
    ErrorKind.INCLUDE_INDENTED: ErrorInfo(_E, "include directive must have no indentation"),
    ErrorKind.PRAGMA_ONCE_AND_GUARD: ErrorInfo(
        _E, "do not use #pragma once and include-guard simultaneously; choose one"),
    ErrorKind.MISSING_HEADER_GUARD: ErrorInfo(
        _E, "header file must be protected by include-guard '%s' or #pragma once"),
    ErrorKind.MISSING_EOF_NEWLINE: ErrorInfo(_E, "file must end with a newline"),
    ErrorKind.TRAILING_BLANK_LINES: ErrorInfo(
        _W, "file ends with %d blank line(s); remove excess"),
    ErrorKind.MISSING_BLANK_AFTER_FUNCTION: ErrorInfo(
        _E, "missing blank line after function definition"),
    ErrorKind.TOO_MANY_BLANKS_BETWEEN_FUNCTIONS: ErrorInfo(
        _W, "more than one blank line (%d) between functions"),
    ErrorKind.POINTER_COULD_BE_CONST: ErrorInfo(
        _W, "pointer '%s' is not modified; consider declaring it 'const %s'"),
    ErrorKind.LINE_TOO_LONG: ErrorInfo(
        _E, "line length must not exceed %d characters, found %d"),
    ErrorKind.TOO_MANY_BLANK_LINES: ErrorInfo(
        _W, "more than 1 blank line consecutively (%d)"),
    ErrorKind.BLANK_LINE_INDENTED: ErrorInfo(_E, "blank line must have no indentation"),
    ErrorKind.TRAILING_WHITESPACE: ErrorInfo(_E, "whitespace at the end of the line"),
    ErrorKind.NON_ASCII_CHARACTER: ErrorInfo(_W, "unexpected non-ASCII character: 0x%X"),
    ErrorKind.TODO_COMMENT: ErrorInfo(
        _W, "found TODO/FIXME comment - check pending tasks before submitting"),
    ErrorKind.INDENTATION_MISMATCH: ErrorInfo(
        _E, "line should be indented to %d spaces (found %d)"),
    ErrorKind.SPACE_BEFORE_SEMICOLON: ErrorInfo(_E, "no space before ';'"),
    ErrorKind.SPACE_INSIDE_PARENS: ErrorInfo(_E, "no space allowed inside parentheses"),
    ErrorKind.SPACE_INSIDE_BRACKETS: ErrorInfo(_E, "no space allowed after '[' or before ']'"),
    ErrorKind.COMMA_SPACING: ErrorInfo(
        _E, "comma must be followed by a single space and not preceded by one"),
    ErrorKind.MULTIPLE_SPACES: ErrorInfo(_E, "multiple consecutive spaces between tokens"),
    ErrorKind.OPERATOR_SPACE_BEFORE: ErrorInfo(_E, "operator '%s' must have space before it"),
    ErrorKind.OPERATOR_SPACE_AFTER: ErrorInfo(_E, "operator '%s' must have space after it"),
    ErrorKind.TERNARY_QUESTION_SPACE_BEFORE: ErrorInfo(_E, "operator '?' must have space before it"),
    ErrorKind.TERNARY_QUESTION_SPACE_AFTER: ErrorInfo(_E, "operator '?' must have space after it"),
    ErrorKind.TERNARY_COLON_SPACE_BEFORE: ErrorInfo(_E, "operator ':' must have space before it"),
    ErrorKind.TERNARY_COLON_SPACE_AFTER: ErrorInfo(_E, "operator ':' must have space after it"),
    ErrorKind.KEYWORD_SPACE_BEFORE_PAREN: ErrorInfo(_E, "keyword must have a space before '('"),
    ErrorKind.SPACE_BEFORE_CALL_PAREN: ErrorInfo(
        _E, "space before '(' in function call is not allowed"),
    ErrorKind.FUNCTION_NAME_SPACE_BEFORE_PAREN: ErrorInfo(
        _E, "no space allowed between function name and '('"),
    ErrorKind.POINTER_FORMAT: ErrorInfo(
        _E,
        "pointer must be formatted as:\n"
        "- 'type *ptr' for declarations\n"
        "- '*ptr' or '*type' for dereferences\n"
        "- 'type *' for casting"),
    ErrorKind.POINTER_CAST_DETACHED: ErrorInfo(
        _E,
        "pointer cast must be attached to the operand:\n"
        "- use '(t *)x' or '(t *)(x)', not '(t *) x'"),
    ErrorKind.ALLOC_NOT_CAST: ErrorInfo(
        _E, "allocation via %s must be cast to the target pointer type"),
    ErrorKind.INSECURE_FUNCTION: ErrorInfo(
        _W, "use of insecure function '%s'; consider using %s"),
    ErrorKind.MAGIC_NUMBER: ErrorInfo(_W, "magic number '%s' detected; extract to constant"),
    ErrorKind.MACRO_NAME_NOT_SCREAMING: ErrorInfo(
        _E, "macro name '%s' must be SCREAMING_SNAKE_CASE"),
    ErrorKind.MACRO_PARAM_NOT_SNAKE: ErrorInfo(
        _E, "macro parameter '%s' must be snake_lower_case"),
    ErrorKind.MACRO_BODY_IDENT_NOT_SNAKE: ErrorInfo(
        _E, "identifier '%s' in macro body must be snake_lower_case"),
    ErrorKind.MACRO_BODY_NO_SPACE: ErrorInfo(
        _E, "macro body must be preceded by a space after parameter list"),
    ErrorKind.MACRO_BODY_NOT_PARENTHESIZED: ErrorInfo(
        _E, "function-like macro body must be parenthesized, e.g. ((x)*(x))"),
    ErrorKind.FUNCTION_NAME_NOT_MODULE_CAMEL: ErrorInfo(
        _E, "function name '%s' must follow MODULE_camelCase"),
    ErrorKind.PARAM_NAME_NOT_SNAKE: ErrorInfo(
        _E, "parameter name '%s' must be snake_lower_case"),
    ErrorKind.PARAM_LINE_INDENT: ErrorInfo(
        _E, "parameter line should be indented to %d spaces (found %d)"),
    ErrorKind.PARAM_LINE_NO_COMMA: ErrorInfo(_E, "parameter line must end with ','"),
    ErrorKind.RETURN_TYPE_SEPARATE_LINE: ErrorInfo(
        _E, "return type must be on the same line as the function name"),
    ErrorKind.FUNCTION_BRACE_OWN_LINE: ErrorInfo(_E, "function opening must be on its own line"),
    ErrorKind.LABEL_INDENTED: ErrorInfo(_E, "label must have no indentation"),
    ErrorKind.LABEL_NOT_SNAKE: ErrorInfo(_E, "label '%s' must be snake_lower_case"),
    ErrorKind.COLON_NOT_ATTACHED: ErrorInfo(
        _E, "':' must be attached without space to preceding token"),
    ErrorKind.ALLMAN_BRACE_OWN_LINE: ErrorInfo(_E, "opening brace must be on its own line (%s)"),
    ErrorKind.KR_SPACE_BEFORE_BRACE: ErrorInfo(_E, "missing space before '{' in control statement"),
    ErrorKind.KR_BRACE_SAME_LINE: ErrorInfo(_E, "opening brace must be on the same line as %s"),
    ErrorKind.KR_ELSE_SAME_LINE: ErrorInfo(
        _E, "\"else\" must be on the same line as the closing '}' (K&R style)"),
    ErrorKind.CLOSING_BRACE_OWN_LINE: ErrorInfo(_E, "closing brace must be on its own line"),
    ErrorKind.SPACE_AFTER_CLOSING_BRACE: ErrorInfo(_E, "expected space after '}'"),
    ErrorKind.CASE_BLOCK_BRACES: ErrorInfo(_W, "case blocks must not use '{ }'"),
    ErrorKind.CASE_MISSING_BREAK: ErrorInfo(
        _W, "'%s' block must end with a break; or have a '// fall-through' comment"),
    ErrorKind.INLINE_EMPTY_BRACES: ErrorInfo(_E, "{} must have a space: use { }"),
    ErrorKind.INLINE_NESTED_BRACES: ErrorInfo(_E, "inline block must not contain nested braces"),
    ErrorKind.INLINE_ONE_STATEMENT: ErrorInfo(
        _E, "inline block must contain exactly one statement"),
    ErrorKind.INLINE_CONTROL_STATEMENT: ErrorInfo(
        _E, "inline block must not contain control statements"),
    ErrorKind.INLINE_SPACE_AFTER_PAREN: ErrorInfo(_E, "expected space after ')'"),
    ErrorKind.SPACE_AFTER_OPENING_BRACE: ErrorInfo(_E, "expected space after '{'"),
    ErrorKind.SPACE_BEFORE_CLOSING_BRACE: ErrorInfo(_E, "expected space before '}'"),
    ErrorKind.INSTANCE_NOT_SNAKE: ErrorInfo(_E, "%s instance '%s' must be snake_lower_case"),
    ErrorKind.INSTANCE_ENDS_WITH_T: ErrorInfo(_E, "%s instance '%s' must not end with '_t'"),
    ErrorKind.TYPE_TAG_NOT_CAMEL: ErrorInfo(_E, "%s tag '%s' must be camelCase"),
    ErrorKind.TYPEDEF_TYPE_NAME: ErrorInfo(
        _E, "%s typedef name '%s' must be snake_lower_case and end with '_t'"),
    ErrorKind.TYPEDEF_NAME_MISSING: ErrorInfo(
        _E, "%s typedef must declare a snake_lower_case name ending with '_t'"),
    ErrorKind.TYPEDEF_FUNC_PTR_NAME: ErrorInfo(
        _W, "typedef name '%s' must be snake_lower_case and end with '_t'"),
    ErrorKind.TYPEDEF_ALIAS_NAME: ErrorInfo(
        _W, "typedef name '%s' must be snake_lower_case and end with '_t'"),
    ErrorKind.ENUM_ELEMENT_NOT_SCREAMING: ErrorInfo(
        _E, "enum element '%s' must be SCREAMING_SNAKE_CASE"),
    ErrorKind.FIELD_NAME_NOT_SNAKE: ErrorInfo(_E, "%s field name '%s' must be snake_lower_case"),
    ErrorKind.UNINITIALIZED_DECLARATION: ErrorInfo(_W, "'%s' declared without initialization"),
    ErrorKind.VARIABLE_ENDS_WITH_T: ErrorInfo(_E, "variable name '%s' must not end with '_t'"),
    ErrorKind.VARIABLE_NOT_SNAKE: ErrorInfo(_E, "variable name '%s' must be snake_lower_case"),
    ErrorKind.MULTIPLE_DECLARATIONS: ErrorInfo(
        _E, "multiple variable declarations not allowed; use one line per variable"),
}


def format_message(kind: ErrorKind, *args: Any) -> str:
    template = ERROR_INFOS[kind].template
    return template % args if args else template


def severity_of(kind: ErrorKind) -> Severity:
    return ERROR_INFOS[kind].severity


def make_diagnostic(kind: ErrorKind, line: int, column: int, length: int, *args: Any) -> Diagnostic:
    """Build a Diagnostic from the catalog entry for ``kind``."""
    return Diagnostic(
        line=line,
        column=max(column, 0),
        length=max(length, 0),
        message=format_message(kind, *args),
        severity=severity_of(kind),
        kind=kind.name,
    )


@dataclass(frozen=True)
class Finding:
    """A rule hit on a single line, not yet bound to a line number."""
    kind: ErrorKind
    column: int
    length: int
    args: Tuple[Any, ...] = ()

    def to_diagnostic(self, line: int) -> Diagnostic:
        return make_diagnostic(self.kind, line, self.column, self.length, *self.args)
