"""
Tests for the per-line rule table.
"""

import pytest

from c_style_checker import StyleChecker
from c_style_checker.line_rules import RULES, Phase, rules_for
from c_style_checker.rules import ERROR_INFOS, ErrorKind

from .conftest import in_function, kinds, warnings


class TestRegistry:
    """Rule registration."""

    def test_every_phase_has_rules(self):
        """Each phase contributes rules."""
        for phase in Phase:
            assert rules_for(phase)

    def test_rule_names_unique(self):
        """No rule is registered twice."""
        names = [rule.name for rule in RULES]
        assert len(names) == len(set(names))

    def test_declared_kinds_are_cataloged(self):
        """Every kind a rule declares has a severity and message."""
        for rule in RULES:
            assert rule.kinds
            for kind in rule.kinds:
                assert kind in ERROR_INFOS

    def test_catalog_complete(self):
        """Every diagnostic kind has a catalog entry."""
        assert set(ERROR_INFOS) == set(ErrorKind)


# =============================================================================
# RAW LINE RULES
# =============================================================================

class TestRawRules:
    """Rules applied to the raw text."""

    def test_line_too_long(self, check):
        """Lines over the limit are reported from the limit onwards."""
        source = "int x = 1; /* " + "a" * 70 + " */\n"
        found = check(source)
        assert kinds(found) == ["LINE_TOO_LONG"]
        assert found[0].column == 80
        assert found[0].message == "line length must not exceed 80 characters, found 87"

    def test_custom_line_limit(self):
        """The limit is configurable."""
        found = StyleChecker("kr", max_line_length=20).check_source("int total_value_here = 1;\n")
        assert kinds(found) == ["LINE_TOO_LONG"]

    def test_trailing_whitespace(self, check):
        """Whitespace at the end of a line is reported."""
        found = check("int x = 1;  \n")
        assert kinds(found) == ["TRAILING_WHITESPACE"]
        assert (found[0].column, found[0].length) == (10, 2)

    def test_todo_comment(self, check):
        """TODO/FIXME in comments are warnings."""
        found = check("int x = 1; /* TODO remove */\n")
        assert kinds(found) == ["TODO_COMMENT"]
        assert found[0].column == 14

    def test_todo_in_string_ignored(self, check):
        """TODO inside a string is not a comment."""
        assert check("char *s = \"TODO\";\n") == []


# =============================================================================
# SPACING RULES
# =============================================================================

class TestSpacing:
    """Token spacing rules on the masked line."""

    @pytest.mark.parametrize("line,kind", [
        ("  x = 1 ;", "SPACE_BEFORE_SEMICOLON"),
        ("  test_call( 1);", "SPACE_INSIDE_PARENS"),
        ("  test_call(1 );", "SPACE_INSIDE_PARENS"),
        ("  x = buf[ 1];", "SPACE_INSIDE_BRACKETS"),
        ("  test_call(1,1);", "COMMA_SPACING"),
        ("  test_call(1 , 1);", "COMMA_SPACING"),
        ("  x =  1;", "MULTIPLE_SPACES"),
        ("  x = a==1;", "OPERATOR_SPACE_BEFORE"),
        ("  x = c ?1 : 0;", "TERNARY_QUESTION_SPACE_AFTER"),
        ("  x = c ? 1: 0;", "TERNARY_COLON_SPACE_BEFORE"),
        ("  if(x) x = 0;", "KEYWORD_SPACE_BEFORE_PAREN"),
        ("  test_call (1);", "SPACE_BEFORE_CALL_PAREN"),
    ])
    def test_reported(self, check, line, kind):
        """Each malformed line yields its diagnostic."""
        assert kind in kinds(check(in_function("  int x = 0;", "", line)))

    def test_spacing_inside_string_ignored(self, check):
        """Literal contents never trigger spacing rules."""
        source = in_function("  printf(\"a ,b  ( c )\");")
        assert check(source) == []

    def test_multiple_spaces_before_comment(self, check):
        """Alignment before a trailing comment counts as multiple spaces."""
        found = check("int x = 1;  // one\n")
        assert kinds(found) == ["MULTIPLE_SPACES"]

    def test_leading_spaces_not_multiple(self, check):
        """Indentation is never multiple spaces."""
        assert check(in_function("  int x = 1;")) == []


# =============================================================================
# SAFETY AND POINTER RULES
# =============================================================================

class TestSafetyRules:
    """Insecure calls, allocation casts and magic numbers."""

    def test_insecure_function(self, check):
        """gets() is reported with its replacement."""
        found = warnings(check(in_function("  gets(line);")))
        assert kinds(found) == ["INSECURE_FUNCTION"]
        assert "fgets(buffer, size, stdin)" in found[0].message

    def test_alloc_without_cast(self, check):
        """malloc results must be cast."""
        found = check(in_function("  int *p = malloc(sizeof(int));"))
        assert kinds(found) == ["ALLOC_NOT_CAST"]

    def test_alloc_with_cast(self, check):
        """A pointer cast satisfies the allocation rule."""
        assert check(in_function("  int *p = (int *)malloc(sizeof(int));")) == []

    def test_magic_number(self, check):
        """Numbers of two or more are magic outside defines and enums."""
        found = check("int buf[64];\n")
        assert kinds(found) == ["MAGIC_NUMBER"]
        assert found[0].message == "magic number '64' detected; extract to constant"

    def test_small_numbers_allowed(self, check):
        """0 and 1 are not magic."""
        assert check("int x = 1;\n") == []

    def test_define_not_magic(self, check):
        """Macro definitions may hold numbers."""
        assert check("#define BUF_SIZE 64\n") == []

    def test_non_ascii_in_code(self, check):
        """Non-ASCII characters outside comments are reported."""
        found = check("int café = 1;\n")
        assert "NON_ASCII_CHARACTER" in kinds(found)
        assert "0xE9" in [d.message for d in found if d.kind == "NON_ASCII_CHARACTER"][0]

    def test_non_ascii_in_comment(self, check):
        """Comments may hold any text."""
        assert check("int x = 1; /* café */\n") == []

    def test_pointer_format(self, check):
        """'int* p' is reported."""
        assert kinds(check("int* p = NULL;\n")) == ["POINTER_FORMAT"]


# =============================================================================
# MACROS
# =============================================================================

class TestMacros:
    """#define naming and shape."""

    def test_name_case(self, check):
        """Macro names are SCREAMING_SNAKE_CASE."""
        assert kinds(check("#define max_size 10\n")) == ["MACRO_NAME_NOT_SCREAMING"]

    def test_function_macro(self, check):
        """Function-like macro parameters are snake_case and the body parenthesized."""
        found = kinds(check("#define SQUARE(X) X * X\n"))
        assert "MACRO_PARAM_NOT_SNAKE" in found
        assert "MACRO_BODY_NOT_PARENTHESIZED" in found

    def test_body_without_space(self, check):
        """The body is separated from the parameter list."""
        assert "MACRO_BODY_NO_SPACE" in kinds(check("#define NEG(x)(-(x))\n"))

    def test_body_identifier(self, check):
        """Identifiers in the body follow snake_case."""
        found = check("#define GET(x) ((x) + offsetValue)\n")
        assert kinds(found) == ["MACRO_BODY_IDENT_NOT_SNAKE"]

    def test_good_macro(self, check):
        """A well-formed macro passes."""
        assert check("#define SQUARE(x) ((x) * (x))\n") == []


# =============================================================================
# STATEMENT RULES
# =============================================================================

class TestFunctionHeaders:
    """Function names, parameters and braces."""

    def test_function_name(self, check):
        """Function names follow MODULE_camelCase."""
        found = check("int computeTotal(void);\n")
        assert kinds(found) == ["FUNCTION_NAME_NOT_MODULE_CAMEL"]

    def test_main_exempt(self, check):
        """main keeps its name."""
        assert check("int main(void);\n") == []

    def test_space_before_paren(self, check):
        """No space between a declared name and its parameters."""
        found = check("int list_size (void);\n")
        assert kinds(found) == ["FUNCTION_NAME_SPACE_BEFORE_PAREN"]

    def test_parameter_name(self, check):
        """Parameters are snake_lower_case."""
        found = check("int list_get(int itemIndex);\n")
        assert kinds(found) == ["PARAM_NAME_NOT_SNAKE"]
        assert found[0].column == 17

    def test_brace_on_header_line(self, check):
        """A function's opening brace sits on its own line."""
        found = check("int list_size(void) {\n  return 0;\n}\n")
        assert "FUNCTION_BRACE_OWN_LINE" in kinds(found)

    def test_return_type_on_own_line(self, check):
        """The return type shares the line with the name."""
        found = check("static int\nlist_size(void);\n")
        assert kinds(found) == ["RETURN_TYPE_SEPARATE_LINE"]


class TestBraces:
    """Brace placement per style."""

    def test_kr_brace_on_next_line(self, check):
        """K&R puts control braces on the statement line."""
        source = in_function("  int x = 1;", "", "  if (x)", "  {", "    x = 0;", "  }")
        found = check(source, style="kr")
        assert kinds(found) == ["KR_BRACE_SAME_LINE"]
        assert found[0].message == "opening brace must be on the same line as if"

    def test_kr_missing_space(self, check):
        """K&R needs a space before the brace."""
        source = in_function("  int x = 1;", "", "  if (x){", "    x = 0;", "  }")
        assert kinds(check(source)) == ["KR_SPACE_BEFORE_BRACE"]

    def test_kr_else_on_own_line(self, check):
        """K&R keeps else on the closing brace line."""
        source = in_function(
            "  int x = 1;", "", "  if (x) {", "    x = 0;", "  }", "  else {", "    x = 1;", "  }")
        found = check(source)
        assert kinds(found) == ["KR_ELSE_SAME_LINE"]
        assert (found[0].line, found[0].column) == (8, 2)

    def test_allman_brace_on_statement_line(self, check):
        """Allman puts control braces on their own line."""
        source = in_function("  int x = 1;", "", "  if (x) {", "    x = 0;", "  }")
        found = check(source, style="allman")
        assert kinds(found) == ["ALLMAN_BRACE_OWN_LINE"]

    def test_closing_brace_after_code(self, check):
        """A closing brace does not trail code."""
        source = in_function("  int x = 1;", "", "  while (x) {", "    x = 0; }")
        assert "CLOSING_BRACE_OWN_LINE" in kinds(check(source))


class TestDeclarations:
    """Variable declarations."""

    def test_uninitialized(self, check):
        """Declarations without an initializer are warnings."""
        found = check(in_function("  int count;"))
        assert kinds(found) == ["UNINITIALIZED_DECLARATION"]

    def test_variable_name(self, check):
        """Variables are snake_lower_case."""
        assert kinds(check("int itemCount = 0;\n")) == ["VARIABLE_NOT_SNAKE"]

    def test_variable_ending_with_t(self, check):
        """Variables do not use the typedef suffix."""
        assert kinds(check("int count_t = 0;\n")) == ["VARIABLE_ENDS_WITH_T"]

    def test_multiple_declarations(self, check):
        """One variable per declaration."""
        assert kinds(check("int a = 0, b = 0;\n")) == ["MULTIPLE_DECLARATIONS"]

    def test_return_is_not_declaration(self, check):
        """'return value;' is a statement."""
        assert check(in_function("  int value = 0;", "", "  return value;")) == []


class TestLabelsAndBlanks:
    """goto labels and blank lines."""

    def test_label(self, check):
        """Labels start at column 0 and are snake_lower_case."""
        source = in_function("  goto Done;", "  Done:", "  return;")
        found = kinds(check(source))
        assert "LABEL_INDENTED" in found
        assert "LABEL_NOT_SNAKE" in found

    def test_good_label(self, check):
        """A flush-left snake_case label passes."""
        assert check(in_function("  goto done;", "done:", "  return;")) == []

    def test_too_many_blank_lines(self, check):
        """More than one consecutive blank line is a warning with the count."""
        found = check("int a = 0;\n\n\n\nint b = 0;\n")
        assert kinds(found) == ["TOO_MANY_BLANK_LINES"]
        assert found[0].message == "more than 1 blank line consecutively (3)"

    def test_indented_blank_line(self, check):
        """Blank lines carry no whitespace."""
        found = check("int a = 0;\n  \nint b = 0;\n")
        assert kinds(found) == ["BLANK_LINE_INDENTED"]

    def test_blank_lines_in_comment(self, check):
        """Blank lines inside a block comment are not counted."""
        assert check("/*\n\n\n*/\nint a = 0;\n") == []
