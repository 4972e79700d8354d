"""
Tests for the cross-line trackers and pointer classification.
"""

from pathlib import Path

import pytest

from c_style_checker.checker_base import SourceFile
from c_style_checker.checkers.line_checker import LineStyleChecker
from c_style_checker.context import INDENT_UNIT, StyleMode
from c_style_checker.rules import ErrorKind
from c_style_checker.trackers.inline_block import InlineBlockValidator, is_inline_control, split_control
from c_style_checker.trackers.param_block import is_bare_return_type, opens_param_block
from c_style_checker.trackers.pointers import operator_findings, pointer_format_findings

from .conftest import in_function, kinds


def finding_kinds(findings):
    return [f.kind for f in findings]


# =============================================================================
# POINTERS AND OPERATORS
# =============================================================================

class TestOperatorSpacing:
    """Binary operator spacing with pointer and unary exemptions."""

    def test_multiplication_without_spaces(self):
        """'a*b' is multiplication and needs spaces on both sides."""
        found = operator_findings("x = a*b;")
        assert finding_kinds(found) == [ErrorKind.OPERATOR_SPACE_BEFORE, ErrorKind.OPERATOR_SPACE_AFTER]
        assert found[0].column == 5
        assert found[0].args == ("*",)

    @pytest.mark.parametrize("code", [
        "int *p = NULL;",
        "char **argv;",
        "struct node *next;",
        "size_t *len;",
        "p = (char *)buf;",
        "x = -1;",
        "i++;",
        "p->next = q;",
        "return -x;",
        "double e = 1e-5;",
        "y = *p;",
    ])
    def test_exempt(self, code):
        """Pointer markers, unary operators and member access are not binary operators."""
        assert operator_findings(code) == []

    def test_compound_operator(self):
        """Multi-character operators are reported as one token."""
        found = operator_findings("x+=1;")
        assert [f.args for f in found] == [("+=",), ("+=",)]


class TestPointerFormat:
    """Placement of '*' in declarations and casts."""

    def test_star_attached_to_type(self):
        """'int* p' is reported."""
        assert finding_kinds(pointer_format_findings("int* p;")) == [ErrorKind.POINTER_FORMAT]

    def test_star_detached_both_sides(self):
        """'int * p' is reported."""
        assert finding_kinds(pointer_format_findings("int * p;")) == [ErrorKind.POINTER_FORMAT]

    def test_detached_cast(self):
        """'(char *) buf' is reported."""
        found = pointer_format_findings("p = (char *) buf;")
        assert finding_kinds(found) == [ErrorKind.POINTER_CAST_DETACHED]

    def test_good_forms(self):
        """Canonical pointer forms pass."""
        assert pointer_format_findings("int *p = (int *)q;") == []


# =============================================================================
# INLINE CONTROL STATEMENTS
# =============================================================================

class TestInlineControl:
    """One-line control statements."""

    @pytest.mark.parametrize("code,expected", [
        ("  if (x) { y(); }", True),
        ("  if (x) y();", True),
        ("  else return 0;", True),
        ("  if (x) {", False),
        ("  if (x)", False),
        ("  while (a && (b ||", False),
        ("  x = 1;", False),
    ])
    def test_is_inline_control(self, code, expected):
        """Only lines carrying their whole body count as inline."""
        assert is_inline_control(code) is expected

    def test_split_control(self):
        """The condition parentheses are located."""
        split = split_control("  for (i = 0; i < n; i++) x();")
        assert split.keyword == "for"
        assert split.paren_open == 6
        assert split.paren_close == 24

    def test_valid_inline_block(self):
        """A spaced single statement passes."""
        assert InlineBlockValidator().check("  if (x) { return 1; }") == []

    def test_missing_inner_spaces(self):
        """Braces must be padded."""
        found = InlineBlockValidator().check("  if (x) {return 1;}")
        assert finding_kinds(found) == [ErrorKind.SPACE_AFTER_OPENING_BRACE, ErrorKind.SPACE_BEFORE_CLOSING_BRACE]

    def test_empty_braces(self):
        """'{}' must be written '{ }'."""
        found = InlineBlockValidator().check("  while (x) {}")
        assert finding_kinds(found) == [ErrorKind.INLINE_EMPTY_BRACES]

    def test_two_statements(self):
        """An inline block holds exactly one statement."""
        found = InlineBlockValidator().check("  if (x) { a(); b(); }")
        assert finding_kinds(found) == [ErrorKind.INLINE_ONE_STATEMENT]

    def test_nested_control(self):
        """No control statement inside an inline block."""
        found = InlineBlockValidator().check("  if (x) { while (y) z(); }")
        assert ErrorKind.INLINE_CONTROL_STATEMENT in finding_kinds(found)

    def test_space_after_paren(self):
        """The body must be separated from the condition."""
        found = InlineBlockValidator().check("  if (x)y();")
        assert finding_kinds(found) == [ErrorKind.INLINE_SPACE_AFTER_PAREN]


# =============================================================================
# PARAMETER BLOCKS
# =============================================================================

class TestParamBlockHelpers:
    """Detection helpers for multi-line parameter lists."""

    def test_opens_param_block(self):
        """An unbalanced '(' with a trailing comma opens a block."""
        assert opens_param_block("int util_add(int first,")
        assert not opens_param_block("int util_add(int first, int second)")
        assert not opens_param_block("  x = 1,")

    @pytest.mark.parametrize("code,expected", [
        ("static int", True),
        ("struct node *", True),
        ("return x;", False),
        ("else", False),
        ("int x;", False),
    ])
    def test_is_bare_return_type(self, code, expected):
        """Only a lone type counts as a split return type."""
        assert is_bare_return_type(code) is expected


class TestParamBlockScan:
    """Parameter blocks driven through the checker."""

    def test_aligned_continuation(self, check):
        """Continuation lines aligned past the parenthesis pass."""
        source = (
            "int util_add(int first,\n"
            "              int second)\n"
            "{\n"
            "  return first + second;\n"
            "}\n"
        )
        assert check(source) == []

    def test_misaligned_continuation(self, check):
        """A continuation line at the wrong column is reported with both widths."""
        source = (
            "int util_add(int first,\n"
            "    int second)\n"
            "{\n"
            "  return first + second;\n"
            "}\n"
        )
        found = [d for d in check(source) if d.kind == "PARAM_LINE_INDENT"]
        assert len(found) == 1
        assert found[0].line == 2
        assert found[0].message == "parameter line should be indented to 14 spaces (found 4)"

    def test_continuation_without_comma(self, check):
        """An unfinished continuation line must end with a comma."""
        source = (
            "int util_add(int first,\n"
            "              int second\n"
            "              )\n"
            "{\n"
            "  return first + second;\n"
            "}\n"
        )
        assert "PARAM_LINE_NO_COMMA" in kinds(check(source))

    def test_bad_param_name_on_continuation(self, check):
        """Parameter names on continuation lines are checked."""
        source = (
            "int util_add(int first,\n"
            "              int secondValue)\n"
            "{\n"
            "  return first + secondValue;\n"
            "}\n"
        )
        found = [d for d in check(source) if d.kind == "PARAM_NAME_NOT_SNAKE"]
        assert [d.line for d in found] == [2]


# =============================================================================
# INDENTATION
# =============================================================================

class TestIndentation:
    """The brace and indent state machine."""

    def test_mismatch_reported_once(self, check):
        """One misindented line does not shift the lines after it."""
        found = check(in_function("   int x = 1;", "  x++;"))
        assert kinds(found) == ["INDENTATION_MISMATCH"]
        assert found[0].line == 3
        assert found[0].message == "line should be indented to 2 spaces (found 3)"

    def test_braceless_body(self, check):
        """A control statement without braces indents exactly one line."""
        source = in_function(
            "  int x = 1;",
            "",
            "  if (x)",
            "    x = 0;",
            "  x++;",
        )
        assert check(source) == []

    def test_tab_indentation(self, check):
        """A tab counts as two columns."""
        assert check(in_function("\tint x = 1;")) == []

    def test_else_reopens_block(self, check):
        """'} else {' closes and reopens at the same depth."""
        source = in_function(
            "  int x = 1;",
            "",
            "  if (x) {",
            "    x = 0;",
            "  } else {",
            "    x = 1;",
            "  }",
        )
        assert check(source) == []

    def test_empty_block(self, check):
        """A brace followed directly by its closing brace keeps the indent."""
        source = in_function("  int x = 1;", "", "  while (x) {", "  }")
        assert check(source) == []

    def test_condition_continuation_uses_block_indent(self, check):
        """A wrapped condition line is held to the block indent; the body is not shifted."""
        source = in_function(
            "  int count = 1;",
            "  if (count &&",
            "      count) {",
            "    count = 0;",
            "  }",
        )
        found = check(source)
        assert [d.line for d in found if d.kind == "INDENTATION_MISMATCH"] == [5]


# =============================================================================
# SWITCH / CASE
# =============================================================================

class TestCaseBlocks:
    """Case frames and fall-through detection."""

    def _switch(self, *cases):
        return (
            "void state_step(int state)\n"
            "{\n"
            "  switch (state) {\n"
            + "".join(line + "\n" for line in cases)
            + "  }\n"
            "}\n"
        )

    def test_well_formed_switch(self, check):
        """Every case ending in break passes."""
        source = self._switch(
            "    case 0:",
            "      state_reset();",
            "      break;",
            "    default:",
            "      break;",
        )
        assert check(source) == []

    def test_missing_break(self, check):
        """A case body without break is a warning at the label colon."""
        found = check(self._switch(
            "    case 0:",
            "      state_reset();",
            "    case 1:",
            "      break;",
        ))
        assert kinds(found) == ["CASE_MISSING_BREAK"]
        assert found[0].line == 4
        assert found[0].column == 10
        assert "'case 0'" in found[0].message

    def test_fall_through_comment(self, check):
        """A fall-through comment suppresses the warning."""
        source = self._switch(
            "    case 0:",
            "      state_reset();",
            "      // fall-through",
            "    case 1:",
            "      break;",
        )
        assert check(source) == []

    def test_stacked_labels(self, check):
        """Labels sharing one body are not reported."""
        source = self._switch(
            "    case 0:",
            "    case 1:",
            "      state_reset();",
            "      break;",
        )
        assert check(source) == []

    def test_braced_case(self, check):
        """Case blocks must not use braces."""
        found = check(self._switch(
            "    case 0: {",
            "      state_reset();",
            "      break;",
            "    }",
        ))
        assert "CASE_BLOCK_BRACES" in kinds(found)

    def test_colon_not_attached(self, check):
        """The case colon is attached to its label."""
        found = check(self._switch("    case 0 :", "      break;"))
        assert "COLON_NOT_ATTACHED" in kinds(found)


# =============================================================================
# TYPE CONTEXTS
# =============================================================================

class TestTypeContexts:
    """struct/enum/union naming."""

    def test_enum_element_case(self, check):
        """Enum elements are SCREAMING_SNAKE_CASE."""
        found = check("enum color {\n  COLOR_RED,\n  green\n};\n")
        assert kinds(found) == ["ENUM_ELEMENT_NOT_SCREAMING"]
        assert found[0].line == 3

    def test_struct_field_case(self, check):
        """Struct fields are snake_lower_case."""
        found = check("struct point {\n  int xPos;\n};\n")
        assert kinds(found) == ["FIELD_NAME_NOT_SNAKE"]

    def test_tag_not_camel(self, check):
        """Tags are camelCase and reported at the tag."""
        found = check("struct Point {\n  int x;\n};\n")
        assert kinds(found) == ["TYPE_TAG_NOT_CAMEL"]
        assert (found[0].line, found[0].column) == (1, 7)

    def test_typedef_without_name(self, check):
        """A typedef block must declare a name."""
        found = check("typedef struct {\n  int x;\n};\n")
        assert kinds(found) == ["TYPEDEF_NAME_MISSING"]

    def test_instance_ending_with_t(self, check):
        """A plain instance must not look like a typedef."""
        found = check("struct point {\n  int x;\n} origin_t;\n")
        assert kinds(found) == ["INSTANCE_ENDS_WITH_T"]

    def test_brace_on_next_line(self, check):
        """'struct tag' with its brace on the following line opens a context."""
        found = check("struct point\n{\n  int xPos;\n};\n", style="allman")
        assert kinds(found) == ["FIELD_NAME_NOT_SNAKE"]

    def test_nested_struct(self, check):
        """A nested definition closes back to its parent context."""
        source = (
            "struct outer {\n"
            "  struct inner {\n"
            "    int value;\n"
            "  } part;\n"
            "  int count;\n"
            "};\n"
        )
        assert check(source) == []

    def test_typedef_alias(self, check):
        """Simple typedef aliases follow the _t convention."""
        found = check("typedef unsigned int Word;\n")
        assert kinds(found) == ["TYPEDEF_ALIAS_NAME"]

    def test_function_pointer_typedef(self, check):
        """Function pointer typedefs follow the _t convention."""
        found = check("typedef int (*Handler)(int code);\n")
        assert "TYPEDEF_FUNC_PTR_NAME" in kinds(found)

    def test_pointer_instance_closes_context(self, check):
        """'} *name;' ends the struct, so later statements are not fields."""
        found = check("struct point {\n  int x_val;\n} *origin_ptr;\n\nint counterValue = 1;\n")
        assert "FIELD_NAME_NOT_SNAKE" not in kinds(found)
        assert "OPERATOR_SPACE_AFTER" not in kinds(found)
        assert [(d.kind, d.line) for d in found if d.kind == "VARIABLE_NOT_SNAKE"] == [("VARIABLE_NOT_SNAKE", 5)]

    def test_initialized_instance_closes_context(self, check):
        """'} name = { 0 };' ends the struct and checks the instance name."""
        found = check("struct point {\n  int x_val;\n} originPoint = { 0 };\n\nint counterValue = 1;\n")
        assert "FIELD_NAME_NOT_SNAKE" not in kinds(found)
        assert [d.line for d in found if d.kind == "INSTANCE_NOT_SNAKE"] == [3]
        assert [d.line for d in found if d.kind == "VARIABLE_NOT_SNAKE"] == [5]

    def test_attribute_closes_context(self, check):
        """An unrecognised declarator after '}' still ends the struct."""
        found = check("struct packed {\n  char tag;\n} __attribute__((packed));\n\nint counterValue = 1;\n")
        assert "FIELD_NAME_NOT_SNAKE" not in kinds(found)
        assert [d.line for d in found if d.kind == "VARIABLE_NOT_SNAKE"] == [5]


# =============================================================================
# STATE INVARIANTS
# =============================================================================

NESTED_KR_SOURCE = """\
struct point {
  int x_val;
} *origin_ptr;

struct pair {
  int left;
} origin = { 0 };

struct packed {
  char tag;
} __attribute__((packed));

static int clamp(int value,
                  int limit) {
  struct range {
    int low;
  } bounds;
  if (value > limit)
    return limit;
  else
    value = value + 1;
  switch (value) {
    case 1:
      value = 2;
      break;
    default:
      break;
  }
  if (value) {
    value = 0;
  } else {
    value = 1;
  }
  while (value) {
  }
  return value;
}
"""

NESTED_ALLMAN_SOURCE = """\
static int pick(int flag)
{
  if (flag)
    flag = 0;
  else
    flag = 1;
  switch (flag)
  {
    case 0:
      flag = 3;
      break;
    default:
      break;
  }
  if (flag)
  {
    flag = 2;
  }
  else
  {
    flag = 4;
  }
  return flag;
}
"""


def scan_states(source, style=StyleMode.KR):
    """Scanner state after every line: (indent stack, type stack size, depth)."""
    checker = LineStyleChecker(style)
    states = []
    for _ in checker.scan(SourceFile.from_text(Path("nested.c"), source)):
        ctx = checker.ctx
        states.append((list(ctx.indent_stack), len(ctx.type_stack), ctx.depth))
    return states


def line_indexes(source, predicate):
    return [i for i, line in enumerate(source.splitlines()) if predicate(line.strip())]


class TestStateInvariants:
    """Stack invariants hold after every scanned line."""

    @pytest.mark.parametrize("source,style", [
        (NESTED_KR_SOURCE, StyleMode.KR),
        (NESTED_ALLMAN_SOURCE, StyleMode.ALLMAN),
    ])
    def test_indent_stack_well_formed(self, source, style):
        """The indent stack is never empty and holds non-negative unit multiples."""
        states = scan_states(source, style)
        assert len(states) == len(source.splitlines())
        for stack, _, _ in states:
            assert stack
            assert all(value >= 0 and value % INDENT_UNIT == 0 for value in stack)
        assert states[-1][0] == [0]

    @pytest.mark.parametrize("source,style", [
        (NESTED_KR_SOURCE, StyleMode.KR),
        (NESTED_ALLMAN_SOURCE, StyleMode.ALLMAN),
    ])
    def test_case_frame_spans_label_to_break(self, source, style):
        """A case body raises the depth by one and drops it at its break."""
        states = scan_states(source, style)
        labels = line_indexes(source, lambda text: text.startswith(("case ", "default:")))
        assert len(labels) == 2
        for label in labels:
            brk = next(i for i in line_indexes(source, lambda text: text == "break;") if i > label)
            before = states[label - 1][2]
            assert states[label][2] == before + 1
            for index in range(label, brk):
                assert states[index][2] == before + 1
            assert states[brk][2] == before

    def test_type_stack_balanced(self):
        """Each struct returns the type stack to its size before the struct."""
        states = scan_states(NESTED_KR_SOURCE)
        opens = line_indexes(NESTED_KR_SOURCE, lambda text: text.startswith("struct ") and text.endswith("{"))
        closes = line_indexes(NESTED_KR_SOURCE, lambda text: text.startswith("}") and text.endswith(";"))
        assert len(opens) == len(closes) == 4
        for start, end in zip(opens, closes):
            before = states[start - 1][1] if start else 0
            assert states[start][1] == before + 1
            assert states[end][1] == before
        assert all(types == 0 for _, types, _ in states[closes[-1]:])
