"""
Tests for literal and comment masking.
"""

from c_style_checker.context import CommentState
from c_style_checker.masker import MASK_CHAR, LiteralMasker


def mask(*lines):
    return LiteralMasker().mask_lines(list(lines))


class TestLineComments:
    """// comments."""

    def test_comment_blanked_in_code_view(self):
        """The code view replaces a line comment with spaces."""
        line = mask("int x = 1; // note")[0]
        assert line.code == "int x = 1;" + " " * 8
        assert line.masked == "int x = 1; " + MASK_CHAR * 7

    def test_views_keep_raw_length(self):
        """Masking never moves columns."""
        raw = "foo(\"a, b\"); /* c */ bar();"
        line = mask(raw)[0]
        assert len(line.masked) == len(raw)
        assert len(line.code) == len(raw)

    def test_comment_text_recorded(self):
        """Comment fragments are kept with their columns."""
        line = mask("x = 0; // TODO later")[0]
        assert line.comments == [(7, "// TODO later")]

    def test_comment_only_line_is_skipped(self):
        """A line with nothing but a comment has no code."""
        line = mask("   // just a note")[0]
        assert not line.has_code
        assert line.skip


class TestBlockComments:
    """/* */ comments spanning lines."""

    def test_state_carries_across_lines(self):
        """An unterminated block comment continues on the next line."""
        first, second = mask("/* start", "still */ int y;")
        assert first.state_after is CommentState.BLOCK_COMMENT
        assert second.state_before is CommentState.BLOCK_COMMENT
        assert second.state_after is CommentState.CODE
        assert second.code == " " * 8 + " int y;"

    def test_inline_block_comment(self):
        """A closed block comment in the middle of a line leaves code on both sides."""
        line = mask("a = /* b */ c;")[0]
        assert line.code == "a = " + " " * 7 + " c;"

    def test_comment_marker_inside_string_ignored(self):
        """'//' inside a string literal does not start a comment."""
        line = mask("s = \"http://x\";")[0]
        assert line.comments == []
        assert line.code.endswith(";")


class TestLiterals:
    """String and character literals."""

    def test_string_masked(self):
        """A string literal including its quotes is masked."""
        line = mask("char *s = \"a;b\";")[0]
        assert line.code == "char *s = " + MASK_CHAR * 5 + ";"

    def test_escaped_quote(self):
        """An escaped quote does not end the literal."""
        line = mask("s = \"a\\\"b\";")[0]
        assert line.code == "s = " + MASK_CHAR * 6 + ";"

    def test_char_literal(self):
        """Character literals are masked like strings."""
        line = mask("c = '{';")[0]
        assert "{" not in line.code

    def test_unterminated_literal_runs_to_end_of_line(self):
        """An unterminated literal masks the rest of the line."""
        line = mask("x = 'abc")[0]
        assert line.code == "x = " + MASK_CHAR * 4

    def test_literal_counts_as_code(self):
        """A line holding only a literal still has code."""
        assert mask("\"text\";")[0].has_code
