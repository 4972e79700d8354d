"""
Literal masking: hide comments and string/char literals without moving columns.

Every later rule works on a masked view of the line, so a brace or a comma
inside a string never counts as code and reported columns still point into
the raw source.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .context import CommentState

MASK_CHAR = "\ufffd"


@dataclass
class MaskedLine:
    """One physical line in its three views.

    ``masked`` replaces comments and literals with ``MASK_CHAR``; ``code``
    blanks comments with spaces and masks literals only. Both keep the raw
    line's length. ``comments`` holds ``(column, text)`` for every comment
    fragment found on the line.
    """
    raw: str
    masked: str
    code: str
    comments: List[Tuple[int, str]] = field(default_factory=list)
    state_before: CommentState = CommentState.CODE
    state_after: CommentState = CommentState.CODE

    @property
    def is_blank(self) -> bool:
        return not self.raw.strip()

    @property
    def has_code(self) -> bool:
        return any(not ch.isspace() and ch != MASK_CHAR for ch in self.code)

    @property
    def skip(self) -> bool:
        """True for non-blank lines that contribute no code at all."""
        return not self.is_blank and not self.has_code

    @property
    def comment_text(self) -> str:
        return " ".join(text for _, text in self.comments)

    @property
    def stripped(self) -> str:
        return self.code.strip()


class LiteralMasker:
    """Character-level state machine over a sequence of lines."""

    def __init__(self):
        self.state = CommentState.CODE

    def reset(self):
        self.state = CommentState.CODE

    def mask(self, raw: str) -> MaskedLine:
        masked = list(raw)
        code = list(raw)
        comments: List[Tuple[int, str]] = []
        state_before = self.state
        n = len(raw)
        i = 0
        while i < n:
            if self.state is CommentState.BLOCK_COMMENT:
                end = raw.find("*/", i)
                stop = n if end < 0 else end + 2
                comments.append((i, raw[i:stop]))
                _blank_comment(masked, code, i, stop)
                if end >= 0:
                    self.state = CommentState.CODE
                i = stop
                continue
            ch = raw[i]
            if raw.startswith("//", i):
                comments.append((i, raw[i:]))
                _blank_comment(masked, code, i, n)
                break
            if raw.startswith("/*", i):
                self.state = CommentState.BLOCK_COMMENT
                end = raw.find("*/", i + 2)
                stop = n if end < 0 else end + 2
                comments.append((i, raw[i:stop]))
                _blank_comment(masked, code, i, stop)
                if end >= 0:
                    self.state = CommentState.CODE
                i = stop
                continue
            if ch in ("\"", "'"):
                stop = _literal_end(raw, i)
                for j in range(i, stop):
                    masked[j] = MASK_CHAR
                    code[j] = MASK_CHAR
                i = stop
                continue
            i += 1
        return MaskedLine(
            raw=raw,
            masked="".join(masked),
            code="".join(code),
            comments=comments,
            state_before=state_before,
            state_after=self.state,
        )

    def mask_lines(self, lines: Iterable[str]) -> List[MaskedLine]:
        self.reset()
        return [self.mask(line) for line in lines]


def _blank_comment(masked: List[str], code: List[str], start: int, stop: int):
    for j in range(start, stop):
        masked[j] = MASK_CHAR
        code[j] = " "


def _literal_end(raw: str, start: int) -> int:
    """Index just past the literal opened at ``start`` (end of line if unterminated)."""
    quote = raw[start]
    i = start + 1
    while i < len(raw):
        if raw[i] == "\\":
            i += 2
            continue
        if raw[i] == quote:
            return i + 1
        i += 1
    return len(raw)
