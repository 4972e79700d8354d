"""
Scanner state shared by the per-line trackers.

Everything a single file scan needs to remember between lines lives in one
``ScannerContext`` so the state machines can be driven and inspected in
isolation from file I/O.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

INDENT_UNIT = 2
TAB_WIDTH = 2
DEFAULT_MAX_LINE_LENGTH = 80


class StyleMode(Enum):
    """Brace placement convention."""
    KR = "kr"
    ALLMAN = "allman"

    @classmethod
    def parse(cls, text: str) -> "StyleMode":
        value = (text or "").strip().lower()
        for mode in cls:
            if mode.value == value:
                return mode
        raise ValueError(f"unknown style '{text}': expected 'kr' or 'allman'")


class CommentState(Enum):
    CODE = "code"
    BLOCK_COMMENT = "block_comment"


@dataclass
class PendingType:
    """A bare ``struct|enum|union [tag]`` line still waiting for its brace."""
    kind: str
    is_typedef: bool
    tag: Optional[str]
    tag_line: int
    tag_column: int
    line: int


@dataclass
class TypeContext:
    kind: str
    is_typedef: bool
    tag: Optional[str]
    tag_line: int
    tag_column: int
    stack_depth: int

    @property
    def is_enum(self) -> bool:
        return self.kind == "enum"


@dataclass
class CaseState:
    """Indent frame opened by a case label; popped once ``end_line`` is scanned."""
    end_line: int
    indent: int


@dataclass
class ParamBlockState:
    required_indent: int
    base_indent: int
    depth: int
    is_definition: bool = False
    is_control: bool = False


@dataclass
class ScannerContext:
    style: StyleMode = StyleMode.KR
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    indent_stack: List[int] = field(default_factory=lambda: [0])
    next_indent: Optional[int] = None
    type_stack: List[TypeContext] = field(default_factory=list)
    pending_type: Optional[PendingType] = None
    case_stack: List[CaseState] = field(default_factory=list)
    param_block: Optional[ParamBlockState] = None
    comment_state: CommentState = CommentState.CODE
    blank_run: int = 0
    in_macro_continuation: bool = False

    @property
    def top(self) -> int:
        return self.indent_stack[-1]

    def push(self, indent: int) -> None:
        self.indent_stack.append(max(indent, 0))

    def pop(self) -> int:
        """Pop one frame; the root frame is never removed."""
        if len(self.indent_stack) > 1:
            return self.indent_stack.pop()
        return self.indent_stack[0]

    @property
    def depth(self) -> int:
        return len(self.indent_stack) - 1

    @property
    def current_type(self) -> Optional[TypeContext]:
        return self.type_stack[-1] if self.type_stack else None

    @property
    def in_enum(self) -> bool:
        current = self.current_type
        return current is not None and current.is_enum
