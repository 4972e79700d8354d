"""
Include directive checks: ordering, recursion and header guards.
"""

import re
from typing import List, NamedTuple

from .. import patterns
from ..checker_base import BaseChecker
from ..rules import ErrorKind


class IncludeEntry(NamedTuple):
    target: str
    line: int


def guard_name(stem: str) -> str:
    """``list.h`` is guarded by ``LIST_H``."""
    return re.sub(r"[^A-Za-z0-9]", "_", stem).upper() + "_H"


def first_unsorted(keys: List[str]) -> int:
    """Index of the first key smaller than its predecessor, or -1."""
    for i in range(1, len(keys)):
        if keys[i] < keys[i - 1]:
            return i
    return -1


class IncludeChecker(BaseChecker):
    """Checks include ordering and header protection."""

    def _run_checks(self):
        system: List[IncludeEntry] = []
        project: List[IncludeEntry] = []
        for index, line in enumerate(self.lines):
            m = patterns.INCLUDE.match(line)
            # commented-out directives are blanked in the code view
            if not m or self.masked[index].code.lstrip()[:1] != "#":
                continue
            entry = IncludeEntry(m.group(1), index + 1)
            if entry.target.startswith("<"):
                system.append(entry)
            else:
                project.append(entry)
                if self.source.is_header and entry.target[1:-1] == self.source.path.name:
                    self._add_issue(
                        ErrorKind.RECURSIVE_INCLUSION, index + 1, m.start(1) + 1,
                        len(entry.target) - 2, entry.target[1:-1])

        self._check_order(system, project)
        if self.source.is_header:
            self._check_header_guard()

    def _add_directive_issue(self, kind: ErrorKind, entry: IncludeEntry, *args):
        line = self.lines[entry.line - 1]
        start = line.index("#")
        self._add_issue(kind, entry.line, start, len(line) - start, *args)

    def _check_order(self, system: List[IncludeEntry], project: List[IncludeEntry]):
        if system and project and project[0].line < system[-1].line:
            self._add_directive_issue(ErrorKind.SYSTEM_INCLUDES_FIRST, project[0], project[0].target[1:-1])

        idx = first_unsorted([e.target for e in system])
        if idx > 0:
            self._add_directive_issue(ErrorKind.SYSTEM_INCLUDES_UNSORTED, system[idx - 1])

        idx = first_unsorted([e.target for e in project])
        if idx > 0:
            self._add_directive_issue(ErrorKind.PROJECT_INCLUDES_UNSORTED, project[idx - 1], project[idx - 1].target[1:-1])

    def _check_header_guard(self):
        guard = guard_name(self.source.path.stem)
        stripped = [" ".join(line.split()) for line in self.lines]
        has_guard = (
            f"#ifndef {guard}" in stripped
            and f"#define {guard}" in stripped
            and any(line.startswith("#endif") for line in stripped)
        )
        pragma_lines = [i for i, line in enumerate(self.lines) if patterns.PRAGMA_ONCE.match(line)]

        if has_guard and pragma_lines:
            line_num = pragma_lines[0] + 1
            self._add_issue(ErrorKind.PRAGMA_ONCE_AND_GUARD, line_num, 0, len(self.lines[line_num - 1]))
        elif not has_guard and not pragma_lines:
            self._add_issue(ErrorKind.MISSING_HEADER_GUARD, 1, 0, 0, guard)
