"""
Function definition checks: pointer parameters that could be const.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .. import patterns
from ..checker_base import BaseChecker
from ..masker import MaskedLine
from ..rules import ErrorKind

_DEF_HEADER = re.compile(
    r"(" + patterns.IDENT + r")\s*\(((?:[^()]|\([^()]*\))*)\)\s*$")
_ASSIGN = r"\s*(?:[-+*/%&|^]|<<|>>)?=(?!=)"


@dataclass
class FunctionDef:
    """A function definition located by brace matching at file scope.

    Line numbers are 0-based indexes into the masked line list.
    """
    name: str
    header_line: int
    open_line: int
    close_line: int = -1
    params: List[str] = field(default_factory=list)


def split_params(text: str) -> List[str]:
    """Split a parameter list on its top-level commas."""
    params = []
    depth = 0
    current = []
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            params.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    tail = "".join(current).strip()
    if tail:
        params.append(tail)
    return params


def _header_match(text: str):
    m = _DEF_HEADER.search(text)
    if not m or m.group(1) in patterns.C_KEYWORDS:
        return None
    prefix = text[:m.start(1)]
    words = re.findall(patterns.IDENT, prefix)
    if not words or any(w in patterns.STATEMENT_KEYWORDS for w in words) or "=" in prefix:
        return None
    return m


def find_function_definitions(lines: List[MaskedLine]) -> List[FunctionDef]:
    """Return every function definition in file order."""
    found: List[FunctionDef] = []
    header: List[Tuple[int, str]] = []
    current: Optional[FunctionDef] = None
    depth = 0

    for index, line in enumerate(lines):
        if not line.has_code:
            continue
        code = line.code
        stripped = line.stripped

        if depth == 0 and current is None:
            if stripped.startswith("#"):
                header = []
                continue
            brace = code.find("{")
            if brace < 0:
                if stripped.endswith((";", "}")):
                    header = []
                else:
                    header.append((index, code))
                continue
            text = " ".join([part.strip() for _, part in header] + [code[:brace].strip()]).strip()
            m = _header_match(text)
            if m:
                current = FunctionDef(
                    name=m.group(1),
                    header_line=header[0][0] if header else index,
                    open_line=index,
                    params=split_params(m.group(2)),
                )
            header = []

        depth += stripped.count("{") - stripped.count("}")
        if depth <= 0:
            depth = 0
            if current is not None:
                current.close_line = index
                found.append(current)
                current = None
    return found


def param_pointer_name(param: str) -> Optional[str]:
    """Name of a pointer parameter that is a candidate for const, else None."""
    if "*" not in param or param.startswith("*"):
        return None
    words = re.findall(patterns.IDENT, param)
    if "const" in words or "**" in param.replace(" ", ""):
        return None
    if "[" in param or "(" in param:
        return None
    return words[-1] if words else None


def is_pointer_modified(name: str, body: str) -> bool:
    n = re.escape(name)
    writes = (
        r"\*\s*" + n + _ASSIGN,
        r"\b" + n + r"\s*(?:\[[^\]]*\]\s*)+" + _ASSIGN,
        r"\b" + n + r"\s*->\s*\w+(?:\s*\[[^\]]*\])*(?:\s*(?:\.|->)\s*\w+)*" + _ASSIGN,
        r"(?<![=!<>])\b" + n + _ASSIGN,
        r"(?:\+\+|--)\s*\*?\s*\(?\s*\*?\s*" + n + r"\b",
        r"\b" + n + r"\s*\)?\s*(?:\+\+|--)",
        r"(?<![&\w)\]])&\s*" + n + r"\b",
        r"\breturn\s+\(?\s*" + n + r"\s*\)?\s*;",
    )
    if any(re.search(pattern, body) for pattern in writes):
        return True
    return _passed_to_call(name, body)


def _passed_to_call(name: str, body: str) -> bool:
    for m in re.finditer(r"\b(" + patterns.IDENT + r")\s*\(", body):
        if m.group(1) in patterns.C_KEYWORDS:
            continue
        depth = 1
        pos = m.end()
        while pos < len(body) and depth:
            if body[pos] == "(":
                depth += 1
            elif body[pos] == ")":
                depth -= 1
            pos += 1
        for arg in split_params(body[m.end():pos - 1]):
            if re.fullmatch(r"\(?\s*(?:\([^()]*\)\s*)?" + re.escape(name) + r"\s*\)?(?:\s*[-+]\s*\w+)?", arg):
                return True
    return False


class FunctionChecker(BaseChecker):
    """Flags pointer parameters that are only read."""

    def _run_checks(self):
        for func in find_function_definitions(self.masked):
            self._check_const_pointers(func)

    def _check_const_pointers(self, func: FunctionDef):
        lines = self.masked
        open_code = lines[func.open_line].code
        body_parts = [open_code[open_code.find("{") + 1:]]
        body_parts.extend(lines[j].code for j in range(func.open_line + 1, func.close_line + 1))
        body = "\n".join(body_parts)

        for param in func.params:
            name = param_pointer_name(param)
            if name is None or is_pointer_modified(name, body):
                continue
            line_idx, column = self._locate(func, name)
            self._add_issue(ErrorKind.POINTER_COULD_BE_CONST, line_idx + 1, column, len(name), name, param)

    def _locate(self, func: FunctionDef, name: str) -> Tuple[int, int]:
        word = re.compile(r"\b" + re.escape(name) + r"\b")
        for j in range(func.header_line, func.open_line + 1):
            code = self.masked[j].code
            start = code.find("(") + 1 if j == func.header_line else 0
            m = word.search(code, start)
            if m:
                return j, m.start()
        return func.header_line, 0
