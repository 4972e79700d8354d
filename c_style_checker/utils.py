"""
Utility functions for the style checker.
"""

import logging
from pathlib import Path
from typing import List

from .context import TAB_WIDTH
from .errors import SourceReadError

logger = logging.getLogger(__name__)

C_SOURCE_SUFFIXES = (".c",)


def get_indent(line: str) -> int:
    """Width of the leading whitespace; a tab counts as TAB_WIDTH columns."""
    width = 0
    for ch in line:
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += TAB_WIDTH
        else:
            break
    return width


def leading_whitespace(line: str) -> int:
    """Number of leading whitespace characters (not columns)."""
    return len(line) - len(line.lstrip(" \t"))


def split_lines(content: str) -> List[str]:
    """Split text into physical lines without line terminators.

    A trailing newline does not produce an extra empty line.
    """
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_source(file_path: Path) -> str:
    """Read a whole source file; undecodable bytes become U+FFFD."""
    try:
        with open(file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
    except OSError as e:
        raise SourceReadError(file_path, e.strerror or str(e)) from e


def collect_source_files(target: Path) -> List[Path]:
    """Return ``target`` itself or every C source below it, sorted."""
    if target.is_dir():
        files = sorted(
            p for p in target.rglob("*")
            if p.is_file() and p.suffix in C_SOURCE_SUFFIXES
        )
        logger.debug("Collected %d source file(s) under %s", len(files), target)
        return files
    return [target]
