"""
Diagnostic data model for the style checker.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Set, Tuple


class Severity(Enum):
    """Diagnostic severity levels."""
    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass(frozen=True)
class Diagnostic:
    """A single style violation.

    ``line`` is 1-based, ``column`` is 0-based and ``length`` is the width of
    the offending span (0 when the diagnostic applies to the whole line).
    """
    line: int
    column: int
    length: int
    message: str
    severity: Severity
    kind: str = ""

    @property
    def key(self) -> Tuple[int, int, str]:
        return (self.line, self.column, self.message)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR


def dedupe_diagnostics(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    """Drop diagnostics sharing (line, column, message), keeping first-seen order."""
    seen: Set[Tuple[int, int, str]] = set()
    unique: List[Diagnostic] = []
    for diagnostic in diagnostics:
        if diagnostic.key in seen:
            continue
        seen.add(diagnostic.key)
        unique.append(diagnostic)
    return unique


def count_by_severity(diagnostics: Iterable[Diagnostic]) -> Tuple[int, int]:
    """Return (errors, warnings)."""
    errors = warnings = 0
    for diagnostic in diagnostics:
        if diagnostic.is_error:
            errors += 1
        else:
            warnings += 1
    return errors, warnings
