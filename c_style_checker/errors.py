"""
Exceptions raised by the style checker.
"""

from pathlib import Path


class SourceReadError(Exception):
    """Raised when an input file cannot be opened or read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read {path}: {reason}")
