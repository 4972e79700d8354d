"""
Line-oriented style checker for C source files.
"""

from .context import StyleMode
from .errors import SourceReadError
from .issue import Diagnostic, Severity
from .main_checker import StyleChecker

__all__ = ["Diagnostic", "Severity", "SourceReadError", "StyleChecker", "StyleMode"]
__version__ = "0.1.0"
