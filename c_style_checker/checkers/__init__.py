"""
Checkers package for C style rules.
"""

from .include_checker import IncludeChecker
from .layout_checker import LayoutChecker
from .line_checker import LineStyleChecker
from .function_checker import FunctionChecker

__all__ = [
    'IncludeChecker',
    'LayoutChecker',
    'LineStyleChecker',
    'FunctionChecker',
]
