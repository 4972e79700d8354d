"""
Cross-line state machines driven by the line checker.
"""

from .case_block import CaseBlockAnalyzer
from .indent import IndentTracker
from .inline_block import InlineBlockValidator, is_inline_control
from .param_block import ParamBlockTracker
from .type_context import TypeContextTracker

__all__ = [
    'CaseBlockAnalyzer',
    'IndentTracker',
    'InlineBlockValidator',
    'ParamBlockTracker',
    'TypeContextTracker',
    'is_inline_control',
]
