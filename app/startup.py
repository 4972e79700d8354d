"""Startup validation and configuration checks."""

import logging
import os

from c_style_checker.context import StyleMode

from .config import get_default_style, get_max_line_length

logger = logging.getLogger(__name__)


def _is_positive_int(text: str) -> bool:
    try:
        return int(text) > 0
    except ValueError:
        return False


def validate_config() -> None:
    """Warn about environment settings that were ignored in favour of defaults."""
    raw_style = os.environ.get("CSTYLE_STYLE")
    if raw_style is not None:
        try:
            StyleMode.parse(raw_style)
        except ValueError:
            logger.warning("CSTYLE_STYLE=%r is not 'kr' or 'allman'; using '%s'",
                           raw_style, get_default_style().value)
    raw_length = os.environ.get("CSTYLE_MAX_LINE_LENGTH")
    if raw_length is not None and not _is_positive_int(raw_length):
        logger.warning("CSTYLE_MAX_LINE_LENGTH=%r is not a positive integer; using %d",
                       raw_length, get_max_line_length())
    logger.info("Default style '%s', max line length %d",
                get_default_style().value, get_max_line_length())
