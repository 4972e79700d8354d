"""Configuration from environment."""

import os

from dotenv import load_dotenv

from c_style_checker.context import DEFAULT_MAX_LINE_LENGTH, StyleMode

load_dotenv()


def get_default_style() -> StyleMode:
    """Style used when a request does not name one. Default: kr."""
    try:
        return StyleMode.parse(os.environ.get("CSTYLE_STYLE", "kr"))
    except ValueError:
        return StyleMode.KR


def get_max_line_length() -> int:
    try:
        value = int(os.environ.get("CSTYLE_MAX_LINE_LENGTH", str(DEFAULT_MAX_LINE_LENGTH)))
    except ValueError:
        return DEFAULT_MAX_LINE_LENGTH
    return value if value > 0 else DEFAULT_MAX_LINE_LENGTH


def get_host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip()


def get_port() -> int:
    try:
        return int(os.environ.get("PORT", "8000"))
    except ValueError:
        return 8000
