"""Services for the checker integration."""

from .checker import CheckerService

__all__ = ["CheckerService"]
