"""Exceptions raised by the METAR minima toolkit."""

from typing import Any


class MetarMinimaError(Exception):
    """Base class for all errors raised by metar_minima."""

    def __init__(self, message: str, details: Any = None):
        """
        Initialize the error.

        Args:
            message: Error message
            details: Optional additional details (offending value, field name...)
        """
        super().__init__(message)
        self.details = details


class MissingReportError(MetarMinimaError, ValueError):
    """Raised when no report text was supplied to decode."""


class InvalidMinimaError(MetarMinimaError, ValueError):
    """Raised when a minima threshold is negative."""
