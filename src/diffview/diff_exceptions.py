"""Custom exceptions for diff parsing."""

from typing import Any


class DiffError(Exception):
    """Base exception for diff operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class DiffSyntaxError(DiffError):
    """Raised when the diff text does not match the expected grammar."""


class DiffFormatError(DiffSyntaxError):
    """Raised when a numeric field in a hunk header is not a valid non-negative integer."""


class DiffValidationError(DiffError):
    """Raised when a hunk body does not match the line counts declared in its header."""
