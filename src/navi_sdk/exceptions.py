"""
Custom exceptions for the NAVI SDK.

The memoization layer never raises errors of its own: whatever the wrapped
call raises reaches every caller attached to that call unchanged.
"""

from typing import Any, Optional


class NaviAPIError(Exception):
    """
    Base exception for all SDK-level API failures.

    Args:
        message (str): Short explanation of the error.
        details (Any | None): Optional structured details (e.g., response body).
        status_code (int | None): HTTP status, when the failure came from a response.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.details = details
        self.status_code = status_code


class NaviNotFoundError(NaviAPIError):
    """Raised when a lookup (pool, asset) matches nothing."""


class NaviTransportError(NaviAPIError):
    """Raised when a network or protocol-level failure occurs in a transport."""

    def __init__(self, original: Exception):
        super().__init__(str(original) or type(original).__name__)
        self.original = original
