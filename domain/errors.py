"""
Error types raised by the service layer.

Views catch these at the point of the triggering action and render the message
inline; nothing here is expected to reach Streamlit's global error page.
"""
from typing import Iterable, Optional


class DashboardError(Exception):
    """Base class for all dashboard errors."""


class AuthError(DashboardError):
    """Bad credentials, a failed sign-out, or an account that is not an admin."""


class RemoteError(DashboardError):
    """Network or query failure on a backend call."""

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.code = code

    def __str__(self):
        base = super().__str__()
        if self.code:
            return f"{base} (Code: {self.code})"
        return base


class ValidationError(DashboardError):
    """Missing or blank input, detected before any remote call."""

    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields = tuple(fields)
