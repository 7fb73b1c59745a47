"""
Pivotal Tracker client exceptions.

All errors raised by this package derive from TrackerError, so callers can
catch the whole family with a single except clause.
"""

from typing import Optional


class TrackerError(Exception):
    """Base class for all Pivotal Tracker client errors"""

    pass


class ConfigurationError(TrackerError, ValueError):
    """The client was constructed with missing or invalid settings"""

    pass


class RemoteRequestError(TrackerError):
    """
    An HTTP request to Pivotal Tracker failed.

    Raised for network errors, non-2xx responses and response bodies that
    cannot be decoded as JSON.

    Attributes:
        method: HTTP method of the failed request
        path: API path relative to the base URL
        status_code: HTTP status, None for network-level failures
        body: raw response body (truncated), if any
    """

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class RemoteAuthError(TrackerError):
    """The identity lookup answered with an error object instead of a person"""

    pass
