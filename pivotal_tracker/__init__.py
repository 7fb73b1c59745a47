"""pivotal_tracker - Pivotal Tracker REST API v5 client."""

from pivotal_tracker.client import TrackerClient
from pivotal_tracker.core.exceptions import (
    ConfigurationError,
    RemoteAuthError,
    RemoteRequestError,
    TrackerError,
)
from pivotal_tracker.schemas.tracker import OutputShape

__all__ = [
    "TrackerClient",
    "OutputShape",
    "TrackerError",
    "ConfigurationError",
    "RemoteRequestError",
    "RemoteAuthError",
]
