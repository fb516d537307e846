"""Exception hierarchy raised by the planning workflow."""
from __future__ import annotations


class WorkflowError(Exception):
    """Base class for errors raised by the planning workflow itself."""


class InvalidRequestError(WorkflowError, ValueError):
    """Raised when a run is started without a request or task id."""


class WorkflowCancelledError(WorkflowError):
    """Raised when a run stops because cancellation was requested.

    Kept separate from data failures so callers can tell a cancelled run
    apart from one that broke.
    """

    def __init__(self, reason: str = "Cancellation requested") -> None:
        super().__init__(reason)
        self.reason = reason
