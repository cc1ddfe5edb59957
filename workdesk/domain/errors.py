"""Error types raised by the workdesk services and stores."""

from __future__ import annotations


class WorkdeskError(RuntimeError):
    """Base class for errors surfaced to the acting user."""


class StoreUnavailableError(WorkdeskError):
    """A record store read or write failed (network, configuration, database)."""


class ValidationError(WorkdeskError):
    """Input was rejected before any state was written."""


class PermissionDeniedError(WorkdeskError):
    """The acting user may not change the given task fields."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields
