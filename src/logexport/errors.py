"""Exception hierarchy for logexport.

Library code raises these; only the CLI turns them into a message and a
non-zero exit status.
"""
from __future__ import annotations

from pathlib import Path


class LogExportError(Exception):
    """Base class for every error surfaced to the user."""


class ValidationError(LogExportError):
    """The request was rejected before any query was attempted."""


class InvalidDateRangeError(ValidationError):
    """A date lies in the future, or the range is inverted."""


class LoopbackNotSupportedError(ValidationError):
    """The loopback literal was passed as a remote target."""


class QueryFacilityFailure(LogExportError):
    """The event log could not be read (unreachable host, privileges, unknown log)."""

    def __init__(self, message: str, host: str | None = None, log_name: str | None = None) -> None:
        super().__init__(message)
        self.host = host
        self.log_name = log_name


class OutputWriteFailure(LogExportError):
    """The destination CSV could not be written."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path
