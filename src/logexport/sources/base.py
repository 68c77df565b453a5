"""Event source Protocol — anything that can enumerate one host's log."""
from __future__ import annotations

from datetime import datetime
from typing import Iterator, Protocol, runtime_checkable

from ..query.models import EventRecord, LogCategory


def to_local_naive(value: datetime) -> datetime:
    """Normalize aware or subclassed datetimes to a plain naive local datetime."""
    if value.tzinfo is not None:
        value = value.astimezone()
    return datetime(
        value.year, value.month, value.day,
        value.hour, value.minute, value.second, value.microsecond,
    )


@runtime_checkable
class EventSource(Protocol):
    """Protocol for event sources — duck-typed, no inheritance required."""

    @property
    def name(self) -> str:
        """Human-readable source name (e.g. 'windows', 'jsonl')."""
        ...

    def read(self, host: str, log_name: LogCategory) -> Iterator[EventRecord]:
        """Stream every record of ``log_name`` on ``host``, in any order.

        Raises QueryFacilityFailure when the log cannot be read.
        """
        ...
