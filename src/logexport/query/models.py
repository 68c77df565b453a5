"""Value types shared by the validator, composer, sources and exporter."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

LOCAL_HOST = "local"
LOOPBACK_ADDRESS = "127.0.0.1"

MIN_EVENT_ID = 0
MAX_EVENT_ID = 65535


class LogCategory(str, Enum):
    """Event log partitions that can be queried."""

    APPLICATION = "Application"
    SETUP = "Setup"
    SYSTEM = "System"
    SECURITY = "Security"

    @classmethod
    def parse(cls, value: str) -> "LogCategory":
        """Case-insensitive lookup by log name."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(f"Unknown log name: {value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class QueryRequest:
    """Everything one invocation asks for, as given on the command line.

    Attributes:
        destination_path: CSV file to write (need not exist yet).
        log_name:         Log partition to query.
        event_id:         Only match this id; ``None`` matches any id.
        from_date:        Inclusive lower bound; ``None`` = unbounded.
        to_date:          Inclusive upper bound; ``None`` = unbounded.
        desired_count:    Cap on returned records. ``None`` (absent) and
                          values <= 0 both mean "return every match".
        sort_ascending:   Oldest first when True, newest first otherwise.
        remote_targets:   Hosts to query; ``"local"`` is this machine.
    """

    destination_path: Path
    log_name: LogCategory = LogCategory.SECURITY
    event_id: int | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None
    desired_count: int | None = None
    sort_ascending: bool = False
    remote_targets: tuple[str, ...] = (LOCAL_HOST,)

    def __post_init__(self) -> None:
        if self.event_id is not None and not MIN_EVENT_ID <= self.event_id <= MAX_EVENT_ID:
            raise ValueError(
                f"event_id must be between {MIN_EVENT_ID} and {MAX_EVENT_ID}, got {self.event_id}"
            )
        if not self.remote_targets:
            raise ValueError("remote_targets must contain at least one host")
        # Targets form a set: drop case-insensitive duplicates, keep first spelling
        seen: dict[str, str] = {}
        for target in self.remote_targets:
            seen.setdefault(target.strip().lower(), target.strip())
        object.__setattr__(self, "remote_targets", tuple(seen.values()))


@dataclass(frozen=True)
class FilterSpec:
    """Normalized filter handed to the record filters."""

    max_results: int | None = None
    after: datetime | None = None
    before: datetime | None = None
    description: str = ""


@dataclass(frozen=True)
class EventRecord:
    """One event-log entry, reduced to what the export needs."""

    user_name: str
    time_generated: datetime
    event_id: int = 0
    log_name: str = ""
    host: str = LOCAL_HOST
