"""Timestamp parsing and time-range filtering for event records."""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Iterator

from ..query.models import EventRecord

# Formats tried in order when parsing user or export timestamps
_TIMESTAMP_FORMATS: list[str] = [
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
]


def parse_timestamp(raw: str) -> datetime | None:
    """Try each known format, then ISO-8601, and return the first successful parse.

    Aware results are converted to local time and returned naive so they
    compare cleanly with event-log timestamps.
    """
    raw = raw.strip()
    if not raw:
        return None
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


class TimeRangeFilter:
    """Accept records generated within [after, before].

    Either bound may be ``None`` (open interval).
    """

    def __init__(
        self,
        after: datetime | None = None,
        before: datetime | None = None,
    ) -> None:
        self.after = after
        self.before = before

    def matches(self, record: EventRecord) -> bool:
        # Strip tzinfo for naive comparison if needed
        ts = record.time_generated.replace(tzinfo=None)
        if self.after and ts < self.after.replace(tzinfo=None):
            return False
        if self.before and ts > self.before.replace(tzinfo=None):
            return False
        return True

    def filter(self, records: Iterable[EventRecord]) -> Iterator[EventRecord]:
        """Yield records whose timestamp falls within the configured range."""
        for record in records:
            if self.matches(record):
                yield record
