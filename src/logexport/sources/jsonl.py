"""Replay events from an NDJSON export instead of the live log.

Each line is one object::

    {"time_generated": "2024-01-01T10:00:00", "user_name": "CORP\\\\bob",
     "event_id": 4624, "log_name": "Security", "host": "local"}

Only ``time_generated`` is required.  Records without ``log_name`` match any
log; records without ``host`` belong to the local host.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator

from ..errors import QueryFacilityFailure
from ..query.models import LOCAL_HOST, EventRecord, LogCategory
from ..search.time_filter import parse_timestamp

logger = logging.getLogger(__name__)


class JsonlEventSource:
    """Stream-parse an NDJSON event export. Memory usage: O(1) per line."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def name(self) -> str:
        return "jsonl"

    def parse_line(self, line: str) -> EventRecord | None:
        """Parse one line. Returns None for blank lines or malformed records."""
        line = line.strip()
        if not line:
            return None
        try:
            raw = json.loads(line)
        except json.JSONDecodeError:
            return None
        if not isinstance(raw, dict):
            return None
        return self._to_record(raw)

    def _to_record(self, raw: dict[str, Any]) -> EventRecord | None:
        ts = parse_timestamp(str(raw.get("time_generated") or ""))
        if ts is None:
            return None
        try:
            event_id = int(raw.get("event_id", 0))
        except (TypeError, ValueError):
            return None
        return EventRecord(
            user_name=str(raw.get("user_name") or "N/A"),
            time_generated=ts,
            event_id=event_id,
            log_name=str(raw.get("log_name") or ""),
            host=str(raw.get("host") or LOCAL_HOST),
        )

    def read(self, host: str, log_name: LogCategory) -> Iterator[EventRecord]:
        wanted_log = str(log_name).lower()
        wanted_host = host.strip().lower()
        try:
            with self._path.open(encoding="utf-8", errors="replace") as fh:
                for lineno, line in enumerate(fh, start=1):
                    record = self.parse_line(line)
                    if record is None:
                        if line.strip():
                            logger.debug("Skipping malformed record at %s:%d", self._path, lineno)
                        continue
                    if record.host.lower() != wanted_host:
                        continue
                    if record.log_name and record.log_name.lower() != wanted_log:
                        continue
                    yield record
        except OSError as exc:
            raise QueryFacilityFailure(
                f"Cannot read event export {self._path}: {exc.strerror or exc}",
                host=host, log_name=str(log_name),
            ) from exc
