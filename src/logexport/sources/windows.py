"""Live Windows event log source backed by pywin32.

Remote hosts are opened by name through ``OpenEventLog``; transport and
authentication are left to the operating system.  The win32 modules are
imported on first use so the rest of the package works on any platform.
"""
from __future__ import annotations

import logging
from typing import Any, Iterator

from ..config import settings
from ..errors import QueryFacilityFailure
from ..query.models import LOCAL_HOST, EventRecord, LogCategory
from .base import to_local_naive

logger = logging.getLogger(__name__)

UNKNOWN_USER = "N/A"


def _load_win32() -> tuple[Any, Any, Any]:
    try:
        import pywintypes  # type: ignore[import-not-found]
        import win32evtlog  # type: ignore[import-not-found]
        import win32security  # type: ignore[import-not-found]
    except ImportError as exc:
        raise QueryFacilityFailure(
            "The Windows event log is not available: pywin32 is not installed "
            "(use --input-file to read an exported log instead)."
        ) from exc
    return win32evtlog, win32security, pywintypes


class WindowsEventLogSource:
    """Read classic event logs (Application, Setup, System, Security).

    Args:
        batch_limit: Stop after this many ``ReadEventLog`` batches per host
                     (0 = read the whole log).
    """

    def __init__(self, batch_limit: int | None = None) -> None:
        self._batch_limit = settings.read_batch_limit if batch_limit is None else batch_limit
        self._sid_cache: dict[tuple[str | None, str], str] = {}

    @property
    def name(self) -> str:
        return "windows"

    def read(self, host: str, log_name: LogCategory) -> Iterator[EventRecord]:
        win32evtlog, win32security, pywintypes = _load_win32()
        server = None if host.strip().lower() == LOCAL_HOST else host

        try:
            handle = win32evtlog.OpenEventLog(server, str(log_name))
        except pywintypes.error as exc:
            raise QueryFacilityFailure(
                f"Cannot open the {log_name} log on {host}: {exc.strerror}",
                host=host, log_name=str(log_name),
            ) from exc

        flags = win32evtlog.EVENTLOG_BACKWARDS_READ | win32evtlog.EVENTLOG_SEQUENTIAL_READ
        batches = 0
        try:
            while True:
                try:
                    events = win32evtlog.ReadEventLog(handle, flags, 0)
                except pywintypes.error as exc:
                    raise QueryFacilityFailure(
                        f"Reading the {log_name} log on {host} failed: {exc.strerror}",
                        host=host, log_name=str(log_name),
                    ) from exc
                if not events:
                    break
                for event in events:
                    yield EventRecord(
                        user_name=self._resolve_user(event.Sid, server, win32security, pywintypes),
                        time_generated=to_local_naive(event.TimeGenerated),
                        event_id=event.EventID & 0xFFFF,
                        log_name=str(log_name),
                        host=host,
                    )
                batches += 1
                if self._batch_limit and batches >= self._batch_limit:
                    logger.warning(
                        "Stopped reading %s on %s after %d batches", log_name, host, batches
                    )
                    break
        finally:
            win32evtlog.CloseEventLog(handle)

    def _resolve_user(self, sid: Any, server: str | None, win32security: Any, pywintypes: Any) -> str:
        """Return DOMAIN\\name for a SID, the string SID if unresolvable, N/A if absent."""
        if sid is None:
            return UNKNOWN_USER
        try:
            sid_str = win32security.ConvertSidToStringSid(sid)
        except pywintypes.error as exc:
            logger.debug("Could not convert SID %r: %s", sid, exc)
            return UNKNOWN_USER
        key = (server, sid_str)
        if key in self._sid_cache:
            return self._sid_cache[key]
        try:
            name, domain, _ = win32security.LookupAccountSid(server, sid)
            user = f"{domain}\\{name}" if domain else name
        except pywintypes.error as exc:
            logger.debug("Could not resolve SID %s: %s", sid_str, exc)
            user = sid_str
        self._sid_cache[key] = user
        return user
