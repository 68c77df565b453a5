"""Request validation — reject nonsensical date ranges and targets."""
from __future__ import annotations

import logging
from datetime import datetime

from ..errors import InvalidDateRangeError, LoopbackNotSupportedError
from .models import LOOPBACK_ADDRESS, QueryRequest

logger = logging.getLogger(__name__)


def _naive(dt: datetime) -> datetime:
    # Aware values are converted to local time before dropping tzinfo
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def is_usable_count(count: int | None) -> bool:
    """Return True when ``count`` should become a result cap.

    Absent and non-positive counts are not errors; they mean "no cap".
    """
    return count is not None and count > 0


def check_date_range(
    from_date: datetime | None,
    to_date: datetime | None,
    now: datetime | None = None,
) -> None:
    """Raise InvalidDateRangeError for future or inverted bounds."""
    now = _naive(now or datetime.now())
    start = _naive(from_date) if from_date is not None else None
    end = _naive(to_date) if to_date is not None else None

    if start is not None and start > now:
        raise InvalidDateRangeError(f"From date {start} is in the future.")
    if end is not None and end > now:
        raise InvalidDateRangeError(f"To date {end} is in the future.")
    if start is not None and end is not None and start > end:
        raise InvalidDateRangeError(f"From date {start} is after to date {end}.")


def check_remote_targets(targets: tuple[str, ...]) -> None:
    if any(t.strip() == LOOPBACK_ADDRESS for t in targets):
        raise LoopbackNotSupportedError(
            f"{LOOPBACK_ADDRESS} is not supported as a remote server; use 'local' instead."
        )


def validate(request: QueryRequest, now: datetime | None = None) -> QueryRequest:
    """Check a request and return it unchanged; the first failing rule raises."""
    check_date_range(request.from_date, request.to_date, now=now)
    check_remote_targets(request.remote_targets)
    if request.desired_count is not None and not is_usable_count(request.desired_count):
        logger.debug("Desired count %d is not positive, returning all matches", request.desired_count)
    logger.debug("Request validated: %r", request)
    return request
