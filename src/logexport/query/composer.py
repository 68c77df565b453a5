"""Turn a validated request into a FilterSpec and a progress message."""
from __future__ import annotations

from datetime import datetime, time

from .models import FilterSpec, QueryRequest
from .validator import is_usable_count


def format_timestamp(dt: datetime) -> str:
    """Render a bound for display; midnight renders as the date alone."""
    if dt.time() == time(0, 0):
        return dt.strftime("%Y-%m-%d")
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def _date_clause(
    from_date: datetime | None, to_date: datetime | None
) -> tuple[datetime | None, datetime | None, str]:
    """Pick one of the four bound combinations and its narrative."""
    if from_date is None and to_date is None:
        return None, None, "Getting events for all dates..."
    if to_date is None:
        return from_date, None, (
            f"Getting all events logged on or after {format_timestamp(from_date)}..."
        )
    if from_date is None:
        return None, to_date, (
            f"Getting all events logged on or before {format_timestamp(to_date)}..."
        )
    return from_date, to_date, (
        f"Getting all events logged on or after {format_timestamp(from_date)}"
        f" and on or before {format_timestamp(to_date)}..."
    )


def compose(request: QueryRequest) -> tuple[FilterSpec, str]:
    """Build the filter for ``request``. Pure; never raises."""
    cap = request.desired_count if is_usable_count(request.desired_count) else None
    after, before, message = _date_clause(request.from_date, request.to_date)
    spec = FilterSpec(max_results=cap, after=after, before=before, description=message)
    return spec, message
