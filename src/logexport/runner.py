"""Query pipeline: validate, compose, read each host, sort, cap, export."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from .export.csv_writer import write_csv
from .query.composer import compose
from .query.models import EventRecord, FilterSpec, QueryRequest
from .query.validator import validate
from .search.filter_chain import build_chain
from .sources.base import EventSource

logger = logging.getLogger(__name__)

Writer = Callable[[Iterable[EventRecord], Path], int]


@dataclass(frozen=True)
class QueryOutcome:
    spec: FilterSpec
    records: tuple[EventRecord, ...]
    destination: Path

    @property
    def count(self) -> int:
        return len(self.records)


def collect(
    request: QueryRequest, spec: FilterSpec, source: EventSource
) -> list[EventRecord]:
    """Read every target host in turn and return the filtered, ordered, capped records."""
    chain = build_chain(spec, event_id=request.event_id)
    matched: list[EventRecord] = []
    for host in request.remote_targets:
        logger.debug("Querying %s log on %s via %s", request.log_name, host, source.name)
        before = len(matched)
        matched.extend(chain.apply(source.read(host.strip(), request.log_name)))
        logger.debug("%d matching records from %s", len(matched) - before, host)

    matched.sort(key=lambda r: r.time_generated, reverse=not request.sort_ascending)
    if spec.max_results is not None:
        matched = matched[: spec.max_results]
    return matched


def run_query(
    request: QueryRequest,
    source: EventSource,
    *,
    now: datetime | None = None,
    writer: Writer = write_csv,
    echo: Callable[[str], None] | None = None,
) -> QueryOutcome:
    """Run one export end to end.

    Validation errors propagate before any query or file write.  ``echo``
    receives the narrative message before the query starts.
    """
    validate(request, now=now)
    spec, message = compose(request)
    if echo is not None:
        echo(message)
    records = collect(request, spec, source)
    writer(records, request.destination_path)
    return QueryOutcome(spec=spec, records=tuple(records), destination=request.destination_path)
