"""Composable filter chain for event records.

Filters are callables that accept an EventRecord and return bool.
Chains short-circuit on the first failing predicate (AND semantics).
"""
from __future__ import annotations

from typing import Callable, Iterable, Iterator

from ..query.models import EventRecord, FilterSpec
from .time_filter import TimeRangeFilter

Predicate = Callable[[EventRecord], bool]


class EventIdFilter:
    """Accept records with a given event id."""

    def __init__(self, event_id: int) -> None:
        self.event_id = event_id

    def matches(self, record: EventRecord) -> bool:
        return record.event_id == self.event_id


class FilterChain:
    """Apply multiple predicates in sequence (logical AND).

    Usage::

        chain = FilterChain()
        chain.add(EventIdFilter(4624).matches)
        chain.add(TimeRangeFilter(after=t0, before=t1).matches)

        results = list(chain.apply(records))
    """

    def __init__(self) -> None:
        self._predicates: list[Predicate] = []

    def add(self, predicate: Predicate) -> "FilterChain":
        """Append a predicate and return self for chaining."""
        self._predicates.append(predicate)
        return self

    def matches(self, record: EventRecord) -> bool:
        """Return True if all predicates accept the record."""
        return all(p(record) for p in self._predicates)

    def apply(self, records: Iterable[EventRecord]) -> Iterator[EventRecord]:
        """Yield records that pass every predicate."""
        for record in records:
            if self.matches(record):
                yield record

    def __len__(self) -> int:
        return len(self._predicates)

    def __repr__(self) -> str:
        return f"FilterChain({len(self._predicates)} predicates)"


def build_chain(spec: FilterSpec, event_id: int | None = None) -> FilterChain:
    """Translate a FilterSpec (plus the optional event id) into predicates."""
    chain = FilterChain()
    if event_id is not None:
        chain.add(EventIdFilter(event_id).matches)
    if spec.after is not None or spec.before is not None:
        chain.add(TimeRangeFilter(after=spec.after, before=spec.before).matches)
    return chain
