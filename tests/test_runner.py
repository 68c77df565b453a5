"""Tests for the query pipeline."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterator

import pytest

from logexport.errors import InvalidDateRangeError, LoopbackNotSupportedError, QueryFacilityFailure
from logexport.query.models import EventRecord, LogCategory
from logexport.runner import run_query


class _ListSource:
    """In-memory source recording every host it is asked for."""

    def __init__(self, records: dict[str, list[EventRecord]]) -> None:
        self._records = records
        self.calls: list[tuple[str, LogCategory]] = []

    @property
    def name(self) -> str:
        return "list"

    def read(self, host: str, log_name: LogCategory) -> Iterator[EventRecord]:
        self.calls.append((host, log_name))
        if host not in self._records:
            raise QueryFacilityFailure(f"{host} unreachable", host=host)
        yield from self._records[host]


def _rec(day: int, user: str, event_id: int = 4624, host: str = "local") -> EventRecord:
    return EventRecord(user_name=user, time_generated=datetime(2024, 1, day), event_id=event_id, host=host)


@pytest.fixture()
def source() -> _ListSource:
    return _ListSource({
        "local": [_rec(1, "a"), _rec(5, "b", 4625), _rec(3, "c")],
        "dc01": [_rec(4, "d", host="dc01"), _rec(2, "e", host="dc01")],
    })


class TestRunQuery:
    def test_all_dates_descending(self, make_request, source, now: datetime) -> None:
        messages: list[str] = []
        outcome = run_query(make_request(desired_count=100), source, now=now, echo=messages.append)
        assert messages == ["Getting events for all dates..."]
        assert [r.user_name for r in outcome.records] == ["b", "c", "a"]
        assert outcome.spec.max_results == 100
        assert outcome.destination.exists()

    def test_ascending(self, make_request, source, now: datetime) -> None:
        outcome = run_query(make_request(sort_ascending=True), source, now=now)
        assert [r.user_name for r in outcome.records] == ["a", "c", "b"]

    def test_event_id_and_lower_bound(self, make_request, source, now: datetime) -> None:
        request = make_request(event_id=4624, from_date=datetime(2024, 1, 2))
        outcome = run_query(request, source, now=now)
        assert [r.user_name for r in outcome.records] == ["c"]

    def test_cap_applies_after_merging_hosts(self, make_request, source, now: datetime) -> None:
        request = make_request(remote_targets=("local", "dc01"), desired_count=3)
        outcome = run_query(request, source, now=now)
        assert [r.user_name for r in outcome.records] == ["b", "d", "c"]
        assert [c[0] for c in source.calls] == ["local", "dc01"]

    def test_non_positive_count_returns_everything(self, make_request, source, now: datetime) -> None:
        outcome = run_query(make_request(desired_count=-5), source, now=now)
        assert outcome.count == 3
        assert outcome.spec.max_results is None

    def test_invalid_dates_skip_query_and_write(self, make_request, source, now: datetime) -> None:
        request = make_request(from_date=datetime(2024, 6, 1), to_date=datetime(2024, 1, 1))
        written: list = []
        with pytest.raises(InvalidDateRangeError):
            run_query(request, source, now=now, writer=lambda recs, path: written.append(path) or 0)
        assert source.calls == []
        assert written == []
        assert not request.destination_path.exists()

    def test_loopback_skips_query(self, make_request, source, now: datetime) -> None:
        with pytest.raises(LoopbackNotSupportedError):
            run_query(make_request(remote_targets=("127.0.0.1",)), source, now=now)
        assert source.calls == []

    def test_facility_failure_writes_nothing(self, make_request, source, now: datetime) -> None:
        request = make_request(remote_targets=("local", "ghost"))
        with pytest.raises(QueryFacilityFailure):
            run_query(request, source, now=now)
        assert not request.destination_path.exists()

    def test_empty_result_writes_header(self, make_request, source, now: datetime) -> None:
        outcome = run_query(make_request(event_id=1), source, now=now)
        assert outcome.count == 0
        assert outcome.destination.read_text(encoding="utf-8") == "UserName,TimeGenerated\n"

    def test_compose_is_stable_across_runs(self, make_request, source, now: datetime) -> None:
        request = make_request(desired_count=0)
        assert run_query(request, source, now=now).spec == run_query(request, source, now=now).spec
