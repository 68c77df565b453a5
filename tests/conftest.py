"""Shared pytest fixtures for logexport tests."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from logexport.query.models import QueryRequest


@pytest.fixture()
def now() -> datetime:
    """Fixed 'current time' passed to the validator."""
    return datetime(2024, 7, 1, 12, 0, 0)


@pytest.fixture()
def make_request(tmp_path: Path):
    """Return a factory building QueryRequests with a temp destination."""

    def _make(**kwargs) -> QueryRequest:
        kwargs.setdefault("destination_path", tmp_path / "out.csv")
        return QueryRequest(**kwargs)

    return _make


@pytest.fixture()
def event_dicts() -> list[dict]:
    return [
        {"time_generated": "2024-01-01T08:00:00", "user_name": "CORP\\alice", "event_id": 4624,
         "log_name": "Security", "host": "local"},
        {"time_generated": "2024-02-15T09:30:00", "user_name": "CORP\\bob", "event_id": 4625,
         "log_name": "Security", "host": "local"},
        {"time_generated": "2024-03-10T10:00:00", "user_name": "CORP\\carol", "event_id": 4624,
         "log_name": "Security", "host": "local"},
        {"time_generated": "2024-04-20T11:15:00", "user_name": "SYSTEM", "event_id": 7036,
         "log_name": "System", "host": "local"},
        {"time_generated": "2024-05-05T12:00:00", "user_name": "CORP\\dave", "event_id": 4624,
         "log_name": "Security", "host": "dc01"},
    ]


@pytest.fixture()
def events_file(tmp_path: Path, event_dicts: list[dict]):
    """Return a factory that writes NDJSON event exports."""

    def _make(records: list[dict] | None = None, name: str = "events.jsonl") -> Path:
        p = tmp_path / name
        rows = event_dicts if records is None else records
        p.write_text("\n".join(json.dumps(r) for r in rows) + "\n", encoding="utf-8")
        return p

    return _make
