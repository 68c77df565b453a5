"""Two-column CSV export of event records.

The file is written next to its destination and moved into place only once
complete, so a failed export never leaves a truncated CSV behind.
"""
from __future__ import annotations

import csv
import io
import logging
import os
import tempfile
from pathlib import Path
from typing import IO, Iterable

from ..config import settings
from ..errors import OutputWriteFailure
from ..query.models import EventRecord

logger = logging.getLogger(__name__)

FIELDNAMES = ("UserName", "TimeGenerated")


def _write_rows(fh: IO[str], records: Iterable[EventRecord], timestamp_format: str) -> int:
    writer = csv.writer(fh, lineterminator="\n")
    writer.writerow(FIELDNAMES)
    count = 0
    for record in records:
        writer.writerow([record.user_name, record.time_generated.strftime(timestamp_format)])
        count += 1
    return count


def render_csv(records: Iterable[EventRecord], timestamp_format: str | None = None) -> str:
    """Render records as a CSV string (header included)."""
    buf = io.StringIO()
    _write_rows(buf, records, timestamp_format or settings.timestamp_format)
    return buf.getvalue()


def write_csv(
    records: Iterable[EventRecord],
    path: str | Path,
    encoding: str | None = None,
    timestamp_format: str | None = None,
) -> int:
    """Write records to ``path`` atomically. Returns the number of rows written.

    Raises OutputWriteFailure if the destination cannot be written; in that
    case the destination is left untouched.
    """
    dest = Path(path)
    encoding = encoding or settings.csv_encoding
    timestamp_format = timestamp_format or settings.timestamp_format
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{dest.name}.", suffix=".tmp", dir=dest.parent
        )
        with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
            count = _write_rows(fh, records, timestamp_format)
        os.replace(tmp_name, dest)
        tmp_name = None
    except OSError as exc:
        raise OutputWriteFailure(
            f"Cannot write {dest}: {exc.strerror or exc}", path=dest
        ) from exc
    except (UnicodeError, LookupError) as exc:
        raise OutputWriteFailure(
            f"Cannot write {dest} as {encoding}: {exc}", path=dest
        ) from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    logger.debug("Wrote %d rows to %s", count, dest)
    return count
