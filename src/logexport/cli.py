"""logexport CLI — entry point.

Query an event log and export the matches to a two-column CSV
(UserName, TimeGenerated).
"""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import settings
from .errors import LogExportError
from .query.models import LOCAL_HOST, MAX_EVENT_ID, MIN_EVENT_ID, LogCategory, QueryRequest
from .runner import run_query
from .search.time_filter import parse_timestamp
from .sources.base import EventSource

console = Console()
err_console = Console(stderr=True)

# ── Helpers ─────────────────────────────────────────────────────────────────


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _parse_date_option(ctx: click.Context, param: click.Parameter, value: str | None) -> datetime | None:
    if value is None:
        return None
    parsed = parse_timestamp(value)
    if parsed is None:
        raise click.BadParameter(f"Cannot parse date: {value!r}. Use ISO-8601 format.")
    return parsed


def _split_servers(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> tuple[str, ...]:
    servers = tuple(s.strip() for item in value for s in item.split(",") if s.strip())
    return servers or (LOCAL_HOST,)


def _make_source(input_file: Path | None) -> EventSource:
    if input_file is not None:
        from .sources.jsonl import JsonlEventSource
        return JsonlEventSource(input_file)
    from .sources.windows import WindowsEventLogSource
    return WindowsEventLogSource()


# ── CLI root ─────────────────────────────────────────────────────────────────


@click.command()
@click.version_option(version="1.0.0", prog_name="logexport")
@click.option(
    "--log-name", default=settings.default_log_name,
    type=click.Choice([c.value for c in LogCategory], case_sensitive=False),
    help="Event log to query.",
    show_default=True,
)
@click.option(
    "--id", "event_id", default=None,
    type=click.IntRange(MIN_EVENT_ID, MAX_EVENT_ID),
    help="Only export events with this id.",
)
@click.option("--from-date", default=None, callback=_parse_date_option,
              help="Earliest event time, inclusive (ISO-8601, e.g. 2024-01-01T08:00:00).")
@click.option("--to-date", default=None, callback=_parse_date_option,
              help="Latest event time, inclusive (ISO-8601). Must not be in the future.")
@click.option("--csv-path", required=True, type=click.Path(dir_okay=False, path_type=Path),
              help="Destination CSV file (may be a network path).")
@click.option(
    "--remote-servers", multiple=True, callback=_split_servers,
    help="Hosts to query; repeat or comma-separate. Use 'local' for this machine.",
)
@click.option("--desired-count", default=None, type=int,
              help="Max records to export (omit, 0 or negative = all).")
@click.option("--sort-ascending", is_flag=True, help="Oldest first (default: newest first).")
@click.option(
    "--input-file", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read events from an NDJSON export instead of the live event log.",
)
@click.option("--preview", default=0, type=int, help="Show the first N exported rows as a table.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(
    log_name: str,
    event_id: int | None,
    from_date: datetime | None,
    to_date: datetime | None,
    csv_path: Path,
    remote_servers: tuple[str, ...],
    desired_count: int | None,
    sort_ascending: bool,
    input_file: Path | None,
    preview: int,
    verbose: bool,
) -> None:
    """Export matching event-log entries to CSV (UserName, TimeGenerated).

    \b
    Examples:
      logexport --csv-path logons.csv --id 4624 --desired-count 100
      logexport --log-name System --from-date 2024-01-01 --csv-path sys.csv
      logexport --remote-servers dc01,dc02 --csv-path \\\\share\\audit.csv
      logexport --input-file export.jsonl --csv-path out.csv --sort-ascending
    """
    _configure_logging(verbose)

    request = QueryRequest(
        destination_path=csv_path,
        log_name=LogCategory.parse(log_name),
        event_id=event_id,
        from_date=from_date,
        to_date=to_date,
        desired_count=desired_count,
        sort_ascending=sort_ascending,
        remote_targets=remote_servers,
    )

    try:
        outcome = run_query(
            request,
            _make_source(input_file),
            echo=lambda msg: console.print(msg, markup=False, highlight=False, soft_wrap=True),
        )
    except LogExportError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        sys.exit(1)

    if outcome.count == 0:
        console.print("No results returned.")
    else:
        console.print(f"{outcome.count} results found.")

    if preview > 0:
        from .visualization.tables import print_records_table
        print_records_table(list(outcome.records), title=outcome.destination.name, max_rows=preview, console=console)


if __name__ == "__main__":
    main()
