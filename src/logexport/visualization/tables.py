"""Rich-powered preview of exported records."""
from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from ..config import settings
from ..query.models import EventRecord

_console = Console()


def print_records_table(
    records: Sequence[EventRecord],
    title: str = "Exported events",
    max_rows: int = 20,
    console: Console | None = None,
) -> None:
    """Render the exported columns as a Rich table.

    Args:
        records:   Records in export order.
        title:     Table title shown in the header.
        max_rows:  Hard cap; longer result sets are truncated with a notice.
        console:   Target console (defaults to stdout).
    """
    out = console or _console
    if not records:
        out.print("[yellow]No records to display.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, show_lines=False)
    table.add_column("UserName", overflow="fold", max_width=60)
    table.add_column("TimeGenerated", style="cyan")

    for record in records[:max_rows]:
        table.add_row(record.user_name, record.time_generated.strftime(settings.timestamp_format))

    out.print(table)
    if len(records) > max_rows:
        out.print(f"[dim]... and {len(records) - max_rows} more rows in the CSV[/dim]")
