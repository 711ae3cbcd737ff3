"""Helpers shared by the CLI commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from logtrail.config import LogTrailConfig
from logtrail.tail.models import Record
from logtrail.types.loader import find_log_type
from logtrail.types.models import LogType

console = Console(stderr=True)


def require_log_type(ctx: click.Context) -> LogType:
    """The log type selected with ``--type``; exits if missing or invalid."""
    ref = ctx.obj.get("log_type_ref")
    config: LogTrailConfig = ctx.obj["config"]
    if not ref:
        console.print("[red]A log type is required: pass --type / -t.[/red]")
        raise SystemExit(1)
    try:
        return find_log_type(ref, config.type_dirs)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Cannot load log type {ref}: {exc}[/red]")
        raise SystemExit(1)


def records_table(log_type: LogType, records: list[Record], title: str = "") -> Table:
    """Rich table with one column per declared token."""
    table = Table(title=title or None, show_lines=False)
    table.add_column("Offset", justify="right", style="dim")
    tokens = list(log_type.match)
    for token in tokens:
        table.add_column(token, overflow="fold")
    for record in records:
        table.add_row(
            str(record.offset),
            *(Text(record.fields.get(token, "")) for token in tokens),
        )
    return table
