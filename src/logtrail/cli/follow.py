"""CLI command: logtrail follow <file> — poll a log file and print new records."""

from __future__ import annotations

import os
import time

import click
from rich.text import Text

from logtrail.cli.common import console, require_log_type
from logtrail.config import LogTrailConfig
from logtrail.tail.engine import TailEngine
from logtrail.tail.models import Record, ScanResult
from logtrail.types.models import LogType


@click.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--interval", type=float, help="Seconds between polls.")
@click.option("--search", "-s", default="", help="Substring, or /regex/flags.")
@click.option("--polls", type=int, default=0, help="Stop after this many polls (0: never).")
@click.pass_context
def follow(
    ctx: click.Context,
    file: str,
    interval: float | None,
    search: str,
    polls: int,
) -> None:
    """Keep polling FILE, carrying the cursor from one poll to the next."""
    config: LogTrailConfig = ctx.obj["config"]
    log_type = require_log_type(ctx)
    interval = interval if interval is not None else config.poll_interval
    engine = TailEngine()

    console.print(
        f"[bold]logtrail[/bold] following [cyan]{file}[/cyan] "
        f"as [cyan]{log_type.name}[/cyan]"
    )
    console.print("  Press Ctrl+C to stop.\n")

    last_size = 0
    lastline = ""
    done = 0
    try:
        while True:
            size = os.path.getsize(file)
            request = log_type.to_request(
                file,
                wanted=config.wanted,
                old_lastline=lastline,
                data_to_parse=size - last_size,
                search=search,
                timezone=config.timezone,
                max_search_log_time=config.max_search_log_time,
            )
            result = engine.scan(request)
            _print_new(log_type, result)

            last_size = result.filesize
            lastline = result.lastline or lastline
            done += 1
            if polls and done >= polls:
                break
            time.sleep(interval)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopping...[/dim]")
    except (OSError, ValueError) as exc:
        console.print(f"[red]Cannot follow {file}: {exc}[/red]")
        raise SystemExit(1)


def _print_new(log_type: LogType, result: ScanResult) -> None:
    if result.notice:
        console.print("[yellow]File was rotated or truncated.[/yellow]")
    # Print in file order
    records: list[Record] = result.records if result.full else result.records[::-1]
    for record in records:
        console.print(Text(record.raw))
