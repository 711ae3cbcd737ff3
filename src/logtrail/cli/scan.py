"""CLI command: logtrail scan <file> — one poll of a log file."""

from __future__ import annotations

import json
import os

import click

from logtrail.cli.common import console, records_table, require_log_type
from logtrail.config import LogTrailConfig
from logtrail.tail.engine import TailEngine
from logtrail.tail.models import ScanResult, SeekOrigin

_ORIGINS = {
    "start": SeekOrigin.START,
    "current": SeekOrigin.CURRENT,
    "end": SeekOrigin.END,
}


@click.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--wanted", "-n", type=int, help="Number of records to return.")
@click.option("--offset", type=int, default=0, show_default=True, help="Cursor offset.")
@click.option(
    "--origin",
    type=click.Choice(sorted(_ORIGINS)),
    default="end",
    show_default=True,
    help="What --offset is relative to.",
)
@click.option("--load-more", is_flag=True, help="Read older records before --offset.")
@click.option("--lastline", default="", help="Fingerprint returned by the previous poll.")
@click.option(
    "--data-to-parse",
    type=int,
    help="Bytes appended since the previous poll (default: the whole file).",
)
@click.option("--full", is_flag=True, help="Rescan from scratch.")
@click.option("--search", "-s", default="", help="Substring, or /regex/flags.")
@click.option("--timezone", "tz", help="IANA timezone for dates.")
@click.option("--max-time", type=float, help="Scan time budget in seconds.")
@click.option("--json", "as_json", is_flag=True, help="Print the raw result envelope.")
@click.pass_context
def scan(
    ctx: click.Context,
    file: str,
    wanted: int | None,
    offset: int,
    origin: str,
    load_more: bool,
    lastline: str,
    data_to_parse: int | None,
    full: bool,
    search: str,
    tz: str | None,
    max_time: float | None,
    as_json: bool,
) -> None:
    """Return the records of FILE that are new since the given cursor."""
    config: LogTrailConfig = ctx.obj["config"]
    log_type = require_log_type(ctx)

    if data_to_parse is None:
        data_to_parse = os.path.getsize(file) if os.path.isfile(file) else 0

    request = log_type.to_request(
        file,
        wanted=wanted or config.wanted,
        start_offset=offset,
        origin=_ORIGINS[origin],
        load_more=load_more,
        old_lastline=lastline,
        data_to_parse=data_to_parse,
        full=full,
        search=search,
        timezone=tz or config.timezone,
        max_search_log_time=max_time if max_time is not None else config.max_search_log_time,
    )

    try:
        result = TailEngine().scan(request)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Cannot scan {file}: {exc}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False))
        return

    if result.records:
        console.print(records_table(log_type, result.records, title=log_type.name))
    else:
        console.print("[green]No new records.[/green]")
    print_summary(result)


def print_summary(result: ScanResult) -> None:
    mode = "regex" if result.regsearch else "substring"
    console.print(
        f"\n{result.count} record(s), {result.skipped} skipped, "
        f"{result.errors} unparseable, {result.bytes} bytes "
        f"in {result.duration}ms"
    )
    if result.search:
        console.print(f"Search ({mode}): {result.search}")
    if result.notice:
        console.print("[yellow]File was rotated or truncated; full rescan.[/yellow]")
    if result.aborted:
        console.print("[yellow]Time budget exceeded; results are partial.[/yellow]")
    console.print(f"Cursor: offset={result.last_parsed_offset} lastline={result.lastline}")
