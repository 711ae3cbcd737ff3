"""CLI command: logtrail bottom <file> — print the last raw lines of a file."""

from __future__ import annotations

import click

from logtrail.cli.common import console
from logtrail.tail.reverse import lines_from_bottom


@click.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--lines", "-n", "count", type=int, default=10, show_default=True)
def bottom(file: str, count: int) -> None:
    """Print the last non-empty lines of FILE, no log type needed."""
    try:
        lines = lines_from_bottom(file, count)
    except OSError as exc:
        console.print(f"[red]Cannot read {file}: {exc}[/red]")
        raise SystemExit(1)
    for line in reversed(lines):
        click.echo(line)
