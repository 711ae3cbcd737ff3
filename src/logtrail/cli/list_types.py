"""CLI command: logtrail types — list available log types."""

from __future__ import annotations

import click
from rich.table import Table

from logtrail.cli.common import console
from logtrail.config import LogTrailConfig
from logtrail.types.loader import list_presets


@click.command()
@click.pass_context
def types(ctx: click.Context) -> None:
    """List bundled presets and user-defined log types."""
    config: LogTrailConfig = ctx.obj["config"]

    table = Table(title="Log types", show_lines=False)
    table.add_column("Name", style="cyan")
    table.add_column("Source")

    for name in list_presets():
        table.add_row(f"preset:{name}", "bundled")
    for directory in config.type_dirs:
        for path in sorted(directory.glob("*.yaml")):
            table.add_row(path.stem, str(path))

    console.print(table)
