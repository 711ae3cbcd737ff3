"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from logtrail import __version__
from logtrail.config import LogTrailConfig


@click.group()
@click.version_option(version=__version__, prog_name="logtrail")
@click.option(
    "--type",
    "-t",
    "log_type",
    help="Log type: a YAML file, preset:<name>, or a name from the config types/ dir.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, log_type: str | None, verbose: bool) -> None:
    """logtrail — incremental log tailing with regex field extraction."""
    ctx.ensure_object(dict)
    config = LogTrailConfig.load()
    config.verbose = verbose
    ctx.obj["config"] = config
    ctx.obj["log_type_ref"] = log_type

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from logtrail.cli.bottom import bottom  # noqa: F811
    from logtrail.cli.follow import follow  # noqa: F811
    from logtrail.cli.list_types import types  # noqa: F811
    from logtrail.cli.scan import scan  # noqa: F811

    main.add_command(scan)
    main.add_command(follow)
    main.add_command(bottom)
    main.add_command(types)


_register_commands()
