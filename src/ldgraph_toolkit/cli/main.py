"""
Command-line interface for the linked-data graph toolkit using Click.
"""

from pathlib import Path
from typing import Any

import click

from ..shared.logging import get_logger, setup_logging
from .commands.inspect import inspect
from .commands.layout import layout, layouts


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Only report warnings and errors")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write plain-text logs to this file",
)
@click.pass_context
def cli(ctx: Any, verbose: bool, quiet: bool, log_file: Path | None) -> None:
    """LD Graph Toolkit - Normalize, filter and lay out linked-data graphs."""
    ctx.ensure_object(dict)
    ctx.obj["global_flags"] = {"verbose": verbose, "quiet": quiet}

    level = "WARNING" if quiet else "DEBUG" if verbose else "INFO"
    setup_logging(level, log_file=log_file)
    ctx.obj["logger"] = get_logger()


cli.add_command(inspect)
cli.add_command(layout)
cli.add_command(layouts)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
