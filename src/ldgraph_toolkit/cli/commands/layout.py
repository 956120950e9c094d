"""
Layout commands.
"""

import json
import sys
from pathlib import Path

import click

from ...shared.exceptions import LDGraphError
from ...visualization import GraphSession, get_available_layouts
from ..output import create_output_manager
from ..utils import filter_config_from_options, filter_options


def _density(value: str | None) -> float | str | None:
    # Flow layouts take a spacing multiplier, hierarchical ones a preset name
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return value


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--layout",
    "-l",
    "layout_name",
    type=click.Choice(get_available_layouts()),
    default="force-directed",
    show_default=True,
    help="Layout to compute",
)
@filter_options
@click.option("--ticks", type=int, help="Exact simulation ticks (force-directed)")
@click.option("--seed", type=int, help="Random seed for initial positions (force-directed)")
@click.option(
    "--direction",
    help="horizontal|vertical for flow, LR|TB for hierarchical",
)
@click.option(
    "--density",
    help="Spacing multiplier for flow, compact|spacious for hierarchical",
)
@click.option(
    "--layering",
    type=click.Choice(["first-visit", "longest-path"]),
    help="Layer assignment for flow",
)
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Output JSON file"
)
@click.pass_context
def layout(
    ctx,
    document,
    layout_name,
    types,
    namespaces,
    search,
    hide_isolated,
    min_connections,
    ticks,
    seed,
    direction,
    density,
    layering,
    output,
):
    """Compute a layout for a linked-data document and write it as JSON."""
    logger = ctx.obj["logger"]
    flags = ctx.obj["global_flags"]
    console = create_output_manager(quiet=flags["quiet"], verbose=flags["verbose"])

    session = GraphSession()
    if not session.load_file(document):
        console.error(session.error)
        sys.exit(1)

    session.set_filters(
        filter_config_from_options(types, namespaces, search, hide_isolated, min_connections)
    )

    try:
        result = session.layout(
            layout_name,
            ticks=ticks,
            seed=seed,
            direction=direction,
            density=_density(density),
            layering=layering,
        )
    except LDGraphError as e:
        logger.error(f"Layout failed: {e}")
        console.error(str(e))
        sys.exit(1)

    payload = json.dumps(result.to_dict(), indent=2)
    if output is None:
        click.echo(payload)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload, encoding="utf-8")
    console.success(f"{layout_name} layout written to {output}")
    logger.info(f"Wrote {len(result.nodes)} nodes and {len(result.edges)} edges to {output}")


@click.command()
def layouts():
    """List available layouts."""
    for name in get_available_layouts():
        click.echo(name)
