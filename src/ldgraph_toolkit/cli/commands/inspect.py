"""
Document inspection command.
"""

import sys
from collections import Counter
from pathlib import Path

import click

from ...visualization import GraphSession
from ..output import create_output_manager, stats_table, types_table
from ..utils import filter_config_from_options, filter_options


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@filter_options
@click.pass_context
def inspect(ctx, document, types, namespaces, search, hide_isolated, min_connections):
    """Normalize a linked-data document and summarize its graph."""
    logger = ctx.obj["logger"]
    flags = ctx.obj["global_flags"]
    output = create_output_manager(quiet=flags["quiet"], verbose=flags["verbose"])

    session = GraphSession()
    if not session.load_file(document):
        output.error(session.error)
        sys.exit(1)

    session.set_filters(
        filter_config_from_options(types, namespaces, search, hide_isolated, min_connections)
    )
    filtered = session.filtered
    counts = Counter(node.type for node in filtered.nodes)
    colors = {node_type: session.colors.color_for(node_type) for node_type in counts}

    output.table(stats_table(session.stats))
    output.table(types_table(dict(counts), colors))

    facets = session.facets()
    if output.is_verbose:
        output.info(f"Namespaces: {', '.join(facets['namespaces']) or '-'}")

    logger.info(f"Inspected {document}: {len(filtered)} of {len(session.graph)} nodes visible")
