"""
Shared CLI helpers.
"""

from collections.abc import Callable
from typing import Any

import click

from ..filtering import FilterConfig
from ..shared.exceptions import FilterError


def filter_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the filter options shared by every document command."""
    options = [
        click.option("--type", "types", multiple=True, help="Keep only nodes of this type"),
        click.option(
            "--namespace", "namespaces", multiple=True, help="Keep only nodes in this namespace"
        ),
        click.option("--search", default="", help="Case-insensitive text search"),
        click.option("--hide-isolated", is_flag=True, help="Drop nodes without any edge"),
        click.option(
            "--min-connections",
            type=int,
            default=0,
            show_default=True,
            help="Drop nodes with fewer incident edges",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def filter_config_from_options(
    types: tuple[str, ...],
    namespaces: tuple[str, ...],
    search: str,
    hide_isolated: bool,
    min_connections: int,
) -> FilterConfig:
    try:
        return FilterConfig(
            types=frozenset(types),
            namespaces=frozenset(namespaces),
            search=search,
            show_isolated=not hide_isolated,
            min_connections=min_connections,
        )
    except FilterError as e:
        raise click.BadParameter(str(e), param_hint="--min-connections") from e
