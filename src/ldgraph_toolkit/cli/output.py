"""
CLI output management.

Provides consistent console output across commands with respect for the
global --quiet and --verbose flags.
"""

from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table

from ..filtering import FilterStats


class OutputLevel(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"  # Only errors
    NORMAL = "normal"
    VERBOSE = "verbose"


class CLIOutputManager:
    """Console output for CLI commands."""

    def __init__(self, level: OutputLevel = OutputLevel.NORMAL):
        self.level = level
        self.console = Console(quiet=level == OutputLevel.QUIET)
        self.error_console = Console(stderr=True)

    def info(self, message: str, **kwargs: Any) -> None:
        self.console.print(message, **kwargs)

    def success(self, message: str, **kwargs: Any) -> None:
        self.console.print(f"✓ {message}", style="green", **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.error_console.print(f"⚠ {message}", style="yellow", **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Print error message (always shown regardless of quiet mode)."""
        self.error_console.print(f"✗ Error: {message}", style="red bold", **kwargs)

    def table(self, table: Table) -> None:
        self.console.print(table)

    @property
    def is_quiet(self) -> bool:
        return self.level == OutputLevel.QUIET

    @property
    def is_verbose(self) -> bool:
        return self.level == OutputLevel.VERBOSE


def create_output_manager(quiet: bool = False, verbose: bool = False) -> CLIOutputManager:
    if quiet:
        return CLIOutputManager(OutputLevel.QUIET)
    if verbose:
        return CLIOutputManager(OutputLevel.VERBOSE)
    return CLIOutputManager()


def stats_table(stats: FilterStats) -> Table:
    """Totals before and after filtering."""
    table = Table(title="Graph")
    table.add_column("", style="bold")
    table.add_column("Total", justify="right")
    table.add_column("Visible", justify="right")
    table.add_row("Nodes", str(stats.total_nodes), str(stats.visible_nodes))
    table.add_row("Edges", str(stats.total_edges), str(stats.visible_edges))
    return table


def types_table(counts: dict[str, int], colors: dict[str, str]) -> Table:
    """Visible node counts per type with their assigned colours."""
    table = Table(title="Types")
    table.add_column("Type")
    table.add_column("Nodes", justify="right")
    table.add_column("Colour")
    for node_type, count in counts.items():
        color = colors.get(node_type, "")
        swatch = f"[{color}]■[/] {color}" if color else ""
        table.add_row(node_type, str(count), swatch)
    return table
