"""
Graph filtering by type, namespace, text search and connectivity.

Connectivity predicates are always evaluated against the full original edge
set. Edges are pruned only once, after the surviving node set is known.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..shared.exceptions import FilterError, create_error_context
from ..shared.models import Graph, Node, display_value, node_namespace


@dataclass(frozen=True)
class FilterConfig:
    """User-selected filter predicates. Empty collections disable a predicate."""

    types: frozenset[str] = field(default_factory=frozenset)
    namespaces: frozenset[str] = field(default_factory=frozenset)
    search: str = ""
    show_isolated: bool = True
    min_connections: int = 0

    def __post_init__(self):
        # Accept any iterable of names so callers can pass lists or tuples
        object.__setattr__(self, "types", frozenset(self.types))
        object.__setattr__(self, "namespaces", frozenset(self.namespaces))
        if self.min_connections < 0:
            raise FilterError(
                "min_connections must be zero or positive",
                create_error_context(min_connections=self.min_connections),
            )

    @property
    def is_passthrough(self) -> bool:
        return (
            not self.types
            and not self.namespaces
            and not self.search
            and self.show_isolated
            and self.min_connections == 0
        )


@dataclass(frozen=True)
class FilterStats:
    """Node and edge totals before and after filtering."""

    total_nodes: int
    total_edges: int
    visible_nodes: int
    visible_edges: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total_nodes": self.total_nodes,
            "total_edges": self.total_edges,
            "visible_nodes": self.visible_nodes,
            "visible_edges": self.visible_edges,
        }


@dataclass(frozen=True)
class FilterResult:
    graph: Graph
    stats: FilterStats


def matches_search(node: Node, needle: str) -> bool:
    """Case-insensitive substring match over label, id and property values."""
    needle = needle.lower()
    if needle in node.label.lower() or needle in node.id.lower():
        return True
    return any(needle in display_value(value).lower() for value in node.properties.values())


def available_types(graph: Graph) -> list[str]:
    """Distinct node types in first-seen order."""
    return list(dict.fromkeys(node.type for node in graph.nodes))


def available_namespaces(graph: Graph) -> list[str]:
    """Distinct node namespaces in first-seen order."""
    return list(dict.fromkeys(node_namespace(node.id) for node in graph.nodes))


class FilterEngine:
    """Derives reduced graphs from a full graph and a filter configuration.

    The most recent result is memoized on graph identity and configuration
    equality, so re-applying an unchanged configuration is free.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._last: tuple[Graph, FilterConfig, FilterResult] | None = None

    def apply(self, graph: Graph, config: FilterConfig | None = None) -> FilterResult:
        """Apply a filter configuration to a graph.

        Args:
            graph: Full graph
            config: Filter configuration (default: no filtering)

        Returns:
            Filtered graph with before/after statistics
        """
        config = config or FilterConfig()

        if self._last is not None:
            last_graph, last_config, last_result = self._last
            if last_graph is graph and last_config == config:
                return last_result

        result = self._compute(graph, config)
        self._last = (graph, config, result)
        return result

    def _compute(self, graph: Graph, config: FilterConfig) -> FilterResult:
        nodes: list[Node] = list(graph.nodes)

        if config.types:
            nodes = [node for node in nodes if node.type in config.types]

        if config.namespaces:
            nodes = [node for node in nodes if node_namespace(node.id) in config.namespaces]

        if config.search:
            nodes = [node for node in nodes if matches_search(node, config.search)]

        if not config.show_isolated or config.min_connections > 0:
            # Connectivity is counted on the unfiltered edge set
            counts = graph.incident_counts()
            if not config.show_isolated:
                nodes = [node for node in nodes if counts[node.id] > 0]
            if config.min_connections > 0:
                nodes = [node for node in nodes if counts[node.id] >= config.min_connections]

        surviving = {node.id for node in nodes}
        edges = [e for e in graph.edges if e.source in surviving and e.target in surviving]

        filtered = Graph(nodes=tuple(nodes), edges=tuple(edges))
        stats = FilterStats(
            total_nodes=len(graph.nodes),
            total_edges=len(graph.edges),
            visible_nodes=len(filtered.nodes),
            visible_edges=len(filtered.edges),
        )

        self.logger.debug(
            f"Filtered graph: {stats.visible_nodes}/{stats.total_nodes} nodes, "
            f"{stats.visible_edges}/{stats.total_edges} edges"
        )
        return FilterResult(graph=filtered, stats=stats)


def filter_graph(graph: Graph, config: FilterConfig | None = None, **options: Any) -> Graph:
    """Convenience wrapper returning only the filtered graph.

    Args:
        graph: Full graph
        config: Filter configuration; keyword options build one when omitted
        **options: ``FilterConfig`` fields

    Returns:
        Filtered graph
    """
    if config is None:
        config = FilterConfig(**options)
    return FilterEngine().apply(graph, config).graph


def build_filter_config(
    types: Iterable[str] = (),
    namespaces: Iterable[str] = (),
    search: str = "",
    show_isolated: bool = True,
    min_connections: int = 0,
) -> FilterConfig:
    return FilterConfig(
        types=frozenset(types),
        namespaces=frozenset(namespaces),
        search=search,
        show_isolated=show_isolated,
        min_connections=min_connections,
    )
