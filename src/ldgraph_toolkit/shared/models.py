"""
Core graph model for the toolkit using simple dataclasses.

Nodes and edges are value objects: once a graph is built nothing mutates them
in place. Editing produces a new graph (see ``Graph.replace_node``).
"""

import json
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from .exceptions import NodeNotFoundError, create_error_context

LiteralValue = str | int | float | bool | None

DEFAULT_NODE_TYPE = "Thing"


def display_value(value: Any) -> str:
    """Render a property value as display text.

    Nested values are serialized here, at the rendering boundary, rather than
    stored as nested structures on the node.

    Args:
        value: Property value

    Returns:
        Display string
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str | int | float):
        return str(value)
    return json.dumps(value, sort_keys=True, default=str)


@dataclass(frozen=True)
class Node:
    """A typed entity discovered in a linked-data document."""

    id: str
    type: str = DEFAULT_NODE_TYPE
    label: str = ""
    properties: Mapping[str, LiteralValue] = field(default_factory=dict)

    def __post_init__(self):
        if not self.label:
            object.__setattr__(self, "label", self.id)

    @property
    def namespace(self) -> str:
        """Coarse grouping derived from the id prefix."""
        return node_namespace(self.id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "label": self.label,
            "properties": dict(self.properties),
        }


@dataclass(frozen=True)
class Edge:
    """A directed, named relationship between two node ids."""

    source: str
    target: str
    predicate: str

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target, "predicate": self.predicate}


def node_namespace(node_id: str) -> str:
    """Derive a node's namespace from its id.

    The namespace is the text before the first ``:``, or else before the first
    ``/``, or else ``"default"``.

    Args:
        node_id: Node identifier

    Returns:
        Namespace string
    """
    for separator in (":", "/"):
        if separator in node_id:
            prefix = node_id.split(separator, 1)[0]
            if prefix:
                return prefix
    return "default"


@dataclass(frozen=True, eq=False)
class Graph:
    """Ordered collection of nodes and edges.

    Node ids are unique; edge endpoints are not required to resolve.
    """

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    _index: dict[str, Node] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        index: dict[str, Node] = {}
        for node in self.nodes:
            if node.id in index:
                raise ValueError(f"Duplicate node id in graph: {node.id}")
            index[node.id] = node
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    @property
    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def get(self, node_id: str) -> Node | None:
        return self._index.get(node_id)

    def resolved_edges(self) -> list[Edge]:
        """Edges whose endpoints both exist in the node set."""
        return [e for e in self.edges if e.source in self._index and e.target in self._index]

    def incident_counts(self) -> Counter[str]:
        """Count incident edges per id over every edge, dangling ones included."""
        counts: Counter[str] = Counter()
        for edge in self.edges:
            counts[edge.source] += 1
            counts[edge.target] += 1
        return counts

    def replace_node(self, node: Node) -> "Graph":
        """Return a new graph with one node swapped by id.

        All other nodes and all edges are carried over by reference.

        Args:
            node: Patched node

        Returns:
            New graph instance

        Raises:
            NodeNotFoundError: If no node with the same id exists
        """
        if node.id not in self._index:
            raise NodeNotFoundError(
                "Cannot replace unknown node", create_error_context(node_id=node.id)
            )
        nodes = tuple(node if existing.id == node.id else existing for existing in self.nodes)
        return Graph(nodes=nodes, edges=self.edges)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Export as a NetworkX multigraph keyed by node id.

        Dangling edges are skipped.
        """
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(node.id, type=node.type, label=node.label)
        for edge in self.resolved_edges():
            graph.add_edge(edge.source, edge.target, predicate=edge.predicate)
        return graph

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
