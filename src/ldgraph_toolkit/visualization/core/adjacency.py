"""
Precomputed per-node adjacency for hover and selection highlighting.
"""

from collections import defaultdict

from ...shared.models import Edge, Graph


class AdjacencyIndex:
    """Incident edge lists and neighbour sets keyed by node id.

    Built once per layout so that highlighting a hovered node is a dictionary
    lookup rather than a scan over every edge. Only edges whose endpoints both
    exist in the graph are indexed.
    """

    def __init__(self, graph: Graph):
        self._incident: dict[str, list[Edge]] = defaultdict(list)
        self._neighbors: dict[str, set[str]] = defaultdict(set)

        for edge in graph.resolved_edges():
            self._incident[edge.source].append(edge)
            self._neighbors[edge.source].add(edge.target)
            if not edge.is_self_loop:
                self._incident[edge.target].append(edge)
                self._neighbors[edge.target].add(edge.source)

    def incident(self, node_id: str) -> list[Edge]:
        """Edges touching a node, in graph order."""
        return list(self._incident.get(node_id, ()))

    def neighbors(self, node_id: str) -> frozenset[str]:
        return frozenset(self._neighbors.get(node_id, ()))

    def is_adjacent(self, a: str, b: str) -> bool:
        return b in self._neighbors.get(a, ())

    def is_highlighted(self, node_id: str, hovered: str | None) -> bool:
        """Whether a node stays at full opacity while ``hovered`` is active."""
        if hovered is None:
            return True
        return node_id == hovered or self.is_adjacent(hovered, node_id)

    def degree(self, node_id: str) -> int:
        return len(self._incident.get(node_id, ()))
