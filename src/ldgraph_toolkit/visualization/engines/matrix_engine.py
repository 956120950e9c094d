"""
Adjacency matrix layout engine.
"""

import logging
from typing import Any

from ...shared.models import Graph
from ..core.adjacency import AdjacencyIndex
from ..core.geometry import LayoutResult, PositionedNode


class AdjacencyMatrix:
    """Directed (source, target) -> predicate lookup over a fixed node order.

    When several edges join the same ordered pair, the last one wins.
    """

    def __init__(self, graph: Graph):
        self.order = graph.node_ids
        self._cells: dict[tuple[str, str], str] = {}
        for edge in graph.resolved_edges():
            self._cells[(edge.source, edge.target)] = edge.predicate

    def lookup(self, source: str, target: str) -> str | None:
        return self._cells.get((source, target))

    def __len__(self) -> int:
        return len(self._cells)

    def cells(self) -> list[dict[str, str]]:
        return [
            {"source": source, "target": target, "predicate": predicate}
            for (source, target), predicate in self._cells.items()
        ]

    def rows(self) -> list[list[str | None]]:
        return [[self.lookup(row, col) for col in self.order] for row in self.order]


class MatrixEngine:
    """Engine for grid (adjacency matrix) layouts."""

    name = "matrix"

    def __init__(self, cell_size: float = 32.0, margin: float = 100.0):
        self.logger = logging.getLogger(__name__)
        self.cell_size = cell_size
        self.margin = margin

    def build_matrix(self, graph: Graph) -> AdjacencyMatrix:
        return AdjacencyMatrix(graph)

    def cell_origin(self, row: int, column: int) -> tuple[float, float]:
        """Top-left corner of a grid cell."""
        return (self.margin + column * self.cell_size, self.margin + row * self.cell_size)

    def process_graph(self, graph: Graph) -> LayoutResult:
        """Order nodes as given and build the adjacency lookup.

        Nodes are positioned as row headers: ``x``/``y`` is the top-left of the
        node's diagonal cell.
        """
        matrix = self.build_matrix(graph)
        nodes = []
        for i, node in enumerate(graph.nodes):
            x, y = self.cell_origin(i, i)
            nodes.append(
                PositionedNode.from_node(node, x, y, self.cell_size, self.cell_size, index=i)
            )

        extent = 2 * self.margin + len(graph) * self.cell_size
        self.logger.info(
            f"Created matrix layout: {len(nodes)} x {len(nodes)} cells, {len(matrix)} filled"
        )
        return LayoutResult(
            layout=self.name,
            nodes=nodes,
            width=extent,
            height=extent,
            metadata={
                "order": matrix.order,
                "cells": matrix.cells(),
            },
            adjacency=AdjacencyIndex(graph),
        )

    def get_layout_config(self) -> dict[str, Any]:
        return {"cellSize": self.cell_size, "margin": self.margin}
