"""
Circular layout engine family.

Every variant places nodes at angular positions and routes edges as curves:

* radial: one concentric ring per node type
* chord: equal arcs on a single circle, edges curve through the centre
* arc: nodes on a baseline, edges arc above it
* bundle: nodes sorted by type on one circle, edges pulled toward the centre
"""

import logging
import math
from typing import Any

from ...shared.exceptions import UnknownLayoutError
from ...shared.models import Graph, Node
from ..core.adjacency import AdjacencyIndex
from ..core.geometry import (
    ArcPath,
    CubicPath,
    LayoutResult,
    LinePath,
    Point,
    PositionedNode,
    QuadraticPath,
    RoutedEdge,
    route_edge,
)

START_ANGLE = -math.pi / 2


def ring_angle(index: int, count: int) -> float:
    """Angle of the ``index``-th of ``count`` evenly spaced slots, starting at the top."""
    return index / count * 2 * math.pi + START_ANGLE


def polar(center: Point, radius: float, angle: float) -> Point:
    return (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))


def group_by_type(nodes: tuple[Node, ...] | list[Node]) -> dict[str, list[Node]]:
    """Group nodes by type, groups in first-seen order."""
    groups: dict[str, list[Node]] = {}
    for node in nodes:
        groups.setdefault(node.type, []).append(node)
    return groups


class CircularEngine:
    """Engine for the radial, chord, arc and edge-bundling layouts."""

    VARIANTS = ("radial", "chord", "arc", "bundle")

    # Radial
    radial_size = 480.0
    ring_base = 40.0
    ring_span = 160.0

    # Chord
    chord_size = 450.0
    chord_outer_radius = 190.0
    chord_inner_radius = 170.0
    chord_fill = 0.85
    chord_label_offset = 18.0

    # Arc
    arc_width = 580.0
    arc_height = 320.0
    arc_baseline_offset = 50.0
    arc_side_margin = 50.0
    arc_height_factor = 0.45
    arc_max_height = 140.0

    # Bundle
    bundle_size = 480.0
    bundle_radius = 190.0
    bundle_tension = 0.75

    def __init__(self, variant: str = "radial"):
        """Initialize the circular engine.

        Args:
            variant: Default variant used by ``process_graph``
        """
        self.logger = logging.getLogger(__name__)
        if variant not in self.VARIANTS:
            raise UnknownLayoutError(f"Unknown circular variant: {variant}")
        self.variant = variant

    def process_graph(self, graph: Graph, variant: str | None = None) -> LayoutResult:
        """Lay out a graph with one of the circular variants.

        Args:
            graph: Graph to lay out
            variant: Overrides the engine's default variant

        Returns:
            Layout result for the chosen variant
        """
        variant = variant or self.variant
        builders = {
            "radial": self.radial_layout,
            "chord": self.chord_layout,
            "arc": self.arc_layout,
            "bundle": self.bundle_layout,
        }
        if variant not in builders:
            raise UnknownLayoutError(f"Unknown circular variant: {variant}")

        result = builders[variant](graph)
        self.logger.info(
            f"Created {variant} layout: {len(result.nodes)} nodes, {len(result.edges)} edges"
        )
        return result

    def radial_layout(self, graph: Graph) -> LayoutResult:
        """One concentric ring per type; ring radius grows with group index."""
        center = (self.radial_size / 2, self.radial_size / 2)
        groups = group_by_type(graph.nodes)
        ring_step = self.ring_span / (len(groups) or 1)

        positions: dict[str, PositionedNode] = {}
        rings = []
        for ring, (node_type, members) in enumerate(groups.items()):
            radius = self.ring_base + ring * ring_step
            rings.append({"type": node_type, "radius": radius})
            for i, node in enumerate(members):
                x, y = polar(center, radius, ring_angle(i, len(members)))
                positions[node.id] = PositionedNode.from_node(node, x, y, ring=ring)

        nodes = [positions[node.id] for node in graph.nodes]
        edges = [
            route_edge(
                edge, LinePath(positions[edge.source].center, positions[edge.target].center)
            )
            for edge in graph.resolved_edges()
        ]
        return self._result(
            "radial",
            graph,
            nodes,
            edges,
            self.radial_size,
            self.radial_size,
            center=list(center),
            rings=rings,
        )

    def chord_layout(self, graph: Graph) -> LayoutResult:
        """Equal arc per node in input order; edges curve through the centre."""
        center = (self.chord_size / 2, self.chord_size / 2)
        node_angle = 2 * math.pi / len(graph) if len(graph) else 0.0
        label_radius = self.chord_outer_radius + self.chord_label_offset

        nodes = []
        for i, node in enumerate(graph.nodes):
            start = i * node_angle + START_ANGLE
            end = start + node_angle * self.chord_fill
            mid = (start + end) / 2
            x, y = polar(center, self.chord_inner_radius, mid)
            segment = ArcPath(center, self.chord_outer_radius, start, end)
            label_x, label_y = polar(center, label_radius, mid)
            nodes.append(
                PositionedNode.from_node(
                    node,
                    x,
                    y,
                    startAngle=start,
                    endAngle=end,
                    midAngle=mid,
                    arc={**segment.to_dict(), "svg": segment.to_svg()},
                    labelPosition=[label_x, label_y],
                    textAnchor="end" if math.pi / 2 < mid < 3 * math.pi / 2 else "start",
                )
            )

        positions = {node.id: node for node in nodes}
        edges = [
            route_edge(
                edge,
                QuadraticPath(positions[edge.source].center, center, positions[edge.target].center),
            )
            for edge in graph.resolved_edges()
        ]
        return self._result(
            "chord",
            graph,
            nodes,
            edges,
            self.chord_size,
            self.chord_size,
            center=list(center),
            outerRadius=self.chord_outer_radius,
            innerRadius=self.chord_inner_radius,
        )

    def arc_layout(self, graph: Graph) -> LayoutResult:
        """Nodes evenly spaced on a baseline; edges arc above it."""
        baseline = self.arc_height - self.arc_baseline_offset
        span = self.arc_width - 2 * self.arc_side_margin
        slots = (len(graph) - 1) or 1

        nodes = [
            PositionedNode.from_node(node, self.arc_side_margin + i / slots * span, baseline)
            for i, node in enumerate(graph.nodes)
        ]
        positions = {node.id: node for node in nodes}

        edges = []
        for edge in graph.resolved_edges():
            source, target = positions[edge.source].center, positions[edge.target].center
            lift = min(abs(target[0] - source[0]) * self.arc_height_factor, self.arc_max_height)
            control = ((source[0] + target[0]) / 2, baseline - lift)
            edges.append(route_edge(edge, QuadraticPath(source, control, target), height=lift))

        return self._result(
            "arc", graph, nodes, edges, self.arc_width, self.arc_height, baseline=baseline
        )

    def bundle_layout(self, graph: Graph) -> LayoutResult:
        """Nodes sorted by type on one circle; controls pulled toward the centre."""
        center = (self.bundle_size / 2, self.bundle_size / 2)
        ordered = sorted(graph.nodes, key=lambda node: node.type)

        positions: dict[str, PositionedNode] = {}
        for i, node in enumerate(ordered):
            angle = ring_angle(i, len(ordered))
            x, y = polar(center, self.bundle_radius, angle)
            positions[node.id] = PositionedNode.from_node(node, x, y, angle=angle, order=i)

        t = self.bundle_tension

        def pull(point: Point) -> Point:
            return (point[0] * (1 - t) + center[0] * t, point[1] * (1 - t) + center[1] * t)

        edges = []
        for edge in graph.resolved_edges():
            source, target = positions[edge.source].center, positions[edge.target].center
            edges.append(route_edge(edge, CubicPath(source, pull(source), pull(target), target)))

        nodes = [positions[node.id] for node in ordered]
        return self._result(
            "bundle",
            graph,
            nodes,
            edges,
            self.bundle_size,
            self.bundle_size,
            center=list(center),
            tension=t,
        )

    def _result(
        self,
        variant: str,
        graph: Graph,
        nodes: list[PositionedNode],
        edges: list[RoutedEdge],
        width: float,
        height: float,
        **metadata: Any,
    ) -> LayoutResult:
        return LayoutResult(
            layout=variant,
            nodes=nodes,
            edges=edges,
            width=width,
            height=height,
            metadata=metadata,
            adjacency=AdjacencyIndex(graph),
        )

    def get_layout_config(self) -> dict[str, Any]:
        return {
            "radial": {
                "size": self.radial_size,
                "ringBase": self.ring_base,
                "ringSpan": self.ring_span,
            },
            "chord": {
                "size": self.chord_size,
                "outerRadius": self.chord_outer_radius,
                "innerRadius": self.chord_inner_radius,
                "fill": self.chord_fill,
            },
            "arc": {
                "width": self.arc_width,
                "height": self.arc_height,
                "heightFactor": self.arc_height_factor,
                "maxHeight": self.arc_max_height,
            },
            "bundle": {
                "size": self.bundle_size,
                "radius": self.bundle_radius,
                "tension": self.bundle_tension,
            },
        }
