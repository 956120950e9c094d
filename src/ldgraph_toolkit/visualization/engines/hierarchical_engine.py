"""
Layered layout engines.

Two layered layouts live here:

* ``FlowLayoutEngine`` places nodes in breadth-first layers from the root
  nodes and routes each edge as a cubic curve from the trailing side of its
  source to the leading side of its target (a sankey-style flow diagram).
* ``HierarchicalEngine`` delegates rank and in-rank placement to a rank engine,
  converts the returned node centres into top-left boxes with directional
  handles, and labels every edge with its cardinality.
"""

import logging
import math
from collections import Counter, defaultdict, deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

import networkx as nx

from ...shared.exceptions import LayoutError
from ...shared.models import Graph
from ..core.adjacency import AdjacencyIndex
from ..core.geometry import CubicPath, LayoutResult, Point, PositionedNode, route_edge


class LayeringMode(str, Enum):
    """How breadth-first layering treats nodes reachable along several paths."""

    # Layer fixed at the depth of the first dequeue
    FIRST_VISIT = "first-visit"
    # Deepest depth over all discovered paths, capped at n - 1 for cycles
    LONGEST_PATH = "longest-path"


def find_roots(graph: Graph) -> list[str]:
    """Nodes with no incoming edge, in graph order."""
    targets = {edge.target for edge in graph.edges}
    return [node_id for node_id in graph.node_ids if node_id not in targets]


def assign_layers(graph: Graph, mode: LayeringMode = LayeringMode.FIRST_VISIT) -> dict[str, int]:
    """Assign an integer layer to every node reachable from a root.

    Args:
        graph: Graph to layer
        mode: First-visit approximation or longest-path layering

    Returns:
        Mapping of node id to layer; unreached nodes are absent
    """
    children: dict[str, list[str]] = defaultdict(list)
    for edge in graph.edges:
        children[edge.source].append(edge.target)

    queue = deque((root, 0) for root in find_roots(graph))
    layers: dict[str, int] = {}
    max_depth = max(len(graph) - 1, 0)

    while queue:
        node_id, depth = queue.popleft()
        if node_id not in graph:
            continue

        if mode is LayeringMode.FIRST_VISIT:
            if node_id in layers:
                continue
            layers[node_id] = depth
        else:
            depth = min(depth, max_depth)
            if layers.get(node_id, -1) >= depth:
                continue
            layers[node_id] = depth
            if depth == max_depth:
                continue

        for child in children.get(node_id, ()):
            queue.append((child, depth + 1))

    return layers


def group_layers(graph: Graph, layers: dict[str, int]) -> list[list[str]]:
    """Bucket layered nodes by layer, keeping graph order inside each bucket."""
    if not layers:
        return []
    buckets: list[list[str]] = [[] for _ in range(max(layers.values()) + 1)]
    for node_id in graph.node_ids:
        if node_id in layers:
            buckets[layers[node_id]].append(node_id)
    return buckets


@dataclass
class FlowLayoutConfig:
    """Canvas and spacing for the flow layout."""

    width: float = 800.0
    height: float = 600.0
    node_width: float = 20.0
    node_padding: float = 30.0
    min_node_extent: float = 20.0
    extent_per_edge: float = 10.0
    direction: str = "horizontal"
    density: float = 1.0
    layering: LayeringMode = LayeringMode.FIRST_VISIT

    def __post_init__(self):
        if self.direction not in ("horizontal", "vertical"):
            raise LayoutError(f"Unsupported flow direction: {self.direction}")
        if isinstance(self.density, bool) or not isinstance(self.density, int | float):
            raise LayoutError(f"Flow density must be a number, got {self.density!r}")
        if self.density <= 0:
            raise LayoutError("Flow density must be positive")
        self.layering = LayeringMode(self.layering)


class FlowLayoutEngine:
    """Engine for layered flow (sankey-style) diagrams."""

    name = "flow"

    def __init__(self, config: FlowLayoutConfig | None = None):
        self.logger = logging.getLogger(__name__)
        self.config = config or FlowLayoutConfig()

    def process_graph(self, graph: Graph) -> LayoutResult:
        """Lay out the nodes reachable from a root in breadth-first layers.

        Args:
            graph: Graph to lay out

        Returns:
            Layout with one box per reached node and cubic links between them
        """
        cfg = self.config
        horizontal = cfg.direction == "horizontal"
        main_length, cross_length = (
            (cfg.width, cfg.height) if horizontal else (cfg.height, cfg.width)
        )

        layers = assign_layers(graph, cfg.layering)
        buckets = group_layers(graph, layers)
        incident = graph.incident_counts()

        step = (main_length - cfg.node_width) / max(len(buckets) - 1, 1) * cfg.density
        padding = cfg.node_padding * cfg.density

        # Boxes in (main, cross, main_extent, cross_extent) coordinates
        boxes: dict[str, tuple[float, float, float, float]] = {}
        for layer, members in enumerate(buckets):
            count = len(members)
            if not count:
                continue
            extent = max(
                cfg.min_node_extent,
                (cross_length - 2 * padding - padding * (count - 1)) / count,
            )
            for index, node_id in enumerate(members):
                # Slots stay evenly spaced; a busy node may grow into the next slot
                cross = padding + index * (extent + padding)
                size = max(extent, incident[node_id] * cfg.extent_per_edge)
                main = layer * step + cfg.node_width / 2
                boxes[node_id] = (main, cross, cfg.node_width, size)

        def to_xy(main: float, cross: float) -> Point:
            return (main, cross) if horizontal else (cross, main)

        nodes = []
        for node in graph.nodes:
            if node.id not in boxes:
                continue
            main, cross, thickness, size = boxes[node.id]
            x, y = to_xy(main, cross)
            width, height = (thickness, size) if horizontal else (size, thickness)
            nodes.append(
                PositionedNode.from_node(
                    node, x, y, width, height, layer=layers[node.id], value=incident[node.id]
                )
            )

        edges = []
        for edge in graph.resolved_edges():
            if edge.source not in boxes or edge.target not in boxes:
                continue
            s_main, s_cross, s_thick, s_size = boxes[edge.source]
            t_main, t_cross, _, t_size = boxes[edge.target]
            m0, c0 = s_main + s_thick, s_cross + s_size / 2
            m1, c1 = t_main, t_cross + t_size / 2
            mid = (m0 + m1) / 2
            path = CubicPath(
                start=to_xy(m0, c0),
                control1=to_xy(mid, c0),
                control2=to_xy(mid, c1),
                end=to_xy(m1, c1),
            )
            edges.append(route_edge(edge, path))

        width = max([cfg.width] + [n.x + n.width for n in nodes])
        height = max([cfg.height] + [n.y + n.height for n in nodes])

        self.logger.info(
            f"Created flow layout: {len(nodes)} nodes in {len(buckets)} layers, "
            f"{len(edges)} links ({len(graph) - len(nodes)} unreached nodes excluded)"
        )

        return LayoutResult(
            layout=self.name,
            nodes=nodes,
            edges=edges,
            width=width,
            height=height,
            metadata={
                "direction": cfg.direction,
                "density": cfg.density,
                "layering": cfg.layering.value,
                "layers": len(buckets),
                "excluded": [node_id for node_id in graph.node_ids if node_id not in boxes],
            },
            adjacency=AdjacencyIndex(graph),
        )

    def get_layout_config(self) -> dict[str, Any]:
        cfg = self.config
        return {
            "canvas": {"width": cfg.width, "height": cfg.height},
            "nodes": {
                "width": cfg.node_width,
                "padding": cfg.node_padding,
                "minExtent": cfg.min_node_extent,
                "extentPerEdge": cfg.extent_per_edge,
            },
            "direction": cfg.direction,
            "density": cfg.density,
            "layering": cfg.layering.value,
        }


def cardinality_labels(graph: Graph) -> list[tuple[str, str]]:
    """Source/target cardinality for every edge, in graph edge order.

    An end is "N" when more than one edge shares its (node, predicate) pair on
    that side, otherwise "1".
    """
    outgoing = Counter((edge.source, edge.predicate) for edge in graph.edges)
    incoming = Counter((edge.target, edge.predicate) for edge in graph.edges)
    return [
        (
            "N" if outgoing[(edge.source, edge.predicate)] > 1 else "1",
            "N" if incoming[(edge.target, edge.predicate)] > 1 else "1",
        )
        for edge in graph.edges
    ]


def format_cardinality(predicate: str, source: str, target: str) -> str:
    return f"{predicate} ({source}→{target})"


DENSITY_SPACING = {
    "compact": {"ranksep": 120.0, "nodesep": 70.0},
    "spacious": {"ranksep": 180.0, "nodesep": 110.0},
}

HANDLE_POSITIONS = {
    "LR": {"targetPosition": "left", "sourcePosition": "right"},
    "TB": {"targetPosition": "top", "sourcePosition": "bottom"},
}


@dataclass
class HierarchicalLayoutConfig:
    """Direction, spacing and default node size for the hierarchical layout."""

    direction: str = "LR"
    density: str = "spacious"
    margin: float = 32.0
    node_width: float = 240.0
    node_height: float = 120.0
    grid_spacing_x: float = 220.0
    grid_spacing_y: float = 140.0

    def __post_init__(self):
        if self.direction not in HANDLE_POSITIONS:
            raise LayoutError(f"Unsupported hierarchical direction: {self.direction}")
        if self.density not in DENSITY_SPACING:
            raise LayoutError(f"Unsupported hierarchical density: {self.density}")

    @property
    def ranksep(self) -> float:
        return DENSITY_SPACING[self.density]["ranksep"]

    @property
    def nodesep(self) -> float:
        return DENSITY_SPACING[self.density]["nodesep"]


class RankEngine(Protocol):
    """Computes node centres for a layered drawing of a directed graph."""

    def layout(
        self,
        graph: nx.DiGraph,
        sizes: dict[str, tuple[float, float]],
        config: HierarchicalLayoutConfig,
    ) -> dict[str, Point]: ...


class NetworkXRankEngine:
    """Rank engine built on networkx.

    Strongly connected components are condensed so cyclic graphs still rank.
    Ranks come from the topological generations of the condensation; members
    of a rank keep graph order and each rank is centred on the widest one.
    """

    def layout(
        self,
        graph: nx.DiGraph,
        sizes: dict[str, tuple[float, float]],
        config: HierarchicalLayoutConfig,
    ) -> dict[str, Point]:
        if graph.number_of_nodes() == 0:
            return {}

        order = {node_id: i for i, node_id in enumerate(graph.nodes)}
        condensed = nx.condensation(graph)
        ranks: list[list[str]] = []
        for generation in nx.topological_generations(condensed):
            members = [
                node_id
                for component in generation
                for node_id in condensed.nodes[component]["members"]
            ]
            ranks.append(sorted(members, key=order.__getitem__))

        horizontal = config.direction == "LR"

        def along(node_id: str) -> float:
            width, height = sizes[node_id]
            return width if horizontal else height

        def across(node_id: str) -> float:
            width, height = sizes[node_id]
            return height if horizontal else width

        spans = [
            sum(across(n) for n in rank) + config.nodesep * (len(rank) - 1) for rank in ranks
        ]
        widest = max(spans)

        centres: dict[str, Point] = {}
        rank_offset = config.margin
        for rank, span in zip(ranks, spans):
            thickness = max(along(n) for n in rank)
            offset = config.margin + (widest - span) / 2
            for node_id in rank:
                main = rank_offset + thickness / 2
                cross = offset + across(node_id) / 2
                centres[node_id] = (main, cross) if horizontal else (cross, main)
                offset += across(node_id) + config.nodesep
            rank_offset += thickness + config.ranksep
        return centres


class HierarchicalEngine:
    """Engine for directed hierarchical layouts with cardinality labels."""

    name = "hierarchical"

    def __init__(
        self,
        config: HierarchicalLayoutConfig | None = None,
        rank_engine: RankEngine | None = None,
    ):
        """Initialize the hierarchical engine.

        Args:
            config: Direction, density and sizing
            rank_engine: Collaborator that computes node centres
        """
        self.logger = logging.getLogger(__name__)
        self.config = config or HierarchicalLayoutConfig()
        self.rank_engine = rank_engine or NetworkXRankEngine()

    def process_graph(
        self,
        graph: Graph,
        node_sizes: dict[str, tuple[float, float]] | None = None,
    ) -> LayoutResult:
        """Place nodes as boxes using the rank engine.

        Args:
            graph: Graph to lay out
            node_sizes: Measured (width, height) per node id; missing ids use
                the configured default size

        Returns:
            Layout with top-left node positions and labelled edges
        """
        cfg = self.config
        default = (cfg.node_width, cfg.node_height)
        sizes = {node_id: (node_sizes or {}).get(node_id, default) for node_id in graph.node_ids}

        centres, fallback = self._compute_centres(graph, sizes)
        handles = HANDLE_POSITIONS[cfg.direction]

        nodes = []
        for node in graph.nodes:
            width, height = sizes[node.id]
            cx, cy = centres[node.id]
            nodes.append(
                PositionedNode.from_node(
                    node, cx - width / 2, cy - height / 2, width, height, **handles
                )
            )

        labels = dict(zip(graph.edges, cardinality_labels(graph)))
        boxes = {node.id: node for node in nodes}
        edges = []
        for edge in graph.resolved_edges():
            source_card, target_card = labels[edge]
            edges.append(
                route_edge(
                    edge,
                    self._route(boxes[edge.source], boxes[edge.target]),
                    sourceCardinality=source_card,
                    targetCardinality=target_card,
                    label=format_cardinality(edge.predicate, source_card, target_card),
                )
            )

        width = max([0.0] + [n.x + n.width for n in nodes]) + cfg.margin
        height = max([0.0] + [n.y + n.height for n in nodes]) + cfg.margin

        self.logger.info(
            f"Created hierarchical layout ({cfg.direction}, {cfg.density}): "
            f"{len(nodes)} nodes, {len(edges)} edges"
        )

        return LayoutResult(
            layout=self.name,
            nodes=nodes,
            edges=edges,
            width=width,
            height=height,
            metadata={"direction": cfg.direction, "density": cfg.density, "fallback": fallback},
            adjacency=AdjacencyIndex(graph),
        )

    def _compute_centres(
        self, graph: Graph, sizes: dict[str, tuple[float, float]]
    ) -> tuple[dict[str, Point], bool]:
        directed = nx.DiGraph(graph.to_networkx())
        try:
            centres = self.rank_engine.layout(directed, sizes, self.config)
        except LayoutError as e:
            self.logger.warning(f"Rank engine failed, using grid placement: {e}")
            return self._grid_centres(graph, sizes), True

        missing = [node_id for node_id in graph.node_ids if node_id not in centres]
        if missing:
            self.logger.warning(
                f"Rank engine left {len(missing)} nodes unplaced, using grid placement"
            )
            return self._grid_centres(graph, sizes), True
        return centres, False

    def _grid_centres(
        self, graph: Graph, sizes: dict[str, tuple[float, float]]
    ) -> dict[str, Point]:
        """Fallback grid of ceil(sqrt(n)) columns."""
        cfg = self.config
        columns = max(math.ceil(math.sqrt(len(graph))), 1)
        centres = {}
        for index, node_id in enumerate(graph.node_ids):
            width, height = sizes[node_id]
            x = (index % columns) * cfg.grid_spacing_x
            y = (index // columns) * cfg.grid_spacing_y
            centres[node_id] = (x + width / 2, y + height / 2)
        return centres

    def _route(self, source: PositionedNode, target: PositionedNode) -> CubicPath:
        if self.config.direction == "LR":
            start = (source.x + source.width, source.y + source.height / 2)
            end = (target.x, target.y + target.height / 2)
            mid = (start[0] + end[0]) / 2
            return CubicPath(start, (mid, start[1]), (mid, end[1]), end)
        start = (source.x + source.width / 2, source.y + source.height)
        end = (target.x + target.width / 2, target.y)
        mid = (start[1] + end[1]) / 2
        return CubicPath(start, (start[0], mid), (end[0], mid), end)

    def get_layout_config(self) -> dict[str, Any]:
        cfg = self.config
        return {
            "direction": cfg.direction,
            "density": cfg.density,
            "ranksep": cfg.ranksep,
            "nodesep": cfg.nodesep,
            "margin": cfg.margin,
            "defaultNodeSize": {"width": cfg.node_width, "height": cfg.node_height},
            "handles": HANDLE_POSITIONS[cfg.direction],
        }
