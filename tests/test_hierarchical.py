"""
Tests for the layered flow and hierarchical layout engines.
"""

import logging

import pytest

from ldgraph_toolkit.shared.exceptions import LayoutError
from ldgraph_toolkit.shared.models import Edge, Graph, Node
from ldgraph_toolkit.visualization.engines.hierarchical_engine import (
    FlowLayoutConfig,
    FlowLayoutEngine,
    HierarchicalEngine,
    HierarchicalLayoutConfig,
    LayeringMode,
    assign_layers,
    cardinality_labels,
    find_roots,
    format_cardinality,
)


def make_graph(node_ids: str, edges: list[tuple[str, str]], predicate: str = "next") -> Graph:
    """Build a graph from single-letter ids and (source, target) pairs."""
    return Graph(
        nodes=tuple(Node(id=node_id) for node_id in node_ids),
        edges=tuple(Edge(source, target, predicate) for source, target in edges),
    )


@pytest.fixture
def diamond_graph() -> Graph:
    """A reaches C both directly and through B."""
    return make_graph("ABC", [("A", "B"), ("B", "C"), ("A", "C")])


class TestLayering:
    """Tests for root discovery and breadth-first layering."""

    def test_chain_layers(self, chain_graph: Graph) -> None:
        """Test a chain gets consecutive layers."""
        assert find_roots(chain_graph) == ["A"]
        assert assign_layers(chain_graph) == {"A": 0, "B": 1, "C": 2}

    def test_first_visit_keeps_shallowest(self, diamond_graph: Graph) -> None:
        """Test first-visit layering fixes a node at its first dequeue."""
        assert assign_layers(diamond_graph, LayeringMode.FIRST_VISIT)["C"] == 1

    def test_longest_path(self, diamond_graph: Graph) -> None:
        """Test longest-path layering pushes a node to its deepest path."""
        layers = assign_layers(diamond_graph, LayeringMode.LONGEST_PATH)
        assert layers == {"A": 0, "B": 1, "C": 2}

    @pytest.mark.parametrize("mode", list(LayeringMode))
    def test_cycle_terminates(self, mode: LayeringMode) -> None:
        """Test cycles reachable from a root terminate in both modes."""
        graph = make_graph("RAB", [("R", "A"), ("A", "B"), ("B", "A")])
        layers = assign_layers(graph, mode)
        assert set(layers) == {"R", "A", "B"}
        assert max(layers.values()) <= len(graph) - 1

    def test_unreached_nodes_are_absent(self) -> None:
        """Test nodes only reachable through a rootless cycle get no layer."""
        graph = make_graph("ZXY", [("X", "Y"), ("Y", "X")])
        assert assign_layers(graph) == {"Z": 0}

    def test_dangling_targets_are_ignored(self, social_graph: Graph) -> None:
        """Test edges to unknown ids do not create layers."""
        layers = assign_layers(social_graph)
        assert "http://example.org/unknown" not in layers
        assert layers["org:acme"] == 1


class TestFlowLayoutEngine:
    """Tests for FlowLayoutEngine."""

    def test_horizontal_chain(self, chain_graph: Graph) -> None:
        """Test box placement and link routing for a horizontal chain."""
        result = FlowLayoutEngine().process_graph(chain_graph)

        assert [(n.x, n.y) for n in result.nodes] == [(10, 30), (400, 30), (790, 30)]
        assert all(n.width == 20 and n.height == 540 for n in result.nodes)
        assert result.nodes[1].extra["layer"] == 1
        assert result.nodes[1].extra["value"] == 2
        assert (result.width, result.height) == (810, 600)

        link = result.edges[0].path
        assert link.kind == "cubic"
        assert link.start == (30, 300)
        assert link.end == (400, 300)
        assert link.control1 == (215, 300)
        assert link.control2 == (215, 300)

    def test_vertical_swaps_axes(self, chain_graph: Graph) -> None:
        """Test the vertical direction lays layers out top to bottom."""
        config = FlowLayoutConfig(direction="vertical")
        result = FlowLayoutEngine(config).process_graph(chain_graph)

        assert [(n.x, n.y) for n in result.nodes] == [(30, 10), (30, 300), (30, 590)]
        assert all(n.width == 740 and n.height == 20 for n in result.nodes)
        assert result.edges[0].path.start == (400, 30)

    def test_density_scales_spacing(self, chain_graph: Graph) -> None:
        """Test density multiplies the layer step and padding."""
        config = FlowLayoutConfig(density=0.5)
        result = FlowLayoutEngine(config).process_graph(chain_graph)
        assert [n.x for n in result.nodes] == [10, 205, 400]
        assert result.nodes[0].y == 15

    def test_unreached_nodes_excluded(self) -> None:
        """Test nodes outside every root's reach are left out."""
        graph = make_graph("ZXY", [("X", "Y"), ("Y", "X")])
        result = FlowLayoutEngine().process_graph(graph)
        assert [n.id for n in result.nodes] == ["Z"]
        assert result.edges == []
        assert result.metadata["excluded"] == ["X", "Y"]

    def test_busy_nodes_grow(self) -> None:
        """Test node size follows the incident edge count."""
        leaves = "BCDEFGHIJKLM"
        edges = [("A", leaf) for leaf in leaves] + [("B", child) for child in "NOPQ"]
        result = FlowLayoutEngine().process_graph(make_graph("A" + leaves + "NOPQ", edges))

        busy = result.position("B")
        quiet = result.position("C")
        assert busy is not None and quiet is not None
        assert quiet.height == 20
        assert busy.height == 50
        # Slots are evenly spaced regardless of how far a node grows
        assert quiet.y - busy.y == 20 + 30

    def test_invalid_config(self) -> None:
        """Test unsupported directions and densities are rejected."""
        with pytest.raises(LayoutError):
            FlowLayoutConfig(direction="diagonal")
        with pytest.raises(LayoutError):
            FlowLayoutConfig(density=0)

    @pytest.mark.parametrize("density", ["compact", "spacious", None, True])
    def test_non_numeric_density(self, density) -> None:
        """Test preset names and other non-numbers are rejected as layout errors."""
        with pytest.raises(LayoutError):
            FlowLayoutConfig(density=density)

    def test_layering_from_string(self, diamond_graph: Graph) -> None:
        """Test the layering mode accepts its string value."""
        config = FlowLayoutConfig(layering="longest-path")
        result = FlowLayoutEngine(config).process_graph(diamond_graph)
        assert result.metadata["layering"] == "longest-path"
        assert result.metadata["layers"] == 3

    def test_empty_graph(self) -> None:
        """Test an empty graph lays out to nothing."""
        result = FlowLayoutEngine().process_graph(Graph())
        assert result.is_empty
        assert result.metadata["layers"] == 0


class TestCardinality:
    """Tests for edge cardinality labels."""

    def test_many_to_one(self) -> None:
        """Test a predicate shared by one source is labelled N on that side."""
        graph = make_graph("ABC", [("A", "B"), ("A", "C")], predicate="knows")
        assert cardinality_labels(graph) == [("N", "1"), ("N", "1")]
        assert format_cardinality("knows", "N", "1") == "knows (N→1)"

    def test_social_graph(self, social_graph: Graph) -> None:
        """Test labels are listed for every edge, dangling ones included."""
        assert cardinality_labels(social_graph) == [
            ("1", "1"),
            ("1", "N"),
            ("1", "N"),
            ("1", "1"),
        ]


class RaisingRankEngine:
    def layout(self, graph, sizes, config):
        raise LayoutError("rank engine unavailable")


class PartialRankEngine:
    def layout(self, graph, sizes, config):
        return {"A": (0.0, 0.0)}


class TestHierarchicalEngine:
    """Tests for HierarchicalEngine."""

    def test_left_to_right(self) -> None:
        """Test ranks advance along x with right-to-left handles."""
        graph = make_graph("AB", [("A", "B")])
        result = HierarchicalEngine().process_graph(graph)

        a, b = result.nodes
        assert (a.x, a.y) == (32, 32)
        assert (b.x, b.y) == (452, 32)
        assert (a.width, a.height) == (240, 120)
        assert a.extra["sourcePosition"] == "right"
        assert a.extra["targetPosition"] == "left"
        assert (result.width, result.height) == (724, 184)

        path = result.edges[0].path
        assert path.start == (272, 92)
        assert path.end == (452, 92)
        assert path.control1 == (362, 92)

    def test_top_to_bottom(self) -> None:
        """Test ranks advance along y with bottom-to-top handles."""
        graph = make_graph("AB", [("A", "B")])
        config = HierarchicalLayoutConfig(direction="TB")
        result = HierarchicalEngine(config).process_graph(graph)

        a, b = result.nodes
        assert (a.x, a.y) == (32, 32)
        assert (b.x, b.y) == (32, 332)
        assert a.extra["sourcePosition"] == "bottom"
        assert b.extra["targetPosition"] == "top"
        assert result.edges[0].path.start == (152, 152)
        assert result.edges[0].path.end == (152, 332)

    def test_compact_density(self) -> None:
        """Test compact density tightens rank separation."""
        graph = make_graph("AB", [("A", "B")])
        config = HierarchicalLayoutConfig(density="compact")
        result = HierarchicalEngine(config).process_graph(graph)
        assert result.nodes[1].x == 32 + 240 + 120

    def test_measured_sizes(self) -> None:
        """Test measured node sizes replace the default box."""
        graph = make_graph("AB", [("A", "B")])
        result = HierarchicalEngine().process_graph(graph, node_sizes={"A": (100.0, 50.0)})
        a, b = result.nodes
        assert (a.width, a.height) == (100, 50)
        assert (b.width, b.height) == (240, 120)

    def test_edges_carry_labels(self, social_graph: Graph) -> None:
        """Test resolved edges are labelled with their cardinality."""
        result = HierarchicalEngine().process_graph(social_graph)
        assert len(result.edges) == 3
        labels = [edge.extra["label"] for edge in result.edges]
        assert labels == ["knows (1→1)", "worksFor (1→N)", "worksFor (1→N)"]
        assert result.edges[1].extra["targetCardinality"] == "N"

    def test_cycle(self) -> None:
        """Test cyclic graphs still lay out every node."""
        graph = make_graph("AB", [("A", "B"), ("B", "A")])
        result = HierarchicalEngine().process_graph(graph)
        assert len(result.nodes) == 2
        assert result.metadata["fallback"] is False

    def test_rank_engine_failure_falls_back_to_grid(self, caplog) -> None:
        """Test a failing rank engine yields a grid layout and a warning."""
        graph = make_graph("ABC", [("A", "B")])
        engine = HierarchicalEngine(rank_engine=RaisingRankEngine())
        with caplog.at_level(logging.WARNING, logger="ldgraph_toolkit"):
            result = engine.process_graph(graph)

        assert result.metadata["fallback"] is True
        assert [(n.x, n.y) for n in result.nodes] == [(0, 0), (220, 0), (0, 140)]
        assert "grid placement" in caplog.text

    def test_partial_rank_result_falls_back(self) -> None:
        """Test every node is placed by the grid when any is missing."""
        graph = make_graph("AB", [("A", "B")])
        result = HierarchicalEngine(rank_engine=PartialRankEngine()).process_graph(graph)
        assert result.metadata["fallback"] is True
        assert result.position("B") is not None

    def test_invalid_config(self) -> None:
        """Test unsupported directions and densities are rejected."""
        with pytest.raises(LayoutError):
            HierarchicalLayoutConfig(direction="RL")
        with pytest.raises(LayoutError):
            HierarchicalLayoutConfig(density="roomy")
