"""
Tests for the graph model.
"""

import networkx as nx
import pytest

from ldgraph_toolkit.shared.exceptions import NodeNotFoundError
from ldgraph_toolkit.shared.models import (
    DEFAULT_NODE_TYPE,
    Edge,
    Graph,
    Node,
    display_value,
    node_namespace,
)


class TestNode:
    """Tests for Node dataclass."""

    def test_defaults(self) -> None:
        """Test label falls back to the id and type to Thing."""
        node = Node(id="ex:a")
        assert node.label == "ex:a"
        assert node.type == DEFAULT_NODE_TYPE
        assert dict(node.properties) == {}

    def test_to_dict(self) -> None:
        """Test node serialization."""
        node = Node(id="ex:a", type="Person", label="A", properties={"age": 3})
        assert node.to_dict() == {
            "id": "ex:a",
            "type": "Person",
            "label": "A",
            "properties": {"age": 3},
        }

    def test_namespace(self) -> None:
        """Test namespace property uses the id prefix."""
        assert Node(id="ex:a").namespace == "ex"


class TestNodeNamespace:
    """Tests for namespace derivation."""

    def test_colon_prefix(self) -> None:
        """Test text before the first colon is the namespace."""
        assert node_namespace("schema:Person") == "schema"
        assert node_namespace("http://example.org/a") == "http"

    def test_slash_prefix(self) -> None:
        """Test slash is used when there is no colon."""
        assert node_namespace("people/alice") == "people"

    def test_default(self) -> None:
        """Test ids without separators fall into the default namespace."""
        assert node_namespace("alice") == "default"
        assert node_namespace(":alice") == "default"


class TestDisplayValue:
    """Tests for display_value helper."""

    def test_scalars(self) -> None:
        """Test scalar rendering."""
        assert display_value(None) == ""
        assert display_value(True) == "true"
        assert display_value(3) == "3"
        assert display_value("x") == "x"

    def test_nested_values_are_serialized(self) -> None:
        """Test nested values serialize to JSON text."""
        assert display_value({"b": 1, "a": [1, 2]}) == '{"a": [1, 2], "b": 1}'


class TestGraph:
    """Tests for Graph container."""

    def test_duplicate_ids_rejected(self) -> None:
        """Test duplicate node ids raise."""
        with pytest.raises(ValueError):
            Graph(nodes=(Node(id="a"), Node(id="a")))

    def test_lookup_and_membership(self, social_graph: Graph) -> None:
        """Test node lookup by id."""
        assert "ex:alice" in social_graph
        assert "http://example.org/unknown" not in social_graph
        assert social_graph.get("org:acme").label == "Acme"
        assert len(social_graph) == 4

    def test_resolved_edges_skip_dangling(self, social_graph: Graph) -> None:
        """Test dangling edges are excluded from resolved edges."""
        assert len(social_graph.edges) == 4
        assert len(social_graph.resolved_edges()) == 3

    def test_incident_counts_include_dangling(self, social_graph: Graph) -> None:
        """Test incident counts cover every edge."""
        counts = social_graph.incident_counts()
        assert counts["ex:alice"] == 2
        assert counts["ex:bob"] == 3
        assert counts["org:acme"] == 2
        assert counts["ex:dave"] == 0

    def test_replace_node_keeps_everything_else(self, social_graph: Graph) -> None:
        """Test replacing a node carries other nodes and edges by reference."""
        patched = Node(id="ex:bob", type="Person", label="Robert")
        updated = social_graph.replace_node(patched)

        assert updated is not social_graph
        assert updated.get("ex:bob") is patched
        assert updated.edges is social_graph.edges
        for original, carried in zip(social_graph.nodes, updated.nodes):
            if original.id != "ex:bob":
                assert carried is original
        assert social_graph.get("ex:bob").label == "Bob"

    def test_replace_unknown_node(self, social_graph: Graph) -> None:
        """Test replacing an absent node raises NodeNotFoundError."""
        with pytest.raises(NodeNotFoundError):
            social_graph.replace_node(Node(id="ex:nobody"))

    def test_to_networkx(self, social_graph: Graph) -> None:
        """Test NetworkX export skips dangling edges."""
        graph = social_graph.to_networkx()
        assert isinstance(graph, nx.MultiDiGraph)
        assert graph.number_of_nodes() == 4
        assert graph.number_of_edges() == 3
        assert graph.nodes["org:acme"]["type"] == "Organization"

    def test_to_networkx_keeps_parallel_edges(self) -> None:
        """Test identical edges stay separate in the export."""
        graph = Graph(
            nodes=(Node(id="a"), Node(id="b")),
            edges=(Edge("a", "b", "knows"), Edge("a", "b", "knows")),
        )
        assert graph.to_networkx().number_of_edges() == 2

    def test_to_dict(self, chain_graph: Graph) -> None:
        """Test graph serialization."""
        data = chain_graph.to_dict()
        assert [n["id"] for n in data["nodes"]] == ["A", "B", "C"]
        assert data["edges"][0] == {"source": "A", "target": "B", "predicate": "next"}
