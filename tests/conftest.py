"""
Pytest configuration and shared fixtures for LD Graph Toolkit tests.
"""

import json
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from ldgraph_toolkit.shared.models import Edge, Graph, Node


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def people_document() -> dict[str, Any]:
    """Return a small linked-data document about people and an organization."""
    return {
        "@context": "https://schema.org",
        "@graph": [
            {
                "@id": "ex:bob",
                "@type": "http://schema.org/Person",
                "name": "Bob",
                "knows": "http://example.org/carol",
            },
            {
                "@id": "ex:alice",
                "@type": "Person",
                "name": "Alice",
                "age": 34,
                "knows": {"@id": "ex:bob"},
                "worksFor": {"@id": "org:acme", "@type": "Organization", "name": "Acme"},
            },
            {
                "@id": "http://example.org/carol",
                "@type": ["Person", "Employee"],
                "name": {"@value": "Carol"},
                "homepage": "https://carol.example.org",
            },
            {"@id": "ex:dave", "@type": "Person", "name": "Dave"},
        ],
    }


@pytest.fixture
def people_text(people_document: dict[str, Any]) -> str:
    """Return the people document as text with decorative comments."""
    body = json.dumps(people_document, indent=2)
    return "// People directory\n/* generated for tests */\n" + body


@pytest.fixture
def people_file(temp_dir: Path, people_text: str) -> Path:
    """Write the people document to disk and return its path."""
    path = temp_dir / "people.jsonld"
    path.write_text(people_text, encoding="utf-8")
    return path


@pytest.fixture
def invalid_file(temp_dir: Path) -> Path:
    """Write a structurally invalid document and return its path."""
    path = temp_dir / "broken.jsonld"
    path.write_text('{"@id": "ex:a", "name": ', encoding="utf-8")
    return path


@pytest.fixture
def chain_graph() -> Graph:
    """Return the linear chain A -> B -> C."""
    return Graph(
        nodes=(
            Node(id="A", type="Step"),
            Node(id="B", type="Step"),
            Node(id="C", type="Step"),
        ),
        edges=(
            Edge(source="A", target="B", predicate="next"),
            Edge(source="B", target="C", predicate="next"),
        ),
    )


@pytest.fixture
def social_graph() -> Graph:
    """Return a graph with two types, a dangling edge and an isolated node."""
    return Graph(
        nodes=(
            Node(id="ex:alice", type="Person", label="Alice"),
            Node(id="ex:bob", type="Person", label="Bob"),
            Node(id="org:acme", type="Organization", label="Acme"),
            Node(id="ex:dave", type="Person", label="Dave"),
        ),
        edges=(
            Edge(source="ex:alice", target="ex:bob", predicate="knows"),
            Edge(source="ex:alice", target="org:acme", predicate="worksFor"),
            Edge(source="ex:bob", target="org:acme", predicate="worksFor"),
            Edge(source="ex:bob", target="http://example.org/unknown", predicate="knows"),
        ),
    )
