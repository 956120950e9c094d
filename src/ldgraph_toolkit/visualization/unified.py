"""
Functional entry points for computing graph layouts.

These wrap ``GraphSession`` for one-shot use: load a document, optionally
filter it, and compute a single layout.
"""

from pathlib import Path
from typing import Any

from ..filtering import FilterConfig
from ..shared.exceptions import DocumentError
from ..shared.models import Graph
from .core.geometry import LayoutResult
from .core.unified_visualizer import GraphSession


def load_graph(document_path: str | Path) -> Graph:
    """Load and normalize a linked-data document.

    Args:
        document_path: Path to the document

    Returns:
        Normalized graph

    Raises:
        DocumentError: If the file cannot be read or normalized
    """
    session = GraphSession()
    if not session.load_file(document_path):
        raise DocumentError(session.error or f"Could not load document: {document_path}")
    return session.graph


def compute_layout(
    document_path: str | Path,
    layout: str = "force-directed",
    filter_config: FilterConfig | None = None,
    **options: Any,
) -> LayoutResult:
    """Compute one layout for a document.

    Args:
        document_path: Path to the document
        layout: Registered layout name
        filter_config: Filters applied before layout
        **options: Layout specific options

    Returns:
        Layout result

    Example:
        >>> from ldgraph_toolkit.visualization import compute_layout
        >>> result = compute_layout("people.jsonld", layout="radial")
        >>> print(len(result.nodes))
    """
    session = GraphSession()
    if not session.load_file(document_path):
        raise DocumentError(session.error or f"Could not load document: {document_path}")
    if filter_config is not None:
        session.set_filters(filter_config)
    return session.layout(layout, **options)


def get_available_layouts() -> list[str]:
    """Get list of available layout names.

    Returns:
        List of layout names
    """
    return GraphSession.available_layouts()


__all__ = ["compute_layout", "get_available_layouts", "load_graph"]
