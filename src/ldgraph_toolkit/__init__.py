"""
LD Graph Toolkit - normalization, filtering and layout of linked-data graphs.

This toolkit provides functionality for:
- Normalizing linked-data documents (comments allowed) into typed graphs
- Filtering graphs by type, namespace, text and connectivity
- Computing force-directed, layered, circular and matrix layouts
"""

__version__ = "0.1.0"

from .filtering import FilterConfig, FilterEngine
from .ingestion import DocumentNormalizer
from .shared.exceptions import LDGraphError
from .shared.models import Edge, Graph, Node

__all__ = [
    "__version__",
    "DocumentNormalizer",
    "FilterConfig",
    "FilterEngine",
    "Graph",
    "Node",
    "Edge",
    "LDGraphError",
]
