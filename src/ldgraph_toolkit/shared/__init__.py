"""
Shared module for core functionality.

Contains the graph model, exceptions, caching, logging and date helpers
shared across the toolkit.
"""

from .caching import NormalizationCache
from .dates import node_date, node_date_range, parse_date
from .exceptions import (
    DocumentError,
    DocumentParseError,
    DocumentStructureError,
    FilterError,
    GraphError,
    LayoutError,
    LDGraphError,
    NodeNotFoundError,
    SimulationError,
    UnknownLayoutError,
    create_error_context,
    wrap_external_error,
)
from .logging import get_logger, setup_logging
from .models import (
    DEFAULT_NODE_TYPE,
    Edge,
    Graph,
    LiteralValue,
    Node,
    display_value,
    node_namespace,
)

__all__ = [
    # Graph model
    "Node",
    "Edge",
    "Graph",
    "LiteralValue",
    "DEFAULT_NODE_TYPE",
    "display_value",
    "node_namespace",
    # Exceptions
    "LDGraphError",
    "DocumentError",
    "DocumentParseError",
    "DocumentStructureError",
    "GraphError",
    "NodeNotFoundError",
    "FilterError",
    "LayoutError",
    "UnknownLayoutError",
    "SimulationError",
    "wrap_external_error",
    "create_error_context",
    # Utils
    "NormalizationCache",
    "setup_logging",
    "get_logger",
    "node_date",
    "node_date_range",
    "parse_date",
]
