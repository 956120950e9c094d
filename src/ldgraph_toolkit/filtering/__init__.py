"""
Filter Engine: derives reduced graphs from a full graph.
"""

from .engine import (
    FilterConfig,
    FilterEngine,
    FilterResult,
    FilterStats,
    available_namespaces,
    available_types,
    build_filter_config,
    filter_graph,
    matches_search,
)

__all__ = [
    "FilterConfig",
    "FilterEngine",
    "FilterResult",
    "FilterStats",
    "available_namespaces",
    "available_types",
    "build_filter_config",
    "filter_graph",
    "matches_search",
]
