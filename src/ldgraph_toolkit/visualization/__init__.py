"""
Graph visualization layouts.

Every layout turns a ``Graph`` into positioned nodes and routed edges for a
rendering collaborator.
"""

from .core import GraphSession, LayoutResult, SimulationTicker, TypeColorRegistry
from .engines import (
    CircularEngine,
    FlowLayoutEngine,
    ForceDirectedEngine,
    HierarchicalEngine,
    MatrixEngine,
)
from .unified import compute_layout, get_available_layouts, load_graph

__all__ = [
    # Functional interface
    "compute_layout",
    "get_available_layouts",
    "load_graph",
    # Core components
    "GraphSession",
    "LayoutResult",
    "SimulationTicker",
    "TypeColorRegistry",
    "ForceDirectedEngine",
    "FlowLayoutEngine",
    "HierarchicalEngine",
    "CircularEngine",
    "MatrixEngine",
]
