"""
Visualization engines for different layout types.

This module provides one engine per layout family: force-directed, layered
(flow and hierarchical), circular (radial, chord, arc, bundle) and matrix.
"""

from .circular_engine import CircularEngine
from .force_directed_engine import ForceDirectedEngine, ForceSimulation, ForceSimulationConfig
from .hierarchical_engine import (
    FlowLayoutConfig,
    FlowLayoutEngine,
    HierarchicalEngine,
    HierarchicalLayoutConfig,
    LayeringMode,
    NetworkXRankEngine,
    RankEngine,
    assign_layers,
    cardinality_labels,
)
from .matrix_engine import AdjacencyMatrix, MatrixEngine

__all__ = [
    "ForceDirectedEngine",
    "ForceSimulation",
    "ForceSimulationConfig",
    "FlowLayoutEngine",
    "FlowLayoutConfig",
    "HierarchicalEngine",
    "HierarchicalLayoutConfig",
    "LayeringMode",
    "NetworkXRankEngine",
    "RankEngine",
    "assign_layers",
    "cardinality_labels",
    "CircularEngine",
    "MatrixEngine",
    "AdjacencyMatrix",
]
