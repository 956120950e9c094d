"""
Core visualization components.

Output geometry, adjacency lookup, colour assignment, tick scheduling and the
session that ties normalization, filtering and layout together.
"""

from .adjacency import AdjacencyIndex
from .colors import DEFAULT_PALETTE, TypeColorRegistry
from .geometry import (
    ArcPath,
    CubicPath,
    LayoutResult,
    LinePath,
    PositionedNode,
    QuadraticPath,
    RoutedEdge,
)
from .scheduler import SimulationTicker
from .unified_visualizer import GraphSession

__all__ = [
    "AdjacencyIndex",
    "DEFAULT_PALETTE",
    "TypeColorRegistry",
    "ArcPath",
    "CubicPath",
    "LayoutResult",
    "LinePath",
    "PositionedNode",
    "QuadraticPath",
    "RoutedEdge",
    "SimulationTicker",
    "GraphSession",
]
