"""
Layout output types shared by every engine.

A layout produces positioned nodes and routed edges. Each routed edge carries
a path descriptor that the rendering side can turn into a drawable curve
through ``to_svg()``.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from ...shared.models import Edge, Node
from .adjacency import AdjacencyIndex

Point = tuple[float, float]


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _pt(point: Point) -> str:
    return f"{_fmt(point[0])} {_fmt(point[1])}"


@dataclass(frozen=True)
class LinePath:
    start: Point
    end: Point
    kind: str = field(default="line", init=False)

    def to_svg(self) -> str:
        return f"M {_pt(self.start)} L {_pt(self.end)}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "start": list(self.start), "end": list(self.end)}


@dataclass(frozen=True)
class QuadraticPath:
    start: Point
    control: Point
    end: Point
    kind: str = field(default="quadratic", init=False)

    def to_svg(self) -> str:
        return f"M {_pt(self.start)} Q {_pt(self.control)} {_pt(self.end)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "start": list(self.start),
            "control": list(self.control),
            "end": list(self.end),
        }


@dataclass(frozen=True)
class CubicPath:
    start: Point
    control1: Point
    control2: Point
    end: Point
    kind: str = field(default="cubic", init=False)

    def to_svg(self) -> str:
        return (
            f"M {_pt(self.start)} C {_pt(self.control1)}, {_pt(self.control2)}, {_pt(self.end)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "start": list(self.start),
            "control1": list(self.control1),
            "control2": list(self.control2),
            "end": list(self.end),
        }


@dataclass(frozen=True)
class ArcPath:
    """Circular arc segment between two angles (radians, clockwise)."""

    center: Point
    radius: float
    start_angle: float
    end_angle: float
    kind: str = field(default="arc", init=False)

    def point_at(self, angle: float) -> Point:
        return (
            self.center[0] + self.radius * math.cos(angle),
            self.center[1] + self.radius * math.sin(angle),
        )

    def to_svg(self) -> str:
        start = self.point_at(self.start_angle)
        end = self.point_at(self.end_angle)
        large_arc = 1 if self.end_angle - self.start_angle > math.pi else 0
        r = _fmt(self.radius)
        return f"M {_pt(start)} A {r} {r} 0 {large_arc} 1 {_pt(end)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "center": list(self.center),
            "radius": self.radius,
            "startAngle": self.start_angle,
            "endAngle": self.end_angle,
        }


PathDescriptor = LinePath | QuadraticPath | CubicPath | ArcPath


@dataclass(frozen=True)
class PositionedNode:
    """A node placed on the canvas. ``x``/``y`` semantics are engine specific
    (centre for point-like layouts, top-left for box layouts)."""

    id: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_node(
        cls,
        node: Node,
        x: float,
        y: float,
        width: float = 0.0,
        height: float = 0.0,
        **extra: Any,
    ) -> "PositionedNode":
        payload = {
            "type": node.type,
            "label": node.label,
            "properties": dict(node.properties),
            **extra,
        }
        return cls(id=node.id, x=x, y=y, width=width, height=height, extra=payload)

    @property
    def center(self) -> Point:
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "extra": self.extra,
        }


@dataclass(frozen=True)
class RoutedEdge:
    source_id: str
    target_id: str
    predicate: str
    path: PathDescriptor
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sourceId": self.source_id,
            "targetId": self.target_id,
            "predicate": self.predicate,
            "pathDescriptor": {**self.path.to_dict(), "svg": self.path.to_svg()},
            "extra": self.extra,
        }


@dataclass
class LayoutResult:
    """Positioned geometry produced by one layout computation."""

    layout: str
    nodes: list[PositionedNode] = field(default_factory=list)
    edges: list[RoutedEdge] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)
    adjacency: AdjacencyIndex | None = None

    def __post_init__(self):
        self._by_id = {node.id: node for node in self.nodes}

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def position(self, node_id: str) -> PositionedNode | None:
        return self._by_id.get(node_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "layout": self.layout,
            "width": self.width,
            "height": self.height,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "metadata": self.metadata,
            "statistics": {"total_nodes": len(self.nodes), "total_edges": len(self.edges)},
        }


def route_edge(edge: Edge, path: PathDescriptor, **extra: Any) -> RoutedEdge:
    return RoutedEdge(
        source_id=edge.source,
        target_id=edge.target,
        predicate=edge.predicate,
        path=path,
        extra=extra,
    )
