"""
Force-directed layout engine.

Nodes repel each other with an inverse-square force, edges act as springs with
a rest length, and a weak pull keeps everything near the canvas centre. Unlike
the other engines this one is stateful: a ``ForceSimulation`` advances one
integration step per tick and can be driven by a ``SimulationTicker``.
"""

import logging
import math
import threading
from dataclasses import dataclass
from typing import Any

import numpy as np

from ...shared.exceptions import NodeNotFoundError, create_error_context
from ...shared.models import Graph
from ..core.adjacency import AdjacencyIndex
from ..core.geometry import LayoutResult, LinePath, PositionedNode, route_edge
from ..core.scheduler import SimulationTicker


@dataclass
class ForceSimulationConfig:
    """Physical constants and canvas extent for the force simulation."""

    width: float = 550.0
    height: float = 420.0
    margin: float = 40.0
    repulsion: float = 1000.0
    spring_constant: float = 0.04
    rest_length: float = 90.0
    centering: float = 0.003
    damping: float = 0.85
    time_step: float = 0.1
    initial_radius: float = 100.0
    radius_jitter: float = 50.0
    convergence_epsilon: float = 0.01
    convergence_ticks: int = 10
    tick_interval: float = 1 / 60
    seed: int | None = None


class ForceSimulation:
    """Iterative force simulation owning the position state of one graph.

    Positions and velocities live in numpy arrays indexed by graph order. A
    node pinned by pointer input skips force accumulation and follows the
    pointer with zero velocity until released.
    """

    def __init__(self, graph: Graph, config: ForceSimulationConfig | None = None):
        self.logger = logging.getLogger(__name__)
        self.config = config or ForceSimulationConfig()
        self._rng = np.random.default_rng(self.config.seed)
        self._lock = threading.RLock()
        self.set_graph(graph)

    def set_graph(self, graph: Graph) -> None:
        """Replace the simulated graph and re-seed every position."""
        with self._lock:
            self.graph = graph
            self._ids = graph.node_ids
            self._index = {node_id: i for i, node_id in enumerate(self._ids)}

            pairs = [
                (self._index[e.source], self._index[e.target])
                for e in graph.resolved_edges()
                if not e.is_self_loop
            ]
            self._edge_pairs = np.array(pairs, dtype=int).reshape(-1, 2)

            self.positions = self._initial_positions()
            self.velocities = np.zeros_like(self.positions)
            self._pinned: dict[int, tuple[float, float]] = {}
            self.tick_count = 0
            self._stable_ticks = 0
            self.last_displacement: float | None = None

    @property
    def center(self) -> tuple[float, float]:
        return (self.config.width / 2, self.config.height / 2)

    @property
    def converged(self) -> bool:
        return self._stable_ticks >= self.config.convergence_ticks

    def _initial_positions(self) -> np.ndarray:
        n = len(self._ids)
        if n == 0:
            return np.zeros((0, 2))
        cx, cy = self.center
        angles = np.arange(n) / n * 2 * math.pi
        radii = self.config.initial_radius + self._rng.random(n) * self.config.radius_jitter
        return np.column_stack([cx + radii * np.cos(angles), cy + radii * np.sin(angles)])

    def _node_index(self, node_id: str) -> int:
        index = self._index.get(node_id)
        if index is None:
            raise NodeNotFoundError(
                "Node is not part of the simulation", create_error_context(node_id=node_id)
            )
        return index

    def pin(self, node_id: str, x: float, y: float) -> None:
        """Start or continue dragging a node to the pointer position."""
        with self._lock:
            index = self._node_index(node_id)
            self._pinned[index] = (x, y)
            self.positions[index] = (x, y)
            self.velocities[index] = 0.0
            self._stable_ticks = 0

    def release(self, node_id: str) -> None:
        """End a drag; the node rejoins integration from rest."""
        with self._lock:
            index = self._node_index(node_id)
            self._pinned.pop(index, None)
            self.velocities[index] = 0.0

    @property
    def pinned(self) -> list[str]:
        return [self._ids[i] for i in self._pinned]

    def compute_forces(self) -> np.ndarray:
        """Net force on every node from repulsion, springs and centering."""
        cfg = self.config
        pos = self.positions
        n = len(pos)
        forces = np.zeros_like(pos)
        if n == 0:
            return forces

        # Repulsion: diff[i, j] points from j to i
        diff = pos[:, None, :] - pos[None, :, :]
        dist = np.maximum(np.sqrt((diff**2).sum(axis=-1)), 1.0)
        magnitude = cfg.repulsion / dist**2
        np.fill_diagonal(magnitude, 0.0)
        forces += ((diff / dist[..., None]) * magnitude[..., None]).sum(axis=1)

        # Springs along every edge, counted once per edge for each endpoint
        if len(self._edge_pairs):
            src, dst = self._edge_pairs[:, 0], self._edge_pairs[:, 1]
            delta = pos[dst] - pos[src]
            length = np.maximum(np.sqrt((delta**2).sum(axis=-1)), 1.0)
            spring = ((length - cfg.rest_length) * cfg.spring_constant / length)[:, None] * delta
            np.add.at(forces, src, spring)
            np.add.at(forces, dst, -spring)

        cx, cy = self.center
        forces += (np.array([cx, cy]) - pos) * cfg.centering
        return forces

    def tick(self) -> dict[str, tuple[float, float]]:
        """Advance the simulation by one integration step.

        Returns:
            Snapshot of the published positions
        """
        with self._lock:
            cfg = self.config
            n = len(self._ids)
            if n == 0:
                self.tick_count += 1
                self._stable_ticks += 1
                return {}

            previous = self.positions.copy()
            forces = self.compute_forces()

            free = np.ones(n, dtype=bool)
            free[list(self._pinned)] = False

            self.velocities[free] = (self.velocities[free] + forces[free]) * cfg.damping
            self.positions[free] += self.velocities[free] * cfg.time_step

            lo = np.array([cfg.margin, cfg.margin])
            hi = np.maximum(lo, np.array([cfg.width - cfg.margin, cfg.height - cfg.margin]))
            self.positions[free] = np.clip(self.positions[free], lo, hi)

            for index, (x, y) in self._pinned.items():
                self.positions[index] = (x, y)
                self.velocities[index] = 0.0

            if free.any():
                moved = np.sqrt(((self.positions[free] - previous[free]) ** 2).sum(axis=-1))
                displacement = float(moved.max())
            else:
                displacement = 0.0
            self.last_displacement = displacement

            if displacement < cfg.convergence_epsilon:
                self._stable_ticks += 1
            else:
                self._stable_ticks = 0
            self.tick_count += 1

            return self.snapshot()

    def run(self, max_ticks: int = 500) -> int:
        """Tick until converged or ``max_ticks`` is reached.

        Returns:
            Number of ticks executed
        """
        ticks = 0
        while ticks < max_ticks and not self.converged:
            self.tick()
            ticks += 1
        return ticks

    def snapshot(self) -> dict[str, tuple[float, float]]:
        with self._lock:
            return {
                node_id: (float(self.positions[i, 0]), float(self.positions[i, 1]))
                for i, node_id in enumerate(self._ids)
            }

    def distance(self, a: str, b: str) -> float:
        with self._lock:
            delta = self.positions[self._node_index(a)] - self.positions[self._node_index(b)]
            return float(np.sqrt((delta**2).sum()))

    def to_layout(self) -> LayoutResult:
        """Freeze the current state into a layout result."""
        positions = self.snapshot()
        nodes = [
            PositionedNode.from_node(node, *positions[node.id], index=i)
            for i, node in enumerate(self.graph.nodes)
        ]
        edges = []
        for edge in self.graph.resolved_edges():
            source, target = positions[edge.source], positions[edge.target]
            midpoint = ((source[0] + target[0]) / 2, (source[1] + target[1]) / 2)
            edges.append(
                route_edge(edge, LinePath(start=source, end=target), midpoint=list(midpoint))
            )

        return LayoutResult(
            layout="force-directed",
            nodes=nodes,
            edges=edges,
            width=self.config.width,
            height=self.config.height,
            metadata={
                "ticks": self.tick_count,
                "converged": self.converged,
                "last_displacement": self.last_displacement,
            },
            adjacency=AdjacencyIndex(self.graph),
        )


class ForceDirectedEngine:
    """Engine for creating force-directed network layouts."""

    name = "force-directed"

    def __init__(self, config: ForceSimulationConfig | None = None, max_ticks: int = 500):
        """Initialize the force-directed engine.

        Args:
            config: Simulation constants
            max_ticks: Tick budget for one-shot batch layouts
        """
        self.logger = logging.getLogger(__name__)
        self.config = config or ForceSimulationConfig()
        self.max_ticks = max_ticks

    def create_simulation(self, graph: Graph) -> ForceSimulation:
        return ForceSimulation(graph, self.config)

    def create_ticker(self, simulation: ForceSimulation, on_tick=None) -> SimulationTicker:
        return SimulationTicker(simulation, interval=self.config.tick_interval, on_tick=on_tick)

    def process_graph(self, graph: Graph, ticks: int | None = None) -> LayoutResult:
        """Run a simulation to convergence (or the tick budget) and snapshot it.

        Args:
            graph: Graph to lay out
            ticks: Exact number of ticks to run instead of running to convergence

        Returns:
            Layout result with straight-line edge routes
        """
        simulation = self.create_simulation(graph)
        if ticks is None:
            simulation.run(self.max_ticks)
        else:
            for _ in range(ticks):
                simulation.tick()

        result = simulation.to_layout()
        self.logger.info(
            f"Created force-directed layout: {len(result.nodes)} nodes, {len(result.edges)} links "
            f"after {simulation.tick_count} ticks (converged={simulation.converged})"
        )
        return result

    def get_layout_config(self) -> dict[str, Any]:
        cfg = self.config
        return {
            "simulation": {
                "repulsion": cfg.repulsion,
                "springConstant": cfg.spring_constant,
                "restLength": cfg.rest_length,
                "centering": cfg.centering,
                "damping": cfg.damping,
                "timeStep": cfg.time_step,
                "tickInterval": cfg.tick_interval,
            },
            "canvas": {"width": cfg.width, "height": cfg.height, "margin": cfg.margin},
        }
