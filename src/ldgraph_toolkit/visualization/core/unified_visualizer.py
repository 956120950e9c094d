"""
Session orchestrator for linked-data graph visualization.

A ``GraphSession`` holds the currently active graph and filter configuration
and coordinates the normalizer, the filter engine and the layout engines.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ...filtering import (
    FilterConfig,
    FilterEngine,
    FilterResult,
    FilterStats,
    available_namespaces,
    available_types,
)
from ...ingestion import DocumentNormalizer
from ...shared.caching import NormalizationCache
from ...shared.exceptions import (
    DocumentError,
    LayoutError,
    UnknownLayoutError,
    create_error_context,
    wrap_external_error,
)
from ...shared.models import Graph, Node
from ..engines import (
    CircularEngine,
    FlowLayoutConfig,
    FlowLayoutEngine,
    ForceDirectedEngine,
    ForceSimulation,
    ForceSimulationConfig,
    HierarchicalEngine,
    HierarchicalLayoutConfig,
    MatrixEngine,
)
from .colors import TypeColorRegistry
from .geometry import LayoutResult


def _take(options: dict[str, Any], *names: str) -> dict[str, Any]:
    """Pop the named options that were actually supplied."""
    return {
        name: value for name in names if (value := options.pop(name, None)) is not None
    }


def _force_directed(graph: Graph, options: dict[str, Any]) -> LayoutResult:
    ticks = options.pop("ticks", None)
    config = ForceSimulationConfig(**_take(options, "seed", "width", "height"))
    return ForceDirectedEngine(config).process_graph(graph, ticks=ticks)


def _flow(graph: Graph, options: dict[str, Any]) -> LayoutResult:
    config = FlowLayoutConfig(**_take(options, "direction", "density", "layering"))
    return FlowLayoutEngine(config).process_graph(graph)


def _hierarchical(graph: Graph, options: dict[str, Any]) -> LayoutResult:
    node_sizes = options.pop("node_sizes", None)
    config = HierarchicalLayoutConfig(**_take(options, "direction", "density"))
    return HierarchicalEngine(config).process_graph(graph, node_sizes=node_sizes)


def _circular(variant: str) -> Callable[[Graph, dict[str, Any]], LayoutResult]:
    def build(graph: Graph, options: dict[str, Any]) -> LayoutResult:
        return CircularEngine(variant).process_graph(graph)

    return build


def _matrix(graph: Graph, options: dict[str, Any]) -> LayoutResult:
    return MatrixEngine(**_take(options, "cell_size", "margin")).process_graph(graph)


LAYOUT_BUILDERS: dict[str, Callable[[Graph, dict[str, Any]], LayoutResult]] = {
    "force-directed": _force_directed,
    "flow": _flow,
    "hierarchical": _hierarchical,
    "radial": _circular("radial"),
    "chord": _circular("chord"),
    "arc": _circular("arc"),
    "bundle": _circular("bundle"),
    "matrix": _matrix,
}


class GraphSession:
    """Holds the active graph and derives filtered views and layouts from it.

    A failed load never replaces the active graph: the error string is kept
    in ``error`` and the previously loaded graph stays in place.
    """

    def __init__(
        self,
        normalizer: DocumentNormalizer | None = None,
        colors: TypeColorRegistry | None = None,
        cache: NormalizationCache | None = None,
    ):
        """Initialize the session.

        Args:
            normalizer: Document normalizer (default blank-id prefix when omitted)
            colors: Type colour registry, reset on every fresh document
            cache: Memo of normalized graphs keyed by document text
        """
        self.logger = logging.getLogger(__name__)
        self.normalizer = normalizer or DocumentNormalizer()
        self.colors = colors or TypeColorRegistry()
        self.cache = cache or NormalizationCache()
        self.filter_engine = FilterEngine()

        self.graph = Graph()
        self.filter_config = FilterConfig()
        self.error: str | None = None

    def load_text(self, text: str) -> bool:
        """Normalize document text and make it the active graph.

        Args:
            text: Raw document text

        Returns:
            True if the document was loaded, False if it was rejected
        """
        cache_key = self.cache.compute_cache_key(text, self.normalizer.blank_ids.prefix)
        graph = self.cache.get(cache_key)
        if graph is None:
            try:
                graph = self.normalizer.normalize_text(text)
            except DocumentError as e:
                self.error = str(e)
                self.logger.error(f"Failed to load document: {e}")
                return False
            self.cache.put(cache_key, graph)

        self.graph = graph
        self.error = None
        self.colors.reset()
        return True

    def load_file(self, path: str | Path) -> bool:
        """Read a document from disk and load it.

        Args:
            path: Path to the document

        Returns:
            True if the document was loaded, False otherwise
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            error = wrap_external_error(e, create_error_context(path=str(path)))
            self.error = str(error)
            self.logger.error(f"Failed to read document: {error}")
            return False
        return self.load_text(text)

    def set_filters(self, config: FilterConfig | None = None, **options: Any) -> FilterConfig:
        """Replace the active filter configuration.

        Args:
            config: Complete configuration; keyword options build one when omitted
            **options: ``FilterConfig`` fields

        Returns:
            The active configuration
        """
        self.filter_config = config if config is not None else FilterConfig(**options)
        return self.filter_config

    def filter(self) -> FilterResult:
        return self.filter_engine.apply(self.graph, self.filter_config)

    @property
    def filtered(self) -> Graph:
        return self.filter().graph

    @property
    def stats(self) -> FilterStats:
        return self.filter().stats

    def facets(self) -> dict[str, list[str]]:
        """Types and namespaces of the full graph for filter controls."""
        return {
            "types": available_types(self.graph),
            "namespaces": available_namespaces(self.graph),
        }

    def replace_node(self, node: Node) -> Graph:
        """Swap one node of the active graph for an edited copy."""
        self.graph = self.graph.replace_node(node)
        return self.graph

    @staticmethod
    def available_layouts() -> list[str]:
        return list(LAYOUT_BUILDERS)

    def layout(self, name: str, **options: Any) -> LayoutResult:
        """Compute a layout of the filtered graph.

        Args:
            name: Registered layout name
            **options: Layout specific options such as ``ticks``, ``seed``,
                ``direction`` or ``density``

        Returns:
            Layout result with a ``color`` entry on every node

        Raises:
            UnknownLayoutError: If the layout name is not registered
            LayoutError: If options are not understood by the layout
        """
        builder = LAYOUT_BUILDERS.get(name)
        if builder is None:
            raise UnknownLayoutError(
                f"Unknown layout: {name}",
                create_error_context(available=", ".join(LAYOUT_BUILDERS)),
            )

        pending = dict(options)
        result = builder(self.filtered, pending)
        unused = sorted(key for key, value in pending.items() if value is not None)
        if unused:
            raise LayoutError(
                f"Options not supported by layout {name}: {', '.join(unused)}",
                create_error_context(layout=name),
            )

        for node in result.nodes:
            node.extra["color"] = self.colors.color_for(node.extra["type"])
        result.metadata["colors"] = self.colors.assignments()
        result.metadata["filter"] = self.stats.to_dict()
        return result

    def create_simulation(self, config: ForceSimulationConfig | None = None) -> ForceSimulation:
        """Start an interactive force simulation over the filtered graph."""
        return ForceDirectedEngine(config).create_simulation(self.filtered)
