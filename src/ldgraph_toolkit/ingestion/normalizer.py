"""
Linked-data document normalization.

Turns a parsed JSON-LD style document into the toolkit's ``Graph`` model by
walking every entity object, resolving identifiers, types, labels and literal
properties, and emitting edges for nested entities and IRI references.
"""

import json
import logging
import re
from typing import Any

from ..shared.exceptions import (
    DocumentStructureError,
    create_error_context,
    wrap_external_error,
)
from ..shared.models import DEFAULT_NODE_TYPE, Edge, Graph, LiteralValue, Node
from .comments import strip_comments

# Structural keywords that never become properties or predicates
RESERVED_KEYWORDS = frozenset(
    {
        "@context",
        "@id",
        "@type",
        "@graph",
        "@value",
        "@language",
        "@list",
        "@set",
    }
)

COLLECTION_KEY = "@graph"
LABEL_KEYS = ("name", "label", "title")
REFERENCE_PREFIXES = ("http://", "https://", "_:")

_SEGMENT_SEPARATORS = re.compile(r"[#/:]")


def local_name(value: str) -> str:
    """Reduce an IRI-like string to its trailing path or fragment segment.

    ``http://schema.org/knows`` becomes ``knows``, ``ex:worksFor`` becomes
    ``worksFor``. Strings without separators, or whose trailing segment is
    empty, are returned unchanged.

    Args:
        value: IRI, compact IRI or plain name

    Returns:
        Trailing segment
    """
    segment = _SEGMENT_SEPARATORS.split(value)[-1]
    return segment or value


def type_local_name(value: str) -> str:
    """Trailing fragment or path segment of a type IRI.

    Compact IRIs such as ``schema:Person`` keep their prefix so types from
    different vocabularies stay distinct.
    """
    for separator in ("#", "/"):
        if separator in value:
            return value.rsplit(separator, 1)[-1] or value
    return value


def is_reference(value: Any) -> bool:
    """Check whether a string value points at another entity."""
    return isinstance(value, str) and value.startswith(REFERENCE_PREFIXES)


def is_literal_wrapper(value: Any) -> bool:
    return isinstance(value, dict) and "@value" in value


def _coerce_literal(value: Any) -> LiteralValue:
    if value is None or isinstance(value, str | int | float | bool):
        return value
    return json.dumps(value, sort_keys=True, default=str)


class BlankNodeIdFactory:
    """Synthesizes ids for entities that declare none.

    The id embeds the number of nodes discovered so far in the current run,
    so ids are reproducible for identical input order but change when the
    input is reordered.
    """

    def __init__(self, prefix: str = "_:b"):
        self.prefix = prefix

    def __call__(self, discovered: int) -> str:
        return f"{self.prefix}{discovered}"


class _NormalizationRun:
    """Mutable state for a single pass over one document."""

    def __init__(self, blank_ids: BlankNodeIdFactory):
        self.blank_ids = blank_ids
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self.node_ids: set[str] = set()
        self.skipped_literals = 0

    def visit(self, obj: Any, parent_id: str | None = None, field: str | None = None) -> str | None:
        if not isinstance(obj, dict):
            return None

        if is_literal_wrapper(obj):
            self.skipped_literals += 1
            return None

        node_id = obj.get("@id")
        if not isinstance(node_id, str) or not node_id:
            node_id = self.blank_ids(len(self.nodes))

        # First occurrence wins; later ones only contribute edges
        if node_id not in self.node_ids:
            self.nodes.append(self._build_node(node_id, obj))
            self.node_ids.add(node_id)

        if parent_id is not None and field is not None:
            self.edges.append(Edge(source=parent_id, target=node_id, predicate=local_name(field)))

        for key, value in obj.items():
            if key in RESERVED_KEYWORDS:
                continue

            values = value if isinstance(value, list) else [value]
            for item in values:
                if isinstance(item, dict) and not is_literal_wrapper(item):
                    self.visit(item, node_id, key)
                elif is_reference(item):
                    self.edges.append(Edge(source=node_id, target=item, predicate=local_name(key)))

        return node_id

    def _build_node(self, node_id: str, obj: dict[str, Any]) -> Node:
        properties: dict[str, LiteralValue] = {}
        for key, value in obj.items():
            if key in RESERVED_KEYWORDS:
                continue
            if isinstance(value, str | int | float | bool):
                properties[key] = value
            elif is_literal_wrapper(value):
                properties[key] = _coerce_literal(value["@value"])

        return Node(
            id=node_id,
            type=resolve_type_name(obj.get("@type")),
            label=resolve_label(node_id, obj),
            properties=properties,
        )


def resolve_type_name(declared: Any) -> str:
    """Resolve the display type of an entity from its ``@type`` value.

    Args:
        declared: Raw ``@type`` value (string, list or missing)

    Returns:
        Type name without its namespace IRI, ``"Thing"`` when unresolvable
    """
    if isinstance(declared, list):
        declared = declared[0] if declared else None
    if not isinstance(declared, str) or not declared:
        return DEFAULT_NODE_TYPE
    return type_local_name(declared)


def resolve_label(node_id: str, obj: dict[str, Any]) -> str:
    """Pick the human-readable label of an entity.

    Args:
        node_id: Resolved identifier
        obj: Entity object

    Returns:
        Label text
    """
    for key in LABEL_KEYS:
        value = obj.get(key)
        if value is None or value == "" or value is False:
            continue
        if isinstance(value, dict):
            wrapped = value.get("@value")
            return str(wrapped) if wrapped not in (None, "") else node_id
        if isinstance(value, list):
            return node_id
        return str(value)
    return local_name(node_id) or node_id


def parse_document(text: str) -> Any:
    """Parse document text, tolerating comments outside string literals.

    Args:
        text: Raw document text

    Returns:
        Parsed document

    Raises:
        DocumentParseError: If the text is not structurally valid
    """
    try:
        return json.loads(strip_comments(text))
    except json.JSONDecodeError as e:
        raise wrap_external_error(e, create_error_context(stage="parse")) from e


class DocumentNormalizer:
    """Converts linked-data documents into ``Graph`` instances."""

    def __init__(self, blank_ids: BlankNodeIdFactory | None = None):
        """Initialize the normalizer.

        Args:
            blank_ids: Factory for synthesized blank-node ids
        """
        self.logger = logging.getLogger(__name__)
        self.blank_ids = blank_ids or BlankNodeIdFactory()

    def normalize_text(self, text: str) -> Graph:
        """Parse and normalize document text in one step.

        Either a complete graph is returned or an exception is raised.

        Args:
            text: Raw document text, comments allowed

        Returns:
            Normalized graph

        Raises:
            DocumentParseError: If the text cannot be parsed
            DocumentStructureError: If the document is not an object or array
        """
        return self.normalize(parse_document(text))

    def normalize(self, document: Any) -> Graph:
        """Normalize an already-parsed document.

        Args:
            document: Parsed document (object or array of objects)

        Returns:
            Normalized graph
        """
        if not isinstance(document, dict | list):
            raise DocumentStructureError(
                "Document must be an object or an array",
                create_error_context(found=type(document).__name__),
            )

        root = document
        if isinstance(document, dict) and document.get(COLLECTION_KEY) is not None:
            root = document[COLLECTION_KEY]
        items = root if isinstance(root, list) else [root]

        run = _NormalizationRun(self.blank_ids)
        try:
            for item in items:
                run.visit(item)
        except RecursionError as e:
            raise wrap_external_error(e, create_error_context(stage="normalize")) from e

        if run.skipped_literals:
            self.logger.debug(f"Skipped {run.skipped_literals} literal value objects")
        self.logger.info(f"Normalized document: {len(run.nodes)} nodes, {len(run.edges)} edges")

        return Graph(nodes=tuple(run.nodes), edges=tuple(run.edges))


__all__ = [
    "BlankNodeIdFactory",
    "DocumentNormalizer",
    "local_name",
    "parse_document",
    "resolve_label",
    "resolve_type_name",
    "type_local_name",
]
