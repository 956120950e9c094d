"""
Document ingestion: comment stripping and linked-data normalization.
"""

from .comments import strip_comments
from .normalizer import (
    BlankNodeIdFactory,
    DocumentNormalizer,
    local_name,
    parse_document,
)

__all__ = [
    "BlankNodeIdFactory",
    "DocumentNormalizer",
    "local_name",
    "parse_document",
    "strip_comments",
]
