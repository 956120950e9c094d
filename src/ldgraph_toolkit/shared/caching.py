"""
Caching utilities for document normalization.
"""

import hashlib
import logging
from collections import OrderedDict

from .models import Graph


class NormalizationCache:
    """Memoizes normalized graphs by the content hash of their source text."""

    def __init__(self, max_entries: int = 16):
        """Initialize the cache.

        Args:
            max_entries: Maximum number of graphs kept before the oldest is evicted
        """
        self.logger = logging.getLogger(__name__)
        self.max_entries = max_entries
        self._entries: OrderedDict[str, Graph] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def compute_cache_key(self, text: str, variant: str = "") -> str:
        """Compute a unique cache key for document text.

        Args:
            text: Raw document text
            variant: Extra discriminator, e.g. the normalizer's blank-id prefix

        Returns:
            SHA256 hash as cache key
        """
        key = f"{variant}|{text}"
        return hashlib.sha256(key.encode()).hexdigest()

    def get(self, cache_key: str) -> Graph | None:
        graph = self._entries.get(cache_key)
        if graph is None:
            self.misses += 1
            return None
        self._entries.move_to_end(cache_key)
        self.hits += 1
        return graph

    def put(self, cache_key: str, graph: Graph) -> None:
        self._entries[cache_key] = graph
        self._entries.move_to_end(cache_key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self.logger.debug(f"Evicted cached graph {evicted[:12]}")

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cache_key: object) -> bool:
        return cache_key in self._entries
