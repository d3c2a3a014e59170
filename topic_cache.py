"""Per-topic memo of ranked aggregation results, scoped to the process."""

from __future__ import annotations

import logging
import os
import threading

from cachetools import LRUCache

from models import Paper

_DEFAULT_MAX_TOPICS = 128

LOGGER = logging.getLogger(__name__)


class TopicCache:
    """Bounded in-memory cache keyed by the exact topic string.

    Keys are not normalized: "LLM" and "llm " are different topics. Entries
    never expire; once ``max_size`` topics are held the least recently used
    one is evicted.
    """

    def __init__(self, max_size: int | None = None) -> None:
        if max_size is None:
            max_size = int(os.getenv("TOPIC_CACHE_SIZE", _DEFAULT_MAX_TOPICS))
        if max_size < 1:
            raise ValueError("TopicCache max_size must be at least 1")
        self._entries: LRUCache[str, tuple[Paper, ...]] = LRUCache(maxsize=max_size)
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return int(self._entries.maxsize)

    def get(self, topic: str) -> list[Paper] | None:
        with self._lock:
            entry = self._entries.get(topic)
        if entry is None:
            return None
        LOGGER.debug("Topic cache hit: %r", topic)
        return list(entry)

    def put(self, topic: str, papers: list[Paper]) -> None:
        with self._lock:
            self._entries[topic] = tuple(papers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
