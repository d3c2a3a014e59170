"""Topic search, related-paper lookup and summaries over a shared corpus.

The corpus is the ranked result of the most recent search. It is held as an
immutable tuple and replaced in one assignment under a lock, so a concurrent
``related`` call sees either the previous corpus or the new one, never a
partial list. Indexes are only meaningful against the most recent search.
"""

from __future__ import annotations

import logging
import threading

from aggregator import Adapter, aggregate
from errors import PaperNotFoundError
from models import Paper, RelatedResult
from normalizer import current_year, enrich
from ranking import rank_trending
from similarity import RELATED_LIMIT, related_papers
from summarizer import summarize_paper
from topic_cache import TopicCache

LOGGER = logging.getLogger(__name__)


class PaperSearchService:
    """Aggregate, rank and explore papers for one process."""

    def __init__(
        self,
        adapters: list[Adapter] | None = None,
        cache: TopicCache | None = None,
        timeout: float | None = None,
    ) -> None:
        self._adapters = adapters
        self._cache = cache if cache is not None else TopicCache()
        self._timeout = timeout
        self._corpus: tuple[Paper, ...] = ()
        self._lock = threading.Lock()

    @property
    def corpus(self) -> tuple[Paper, ...]:
        with self._lock:
            return self._corpus

    def search(self, topic: str) -> list[Paper]:
        """Ranked papers for ``topic``; served from the topic cache when possible."""
        cached = self._cache.get(topic)
        if cached is not None:
            LOGGER.info("Serving topic=%r from cache (%s papers)", topic, len(cached))
            self._swap_corpus(cached)
            return cached

        year_now = current_year()
        papers = aggregate(topic, adapters=self._adapters, timeout=self._timeout)
        ranked = rank_trending(enrich(papers, year_now), year_now)

        self._cache.put(topic, ranked)
        LOGGER.info(
            "Cached topic=%r (%s papers); %s/%s topics cached",
            topic,
            len(ranked),
            len(self._cache),
            self._cache.max_size,
        )
        self._swap_corpus(ranked)
        return list(ranked)

    def related(self, index: int, limit: int = RELATED_LIMIT) -> RelatedResult:
        """Most similar papers to the one at ``index`` of the current corpus.

        Raises PaperNotFoundError if ``index`` is outside the current corpus.
        """
        return related_papers(self.corpus, index, limit)

    def summarize(self, index: int) -> Paper:
        """Copy of the paper at ``index`` with a generated summary attached."""
        paper = self._paper_at(index)
        text = summarize_paper(paper.title, paper.summary, paper.authors, paper.year or None)
        return paper.with_computed_summary(text)

    def _paper_at(self, index: int) -> Paper:
        corpus = self.corpus
        if index < 0 or index >= len(corpus):
            raise PaperNotFoundError(index, len(corpus))
        return corpus[index]

    def _swap_corpus(self, papers: list[Paper]) -> None:
        snapshot = tuple(papers)
        with self._lock:
            self._corpus = snapshot
