"""Content-based "related papers" over the current corpus.

The weighting is corpus-relative: a term's inverse document frequency is
computed against the papers fetched for the same topic, so scores are only
comparable within one corpus. A paper's document is its lower-cased
``title + " " + summary``.

    idf(t)      = 1 + ln(N / (1 + df(t)))
    score(q, d) = sum over terms t of q: tf(t, d) * idf(t)

Terms repeated in the query count once per occurrence. English stop words
are never counted in documents.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from errors import PaperNotFoundError
from models import Paper, RelatedResult

RELATED_LIMIT = 5
SELF_SCORE = -1.0
_TOKEN_PATTERN = r"(?u)\b\w+\b"

LOGGER = logging.getLogger(__name__)


class TfIdfModel:
    """Term counts and idf weights for a fixed document collection."""

    def __init__(self, documents: Sequence[str]) -> None:
        self._size = len(documents)
        self._vectorizer = CountVectorizer(
            lowercase=True,
            token_pattern=_TOKEN_PATTERN,
            stop_words="english",
        )
        try:
            self._counts = self._vectorizer.fit_transform(documents)
        except ValueError:
            # Every document was empty or made only of stop words.
            LOGGER.debug("No indexable terms in a corpus of %s documents", self._size)
            self._counts = None
            self._idf = np.zeros(0)
            return

        document_frequency = np.bincount(self._counts.indices, minlength=self._counts.shape[1])
        self._idf = 1.0 + np.log(self._size / (1.0 + document_frequency))

    def scores(self, query: str) -> np.ndarray:
        """Score ``query`` against every document, in document order."""
        if self._counts is None:
            return np.zeros(self._size)
        query_counts = self._vectorizer.transform([query.lower()]).toarray().ravel()
        return np.asarray(self._counts @ (query_counts * self._idf)).ravel()


def score_related(
    corpus: Sequence[Paper], index: int, limit: int = RELATED_LIMIT
) -> list[tuple[Paper, float]]:
    """Top ``limit`` peers of ``corpus[index]`` with strictly positive score, best first."""
    if index < 0 or index >= len(corpus):
        raise PaperNotFoundError(index, len(corpus))

    model = TfIdfModel([paper.document_text() for paper in corpus])
    raw_scores = model.scores(corpus[index].document_text())

    scored = [
        (position, SELF_SCORE if position == index else float(score))
        for position, score in enumerate(raw_scores)
    ]
    positive = [item for item in scored if item[1] > 0]
    positive.sort(key=lambda item: item[1], reverse=True)
    return [(corpus[position], score) for position, score in positive[:limit]]


def related_papers(corpus: Sequence[Paper], index: int, limit: int = RELATED_LIMIT) -> RelatedResult:
    """The paper at ``index`` and up to ``limit`` most textually similar peers.

    Raises PaperNotFoundError when ``index`` is outside the corpus.
    """
    related = score_related(corpus, index, limit)
    LOGGER.info("Related papers for index=%s: %s of %s", index, len(related), len(corpus) - 1)
    return RelatedResult(clicked=corpus[index], related=tuple(paper for paper, _ in related))
