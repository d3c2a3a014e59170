"""Shared typed models for the aggregation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

NO_TITLE = "No title"
NO_ABSTRACT = "No abstract"
NO_LINK = "#"
UNKNOWN_YEAR = 0
UNKNOWN_CITATIONS = 0


@dataclass(frozen=True, slots=True)
class Paper:
    """Normalized paper record produced by the source adapters.

    ``year`` and ``citations`` use ``0`` for unknown. ``source`` holds the raw
    provider label until the normalizer replaces it with a canonical one.
    """

    title: str = NO_TITLE
    summary: str = NO_ABSTRACT
    link: str = NO_LINK
    authors: tuple[str, ...] = ()
    source: str = ""
    year: int = UNKNOWN_YEAR
    citations: int = UNKNOWN_CITATIONS
    tags: tuple[str, ...] = ()
    computed_summary: str | None = None

    def with_computed_summary(self, text: str) -> Paper:
        return replace(self, computed_summary=text)

    def document_text(self) -> str:
        """Text used by the similarity engine for this paper."""
        return f"{self.title} {self.summary}".lower()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "summary": self.summary,
            "link": self.link,
            "authors": list(self.authors),
            "source": self.source,
            "year": self.year,
            "citations": self.citations,
            "tags": list(self.tags),
        }
        if self.computed_summary is not None:
            data["computedSummary"] = self.computed_summary
        return data


@dataclass(frozen=True, slots=True)
class RelatedResult:
    """A selected paper and its most textually similar peers, best first."""

    clicked: Paper
    related: tuple[Paper, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "clickedPaper": self.clicked.to_dict(),
            "relatedPapers": [paper.to_dict() for paper in self.related],
        }
