"""Source-label canonicalization and badge assignment."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

from models import Paper

UNKNOWN_SOURCE = "Unknown"

HIGHLY_CITED = "Highly Cited"
OPEN_ACCESS = "Open Access"
NEW = "New"

HIGHLY_CITED_THRESHOLD = 50

# Checked in order; the first substring hit wins.
_CANONICAL_SOURCES: tuple[tuple[str, str], ...] = (
    ("arxiv", "arXiv"),
    ("openalex", "OpenAlex"),
    ("ieee", "IEEE"),
    ("springer", "Springer"),
    ("elsevier", "Elsevier"),
    ("acm", "ACM"),
)


def current_year() -> int:
    return datetime.now(UTC).year


def normalize_source(raw: str | None) -> str:
    """Map a self-reported provider or venue name onto a small closed label set.

    Unmatched names are lower-cased and capitalized, so "NATURE" and "nature"
    land on the same label.
    """
    if not raw:
        return UNKNOWN_SOURCE

    lowered = raw.lower()
    for needle, label in _CANONICAL_SOURCES:
        if needle in lowered:
            return label
    return lowered[:1].upper() + lowered[1:]


def assign_badges(paper: Paper, year_now: int | None = None) -> list[str]:
    """Derive badges from paper attributes; ``paper.source`` is the raw label."""
    year_now = current_year() if year_now is None else year_now

    badges: list[str] = []
    if paper.citations >= HIGHLY_CITED_THRESHOLD:
        badges.append(HIGHLY_CITED)
    if "arxiv" in paper.source.lower():
        badges.append(OPEN_ACCESS)
    if paper.year > 0 and paper.year >= year_now - 1:
        badges.append(NEW)
    return badges


def enrich(papers: list[Paper], year_now: int | None = None) -> list[Paper]:
    """Overwrite tags with fresh badges and canonicalize every source label."""
    year_now = current_year() if year_now is None else year_now
    return [
        replace(
            paper,
            tags=tuple(assign_badges(paper, year_now)),
            source=normalize_source(paper.source),
        )
        for paper in papers
    ]
