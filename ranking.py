"""Trending score and the alternative result orderings."""

from __future__ import annotations

import math
from typing import Any, Callable

from models import Paper
from normalizer import current_year

AGE_PENALTY_PER_YEAR = 0.5

SORT_MODES: tuple[str, ...] = (
    "trending",
    "relevance",
    "newest",
    "oldest",
    "most_cited",
    "least_cited",
    "a_to_z",
    "z_to_a",
)


def trending_score(paper: Paper, year_now: int) -> float:
    """Log-damped citations minus a linear penalty per year of age.

    An unknown year (0) carries no penalty.
    """
    recency = (year_now - paper.year) * -AGE_PENALTY_PER_YEAR if paper.year > 0 else 0.0
    return math.log(paper.citations + 1) + recency


def relevance_score(paper: Paper, year_now: int) -> float:
    """(citations + 1) scaled down by age; an unknown year counts as this year."""
    age = year_now - (paper.year or year_now)
    return (paper.citations + 1) / (age + 1)


def rank_trending(papers: list[Paper], year_now: int | None = None) -> list[Paper]:
    """Best trending score first; equal scores keep their arrival order."""
    year_now = current_year() if year_now is None else year_now
    return sorted(papers, key=lambda p: trending_score(p, year_now), reverse=True)


def sort_papers(papers: list[Paper], mode: str = "trending", year_now: int | None = None) -> list[Paper]:
    """Return ``papers`` in the order named by ``mode`` (see SORT_MODES)."""
    year_now = current_year() if year_now is None else year_now

    keyed: dict[str, tuple[Callable[[Paper], Any], bool]] = {
        "trending": (lambda p: trending_score(p, year_now), True),
        "relevance": (lambda p: relevance_score(p, year_now), True),
        "newest": (lambda p: p.year, True),
        "oldest": (lambda p: p.year, False),
        "most_cited": (lambda p: p.citations, True),
        "least_cited": (lambda p: p.citations, False),
        "a_to_z": (lambda p: p.title.casefold(), False),
        "z_to_a": (lambda p: p.title.casefold(), True),
    }
    if mode not in keyed:
        raise ValueError(f"Unknown sort mode {mode!r}; expected one of {', '.join(SORT_MODES)}")

    key, descending = keyed[mode]
    return sorted(papers, key=key, reverse=descending)
