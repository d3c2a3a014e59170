"""Source filtering over an enriched result set."""

from __future__ import annotations

from typing import Iterable

from models import Paper


def available_sources(papers: Iterable[Paper]) -> list[str]:
    """Distinct canonical source labels, in first-seen order."""
    return list(dict.fromkeys(paper.source for paper in papers))


def filter_by_sources(papers: list[Paper], sources: Iterable[str] | None) -> list[Paper]:
    """Keep papers whose canonical source is one of ``sources``.

    An empty or missing selection means no filtering, matching an unticked
    filter list.
    """
    selected = set(sources or ())
    if not selected:
        return list(papers)
    return [paper for paper in papers if paper.source in selected]
