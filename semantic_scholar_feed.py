"""Semantic Scholar Graph API adapter."""

from __future__ import annotations

from typing import Any, TypedDict

from models import Paper
from sources import (
    MAX_RESULTS_PER_SOURCE,
    as_int,
    as_str,
    build_paper,
    expect_dict,
    expect_list,
    get_json,
    names,
    parse_records,
    parse_year,
)

SEMANTIC_SCHOLAR_SEARCH_URL = "https://api.semanticscholar.org/graph/v1/paper/search"
SEARCH_FIELDS = "title,abstract,url,venue,citationCount,year,authors"
SOURCE_NAME = "Semantic Scholar"


class SemanticScholarPaper(TypedDict, total=False):
    title: str
    abstract: str
    url: str
    venue: str
    year: int
    citationCount: int
    authors: list[dict[str, Any]]


def fetch_papers(topic: str, timeout: float) -> list[Paper]:
    payload = get_json(
        SEMANTIC_SCHOLAR_SEARCH_URL,
        params={"query": topic, "limit": MAX_RESULTS_PER_SOURCE, "fields": SEARCH_FIELDS},
        timeout=timeout,
    )
    return _parse_semantic_scholar_payload(payload)


def _parse_semantic_scholar_payload(payload: Any) -> list[Paper]:
    body = expect_dict(SOURCE_NAME, payload)
    return parse_records(SOURCE_NAME, expect_list(SOURCE_NAME, body.get("data")), _map_paper)


def _map_paper(record: SemanticScholarPaper) -> Paper:
    return build_paper(
        title=record.get("title"),
        summary=record.get("abstract"),
        link=record.get("url"),
        authors=names(record.get("authors"), "name"),
        source=as_str(record.get("venue")) or SOURCE_NAME,
        year=parse_year(record.get("year")),
        citations=as_int(record.get("citationCount")),
    )
