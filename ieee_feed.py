"""IEEE Xplore metadata search adapter."""

from __future__ import annotations

from typing import Any, TypedDict

from models import Paper
from sources import (
    MAX_RESULTS_PER_SOURCE,
    as_int,
    build_paper,
    expect_dict,
    expect_list,
    get_json,
    names,
    parse_records,
    parse_year,
    require_api_key,
)

IEEE_SEARCH_URL = "https://ieeexploreapi.ieee.org/api/v1/search/articles"
SOURCE_NAME = "IEEE"


class IeeeArticle(TypedDict, total=False):
    title: str
    abstract: str
    pdf_url: str
    html_url: str
    authors: dict[str, list[dict[str, Any]]]
    publication_year: str | int
    citing_paper_count: int


def fetch_papers(topic: str, timeout: float) -> list[Paper]:
    api_key = require_api_key("IEEE_API_KEY")
    payload = get_json(
        IEEE_SEARCH_URL,
        params={
            "querytext": topic,
            "format": "json",
            "max_records": MAX_RESULTS_PER_SOURCE,
            "start_record": 1,
            "apikey": api_key,
        },
        timeout=timeout,
    )
    return _parse_ieee_payload(payload)


def _parse_ieee_payload(payload: Any) -> list[Paper]:
    body = expect_dict(SOURCE_NAME, payload)
    return parse_records(SOURCE_NAME, expect_list(SOURCE_NAME, body.get("articles")), _map_article)


def _map_article(article: IeeeArticle) -> Paper:
    authors_block = article.get("authors")
    # Xplore nests the author list one level down: {"authors": {"authors": [...]}}
    author_list = authors_block.get("authors") if isinstance(authors_block, dict) else authors_block
    return build_paper(
        title=article.get("title"),
        summary=article.get("abstract"),
        link=article.get("pdf_url") or article.get("html_url"),
        authors=names(author_list, "full_name"),
        source=SOURCE_NAME,
        year=parse_year(article.get("publication_year")),
        citations=as_int(article.get("citing_paper_count") or article.get("citation_count")),
    )
