"""Elsevier Scopus search adapter."""

from __future__ import annotations

from typing import Any

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
    require_api_key,
)

SCOPUS_SEARCH_URL = "https://api.elsevier.com/content/search/scopus"
SOURCE_NAME = "Elsevier"

# Scopus uses namespaced keys such as "dc:title", so the raw entry shape is
# documented here instead of as a TypedDict.
_TITLE = "dc:title"
_DESCRIPTION = "dc:description"
_TEASER = "prism:teaser"
_URL = "prism:url"
_CREATOR = "dc:creator"
_COVER_DATE = "prism:coverDate"
_CITED_BY = "citedby-count"


def fetch_papers(topic: str, timeout: float) -> list[Paper]:
    api_key = require_api_key("ELSEVIER_API_KEY")
    payload = get_json(
        SCOPUS_SEARCH_URL,
        params={"query": topic, "count": MAX_RESULTS_PER_SOURCE, "view": "STANDARD"},
        headers={"X-ELS-APIKey": api_key, "Accept": "application/json"},
        timeout=timeout,
    )
    return _parse_scopus_payload(payload)


def _parse_scopus_payload(payload: Any) -> list[Paper]:
    body = expect_dict(SOURCE_NAME, payload)
    results = body.get("search-results") or {}
    results = expect_dict(SOURCE_NAME, results)
    return parse_records(SOURCE_NAME, expect_list(SOURCE_NAME, results.get("entry")), _map_entry)


def _map_entry(entry: dict[str, Any]) -> Paper:
    return build_paper(
        title=entry.get(_TITLE),
        summary=entry.get(_DESCRIPTION) or entry.get(_TEASER),
        link=entry.get(_URL),
        authors=_authors(entry),
        source=SOURCE_NAME,
        year=parse_year(entry.get(_COVER_DATE)),
        citations=as_int(entry.get(_CITED_BY)),
    )


def _authors(entry: dict[str, Any]) -> tuple[str, ...]:
    creator = as_str(entry.get(_CREATOR))
    if creator:
        return (creator,)
    author_names = entry.get("author-names")
    if isinstance(author_names, dict):
        return names(author_names.get("author"), "authname")
    return ()
