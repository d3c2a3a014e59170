"""arXiv Atom API adapter.

arXiv answers with an Atom feed rather than JSON. Entry extraction is
delegated to feedparser; each entry is mapped on its own so a missing
sub-field only affects that field of that entry.
"""

from __future__ import annotations

import logging
from typing import Any

import feedparser
import requests

from errors import MalformedProviderPayload, ProviderUnavailable
from models import Paper
from sources import MAX_RESULTS_PER_SOURCE, build_paper, names, parse_records, parse_year

ARXIV_QUERY_URL = "http://export.arxiv.org/api/query"
SOURCE_NAME = "arXiv"

LOGGER = logging.getLogger(__name__)


def fetch_papers(topic: str, timeout: float) -> list[Paper]:
    params = {
        "search_query": f"all:{topic}",
        "start": 0,
        "max_results": MAX_RESULTS_PER_SOURCE,
    }
    try:
        response = requests.get(ARXIV_QUERY_URL, params=params, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ProviderUnavailable(f"Request to {ARXIV_QUERY_URL} failed: {exc}") from exc

    return _parse_arxiv_feed(response.content)


def _parse_arxiv_feed(document: bytes | str) -> list[Paper]:
    feed = feedparser.parse(document)
    entries = list(feed.get("entries") or [])

    if not entries and feed.get("bozo"):
        raise MalformedProviderPayload(
            f"Unparseable arXiv feed: {feed.get('bozo_exception')}"
        )
    if feed.get("bozo"):
        LOGGER.debug("arXiv feed parsed with warnings: %s", feed.get("bozo_exception"))

    return parse_records(SOURCE_NAME, entries, _map_entry)


def _map_entry(entry: dict[str, Any]) -> Paper:
    return build_paper(
        title=entry.get("title"),
        summary=entry.get("summary"),
        link=entry.get("id") or entry.get("link"),
        authors=names(entry.get("authors"), "name"),
        source=SOURCE_NAME,
        year=parse_year(entry.get("published")),
        citations=0,
    )
