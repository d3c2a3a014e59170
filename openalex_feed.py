"""OpenAlex works search adapter."""

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
    parse_records,
    parse_year,
)

OPENALEX_WORKS_URL = "https://api.openalex.org/works"
SOURCE_NAME = "OpenAlex"


class OpenAlexWork(TypedDict, total=False):
    id: str
    title: str
    abstract: str
    abstract_inverted_index: dict[str, list[int]]
    authorships: list[dict[str, Any]]
    host_venue: dict[str, Any]
    primary_location: dict[str, Any]
    publication_year: int
    cited_by_count: int


def fetch_papers(topic: str, timeout: float) -> list[Paper]:
    payload = get_json(
        OPENALEX_WORKS_URL,
        params={"search": topic, "per_page": MAX_RESULTS_PER_SOURCE},
        timeout=timeout,
    )
    return _parse_openalex_payload(payload)


def _parse_openalex_payload(payload: Any) -> list[Paper]:
    body = expect_dict(SOURCE_NAME, payload)
    results = expect_list(SOURCE_NAME, body.get("results"))
    return parse_records(SOURCE_NAME, results, _map_work)


def _map_work(work: OpenAlexWork) -> Paper:
    authors = tuple(
        name
        for name in (
            as_str((authorship.get("author") or {}).get("display_name"))
            for authorship in work.get("authorships") or []
            if isinstance(authorship, dict)
        )
        if name
    )
    return build_paper(
        title=work.get("title"),
        summary=work.get("abstract") or _rebuild_abstract(work.get("abstract_inverted_index")),
        link=work.get("id"),
        authors=authors,
        source=_venue_name(work),
        year=parse_year(work.get("publication_year")),
        citations=as_int(work.get("cited_by_count")),
    )


def _venue_name(work: OpenAlexWork) -> str:
    host_venue = work.get("host_venue")
    if isinstance(host_venue, dict):
        name = as_str(host_venue.get("display_name"))
        if name:
            return name

    location = work.get("primary_location")
    if isinstance(location, dict) and isinstance(location.get("source"), dict):
        name = as_str(location["source"].get("display_name"))
        if name:
            return name

    return SOURCE_NAME


def _rebuild_abstract(inverted_index: Any) -> str | None:
    """OpenAlex ships abstracts as {word: [positions]}; restore word order."""
    if not isinstance(inverted_index, dict) or not inverted_index:
        return None

    positioned: list[tuple[int, str]] = []
    for word, positions in inverted_index.items():
        if not isinstance(positions, list):
            continue
        positioned.extend((pos, word) for pos in positions if isinstance(pos, int))

    positioned.sort()
    return " ".join(word for _, word in positioned) or None
