"""Springer Nature open-access API adapter."""

from __future__ import annotations

from typing import Any, TypedDict

from models import Paper
from sources import (
    MAX_RESULTS_PER_SOURCE,
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

SPRINGER_OPENACCESS_URL = "https://api.springernature.com/openaccess/json"
SOURCE_NAME = "Springer"


class SpringerRecord(TypedDict, total=False):
    title: str
    abstract: str | dict[str, Any]
    creators: list[dict[str, Any]]
    publisher: str | dict[str, Any]
    url: list[dict[str, Any]]
    onlineDate: str
    publicationDate: str


def fetch_papers(topic: str, timeout: float) -> list[Paper]:
    api_key = require_api_key("SPRINGER_API_KEY")
    payload = get_json(
        SPRINGER_OPENACCESS_URL,
        params={"api_key": api_key, "q": f"keyword:{topic}", "p": MAX_RESULTS_PER_SOURCE},
        timeout=timeout,
    )
    return _parse_springer_payload(payload)


def _parse_springer_payload(payload: Any) -> list[Paper]:
    body = expect_dict(SOURCE_NAME, payload)
    return parse_records(SOURCE_NAME, expect_list(SOURCE_NAME, body.get("records")), _map_record)


def _map_record(record: SpringerRecord) -> Paper:
    # Springer does not report citation counts.
    return build_paper(
        title=record.get("title"),
        summary=_text(record.get("abstract")),
        link=_first_url(record.get("url")),
        authors=names(record.get("creators"), "creator"),
        source=_text(record.get("publisher")) or SOURCE_NAME,
        year=parse_year(record.get("onlineDate") or record.get("publicationDate")),
        citations=0,
    )


def _text(value: Any) -> str | None:
    """Springer fields are either plain strings or {"text": ...} objects."""
    if isinstance(value, dict):
        return as_str(value.get("text"))
    return as_str(value)


def _first_url(value: Any) -> str | None:
    if not isinstance(value, list):
        return None
    for item in value:
        if isinstance(item, dict):
            url = as_str(item.get("value"))
            if url:
                return url
    return None
