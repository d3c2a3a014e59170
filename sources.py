"""Shared plumbing for the per-provider source adapters."""

from __future__ import annotations

import logging
import math
import os
import re
from typing import Any, Callable, Iterable

import requests

from errors import MalformedProviderPayload, ProviderUnavailable
from models import NO_ABSTRACT, NO_LINK, NO_TITLE, Paper

MAX_RESULTS_PER_SOURCE = 5
_DEFAULT_TIMEOUT_SECONDS = 15.0
_YEAR_RE = re.compile(r"^\s*(\d{4})")
_WHITESPACE_RE = re.compile(r"\s+")

LOGGER = logging.getLogger(__name__)

FetchFn = Callable[[str, float], list[Paper]]


def default_timeout() -> float:
    """Per-adapter request timeout, from PAPER_SOURCE_TIMEOUT_SECONDS."""
    return float(os.getenv("PAPER_SOURCE_TIMEOUT_SECONDS", _DEFAULT_TIMEOUT_SECONDS))


def require_api_key(env_var: str) -> str:
    api_key = os.getenv(env_var)
    if not api_key:
        raise ProviderUnavailable(f"{env_var} environment variable is required")
    return api_key


def get_json(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float,
) -> Any:
    """GET a JSON document, mapping transport errors to ProviderUnavailable."""
    try:
        response = requests.get(url, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ProviderUnavailable(f"Request to {url} failed: {exc}") from exc

    try:
        return response.json()
    except ValueError as exc:
        raise MalformedProviderPayload(f"Response from {url} is not JSON") from exc


def safe_fetch(name: str, fetch: FetchFn, topic: str, timeout: float) -> list[Paper]:
    """Run one adapter and reduce any failure to an empty contribution."""
    try:
        papers = fetch(topic, timeout)
    except ProviderUnavailable as exc:
        LOGGER.warning("%s unavailable, skipping: %s", name, exc)
        return []
    except MalformedProviderPayload as exc:
        LOGGER.warning("%s returned a malformed payload, skipping: %s", name, exc)
        return []
    except Exception as exc:
        LOGGER.warning("%s failed unexpectedly, skipping: %s", name, exc)
        return []

    LOGGER.info("%s papers fetched: %s", name, len(papers))
    return papers


def parse_records(
    name: str,
    records: Iterable[Any],
    mapper: Callable[[dict[str, Any]], Paper],
) -> list[Paper]:
    """Map raw records to Papers, dropping only the records that fail."""
    papers: list[Paper] = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            LOGGER.warning("%s record %s is not an object, skipping", name, position)
            continue
        try:
            papers.append(mapper(record))
        except (AttributeError, KeyError, OverflowError, TypeError, ValueError) as exc:
            LOGGER.warning("%s record %s is malformed, skipping: %s", name, position, exc)
    return papers[:MAX_RESULTS_PER_SOURCE]


def expect_list(name: str, value: Any) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedProviderPayload(f"Unexpected {name} payload shape: expected a list")
    return value


def expect_dict(name: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedProviderPayload(f"Unexpected {name} payload shape: expected an object")
    return value


def as_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = _WHITESPACE_RE.sub(" ", value).strip()
    return cleaned or None


def as_int(value: Any) -> int:
    """Coerce a count-like field to a non-negative int, 0 when unknown."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return max(int(value), 0)
    if isinstance(value, str):
        try:
            return max(int(value.strip()), 0)
        except ValueError:
            return 0
    return 0


def parse_year(value: Any) -> int:
    """Extract a publication year from an int or a date-like string."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value if value > 0 else 0
    if isinstance(value, str):
        match = _YEAR_RE.match(value)
        if match:
            return int(match.group(1))
    return 0


def names(items: Any, key: str) -> tuple[str, ...]:
    """Collect non-empty ``item[key]`` strings from a list of objects."""
    if not isinstance(items, list):
        return ()
    collected: list[str] = []
    for item in items:
        if isinstance(item, dict):
            name = as_str(item.get(key))
            if name:
                collected.append(name)
    return tuple(collected)


def build_paper(
    *,
    title: Any,
    summary: Any,
    link: Any,
    authors: tuple[str, ...],
    source: str,
    year: int,
    citations: int,
) -> Paper:
    """Assemble a Paper, applying the fallback literals for missing text."""
    return Paper(
        title=as_str(title) or NO_TITLE,
        summary=as_str(summary) or NO_ABSTRACT,
        link=as_str(link) or NO_LINK,
        authors=authors,
        source=source,
        year=year,
        citations=citations,
    )
