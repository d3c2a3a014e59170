"""Concurrent fan-out over every configured source adapter."""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import NamedTuple

import arxiv_feed
import elsevier_feed
import ieee_feed
import openalex_feed
import semantic_scholar_feed
import springer_feed
from models import Paper
from sources import FetchFn, default_timeout, safe_fetch

LOGGER = logging.getLogger(__name__)

# Extra time granted to the pool on top of the per-request timeout before an
# adapter is abandoned.
_DEADLINE_GRACE_SECONDS = 2.0


class Adapter(NamedTuple):
    name: str
    fetch: FetchFn


# Priority order: results are concatenated in this order.
ALL_ADAPTERS: tuple[Adapter, ...] = (
    Adapter("openalex", openalex_feed.fetch_papers),
    Adapter("arxiv", arxiv_feed.fetch_papers),
    Adapter("semantic_scholar", semantic_scholar_feed.fetch_papers),
    Adapter("springer", springer_feed.fetch_papers),
    Adapter("elsevier", elsevier_feed.fetch_papers),
    Adapter("ieee", ieee_feed.fetch_papers),
)


def configured_adapters() -> list[Adapter]:
    """Adapters enabled by PAPER_SOURCES (comma-separated names), in priority order."""
    raw = os.getenv("PAPER_SOURCES", "")
    wanted = {name.strip().lower() for name in raw.split(",") if name.strip()}
    if not wanted:
        return list(ALL_ADAPTERS)

    unknown = wanted - {adapter.name for adapter in ALL_ADAPTERS}
    if unknown:
        LOGGER.warning("Ignoring unknown PAPER_SOURCES entries: %s", ", ".join(sorted(unknown)))
    return [adapter for adapter in ALL_ADAPTERS if adapter.name in wanted]


def aggregate(
    topic: str,
    adapters: list[Adapter] | None = None,
    timeout: float | None = None,
) -> list[Paper]:
    """Fetch ``topic`` from every adapter concurrently and concatenate the results.

    A failing, empty or slow adapter contributes nothing; the others are
    unaffected. The result order follows the adapter order, not completion
    order. Never raises.
    """
    adapters = configured_adapters() if adapters is None else adapters
    timeout = default_timeout() if timeout is None else timeout
    if not adapters:
        return []

    papers: list[Paper] = []
    executor = ThreadPoolExecutor(max_workers=len(adapters), thread_name_prefix="paper-source")
    try:
        futures: list[tuple[Adapter, Future[list[Paper]]]] = [
            (adapter, executor.submit(safe_fetch, adapter.name, adapter.fetch, topic, timeout))
            for adapter in adapters
        ]
        deadline = time.monotonic() + timeout + _DEADLINE_GRACE_SECONDS

        for adapter, future in futures:
            remaining = max(deadline - time.monotonic(), 0.0)
            try:
                papers.extend(future.result(timeout=remaining))
            except FutureTimeoutError:
                LOGGER.warning("%s timed out after %.1fs, skipping", adapter.name, timeout)
            except Exception as exc:
                LOGGER.warning("%s failed, skipping: %s", adapter.name, exc)
    finally:
        # Stragglers keep running until their request timeout; nobody waits on them.
        executor.shutdown(wait=False, cancel_futures=True)

    LOGGER.info("Total papers aggregated for topic=%r: %s", topic, len(papers))
    return papers
