"""Fan-out behaviour of aggregator.aggregate."""

from __future__ import annotations

import threading
import time
from unittest.mock import patch

import pytest

from aggregator import ALL_ADAPTERS, Adapter, aggregate, configured_adapters
from errors import ProviderUnavailable
from models import Paper


def _papers(source: str, count: int = 2) -> list[Paper]:
    return [Paper(title=f"{source} {i}", source=source) for i in range(count)]


def _returns(papers: list[Paper]):
    def fetch(topic: str, timeout: float) -> list[Paper]:
        return papers
    return fetch


def _raises(error: Exception):
    def fetch(topic: str, timeout: float) -> list[Paper]:
        raise error
    return fetch


def test_results_follow_adapter_priority_order() -> None:
    slow_first = threading.Event()

    def slow(topic: str, timeout: float) -> list[Paper]:
        time.sleep(0.05)
        slow_first.set()
        return _papers("first")

    adapters = [Adapter("first", slow), Adapter("second", _returns(_papers("second")))]

    papers = aggregate("graphs", adapters=adapters, timeout=5.0)

    assert slow_first.is_set()
    assert [p.title for p in papers] == ["first 0", "first 1", "second 0", "second 1"]


def test_failing_adapter_does_not_empty_others() -> None:
    adapters = [
        Adapter("broken", _raises(ProviderUnavailable("no key"))),
        Adapter("crashing", _raises(RuntimeError("boom"))),
        Adapter("ok", _returns(_papers("ok"))),
    ]
    assert [p.source for p in aggregate("x", adapters=adapters, timeout=5.0)] == ["ok", "ok"]


def test_all_adapters_failing_returns_empty_list() -> None:
    adapters = [Adapter(name, _raises(ValueError(name))) for name in ("a", "b", "c")]
    assert aggregate("x", adapters=adapters, timeout=5.0) == []


def test_no_adapters_returns_empty_list() -> None:
    assert aggregate("x", adapters=[], timeout=1.0) == []


def test_empty_topic_is_passed_through() -> None:
    seen: list[str] = []

    def record(topic: str, timeout: float) -> list[Paper]:
        seen.append(topic)
        return []

    assert aggregate("", adapters=[Adapter("rec", record)], timeout=1.0) == []
    assert seen == [""]


def test_adapters_run_concurrently() -> None:
    barrier = threading.Barrier(3, timeout=2.0)

    def meet(topic: str, timeout: float) -> list[Paper]:
        # Only passes if all three adapters are in flight at once.
        barrier.wait()
        return _papers("met", 1)

    adapters = [Adapter(f"a{i}", meet) for i in range(3)]
    assert len(aggregate("x", adapters=adapters, timeout=5.0)) == 3


def test_hung_adapter_is_abandoned_after_deadline() -> None:
    release = threading.Event()

    def hang(topic: str, timeout: float) -> list[Paper]:
        release.wait(5.0)
        return _papers("late")

    adapters = [Adapter("hung", hang), Adapter("ok", _returns(_papers("ok", 1)))]

    with patch("aggregator._DEADLINE_GRACE_SECONDS", 0.0):
        started = time.monotonic()
        papers = aggregate("x", adapters=adapters, timeout=0.2)
        elapsed = time.monotonic() - started
    release.set()

    assert [p.source for p in papers] == ["ok"]
    assert elapsed < 2.0


def test_timeout_is_forwarded_to_adapters() -> None:
    seen: list[float] = []

    def record(topic: str, timeout: float) -> list[Paper]:
        seen.append(timeout)
        return []

    aggregate("x", adapters=[Adapter("rec", record)], timeout=7.5)
    assert seen == [7.5]


def test_configured_adapters_default_is_all(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PAPER_SOURCES", raising=False)
    assert configured_adapters() == list(ALL_ADAPTERS)


def test_configured_adapters_subset_keeps_priority(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAPER_SOURCES", "ieee, arxiv ,bogus")
    assert [a.name for a in configured_adapters()] == ["arxiv", "ieee"]


def test_priority_order_of_builtin_adapters() -> None:
    assert [a.name for a in ALL_ADAPTERS] == [
        "openalex",
        "arxiv",
        "semantic_scholar",
        "springer",
        "elsevier",
        "ieee",
    ]
