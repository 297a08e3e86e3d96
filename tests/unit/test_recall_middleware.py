"""Unit tests for session_recall.middleware.recall_middleware."""
from __future__ import annotations

import logging

import pytest

from session_recall.config import RecallConfig
from session_recall.context.formatter import BLOCK_OPEN
from session_recall.middleware.recall_middleware import RecallMiddleware
from session_recall.models import RawHit
from session_recall.search.base import SearchBackend, SearchBackendError, SearchRequest
from session_recall.search.memory import InMemorySearchBackend

PROMPT = "What did we decide about the retry policy?"


class _FailingBackend(SearchBackend):
    def __init__(self) -> None:
        self.calls = 0

    def search(self, request: SearchRequest) -> list[RawHit]:
        self.calls += 1
        raise SearchBackendError("openclaw search timed out after 10s")


class _RecordingBackend(InMemorySearchBackend):
    def __init__(self, hits: list[RawHit]) -> None:
        super().__init__(hits)
        self.requests: list[SearchRequest] = []

    def search(self, request: SearchRequest) -> list[RawHit]:
        self.requests.append(request)
        return super().search(request)


def _ages(mapping: dict[str, float]):
    return lambda path: mapping.get(path)


def _middleware(
    hits: list[RawHit],
    ages: dict[str, float] | None = None,
    **config: object,
) -> tuple[RecallMiddleware, _RecordingBackend]:
    backend = _RecordingBackend(hits)
    middleware = RecallMiddleware(
        RecallConfig(**config), backend, age_source=_ages(ages or {})
    )
    return middleware, backend


class TestRecallMiddlewareSearch:
    def test_request_overfetches(self) -> None:
        middleware, backend = _middleware([], max_results=4, min_score=0.6)
        middleware.search(PROMPT)
        request = backend.requests[0]
        assert request.max_results == 12
        assert request.min_score == pytest.approx(0.3)
        assert request.agent_id == "main"

    def test_non_session_sources_dropped(self) -> None:
        hits = [
            RawHit(path="m", score=0.9, source="memory"),
            RawHit(path="s", score=0.7, source="sessions"),
        ]
        middleware, _ = _middleware(hits)
        assert [r.path for r in middleware.search(PROMPT)] == ["s"]

    def test_decay_reorders_results(self) -> None:
        hits = [
            RawHit(path="old", score=0.9, source="sessions"),
            RawHit(path="fresh", score=0.7, source="sessions"),
        ]
        middleware, _ = _middleware(hits, {"old": 40.0, "fresh": 1.0}, min_score=0.1)
        results = middleware.search(PROMPT)
        assert [r.path for r in results] == ["fresh", "old"]
        assert results[1].score == pytest.approx(0.45)

    def test_backend_failure_logged_and_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        middleware = RecallMiddleware(RecallConfig(), _FailingBackend())
        with caplog.at_level(logging.WARNING):
            assert middleware.search(PROMPT) == []
        assert "search failed" in caplog.text


class TestRecallMiddlewareBeforeAgentStart:
    def test_short_prompt_skips_backend(self) -> None:
        backend = _FailingBackend()
        middleware = RecallMiddleware(RecallConfig(min_prompt_length=10), backend)
        assert middleware.before_agent_start("hey") is None
        assert backend.calls == 0

    def test_heartbeat_skips_backend(self) -> None:
        middleware, backend = _middleware([RawHit(path="s", score=0.9, source="sessions")])
        assert middleware.before_agent_start("heartbeat: are you alive?") is None
        assert backend.requests == []

    def test_no_results_gives_none(self) -> None:
        middleware, backend = _middleware([])
        assert middleware.before_agent_start(PROMPT) is None
        assert len(backend.requests) == 1

    def test_backend_failure_gives_none(self) -> None:
        middleware = RecallMiddleware(RecallConfig(), _FailingBackend())
        assert middleware.before_agent_start(PROMPT) is None

    def test_returns_formatted_block(self, caplog: pytest.LogCaptureFixture) -> None:
        hits = [RawHit(path="s", score=0.8, snippet="use exponential backoff", source="sessions")]
        middleware, _ = _middleware(hits, {"s": 3.0})
        with caplog.at_level(logging.INFO):
            context = middleware.before_agent_start(PROMPT)
        assert context is not None
        assert context.startswith(BLOCK_OPEN)
        assert "[1] (80%, 3d ago)\nuse exponential backoff" in context
        assert "injecting 1 session snippets" in caplog.text

    def test_results_capped_at_max_results(self) -> None:
        hits = [
            RawHit(path=f"s{i}", score=0.9 - i * 0.01, snippet=f"snippet {i}", source="sessions")
            for i in range(10)
        ]
        middleware, _ = _middleware(hits, max_results=2)
        context = middleware.before_agent_start(PROMPT)
        assert context is not None
        assert "[2]" in context
        assert "[3]" not in context

    def test_unreadable_transcript_path_degrades_one_hit(self) -> None:
        hits = [
            RawHit(path="/nonexistent/good.jsonl", score=0.9, snippet="good one", source="sessions"),
            RawHit(path="bad\x00path.jsonl", score=0.8, snippet="bad one", source="sessions"),
        ]
        middleware = RecallMiddleware(RecallConfig(), InMemorySearchBackend(hits))
        context = middleware.before_agent_start(PROMPT)
        assert context is not None
        assert "[1] (90%, today)\ngood one" in context
        assert "[2] (80%, today)\nbad one" in context
