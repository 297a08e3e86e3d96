"""Before-turn recall middleware.

Runs the full recall pipeline for one upcoming prompt:

    gate -> backend search -> sessions filter -> decay -> select -> format

Classes
-------
- RecallMiddleware  — turn-start hook returning a context block or None
"""
from __future__ import annotations

import logging

from session_recall.config import RecallConfig
from session_recall.context.age import AgeSource, file_age_days
from session_recall.context.decay import TieredDecay
from session_recall.context.formatter import format_context
from session_recall.context.selector import (
    apply_decay,
    build_search_request,
    filter_session_hits,
    select_results,
)
from session_recall.middleware.gating import skip_reason
from session_recall.models import ScoredResult
from session_recall.search.base import SearchBackend, SearchBackendError

logger = logging.getLogger(__name__)


class RecallMiddleware:
    """Inject relevant session excerpts ahead of an agent turn.

    The middleware holds only read-only collaborators, so one instance can
    serve concurrent turns for independent conversations.

    Parameters
    ----------
    config:
        Validated plugin configuration.
    backend:
        Search backend queried for candidate hits.
    decay:
        Recency decay table.  Defaults to ``TieredDecay()``.
    age_source:
        Callable returning a transcript's age in days.  Defaults to
        ``file_age_days`` (modification time).
    """

    def __init__(
        self,
        config: RecallConfig,
        backend: SearchBackend,
        decay: TieredDecay | None = None,
        age_source: AgeSource = file_age_days,
    ) -> None:
        self.config = config
        self._backend = backend
        self._decay = decay or TieredDecay()
        self._age_source = age_source

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search(self, query: str) -> list[ScoredResult]:
        """Return ranked session results for ``query``.

        Backend failures are logged at WARNING level and yield an empty
        list.

        Parameters
        ----------
        query:
            The free-text query, normally the upcoming prompt.

        Returns
        -------
        list[ScoredResult]
            At most ``max_results`` results, each with a decayed score of
            at least ``min_score``, best first.
        """
        request = build_search_request(query, self.config)
        try:
            hits = self._backend.search(request)
        except SearchBackendError as exc:
            logger.warning("session-recall: search failed: %s", exc)
            return []

        session_hits = filter_session_hits(hits)
        scored = apply_decay(session_hits, self._decay, self._age_source)
        return select_results(scored, self.config.max_results, self.config.min_score)

    def before_agent_start(self, prompt: str | None) -> str | None:
        """Return the context block to prepend for ``prompt``, or None.

        Parameters
        ----------
        prompt:
            The upcoming user-facing prompt.

        Returns
        -------
        str | None
            The formatted ``<session-recall>`` block, or None when the
            prompt is gated out or nothing relevant was found.
        """
        reason = skip_reason(prompt, self.config)
        if reason is not None:
            logger.debug("session-recall: skipped prompt (%s)", reason)
            return None

        results = self.search(prompt)
        if not results:
            logger.debug("session-recall: no relevant sessions found")
            return None

        logger.info("session-recall: injecting %d session snippets", len(results))
        return format_context(results)
