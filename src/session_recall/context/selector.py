"""Recency-aware ranking and selection of search hits.

The search backend is asked for more candidates than will be shown, at a
lower threshold, because decay can only lower scores: filtering on the
undecayed threshold would drop aged hits before their decayed score is
known.  The final threshold is applied here, after decay.

Functions
---------
- build_search_request  — over-fetching request for the backend
- filter_session_hits   — keep only hits tagged as session transcripts
- apply_decay           — turn hits into ``ScoredResult`` objects
- select_results        — threshold, rank, and cap scored results
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from session_recall.config import RecallConfig
from session_recall.context.age import AgeSource, file_age_days
from session_recall.context.decay import TieredDecay
from session_recall.models import SESSIONS_SOURCE, RawHit, ScoredResult
from session_recall.search.base import SearchRequest

logger = logging.getLogger(__name__)

OVERFETCH_MULTIPLIER: int = 3
PREFILTER_SCORE_RATIO: float = 0.5


def build_search_request(query: str, config: RecallConfig) -> SearchRequest:
    """Return the backend request for ``query``.

    Asks for ``OVERFETCH_MULTIPLIER`` times ``max_results`` candidates at
    ``PREFILTER_SCORE_RATIO`` times ``min_score``.
    """
    return SearchRequest(
        query=query,
        agent_id=config.agent_id,
        max_results=config.max_results * OVERFETCH_MULTIPLIER,
        min_score=config.min_score * PREFILTER_SCORE_RATIO,
    )


def filter_session_hits(hits: Iterable[RawHit]) -> list[RawHit]:
    """Return the hits whose ``source`` is ``"sessions"``, in order."""
    return [hit for hit in hits if hit.source == SESSIONS_SOURCE]


def apply_decay(
    hits: Iterable[RawHit],
    decay: TieredDecay,
    age_source: AgeSource = file_age_days,
) -> list[ScoredResult]:
    """Score each hit by the age of its transcript.

    Parameters
    ----------
    hits:
        Hits to score, in backend rank order.
    decay:
        Tier table supplying the multiplier.
    age_source:
        Callable returning a transcript's age in days for its path, or
        None when unknown.  Unknown ages, and lookups that raise, count
        as 0 (full weight) for that hit only.

    Returns
    -------
    list[ScoredResult]
        One result per hit, same order.
    """
    scored: list[ScoredResult] = []
    for hit in hits:
        try:
            age = max(0.0, age_source(hit.path) or 0.0)
        except Exception as exc:  # noqa: BLE001
            logger.debug("apply_decay: age lookup failed for %r: %s", hit.path, exc)
            age = 0.0
        scored.append(ScoredResult.from_hit(hit, age, decay.factor(age)))
    return scored


def select_results(
    results: Sequence[ScoredResult],
    max_results: int,
    min_score: float,
) -> list[ScoredResult]:
    """Return the top ``max_results`` results scoring at least ``min_score``.

    The threshold applies to the decayed ``score``.  Ordering is by
    decayed score, descending; the sort is stable, so equal scores keep
    the backend's original rank.
    """
    eligible = [result for result in results if result.score >= min_score]
    eligible.sort(key=lambda result: result.score, reverse=True)
    return eligible[:max_results]
