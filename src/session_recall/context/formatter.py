"""Render selected results into the injected context block.

Functions
---------
- round_half_up     — nearest-integer rounding with .5 rounding up
- truncate_snippet  — trim and cap a snippet at ``SNIPPET_CHAR_LIMIT``
- format_age        — relative age label ("today", "3d ago", ...)
- format_context    — the full ``<session-recall>`` block
"""
from __future__ import annotations

import math
from collections.abc import Sequence

from session_recall.models import ScoredResult

SNIPPET_CHAR_LIMIT: int = 500
ELLIPSIS: str = "..."

BLOCK_OPEN: str = "<session-recall>"
BLOCK_CLOSE: str = "</session-recall>"
BLOCK_INTRO: str = "The following excerpts from recent sessions may be relevant:"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def truncate_snippet(snippet: str, limit: int = SNIPPET_CHAR_LIMIT) -> str:
    """Strip surrounding whitespace and cap at ``limit`` characters.

    Longer snippets are cut at exactly ``limit`` characters, without
    regard for word boundaries, and ``ELLIPSIS`` is appended.
    """
    text = snippet.strip()
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def format_age(days: float) -> str:
    """Return a short relative label for an age in days.

    Thresholds are checked in order and the first match wins:
    < 1 "today", < 2 "yesterday", < 7 days, < 30 weeks, < 365 months,
    then years.  Counts are rounded half-up, so 6.9 days reads "7d ago".
    """
    if days < 1:
        return "today"
    if days < 2:
        return "yesterday"
    if days < 7:
        return f"{round_half_up(days)}d ago"
    if days < 30:
        return f"{round_half_up(days / 7)}w ago"
    if days < 365:
        return f"{round_half_up(days / 30)}mo ago"
    return f"{round_half_up(days / 365)}y ago"


def _format_item(rank: int, result: ScoredResult) -> str:
    score_percent = round_half_up(result.score * 100)
    age_label = format_age(result.age_in_days)
    return f"[{rank}] ({score_percent}%, {age_label})\n{truncate_snippet(result.snippet)}"


def format_context(results: Sequence[ScoredResult]) -> str:
    """Format ranked results into a single injectable block.

    Parameters
    ----------
    results:
        Results in final rank order.  Must not be empty: an empty block
        carries no information, so callers return "no context" instead.

    Returns
    -------
    str
        The ``<session-recall>`` block with one ``[n] (score%, age)``
        header per result.

    Raises
    ------
    ValueError
        If ``results`` is empty.
    """
    if not results:
        raise ValueError("format_context requires at least one result.")

    items = "\n\n".join(
        _format_item(rank, result) for rank, result in enumerate(results, start=1)
    )
    return f"{BLOCK_OPEN}\n{BLOCK_INTRO}\n\n{items}\n{BLOCK_CLOSE}"
