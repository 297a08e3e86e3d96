"""Context processing subpackage.

Provides recency decay, ranking, and formatting of historical session
excerpts for injection ahead of an agent turn.

Public surface
--------------
- TieredDecay           — step-table recency decay
- DecayTier             — one step of the table
- DEFAULT_DECAY_TIERS   — 7d / 30d / 90d / older
- file_age_days         — transcript age from its modification time
- apply_decay           — hits to scored results
- select_results        — threshold, rank, and cap
- format_context        — render the injected block
"""
from __future__ import annotations

from session_recall.context.age import file_age_days
from session_recall.context.decay import DEFAULT_DECAY_TIERS, DecayTier, TieredDecay
from session_recall.context.formatter import format_age, format_context, truncate_snippet
from session_recall.context.selector import (
    apply_decay,
    build_search_request,
    filter_session_hits,
    select_results,
)

__all__ = [
    "DEFAULT_DECAY_TIERS",
    "DecayTier",
    "TieredDecay",
    "apply_decay",
    "build_search_request",
    "file_age_days",
    "filter_session_hits",
    "format_age",
    "format_context",
    "select_results",
    "truncate_snippet",
]
