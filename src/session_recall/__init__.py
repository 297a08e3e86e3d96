"""session-recall — Recency-weighted recall of past agent sessions.

Re-ranks session search hits by transcript age and renders the best of
them into a context block injected ahead of the next agent turn.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import session_recall
>>> session_recall.__version__
'0.1.0'
"""
from __future__ import annotations

# Configuration and models
from session_recall.config import ConfigurationError, RecallConfig, load_config
from session_recall.models import RawHit, ScoredResult

# Context processing
from session_recall.context.age import file_age_days
from session_recall.context.decay import DEFAULT_DECAY_TIERS, DecayTier, TieredDecay
from session_recall.context.formatter import format_age, format_context, truncate_snippet
from session_recall.context.selector import (
    apply_decay,
    build_search_request,
    filter_session_hits,
    select_results,
)

# Search backends
from session_recall.search.base import SearchBackend, SearchBackendError, SearchRequest
from session_recall.search.command import CommandSearchBackend
from session_recall.search.memory import InMemorySearchBackend
from session_recall.search.parsing import extract_json_payload, parse_search_response

# Middleware and plugin
from session_recall.middleware.gating import should_recall, skip_reason
from session_recall.middleware.recall_middleware import RecallMiddleware
from session_recall.plugin import (
    BeforeAgentStartEvent,
    HookResult,
    PluginHost,
    PluginService,
    SessionRecallPlugin,
)

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # Configuration and models
    "ConfigurationError",
    "RawHit",
    "RecallConfig",
    "ScoredResult",
    "load_config",
    # Context
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
    # Search
    "CommandSearchBackend",
    "InMemorySearchBackend",
    "SearchBackend",
    "SearchBackendError",
    "SearchRequest",
    "extract_json_payload",
    "parse_search_response",
    # Middleware and plugin
    "BeforeAgentStartEvent",
    "HookResult",
    "PluginHost",
    "PluginService",
    "RecallMiddleware",
    "SessionRecallPlugin",
    "should_recall",
    "skip_reason",
]
