"""Quickstart: rank saved search hits and print the injected context.

Run with::

    python examples/01_quickstart.py
"""
from __future__ import annotations

from session_recall import InMemorySearchBackend, RawHit, RecallConfig, RecallMiddleware

hits = [
    RawHit(
        path="/home/agent/.openclaw/sessions/2024-03-01.jsonl",
        score=0.9,
        snippet="We moved the nightly backup to 02:00 UTC to avoid the deploy window.",
        source="sessions",
    ),
    RawHit(
        path="/home/agent/.openclaw/sessions/2024-05-20.jsonl",
        score=0.65,
        snippet="Backups now go to the eu-west bucket; the old bucket is read-only.",
        source="sessions",
    ),
    RawHit(
        path="/home/agent/MEMORY.md",
        score=0.95,
        snippet="Backups: see runbook.",
        source="memory",
    ),
]

# Ages in days; paths without an entry count as recent.
ages = {
    "/home/agent/.openclaw/sessions/2024-03-01.jsonl": 120.0,
    "/home/agent/.openclaw/sessions/2024-05-20.jsonl": 3.0,
}

middleware = RecallMiddleware(
    RecallConfig(max_results=3, min_score=0.2),
    InMemorySearchBackend(hits),
    age_source=ages.get,
)

context = middleware.before_agent_start("Where do the nightly backups go now?")
print(context or "(nothing to inject)")
