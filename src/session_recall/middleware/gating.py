"""Pre-search gating of incoming prompts.

Synthetic wake-up messages and very short prompts never trigger a
search.  These checks run before any backend call.

Functions
---------
- skip_reason    — why a prompt should be skipped, or None
- should_recall  — True when a search should run
"""
from __future__ import annotations

from session_recall.config import RecallConfig

HEARTBEAT_MARKER: str = "heartbeat"
SYSTEM_PREFIX: str = "[system"


def skip_reason(prompt: str | None, config: RecallConfig) -> str | None:
    """Return a short reason to skip ``prompt``, or None to proceed.

    Parameters
    ----------
    prompt:
        The upcoming user-facing prompt.  May be None.
    config:
        Supplies ``min_prompt_length``.

    Returns
    -------
    str | None
        ``"empty"``, ``"too-short"``, ``"heartbeat"``, ``"system"``, or
        None when the prompt qualifies for recall.
    """
    if not prompt:
        return "empty"
    if len(prompt) < config.min_prompt_length:
        return "too-short"
    lowered = prompt.lower()
    if HEARTBEAT_MARKER in lowered:
        return "heartbeat"
    if lowered.startswith(SYSTEM_PREFIX):
        return "system"
    return None


def should_recall(prompt: str | None, config: RecallConfig) -> bool:
    """Return True when ``prompt`` should trigger a session search."""
    return skip_reason(prompt, config) is None
