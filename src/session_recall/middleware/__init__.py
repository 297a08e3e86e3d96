"""Middleware subpackage.

Public surface
--------------
- RecallMiddleware  — before-turn recall pipeline
- should_recall     — prompt gating predicate
- skip_reason       — prompt gating with a reason label
"""
from __future__ import annotations

from session_recall.middleware.gating import should_recall, skip_reason
from session_recall.middleware.recall_middleware import RecallMiddleware

__all__ = ["RecallMiddleware", "should_recall", "skip_reason"]
