"""Search backend subpackage.

Public surface
--------------
- SearchBackend           — abstract base for backends
- SearchRequest           — parameters of one search
- SearchBackendError      — transport-level backend failure
- CommandSearchBackend    — subprocess-based backend
- InMemorySearchBackend   — fixed hit list backend
- extract_json_payload    — locate the JSON object in noisy output
- parse_search_response   — output to ``RawHit`` list
"""
from __future__ import annotations

from session_recall.search.base import SearchBackend, SearchBackendError, SearchRequest
from session_recall.search.command import CommandSearchBackend
from session_recall.search.memory import InMemorySearchBackend
from session_recall.search.parsing import extract_json_payload, parse_search_response

__all__ = [
    "CommandSearchBackend",
    "InMemorySearchBackend",
    "SearchBackend",
    "SearchBackendError",
    "SearchRequest",
    "extract_json_payload",
    "parse_search_response",
]
