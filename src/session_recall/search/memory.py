"""In-memory search backend.

Serves a fixed list of hits.  Useful in tests and for replaying a saved
search response through the ranking pipeline.

Classes
-------
- InMemorySearchBackend  — filters and caps a fixed hit list
"""
from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from session_recall.models import RawHit
from session_recall.search.base import SearchBackend, SearchRequest
from session_recall.search.parsing import parse_search_response


class InMemorySearchBackend(SearchBackend):
    """Return a stored hit list, honouring the request's limits.

    Hits are ordered by descending score, the way a real backend ranks
    them, then filtered by ``min_score`` and capped at ``max_results``.

    Parameters
    ----------
    hits:
        The hits to serve.
    """

    def __init__(self, hits: Iterable[RawHit] = ()) -> None:
        self._hits: tuple[RawHit, ...] = tuple(
            sorted(hits, key=lambda hit: hit.score, reverse=True)
        )

    @classmethod
    def from_file(cls, path: str | Path) -> InMemorySearchBackend:
        """Load hits from a saved backend JSON response."""
        return cls(parse_search_response(Path(path).read_text(encoding="utf-8")))

    def search(self, request: SearchRequest) -> list[RawHit]:
        matching = [hit for hit in self._hits if hit.score >= request.min_score]
        return matching[: request.max_results]

    def __len__(self) -> int:
        return len(self._hits)
