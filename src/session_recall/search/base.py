"""Abstract base class for search backends.

A backend runs the text search against historical sessions.  Session
recall only re-scores and formats what a backend returns.

Classes
-------
- SearchBackendError  — transport-level failure of a backend call
- SearchRequest       — the parameters of one search
- SearchBackend       — abstract base for all backends
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field

from session_recall.models import RawHit


class SearchBackendError(RuntimeError):
    """Raised when a backend cannot complete a search.

    Covers timeouts, process failures, and oversized output.  A malformed
    payload is not an error: it is reported as zero hits.
    """


class SearchRequest(BaseModel):
    """Parameters for a single backend search.

    Parameters
    ----------
    query:
        Free-text query, normally the upcoming prompt.
    agent_id:
        Agent whose sessions are searched.
    max_results:
        Number of candidates requested.
    min_score:
        Backend-side relevance threshold.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    agent_id: str
    max_results: int = Field(ge=1)
    min_score: float = Field(ge=0.0, le=1.0)


class SearchBackend(ABC):
    """Protocol for running a search and returning raw hits.

    One instance may serve several conversations at once, so
    implementations must tolerate concurrent calls.
    """

    @abstractmethod
    def search(self, request: SearchRequest) -> list[RawHit]:
        """Run ``request`` and return hits in backend rank order.

        Parameters
        ----------
        request:
            The search parameters.

        Returns
        -------
        list[RawHit]
            Hits from every corpus; an empty list if nothing matched or
            the response could not be parsed.

        Raises
        ------
        SearchBackendError
            If the backend could not be reached or did not answer in time.
        """
