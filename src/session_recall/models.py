"""Search hit domain models.

All types are frozen Pydantic models: a hit is never mutated after the
search backend hands it over, and scored results are rebuilt per call.

Classes
-------
- RawHit          — an unscored result from the search backend
- ScoredResult    — a hit with its recency decay applied
"""
from __future__ import annotations

from pathlib import PurePath

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SESSIONS_SOURCE: str = "sessions"


class RawHit(BaseModel):
    """A single search result exactly as the backend reported it.

    Parameters
    ----------
    path:
        Locator of the session transcript the snippet came from.
    start_line:
        First line of the snippet within ``path``.  Passed through only.
    end_line:
        Last line of the snippet within ``path``.  Passed through only.
    score:
        Backend relevance score in [0.0, 1.0].
    snippet:
        The matched text.
    source:
        Corpus tag, e.g. ``"sessions"`` or ``"memory"``.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    path: str
    start_line: int = 0
    end_line: int = 0
    score: float = Field(ge=0.0, le=1.0)
    snippet: str = ""
    source: str = ""


class ScoredResult(RawHit):
    """A ``RawHit`` rescored by artifact age.

    ``score`` holds the decayed score; the backend's value is kept in
    ``raw_score``.
    """

    age_in_days: float = Field(default=0.0, ge=0.0)
    decay_factor: float = Field(default=1.0, gt=0.0, le=1.0)
    raw_score: float = Field(default=0.0, ge=0.0, le=1.0)

    @classmethod
    def from_hit(cls, hit: RawHit, age_in_days: float, decay_factor: float) -> ScoredResult:
        """Build a scored result from ``hit`` and its age-derived factor."""
        data = hit.model_dump()
        data["score"] = hit.score * decay_factor
        return cls(
            **data,
            age_in_days=age_in_days,
            decay_factor=decay_factor,
            raw_score=hit.score,
        )

    @property
    def session_file(self) -> str:
        """Return the file name component of ``path``."""
        return PurePath(self.path).name or self.path

