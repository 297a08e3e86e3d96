"""Recency decay for search hits.

Maps the age of a session transcript (in days) to a multiplier in
(0.0, 1.0] using a step table of age tiers.

Classes
-------
- DecayTier    — one (inclusive upper bound, factor) step
- TieredDecay  — validated tier table with factor lookup
"""
from __future__ import annotations

import math
from bisect import bisect_left
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field


class DecayTier(BaseModel):
    """A single step of the decay table.

    Parameters
    ----------
    max_age_days:
        Inclusive upper bound of the tier in days.  ``math.inf`` for the
        final, unbounded tier.
    factor:
        Multiplier applied to hits whose age falls in this tier.
    """

    model_config = ConfigDict(frozen=True)

    max_age_days: float = Field(gt=0.0)
    factor: float = Field(gt=0.0, le=1.0)


DEFAULT_DECAY_TIERS: tuple[DecayTier, ...] = (
    DecayTier(max_age_days=7.0, factor=1.0),
    DecayTier(max_age_days=30.0, factor=0.8),
    DecayTier(max_age_days=90.0, factor=0.5),
    DecayTier(max_age_days=math.inf, factor=0.2),
)


class TieredDecay:
    """Compute recency multipliers from an ordered tier table.

    A hit of age ``a`` receives the factor of the first tier whose
    ``max_age_days`` is ``>= a``.  The table must partition the whole age
    axis, so it is checked on construction:

    - at least one tier
    - bounds strictly ascending
    - the last bound is ``math.inf``
    - factors non-increasing, so older content never outranks newer

    Parameters
    ----------
    tiers:
        The tier table.  Defaults to ``DEFAULT_DECAY_TIERS``
        (7d → 1.0, 30d → 0.8, 90d → 0.5, older → 0.2).

    Raises
    ------
    ValueError
        If the table violates any of the rules above.
    """

    def __init__(self, tiers: Sequence[DecayTier] = DEFAULT_DECAY_TIERS) -> None:
        self.tiers: tuple[DecayTier, ...] = tuple(tiers)
        self._validate(self.tiers)
        self._bounds: list[float] = [tier.max_age_days for tier in self.tiers]

    @staticmethod
    def _validate(tiers: tuple[DecayTier, ...]) -> None:
        if not tiers:
            raise ValueError("Decay table must contain at least one tier.")
        for previous, current in zip(tiers, tiers[1:]):
            if current.max_age_days <= previous.max_age_days:
                raise ValueError(
                    "Decay tiers must be sorted by strictly ascending max_age_days "
                    f"({previous.max_age_days} then {current.max_age_days})."
                )
            if current.factor > previous.factor:
                raise ValueError(
                    "Decay factors must not increase with age "
                    f"({previous.factor} then {current.factor})."
                )
        if not math.isinf(tiers[-1].max_age_days):
            raise ValueError("The final decay tier must be unbounded (math.inf).")

    # ------------------------------------------------------------------
    # Public scoring method
    # ------------------------------------------------------------------

    def factor(self, age_days: float | None) -> float:
        """Return the decay factor for content ``age_days`` old.

        Parameters
        ----------
        age_days:
            Age in days.  ``None`` means the age could not be determined
            and is treated as 0 (assume recent), as are negative ages.

        Returns
        -------
        float
            Multiplier in (0.0, 1.0].
        """
        age = max(0.0, age_days or 0.0)
        return self.tiers[bisect_left(self._bounds, age)].factor

    def factor_many(self, ages_days: Iterable[float | None]) -> list[float]:
        """Return decay factors for several ages."""
        return [self.factor(age) for age in ages_days]

    def __repr__(self) -> str:
        steps = ", ".join(f"<={t.max_age_days:g}d:{t.factor:g}" for t in self.tiers)
        return f"TieredDecay({steps})"
