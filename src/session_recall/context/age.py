"""Artifact age lookup.

Functions
---------
- file_age_days  — days since a file was last modified
"""
from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

SECONDS_PER_DAY: float = 86400.0

AgeSource = Callable[[str], "float | None"]


def file_age_days(path: str | Path, now: float | None = None) -> float | None:
    """Return how many days ago ``path`` was last modified.

    Parameters
    ----------
    path:
        File to inspect.
    now:
        Reference POSIX timestamp.  Defaults to ``time.time()``.

    Returns
    -------
    float | None
        Age in days, or None if the file cannot be stat'ed.  Callers treat
        None as "recent".
    """
    try:
        mtime = Path(path).stat().st_mtime
    except (OSError, ValueError) as exc:
        logger.debug("file_age_days: cannot stat %r: %s", str(path), exc)
        return None
    reference = time.time() if now is None else now
    return (reference - mtime) / SECONDS_PER_DAY
