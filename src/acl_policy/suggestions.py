"""Spelling suggestions for unexpected argument and block names."""

from __future__ import annotations

import difflib
from typing import Iterable, Optional

DEFAULT_SUGGESTION_CUTOFF = 0.6


def name_suggestion(
    given: str,
    candidates: Iterable[str],
    cutoff: float = DEFAULT_SUGGESTION_CUTOFF,
) -> Optional[str]:
    """Return the candidate closest to ``given``, or None if none is similar enough.

    Similarity is ``difflib.SequenceMatcher.ratio``; ``cutoff`` is the minimum
    ratio a candidate needs to be suggested.
    """
    matches = difflib.get_close_matches(given, list(candidates), n=1, cutoff=cutoff)
    return matches[0] if matches else None
