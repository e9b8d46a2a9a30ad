"""Pure league metric helpers shared across modules.

Purpose:
    Hold the scoring and ranking helpers that can be unit tested in isolation
    and reused by the standings calculator and its validators.
Inputs:
    Goal counts for a single match, or a pandas Series of team points.
Outputs:
    Points awarded per side, competition ranks.
Example:
    >>> match_points(3, 1)
    (3, 0)
"""

from __future__ import annotations

from typing import Optional, Tuple

import pandas as pd

WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0


def match_points(home_score: int, away_score: int) -> Tuple[int, int]:
    """Return ``(home_points, away_points)`` for a final score."""
    if home_score > away_score:
        return WIN_POINTS, LOSS_POINTS
    if home_score < away_score:
        return LOSS_POINTS, WIN_POINTS
    return DRAW_POINTS, DRAW_POINTS


def competition_rank(series: pd.Series, higher_is_better: bool = True) -> pd.Series:
    """Competition rank a numeric series (ties share rank, next rank skips to position)."""
    ordered = series.sort_values(ascending=not higher_is_better, kind="mergesort")
    ranks = {}
    rank = 0
    position = 0
    last_val: Optional[float] = None
    for index, value in ordered.items():
        if pd.isna(value):
            continue
        position += 1
        if last_val is None or value != last_val:
            rank = position
            last_val = value
        ranks[index] = rank
    return pd.Series(ranks, dtype="int64")


__all__ = [
    "WIN_POINTS",
    "DRAW_POINTS",
    "LOSS_POINTS",
    "match_points",
    "competition_rank",
]
