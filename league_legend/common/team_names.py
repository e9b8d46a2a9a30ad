"""Team name helpers for match parsing and table ordering.

Purpose:
    Provide a single source of truth for how team labels are cleaned when
    parsed and how they compare when points are level.
Inputs:
    Raw team label tokens from match result lines.
Outputs:
    Display names with single spaces, and a sort key for tie-breaks.
Example:
    >>> normalize_team_display("  Manchester   United ")
    'Manchester United'
    >>> team_sort_key("arsenal") < team_sort_key("Chelsea")
    True
"""

from __future__ import annotations

from typing import Iterable, Tuple


def normalize_team_display(value: str | Iterable[str]) -> str:
    """Join label tokens (or split a raw label) with single spaces."""
    tokens = value.split() if isinstance(value, str) else [t for t in value if t]
    return " ".join(tokens)


def team_sort_key(name: str) -> Tuple[str, str]:
    """Case-insensitive ordering key; the exact name breaks case-only ties."""
    return name.lower(), name


__all__ = ["normalize_team_display", "team_sort_key"]
