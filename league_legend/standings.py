"""Parse match results and compute the league standings table.

Purpose:
    Turn ``"<Home> <goals>, <Away> <goals>"`` lines into match records, fold
    them into a points table (win 3, draw 1, loss 0) and rank the teams with
    competition ranking.
Inputs:
    Any iterable of match result lines (file, list, stdin).
Outputs:
    Ordered ``RankingEntry`` list; optional pandas DataFrame for export.
Example:
    >>> compute_standings(["Liverpool 3, ManchesterUnited 1"])
    [RankingEntry(rank=1, team='Liverpool', points=3), RankingEntry(rank=2, team='ManchesterUnited', points=0)]
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd
from pandas import DataFrame

from league_legend.common.metrics import competition_rank, match_points
from league_legend.common.team_names import normalize_team_display, team_sort_key

SCORE_PATTERN = re.compile(r"[0-9]+")
STANDINGS_COLUMNS = ["rank", "team", "points"]


class FormatError(ValueError):
    """Raised when a line cannot be parsed into a match record."""

    def __init__(self, line: str, reason: str, line_number: Optional[int] = None) -> None:
        self.line = line
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "line"
        super().__init__(f"{where}: {reason}: {line!r}")

    def at_line(self, line_number: int) -> "FormatError":
        """Return a copy of this error tagged with a source line number."""
        return FormatError(self.line, self.reason, line_number)


@dataclass(frozen=True)
class MatchRecord:
    home_team: str
    home_score: int
    away_team: str
    away_score: int


@dataclass(frozen=True)
class RankingEntry:
    rank: int
    team: str
    points: int


def _parse_side(segment: str, line: str) -> Tuple[str, int]:
    tokens = segment.split()
    if len(tokens) < 2:
        raise FormatError(line, f"expected '<team> <score>' but got {segment.strip()!r}")
    score_token = tokens[-1]
    if not SCORE_PATTERN.fullmatch(score_token):
        raise FormatError(line, f"score {score_token!r} is not a non-negative integer")
    return normalize_team_display(tokens[:-1]), int(score_token)


def parse_match_line(line: str) -> MatchRecord:
    """Parse ``"<Home> <goals>, <Away> <goals>"`` into a ``MatchRecord``."""
    segments = line.split(",")
    if len(segments) != 2:
        raise FormatError(line, f"expected exactly one comma, found {len(segments) - 1}")
    home_team, home_score = _parse_side(segments[0], line)
    away_team, away_score = _parse_side(segments[1], line)
    return MatchRecord(home_team=home_team, home_score=home_score, away_team=away_team, away_score=away_score)


def format_match_line(record: MatchRecord) -> str:
    """Render a record back to the match file format.

    Parsing the result returns ``record`` when team names are single-spaced and
    comma-free; inner whitespace runs collapse to one space on the way back.
    """
    return f"{record.home_team} {record.home_score}, {record.away_team} {record.away_score}"


def apply_match(record: MatchRecord, table: Dict[str, int]) -> None:
    """Award points for ``record`` into ``table`` in place."""
    table.setdefault(record.home_team, 0)
    table.setdefault(record.away_team, 0)
    home_points, away_points = match_points(record.home_score, record.away_score)
    table[record.home_team] += home_points
    table[record.away_team] += away_points


def build_ranking(table: Dict[str, int]) -> List[RankingEntry]:
    """Sort by points (desc) then name (case-insensitive) and assign competition ranks."""
    ordered = sorted(table.items(), key=lambda item: (-item[1], team_sort_key(item[0])))
    ranking: List[RankingEntry] = []
    rank = 0
    previous: Optional[int] = None
    for position, (team, points) in enumerate(ordered, start=1):
        if points != previous:
            rank = position
            previous = points
        ranking.append(RankingEntry(rank=rank, team=team, points=points))
    return ranking


class StandingsCalculator:
    """Accumulate match results into a points table for a single run."""

    def __init__(self) -> None:
        self._points: Dict[str, int] = {}
        self.matches_processed = 0

    def add_match(self, record: MatchRecord) -> None:
        apply_match(record, self._points)
        self.matches_processed += 1

    def add_line(self, line: str, line_number: Optional[int] = None) -> MatchRecord:
        try:
            record = parse_match_line(line)
        except FormatError as exc:
            if line_number is None:
                raise
            raise exc.at_line(line_number) from None
        self.add_match(record)
        return record

    def add_lines(self, lines: Iterable[str]) -> None:
        for number, line in enumerate(lines, start=1):
            self.add_line(line, number)

    @property
    def points_table(self) -> Dict[str, int]:
        return dict(self._points)

    def ranking(self) -> List[RankingEntry]:
        return build_ranking(self._points)


def compute_standings(lines: Iterable[str]) -> List[RankingEntry]:
    """Parse every line and return the ranked table; any bad line aborts."""
    calculator = StandingsCalculator()
    calculator.add_lines(lines)
    return calculator.ranking()


def standings_frame(entries: Iterable[RankingEntry]) -> DataFrame:
    rows = [{"rank": e.rank, "team": e.team, "points": e.points} for e in entries]
    return pd.DataFrame(rows, columns=STANDINGS_COLUMNS)


def validate_ranking(entries: List[RankingEntry]) -> None:
    """Raise ``ValueError`` listing every ordering or tie-rank violation."""
    errors: List[str] = []
    for position, (prev, cur) in enumerate(zip(entries, entries[1:]), start=2):
        if cur.points > prev.points:
            errors.append(f"points increase at position {position} ({prev.team} -> {cur.team})")
        elif cur.points == prev.points:
            if cur.rank != prev.rank:
                errors.append(f"tied teams {prev.team}/{cur.team} have ranks {prev.rank}/{cur.rank}")
            if team_sort_key(cur.team) < team_sort_key(prev.team):
                errors.append(f"tie-break order broken at position {position} ({prev.team} -> {cur.team})")
        elif cur.rank != position:
            errors.append(f"{cur.team} ranked {cur.rank}, expected {position}")
    if entries and entries[0].rank != 1:
        errors.append(f"leader ranked {entries[0].rank}, expected 1")

    if entries:
        frame = standings_frame(entries)
        expected = competition_rank(frame["points"])
        if not frame["rank"].equals(expected.sort_index()):
            errors.append("ranks disagree with competition ranking of points")

    if errors:
        raise ValueError("; ".join(errors))


__all__ = [
    "FormatError",
    "MatchRecord",
    "RankingEntry",
    "parse_match_line",
    "format_match_line",
    "apply_match",
    "build_ranking",
    "StandingsCalculator",
    "compute_standings",
    "standings_frame",
    "validate_ranking",
]
