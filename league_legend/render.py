"""Console presentation for the league table.

Pure formatting: every helper takes plain values (``RankingEntry`` rows,
match text) and returns strings, so nothing here feeds back into scoring.
"""

from __future__ import annotations

import re
import time
from typing import Iterable, List, Optional

from league_legend.standings import RankingEntry

RESET = "\033[0m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
BOLD = "\033[1m"
RED = "\033[31m"

ANSI_RE = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
RULE = "=" * 51
TEAM_WIDTH = 20


def strip_ansi(value: str) -> str:
    return ANSI_RE.sub("", value)


def _paint(text: str, *styles: str, color: bool = True) -> str:
    if not color or not styles:
        return text
    return "".join(styles) + text + RESET


def points_label(points: int) -> str:
    """'pt' for exactly one point, 'pts' otherwise."""
    return "pt" if points == 1 else "pts"


def banner(color: bool = True) -> str:
    return "\n".join(
        [
            _paint(RULE, YELLOW, color=color),
            _paint("        LEAGUE LEGEND: Soccer Rankings", BOLD, color=color),
            _paint(RULE, YELLOW, color=color) + "\n",
        ]
    )


def reading_line(color: bool = True) -> str:
    return _paint("Reading match results...\n", CYAN, color=color)


def processed_line(match_number: int, line: str, color: bool = True) -> str:
    return _paint(f"Processed match #{match_number}: {line}", GREEN, color=color)


def summary_line(match_count: int, color: bool = True) -> str:
    noun = "match" if match_count == 1 else "matches"
    return "\n" + _paint(f"All {match_count} {noun} processed successfully!", YELLOW, color=color)


def ranking_row(entry: RankingEntry, color: bool = True) -> str:
    head = _paint(f"{entry.rank}. {entry.team:<{TEAM_WIDTH}}", BOLD, color=color)
    tail = _paint(f"{entry.points} {points_label(entry.points)}", CYAN, color=color)
    return head + tail


def format_ranking(entries: Iterable[RankingEntry], color: bool = True) -> str:
    lines: List[str] = ["\n" + _paint("Final League Rankings", BOLD, color=color)]
    lines.extend(ranking_row(entry, color=color) for entry in entries)
    return "\n".join(lines)


def footer(color: bool = True) -> str:
    return "\n" + _paint("Thanks for using League Legend! See you next season!", CYAN, color=color)


def error_line(message: str, color: bool = True) -> str:
    return _paint(f"[error] {message}", RED, color=color)


def pause(delay: Optional[float]) -> None:
    """Sleep between progress lines when an animation delay is configured."""
    if delay and delay > 0:
        time.sleep(delay)


__all__ = [
    "strip_ansi",
    "points_label",
    "banner",
    "reading_line",
    "processed_line",
    "summary_line",
    "ranking_row",
    "format_ranking",
    "footer",
    "error_line",
    "pause",
]
