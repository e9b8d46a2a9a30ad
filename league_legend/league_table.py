"""Build and print the league table from a match results file.

Purpose:
    Read one match per line, accumulate win/draw/loss points, and print the
    ranked table; optionally export it as CSV/JSONL.
Inputs:
    Match file path (argument or LEAGUE_LEGEND_MATCHES), presentation flags.
Outputs:
    Console report; <out>.{csv,jsonl} when --out is given.
Example:
    python -m league_legend.league_table data/matches.txt --delay 0.3 --out out/standings
"""

from __future__ import annotations

import argparse
import sys
from contextlib import closing
from pathlib import Path
from typing import List, Optional

from league_legend import render
from league_legend.common.io_utils import (
    SourceUnavailableError,
    getenv,
    iter_numbered_lines,
    write_csv,
    write_jsonl,
)
from league_legend.standings import (
    FormatError,
    RankingEntry,
    StandingsCalculator,
    standings_frame,
    validate_ranking,
)

MATCHES_ENV = "LEAGUE_LEGEND_MATCHES"
DELAY_ENV = "LEAGUE_LEGEND_DELAY"


def _log(message: str) -> None:
    print(f"[league_table] {message}")


def _ensure_suffix(base: Path, suffix: str) -> Path:
    if base.suffix:
        return base.with_suffix(suffix)
    return base.parent / (base.name + suffix)


def write_standings(entries: List[RankingEntry], out_base: Path) -> dict:
    """Write ``<base>.csv`` and ``<base>.jsonl``; return the written paths."""
    df = standings_frame(entries)
    csv_path = _ensure_suffix(out_base, ".csv")
    jsonl_path = _ensure_suffix(out_base, ".jsonl")
    write_csv(df, csv_path)
    write_jsonl(df.to_dict(orient="records"), jsonl_path)
    return {"csv_path": csv_path, "jsonl_path": jsonl_path, "count": len(df)}


def run_league_table(
    matches: Path,
    *,
    delay: float = 0.0,
    color: bool = True,
    quiet: bool = False,
) -> List[RankingEntry]:
    """Process ``matches`` and print the report; errors propagate to the caller."""
    calculator = StandingsCalculator()
    print(render.banner(color=color))
    print(render.reading_line(color=color))
    with closing(iter_numbered_lines(matches)) as lines:
        for number, line in lines:
            calculator.add_line(line, number)
            if not quiet:
                print(render.processed_line(calculator.matches_processed, line, color=color))
                render.pause(delay)
    print(render.summary_line(calculator.matches_processed, color=color))

    ranking = calculator.ranking()
    validate_ranking(ranking)
    print(render.format_ranking(ranking, color=color))
    return ranking


def _env_delay(parser: argparse.ArgumentParser) -> float:
    raw = getenv(DELAY_ENV, "0") or "0"
    try:
        value = float(raw)
    except ValueError:
        parser.error(f"{DELAY_ENV} must be a number of seconds, got {raw!r}")
    if value < 0:
        parser.error(f"{DELAY_ENV} must not be negative")
    return value


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute a league table from match results.")
    parser.add_argument(
        "matches",
        nargs="?",
        default=None,
        help=f"Match results file (default ${MATCHES_ENV}).",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help=f"Seconds to pause after each processed match (default ${DELAY_ENV} or 0).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors.")
    parser.add_argument("--quiet", action="store_true", help="Skip per-match progress lines.")
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output basename for <out>.csv and <out>.jsonl exports.",
    )
    args = parser.parse_args(argv)
    if args.matches is None:
        args.matches = getenv(MATCHES_ENV)
    if not args.matches:
        parser.error(f"no match file given and ${MATCHES_ENV} is not set")
    if args.delay is None:
        args.delay = _env_delay(parser)
    elif args.delay < 0:
        parser.error("--delay must not be negative")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    color = not args.no_color and not getenv("NO_COLOR")
    try:
        ranking = run_league_table(
            Path(args.matches),
            delay=args.delay,
            color=color,
            quiet=args.quiet,
        )
    except (FormatError, SourceUnavailableError) as exc:
        print(render.error_line(str(exc), color=color), file=sys.stderr)
        return 1

    if args.out:
        try:
            result = write_standings(ranking, Path(args.out))
        except OSError as exc:
            print(render.error_line(f"cannot write standings to {args.out}: {exc}", color=color), file=sys.stderr)
            return 1
        _log(f"wrote {result['count']} rows -> {result['csv_path']}, {result['jsonl_path']}")
    print(render.footer(color=color))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
