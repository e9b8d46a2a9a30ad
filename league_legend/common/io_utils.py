"""Shared IO helpers for reading match files and writing standings outputs.

Purpose:
    Centralise filesystem and environment utilities so the calculator and CLI
    stay focused on scoring logic.
Inputs:
    Match result text files, iterables of rows, requested environment keys.
Outputs:
    Lines of match text, JSONL/CSV files, environment key/value mappings.
Source(s) of truth:
    The caller-supplied match file; repository .env for defaults.
Example:
    >>> lines = list(iter_numbered_lines("matches.txt"))
    >>> write_jsonl([{'rank': 1}], Path("out/demo.jsonl"))
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Tuple, Union

import pandas as pd
from dotenv import load_dotenv

RepositoryPath = Path(__file__).resolve().parents[2]

_ENV_LOADED = False


class SourceUnavailableError(RuntimeError):
    """Raised when the match source cannot be opened or read."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot read match source {self.path}: {reason}")


def load_env_once(override: bool = False) -> None:
    """Load .env into os.environ once (idempotent)."""
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    env_path = RepositoryPath / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=override)
    _ENV_LOADED = True


def getenv(key: str, default: str | None = None) -> str | None:
    """Project-safe getenv that ensures .env is loaded once."""
    load_env_once(override=False)
    return os.environ.get(key, default)


def iter_numbered_lines(path: Union[str, Path]) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, text)`` for each line of ``path``.

    Line numbers are 1-based physical positions in the file. Blank lines are
    yielded like any other line (the parser rejects them), except for a run
    of blank lines at the very end of the file, which is dropped. The handle
    is closed once the generator is exhausted or closed; callers that may
    stop early should wrap it in ``contextlib.closing``.
    """
    source = Path(path)
    try:
        handle = source.open("r", encoding="utf-8")
    except OSError as exc:
        raise SourceUnavailableError(source, exc.strerror or str(exc)) from exc
    with handle:
        trailing: List[Tuple[int, str]] = []
        try:
            for number, raw in enumerate(handle, start=1):
                text = raw.rstrip("\r\n")
                if not text.strip():
                    trailing.append((number, text))
                    continue
                yield from trailing
                trailing.clear()
                yield number, text
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailableError(source, str(exc)) from exc


def write_jsonl(rows: Iterable[Mapping], path: Union[str, Path]) -> None:
    """Write iterable of dictionaries to JSON Lines file."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fh:
        for row in rows:
            fh.write(json.dumps(row, default=str, ensure_ascii=False))
            fh.write("\n")


def write_csv(df: pd.DataFrame, path: Union[str, Path]) -> None:
    """Write a DataFrame to CSV without its index."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(target, index=False)


__all__ = [
    "SourceUnavailableError",
    "load_env_once",
    "getenv",
    "iter_numbered_lines",
    "write_jsonl",
    "write_csv",
]
