from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List

import typer

from .words import read_lines, tokenize


logger = logging.getLogger(__name__)

ScoreFn = Callable[[str, str], int]
Echo = Callable[[str], None]

DEFAULT_TOP = 20


@dataclass(frozen=True)
class ScoredLine:
    score: int
    line: str


def index_of(text: str, target: str) -> int:
    """Index of the first ``target`` in ``text``, or -1."""
    return text.find(target)


def rank_tokens(
    score_fn: ScoreFn,
    lines: Iterable[str],
    target: str,
    *,
    limit: int = DEFAULT_TOP,
) -> List[ScoredLine]:
    """Score every word of ``lines`` against ``target`` and keep the best.

    Scoring is per word, not per line. Equal scores come out in an
    unspecified order.
    """
    n = int(limit)
    if n <= 0:
        return []
    scored = (ScoredLine(int(score_fn(tok, target)), tok) for tok in tokenize(lines))
    return heapq.nlargest(n, scored, key=lambda s: s.score)


def format_scored(entry: ScoredLine) -> str:
    return f"{entry.score}:<{entry.line}>"


def _emit(ranked: List[ScoredLine], echo: Echo) -> int:
    for entry in ranked:
        echo(format_scored(entry))
    return len(ranked)


def print_top(
    score_fn: ScoreFn,
    lines: Iterable[str],
    target: str,
    *,
    limit: int = DEFAULT_TOP,
    echo: Echo = typer.echo,
) -> int:
    """Emit ``<score>:<<word>>`` for the top-ranked words; returns how many."""
    return _emit(rank_tokens(score_fn, lines, target, limit=limit), echo)


def rank_file(
    score_fn: ScoreFn,
    path: str | Path,
    target: str,
    *,
    limit: int = DEFAULT_TOP,
    encoding: str | None = None,
) -> List[ScoredLine]:
    """``rank_tokens`` over a file; unreadable files are logged and rank nothing.

    A failure part way through the file also discards what was read so far.
    """
    try:
        return rank_tokens(score_fn, read_lines(path, encoding=encoding), target, limit=limit)
    except (OSError, UnicodeDecodeError):
        logger.exception("Failed to search %s", path)
        return []


def search_file(
    score_fn: ScoreFn,
    path: str | Path,
    target: str,
    *,
    limit: int = DEFAULT_TOP,
    encoding: str | None = None,
    echo: Echo = typer.echo,
) -> int:
    return _emit(rank_file(score_fn, path, target, limit=limit, encoding=encoding), echo)
