from __future__ import annotations

import logging
import time
from collections import Counter, defaultdict
from functools import reduce
from itertools import islice
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, TypeVar


logger = logging.getLogger(__name__)

A = TypeVar("A")

_END = object()


class EmptyResultError(ValueError):
    """Raised when a statistic needs at least one word and got none."""


def fold(
    tokens: Iterable[str],
    identity: A,
    accumulate: Callable[[A, str], A],
    combine: Callable[[A, A], A],
    *,
    chunk_size: int | None = None,
) -> A:
    """Reduce ``tokens`` in consecutive chunks and merge the partials.

    Each chunk starts from ``identity``; partial results are merged left to
    right with ``combine``. ``chunk_size=None`` is a plain sequential fold.
    ``identity`` must be immutable (an int or a tuple), since every chunk
    starts from the same object.
    """
    it = iter(tokens)
    if chunk_size is None:
        return reduce(accumulate, it, identity)

    n = int(chunk_size)
    if n < 1:
        raise ValueError("chunk_size must be >= 1")

    out = identity
    while True:
        first = next(it, _END)
        if first is _END:
            return out
        # The chunk is folded straight off the shared iterator.
        part = reduce(accumulate, islice(it, n - 1), accumulate(identity, first))
        out = combine(out, part)


def count_words(tokens: Iterable[str]) -> int:
    # ``tokens`` is usually lazy, so the timing covers tokenizing too.
    start = time.perf_counter()
    n = sum(1 for _ in tokens)
    logger.info("Count words took: %.3f secs.", time.perf_counter() - start)
    return n


def unique_sorted(tokens: Iterable[str]) -> list[str]:
    """Distinct words in reverse code-point order ("b" > "a" > "B" > "A")."""
    out = sorted(set(tokens), reverse=True)
    if not out:
        raise EmptyResultError("No unique words found in the file.")
    return out


def _longer(best: str, word: str) -> str:
    return word if len(word) > len(best) else best


def longest_word(tokens: Iterable[str]) -> str:
    """Longest word of any kind; the first one seen wins a tie.

    Exposed as the "longest digit number" question, but no digit filter is
    applied.
    """
    it = iter(tokens)
    first = next(it, None)
    if first is None:
        raise EmptyResultError("No longest word found in file.")
    return reduce(_longer, it, first)


def _count3(count: int, word: str) -> int:
    return count + 1 if len(word) == 3 else count


def _add(a: int, b: int) -> int:
    return a + b


def count_length3(tokens: Iterable[str], *, chunk_size: int | None = None) -> int:
    """Number of three-character words, as a single integer fold."""
    return fold(tokens, 0, _count3, _add, chunk_size=chunk_size)


def _length_totals(acc: tuple[int, int], word: str) -> tuple[int, int]:
    return acc[0] + len(word), acc[1] + 1


def _add_totals(a: tuple[int, int], b: tuple[int, int]) -> tuple[int, int]:
    return a[0] + b[0], a[1] + b[1]


def length_totals(tokens: Iterable[str], *, chunk_size: int | None = None) -> tuple[int, int]:
    """(total characters, total words) in one fold."""
    return fold(tokens, (0, 0), _length_totals, _add_totals, chunk_size=chunk_size)


def average_length(tokens: Iterable[str], *, chunk_size: int | None = None) -> float:
    total_length, total_count = length_totals(tokens, chunk_size=chunk_size)
    # No words -> ZeroDivisionError, left to the caller.
    return total_length / total_count


def frequency_map(tokens: Iterable[str]) -> Counter[str]:
    """Occurrences per word. Missing words read as 0.

    The Counter is handed over as a finished result; callers only read it.
    """
    return Counter(tokens)


def group_by_length(tokens: Iterable[str]) -> Mapping[int, frozenset[str]]:
    """Distinct words keyed by length, as a read-only mapping."""
    groups: defaultdict[int, set[str]] = defaultdict(set)
    for t in tokens:
        groups[len(t)].add(t)
    return MappingProxyType({k: frozenset(v) for k, v in groups.items()})
