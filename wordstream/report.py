from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from .aggregate import (
    average_length,
    count_length3,
    count_words,
    frequency_map,
    group_by_length,
    longest_word,
    unique_sorted,
)
from .ranked import DEFAULT_TOP, ScoredLine, format_scored, index_of, rank_file
from .words import words_from_file


@dataclass(frozen=True)
class Answer:
    key: str
    question: str
    value: Any

    def render(self) -> list[str]:
        """Console lines for the answer, in the report's number formats."""
        v = self.value
        if isinstance(v, list):
            return [format_scored(s) for s in v]
        if isinstance(v, float):
            return [f"{v:.2f}"]
        if isinstance(v, int):
            return [f"{v:,}"]
        return [str(v)]

    def to_json(self) -> Any:
        v = self.value
        if isinstance(v, list):
            return [{"score": s.score, "text": s.line} for s in v]
        return v


def iter_answers(
    path: Path,
    *,
    word: str = "the",
    length: int = 4,
    target: str = "science",
    top: int = DEFAULT_TOP,
    encoding: str | None = None,
) -> Iterator[Answer]:
    """Answer the report questions one at a time.

    Each answer re-reads the file. An empty file makes the unique-words
    question raise EmptyResultError when it is reached; answers already
    yielded stand.
    """

    def words() -> Iterator[str]:
        return words_from_file(path, encoding=encoding)

    yield Answer("word_count", "How many words are in the file?", count_words(words()))
    yield Answer("unique_count", "How many unique words are in the file?", len(unique_sorted(words())))
    yield Answer("longest", "What is the longest digit number in the file?", longest_word(words()))
    yield Answer(
        "three_letter_count",
        'How many three-letter words (e.g. "has", "How", "wHy", "THE", "123") are in the file?',
        count_length3(words()),
    )
    yield Answer("average_length", "What is the average word length in the file?", average_length(words()))
    yield Answer(
        "word_occurrences",
        f'How many times does the word "{word}" (case-sensitive) occur in the file?',
        frequency_map(words())[word],
    )
    yield Answer(
        "length_group_size",
        f"How many unique words with the length of {int(length)} characters are in the file?",
        len(group_by_length(words()).get(int(length), frozenset())),
    )
    ranked: list[ScoredLine] = rank_file(index_of, path, target, limit=top, encoding=encoding)
    yield Answer(
        "search",
        f'What is the first index number when searching for the word "{target}" (case-sensitive)?',
        ranked,
    )


def build_report(path: Path, **kwargs: Any) -> dict:
    out: dict = {"path": str(path)}
    for a in iter_answers(path, **kwargs):
        out[a.key] = a.to_json()
    return out
