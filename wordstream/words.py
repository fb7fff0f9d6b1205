from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator


logger = logging.getLogger(__name__)

# Letters and digits only, at least two characters. Matched against the
# whole piece, so "sat." or "89_" are dropped rather than trimmed.
WORD_RE = re.compile(r"[A-Za-z0-9]{2,}")


def is_word(piece: str) -> bool:
    return WORD_RE.fullmatch(piece) is not None


def tokenize(lines: Iterable[str]) -> Iterator[str]:
    """Yield the words of ``lines`` in reading order.

    Lines are split on the single space character only. Tabs are not
    separators, so "a\\tb" is one (rejected) piece, and a
    double space just produces an empty piece.
    """
    for line in lines:
        for piece in line.split(" "):
            if is_word(piece):
                yield piece


def read_lines(path: str | Path, *, encoding: str | None = None) -> Iterator[str]:
    # encoding=None -> the platform's default text encoding.
    with Path(path).open("r", encoding=encoding) as fp:
        for ln in fp:
            yield ln.rstrip("\n")


def soft_read_lines(path: str | Path, *, encoding: str | None = None) -> Iterator[str]:
    """Like ``read_lines`` but an unreadable file just ends the sequence.

    The failure is logged with its traceback; nothing is raised.
    """
    try:
        yield from read_lines(path, encoding=encoding)
    except (OSError, UnicodeDecodeError):
        logger.exception("Failed to read %s", path)


def words_from_file(path: str | Path, *, encoding: str | None = None) -> Iterator[str]:
    return tokenize(soft_read_lines(path, encoding=encoding))
