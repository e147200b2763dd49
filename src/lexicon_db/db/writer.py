"""Row types and inserts for a freshly built dataset."""
from __future__ import annotations

import logging
from dataclasses import astuple, dataclass
from typing import Iterable, Optional

from lexicon_db.common.sqlite_bootstrap import SqliteError, sqlite3
from lexicon_db.errors import PersistenceError

from .schema import VERSION_TABLE, transaction

logger = logging.getLogger(__name__)

ALPHAGRAM_INSERT = """
INSERT INTO alphagrams(probability, alphagram, length, combinations,
    num_anagrams, point_value, num_vowels, contains_word_uniq_to_lex_split,
    contains_update_to_lex, difficulty)
VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

WORD_INSERT = """
INSERT INTO words (word, alphagram, lexicon_symbols, definition,
    front_hooks, back_hooks, inner_front_hook, inner_back_hook)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""

DELETED_WORD_INSERT = "INSERT INTO deletedwords (word, length) VALUES (?, ?)"


@dataclass
class AlphagramRow:
    probability: Optional[int]
    alphagram: str
    length: int
    combinations: int
    num_anagrams: int
    point_value: int
    num_vowels: int
    contains_word_uniq_to_lex_split: int
    contains_update_to_lex: int
    difficulty: Optional[int]


@dataclass
class WordRow:
    word: str
    alphagram: str
    lexicon_symbols: str
    definition: str
    front_hooks: str
    back_hooks: str
    inner_front_hook: int
    inner_back_hook: int


def write_lexicon(
    conn: sqlite3.Connection,
    alphagrams: Iterable[AlphagramRow],
    words: Iterable[WordRow],
) -> tuple[int, int]:
    """Insert every alphagram and word row in a single transaction.

    Returns ``(alphagram_rows, word_rows)``. Nothing is committed if any
    insert fails.
    """

    alph_rows = [astuple(row) for row in alphagrams]
    word_rows = [astuple(row) for row in words]
    with transaction(conn):
        conn.executemany(ALPHAGRAM_INSERT, alph_rows)
        conn.executemany(WORD_INSERT, word_rows)
    counts = (len(alph_rows), len(word_rows))
    logger.info(
        "Wrote lexicon rows",
        extra={"alphagrams": counts[0], "words": counts[1]},
    )
    return counts


def write_deleted_words(conn: sqlite3.Connection, words: Iterable[str]) -> int:
    """Insert deleted words in their own transaction, in sorted order."""

    ordered = sorted(words)
    if not ordered:
        return 0
    with transaction(conn):
        conn.executemany(DELETED_WORD_INSERT, ((word, len(word)) for word in ordered))
    logger.info("Wrote deleted words", extra={"deleted": len(ordered)})
    return len(ordered)


def write_version(conn: sqlite3.Connection, version: int) -> None:
    """Stamp a finished build. Written outside any other transaction, last."""

    try:
        conn.execute(f"INSERT INTO {VERSION_TABLE}(version) VALUES(?)", (version,))
    except SqliteError as exc:
        raise PersistenceError(f"cannot record dataset version {version}: {exc}") from exc


__all__ = [
    "AlphagramRow",
    "WordRow",
    "write_deleted_words",
    "write_lexicon",
    "write_version",
]
