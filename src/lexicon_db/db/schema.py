"""Dataset schema and SQLite helpers."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from lexicon_db.common.sqlite_bootstrap import SqliteError, sqlite3
from lexicon_db.errors import PersistenceError, SetupError

logger = logging.getLogger(__name__)

CURRENT_VERSION = 6
VERSION_TABLE = "db_version"

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE alphagrams (probability int, alphagram varchar(20),
        length int, combinations int, num_anagrams int,
        point_value int, num_vowels int, contains_word_uniq_to_lex_split int,
        contains_update_to_lex int, difficulty int);
    """,
    """
    CREATE TABLE words (word varchar(20), alphagram varchar(20),
        lexicon_symbols varchar(5), definition varchar(512),
        front_hooks varchar(26), back_hooks varchar(26),
        inner_front_hook int, inner_back_hook int);
    """,
    "CREATE TABLE deletedwords (word varchar(20), length int);",
    "CREATE INDEX alpha_index on alphagrams(alphagram);",
    "CREATE INDEX prob_index on alphagrams(probability, length);",
    "CREATE INDEX word_index on words(word);",
    "CREATE INDEX alphagram_index on words(alphagram);",
    "CREATE INDEX length_index on alphagrams(length);",
    "CREATE INDEX difficulty_index on alphagrams(difficulty);",
    "CREATE INDEX num_anagrams_index on alphagrams(num_anagrams);",
    "CREATE INDEX point_value_index on alphagrams(point_value);",
    "CREATE INDEX num_vowels_index on alphagrams(num_vowels);",
    "CREATE INDEX uniq_word_index on alphagrams(contains_word_uniq_to_lex_split);",
    "CREATE INDEX update_word_index on alphagrams(contains_update_to_lex);",
    f"CREATE TABLE {VERSION_TABLE} (version integer);",
)


def dataset_path(output_dir: str | Path, lexicon_name: str) -> Path:
    return Path(output_dir) / f"{lexicon_name}.db"


def connect_sqlite(path: str | Path, *, must_exist: bool = False) -> sqlite3.Connection:
    """Open a dataset with explicit transaction control.

    The connection runs in autocommit mode; writes that must be atomic go
    through :func:`transaction`.
    """

    db_path = Path(path)
    if must_exist and not db_path.is_file():
        raise SetupError(f"dataset '{db_path}' does not exist")
    if not must_exist:
        db_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info("Opening SQLite database", extra={"path": str(db_path)})
    try:
        conn = sqlite3.connect(str(db_path), isolation_level=None)
    except SqliteError as exc:
        raise SetupError(f"cannot open dataset '{db_path}': {exc}") from exc
    conn.row_factory = sqlite3.Row
    return conn


def _rollback(conn: sqlite3.Connection) -> None:
    # SQLite may already have rolled back on its own (e.g. SQLITE_FULL).
    if conn.in_transaction:
        conn.execute("ROLLBACK")


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run the block in one transaction; any failure rolls the whole block back."""

    conn.execute("BEGIN")
    try:
        yield conn
    except SqliteError as exc:
        _rollback(conn)
        raise PersistenceError(str(exc)) from exc
    except BaseException:
        _rollback(conn)
        raise
    else:
        conn.execute("COMMIT")


def create_schema(conn: sqlite3.Connection) -> None:
    try:
        with transaction(conn):
            for statement in SCHEMA_STATEMENTS:
                conn.execute(statement)
    except PersistenceError as exc:
        raise SetupError(f"cannot create dataset schema: {exc}") from exc


def table_exists(conn: sqlite3.Connection, name: str) -> bool:
    cur = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ? LIMIT 1;",
        (name,),
    )
    return cur.fetchone() is not None


__all__ = [
    "CURRENT_VERSION",
    "SCHEMA_STATEMENTS",
    "VERSION_TABLE",
    "connect_sqlite",
    "dataset_path",
    "create_schema",
    "table_exists",
    "transaction",
]
