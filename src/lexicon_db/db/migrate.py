"""Step-wise schema upgrades for datasets built by older releases.

Each invocation moves a dataset forward by at most one version, so every
step can be checked before the next one runs. A dataset without a version
table predates versioning and is treated as version 1.

The oldest supported layout is::

    CREATE TABLE alphagrams (probability int, alphagram varchar(20),
        length int, combinations int);
    CREATE TABLE words (word varchar(20), alphagram varchar(20),
        lexicon_symbols varchar(5), definition varchar(512),
        front_hooks varchar(26), back_hooks varchar(26),
        inner_front_hook int, inner_back_hook int);
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping

from lexicon_db.builder.provenance import contains_update_to_lex, contains_word_unique_to_lex_split
from lexicon_db.common.sqlite_bootstrap import SqliteError, sqlite3
from lexicon_db.errors import MigrationError, PersistenceError
from lexicon_db.lexicon.alphabet import LetterDistribution
from lexicon_db.lexicon.registry import LexiconRegistry

from .schema import (
    CURRENT_VERSION,
    VERSION_TABLE,
    connect_sqlite,
    dataset_path,
    table_exists,
    transaction,
)

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10_000


@dataclass
class MigrationContext:
    """Lexicon knowledge needed to backfill derived columns."""

    dist: LetterDistribution
    exclusive_symbols: frozenset[str]
    load_difficulties: Callable[[], Mapping[str, int]] = field(default=lambda: {})


@dataclass
class MigrationResult:
    start_version: int
    version: int
    bootstrapped: bool = False

    @property
    def migrated(self) -> bool:
        return self.version != self.start_version

    @property
    def up_to_date(self) -> bool:
        return self.version == CURRENT_VERSION


def read_version(conn: sqlite3.Connection) -> tuple[int, bool]:
    """Return ``(version, bootstrapped)``, creating the version table if absent."""

    try:
        if not table_exists(conn, VERSION_TABLE):
            logger.info("No version table, creating one")
            with transaction(conn):
                conn.execute(f"CREATE TABLE {VERSION_TABLE} (version integer)")
                conn.execute(f"INSERT INTO {VERSION_TABLE}(version) VALUES(?)", (1,))
            return 1, True
        row = conn.execute(f"SELECT version FROM {VERSION_TABLE}").fetchone()
    except SqliteError as exc:
        raise PersistenceError(f"cannot read dataset version: {exc}") from exc

    if row is None:
        raise MigrationError("there is a version table but it has no values in it")
    version = row[0]
    if not isinstance(version, int):
        raise MigrationError(f"unrecognized dataset version {version!r}", version=None)
    return version, False


def _set_version(conn: sqlite3.Connection, version: int) -> None:
    conn.execute(f"UPDATE {VERSION_TABLE} SET version = ?", (version,))


def _execute_all(conn: sqlite3.Connection, statements: tuple[str, ...]) -> None:
    for statement in statements:
        conn.execute(statement)


def migrate_to_v2(conn: sqlite3.Connection, ctx: MigrationContext) -> None:
    """Anagram counts, point values and vowel counts, each indexed."""

    _execute_all(
        conn,
        (
            "ALTER TABLE alphagrams ADD COLUMN num_anagrams int",
            "ALTER TABLE alphagrams ADD COLUMN point_value int",
            "ALTER TABLE alphagrams ADD COLUMN num_vowels int",
            "CREATE INDEX num_anagrams_index on alphagrams(num_anagrams)",
            "CREATE INDEX point_value_index on alphagrams(point_value)",
            "CREATE INDEX num_vowels_index on alphagrams(num_vowels)",
        ),
    )
    rows = conn.execute(
        """
        SELECT words.alphagram, count(*) AS word_ct FROM words
        INNER JOIN alphagrams on words.alphagram = alphagrams.alphagram
        GROUP BY words.alphagram
        """
    ).fetchall()

    for idx, (alphagram, word_count) in enumerate(rows, start=1):
        conn.execute(
            """
            UPDATE alphagrams SET num_anagrams = ?, point_value = ?, num_vowels = ?
            WHERE alphagram = ?
            """,
            (word_count, ctx.dist.point_value(alphagram), ctx.dist.num_vowels(alphagram), alphagram),
        )
        if idx % PROGRESS_EVERY == 0:
            logger.debug("%d...", idx)


def migrate_to_v3(conn: sqlite3.Connection, ctx: MigrationContext) -> None:
    conn.execute("CREATE INDEX length_index on alphagrams(length)")


def migrate_to_v4(conn: sqlite3.Connection, ctx: MigrationContext) -> None:
    """Per-alphagram provenance flags, derived from the words' lexicon symbols."""

    _execute_all(
        conn,
        (
            "ALTER TABLE alphagrams ADD COLUMN contains_word_uniq_to_lex_split int",
            "ALTER TABLE alphagrams ADD COLUMN contains_update_to_lex int",
            "CREATE INDEX uniq_word_index on alphagrams(contains_word_uniq_to_lex_split)",
            "CREATE INDEX update_word_index on alphagrams(contains_update_to_lex)",
        ),
    )
    logger.info("Created new columns and indices")

    rows = conn.execute(
        "SELECT word, alphagram, lexicon_symbols FROM words ORDER BY alphagram"
    ).fetchall()
    grouped = itertools.groupby(rows, key=lambda row: row[1])
    for idx, (alphagram, members) in enumerate(grouped, start=1):
        symbols = [row[2] or "" for row in members]
        conn.execute(
            """
            UPDATE alphagrams SET contains_word_uniq_to_lex_split = ?,
                contains_update_to_lex = ?
            WHERE alphagram = ?
            """,
            (
                int(contains_word_unique_to_lex_split(symbols, ctx.exclusive_symbols)),
                int(contains_update_to_lex(symbols)),
                alphagram,
            ),
        )
        if idx % PROGRESS_EVERY == 0:
            logger.debug("%d...", idx)


def migrate_to_v5(conn: sqlite3.Connection, ctx: MigrationContext) -> None:
    _execute_all(
        conn,
        (
            "ALTER TABLE alphagrams ADD COLUMN difficulty int",
            "CREATE INDEX difficulty_index on alphagrams(difficulty)",
        ),
    )
    logger.info("Created new columns and indices")
    load_difficulty(conn, ctx.load_difficulties())


def load_difficulty(conn: sqlite3.Connection, difficulties: Mapping[str, int]) -> int:
    conn.executemany(
        "UPDATE alphagrams SET difficulty = ? WHERE alphagram = ?",
        ((difficulty, alphagram) for alphagram, difficulty in difficulties.items()),
    )
    logger.info("Loaded difficulties", extra={"alphagrams": len(difficulties)})
    return len(difficulties)


def migrate_to_v6(conn: sqlite3.Connection, ctx: MigrationContext) -> None:
    conn.execute("CREATE TABLE deletedwords (word varchar(20), length int)")
    logger.info("Created new deletedwords table")


TRANSITIONS: dict[int, Callable[[sqlite3.Connection, MigrationContext], None]] = {
    1: migrate_to_v2,
    2: migrate_to_v3,
    3: migrate_to_v4,
    4: migrate_to_v5,
    5: migrate_to_v6,
}


def migrate(conn: sqlite3.Connection, ctx: MigrationContext) -> MigrationResult:
    """Apply the single transition that follows the stored version, if any."""

    version, bootstrapped = read_version(conn)
    if version == CURRENT_VERSION:
        logger.info("DB version is up to date", extra={"version": version})
        return MigrationResult(start_version=version, version=version, bootstrapped=bootstrapped)

    step = TRANSITIONS.get(version)
    if step is None:
        raise MigrationError(
            f"dataset version {version} is neither a known migration start nor "
            f"the current version {CURRENT_VERSION}",
            version=version,
        )

    target = version + 1
    logger.info(f"Migrating to version {target}...", extra={"from": version, "to": target})
    with transaction(conn):
        step(conn, ctx)
        _set_version(conn, target)
    if target < CURRENT_VERSION:
        logger.info(f"Run again to migrate to version {target + 1}")
    return MigrationResult(start_version=version, version=target, bootstrapped=bootstrapped)


def migrate_lexicon_database(
    lexicon_name: str, registry: LexiconRegistry, output_dir: str | Path
) -> MigrationResult:
    """Advance the dataset for *lexicon_name* in *output_dir* by one version."""

    lexicon = registry.get(lexicon_name)
    ctx = MigrationContext(
        dist=registry.distribution_for(lexicon_name),
        exclusive_symbols=frozenset(f.symbol for f in registry.families),
        load_difficulties=lambda: lexicon.difficulty_table,
    )
    conn = connect_sqlite(dataset_path(output_dir, lexicon_name), must_exist=True)
    try:
        return migrate(conn, ctx)
    finally:
        conn.close()


__all__ = [
    "MigrationContext",
    "MigrationResult",
    "TRANSITIONS",
    "load_difficulty",
    "migrate",
    "migrate_lexicon_database",
    "read_version",
]
