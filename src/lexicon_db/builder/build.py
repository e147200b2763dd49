"""Build a lexicon dataset from its word list, and repair built datasets.

A build runs: aggregate -> rank -> annotate -> write (one transaction) ->
deleted words (second transaction) -> version stamp. All writes go to
``<LEXICON>.db.partial``, which replaces ``<LEXICON>.db`` only after the
stamp is written; a failed write removes it.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

from tqdm import tqdm

from lexicon_db.db.schema import (
    CURRENT_VERSION,
    connect_sqlite,
    create_schema,
    dataset_path,
    transaction,
)
from lexicon_db.db.writer import (
    AlphagramRow,
    WordRow,
    write_deleted_words,
    write_lexicon,
    write_version,
)
from lexicon_db.errors import LexiconDbError, SetupError
from lexicon_db.lexicon.alphabet import LetterDistribution
from lexicon_db.lexicon.dictionary import InnerHookSide, WordDictionary
from lexicon_db.lexicon.registry import LexiconRegistry
from lexicon_db.lexicon.wordlist import load_definitions

from .aggregate import PROGRESS_EVERY, aggregate_word_list
from .deletions import find_deleted_words
from .provenance import ProvenanceAnnotator, contains_update_to_lex
from .ranking import RankedAlphagram, rank_alphagrams

logger = logging.getLogger(__name__)


@dataclass
class BuildSummary:
    lexicon: str
    path: Path
    alphagrams: int = 0
    words: int = 0
    deleted: int = 0
    length_counts: dict[int, int] = field(default_factory=dict)


def check_destination(db_path: Path, quit_if_exists: bool = True) -> None:
    if quit_if_exists and db_path.exists():
        raise SetupError(
            f"db {db_path} existed, and not overwriting it; "
            "use --force if you would like to overwrite"
        )


def staging_path(db_path: Path) -> Path:
    return db_path.with_name(db_path.name + ".partial")


def create_sqlite_db(db_path: Path) -> Path:
    """Create an empty dataset with the current schema at *db_path*.

    A leftover file at that path, e.g. from an interrupted build, is removed.
    """

    if db_path.exists():
        db_path.unlink()

    conn = connect_sqlite(db_path)
    try:
        create_schema(conn)
    finally:
        conn.close()
    logger.info("Opened database file for writing", extra={"path": str(db_path)})
    return db_path


def annotate(
    ranked: Iterable[RankedAlphagram],
    definitions: Mapping[str, str],
    dictionary: WordDictionary,
    dist: LetterDistribution,
    annotator: ProvenanceAnnotator,
    *,
    progress: bool = False,
) -> tuple[list[AlphagramRow], list[WordRow]]:
    """Turn ranked alphagram classes into alphagram and word rows."""

    alph_rows: list[AlphagramRow] = []
    word_rows: list[WordRow] = []
    items = list(ranked)
    for idx, item in enumerate(tqdm(items, desc="Annotating", unit="alphagram", disable=not progress)):
        if idx % PROGRESS_EVERY == 0:
            logger.debug("%d...", idx)
        alph = item.alph
        symbols_list: list[str] = []
        for word in alph.words:
            symbols = annotator.symbols_for(word)
            symbols_list.append(symbols)
            word_rows.append(
                WordRow(
                    word=word,
                    alphagram=alph.alphagram,
                    lexicon_symbols=symbols,
                    definition=definitions.get(word, ""),
                    front_hooks=dictionary.sorted_front_hooks(word, dist),
                    back_hooks=dictionary.sorted_back_hooks(word, dist),
                    inner_front_hook=int(dictionary.has_inner_hook(word, InnerHookSide.FRONT)),
                    inner_back_hook=int(dictionary.has_inner_hook(word, InnerHookSide.BACK)),
                )
            )
        alph_rows.append(
            AlphagramRow(
                probability=item.probability,
                alphagram=alph.alphagram,
                length=alph.length,
                combinations=alph.combinations,
                num_anagrams=alph.word_count,
                point_value=item.point_value,
                num_vowels=item.num_vowels,
                contains_word_uniq_to_lex_split=int(
                    annotator.contains_word_unique_to_lex_split(symbols_list)
                ),
                contains_update_to_lex=int(contains_update_to_lex(symbols_list)),
                difficulty=item.difficulty,
            )
        )
    return alph_rows, word_rows


def log_word_lengths(length_counts: Mapping[int, int]) -> str:
    """Log per-length alphagram counts as JSON, the form lexicon fixtures expect."""

    payload = json.dumps({str(length): count for length, count in length_counts.items() if count})
    logger.info(f"Word lengths: '{payload}'")
    return payload


def create_lexicon_database(
    lexicon_name: str,
    registry: LexiconRegistry,
    output_dir: str | Path,
    *,
    quit_if_exists: bool = True,
    progress: bool = False,
) -> BuildSummary:
    logger.info("Creating lexicon database", extra={"lexicon": lexicon_name})

    lexicon = registry.get(lexicon_name)
    db_path = dataset_path(output_dir, lexicon_name)
    check_destination(db_path, quit_if_exists)

    lexicon.initialize()
    dist = registry.distribution_for(lexicon_name)
    annotator = ProvenanceAnnotator.for_lexicon(registry, lexicon_name)

    aggregate = aggregate_word_list(lexicon.filename, dist, progress=progress)
    logger.debug("Sorting by probability")
    ranking = rank_alphagrams(aggregate.alphagrams.values(), dist, lexicon.difficulty_table)
    alph_rows, word_rows = annotate(
        ranking.ranked,
        aggregate.definitions,
        lexicon.dictionary,
        dist,
        annotator,
        progress=progress,
    )

    staging = create_sqlite_db(staging_path(db_path))
    summary = BuildSummary(lexicon=lexicon_name, path=db_path)
    conn = connect_sqlite(staging, must_exist=True)
    try:
        summary.alphagrams, summary.words = write_lexicon(conn, alph_rows, word_rows)

        prior = registry.prior_edition(lexicon.family, lexicon_name)
        if prior is not None:
            deleted = find_deleted_words(prior.filename, lexicon.dictionary)
            summary.deleted = write_deleted_words(conn, deleted)

        write_version(conn, CURRENT_VERSION)
    except LexiconDbError:
        conn.close()
        staging.unlink(missing_ok=True)
        logger.error("Build failed, partial dataset removed", extra={"lexicon": lexicon_name})
        raise
    conn.close()

    if db_path.exists():
        logger.warning("Overwriting existing dataset", extra={"path": str(db_path)})
    staging.replace(db_path)

    summary.length_counts = ranking.length_counts
    log_word_lengths(ranking.length_counts)
    return summary


def fix_definitions(lexicon_name: str, registry: LexiconRegistry, output_dir: str | Path) -> int:
    """Rewrite every word's definition from the lexicon's current word list."""

    lexicon = registry.get(lexicon_name)
    definitions = load_definitions(lexicon.filename)

    conn = connect_sqlite(dataset_path(output_dir, lexicon_name), must_exist=True)
    try:
        with transaction(conn):
            conn.executemany(
                "UPDATE words SET definition = ? WHERE word = ?",
                ((definition, word) for word, definition in definitions.items()),
            )
    finally:
        conn.close()
    logger.info("Fixed definitions", extra={"lexicon": lexicon_name, "words": len(definitions)})
    return len(definitions)


def fix_lexicon_symbols(lexicon_name: str, registry: LexiconRegistry, output_dir: str | Path) -> int:
    """Recompute lexicon symbols and the alphagram provenance flags in place."""

    lexicon = registry.get(lexicon_name).initialize()
    dist = registry.distribution_for(lexicon_name)
    annotator = ProvenanceAnnotator.for_lexicon(registry, lexicon_name)
    aggregate = aggregate_word_list(lexicon.filename, dist)

    conn = connect_sqlite(dataset_path(output_dir, lexicon_name), must_exist=True)
    try:
        with transaction(conn):
            for alph in aggregate.alphagrams.values():
                symbols_list = []
                for word in alph.words:
                    symbols = annotator.symbols_for(word)
                    conn.execute(
                        "UPDATE words SET lexicon_symbols = ? WHERE word = ?", (symbols, word)
                    )
                    symbols_list.append(symbols)
                conn.execute(
                    """
                    UPDATE alphagrams SET contains_word_uniq_to_lex_split = ?,
                        contains_update_to_lex = ?
                    WHERE alphagram = ?
                    """,
                    (
                        int(annotator.contains_word_unique_to_lex_split(symbols_list)),
                        int(contains_update_to_lex(symbols_list)),
                        alph.alphagram,
                    ),
                )
    finally:
        conn.close()
    logger.info(
        "Fixed lexicon symbols",
        extra={"lexicon": lexicon_name, "alphagrams": len(aggregate.alphagrams)},
    )
    return len(aggregate.alphagrams)


__all__ = [
    "BuildSummary",
    "annotate",
    "create_lexicon_database",
    "create_sqlite_db",
    "dataset_path",
    "fix_definitions",
    "fix_lexicon_symbols",
    "log_word_lengths",
    "staging_path",
]
