import json
import logging

import pytest

from lexicon_db.builder import build
from lexicon_db.builder.build import (
    create_lexicon_database,
    fix_definitions,
    fix_lexicon_symbols,
    log_word_lengths,
)
from lexicon_db.db.schema import CURRENT_VERSION, connect_sqlite, dataset_path
from lexicon_db.errors import PersistenceError, SetupError, UnknownLexiconError
from lexicon_db.lexicon.registry import LexiconRegistry


@pytest.fixture
def built(registry, output_dir):
    summary = create_lexicon_database("NWL", registry, output_dir)
    conn = connect_sqlite(summary.path, must_exist=True)
    yield summary, conn
    conn.close()


def test_build_summary(built, output_dir):
    summary, _ = built

    assert summary.path == dataset_path(output_dir, "NWL")
    assert summary.alphagrams == 3
    assert summary.words == 3
    assert summary.deleted == 1
    assert summary.length_counts == {2: 1, 3: 2}


def test_alphagram_word_counts_sum_to_word_rows(built):
    _, conn = built

    total = conn.execute("SELECT sum(num_anagrams) FROM alphagrams").fetchone()[0]
    assert total == conn.execute("SELECT count(*) FROM words").fetchone()[0] == 3


def test_build_writes_words_with_hooks_and_symbols(built):
    _, conn = built
    rows = {
        row["word"]: row
        for row in conn.execute("SELECT * FROM words")
    }

    assert rows["ZAX"]["lexicon_symbols"] == "+$"
    assert rows["ZAX"]["definition"] == "a tool for cutting slate"
    assert rows["CAT"]["lexicon_symbols"] == ""
    assert rows["CAT"]["inner_front_hook"] == 1
    assert rows["CAT"]["inner_back_hook"] == 0
    assert rows["AT"]["front_hooks"] == "C"
    assert rows["AT"]["back_hooks"] == ""


def test_build_writes_alphagram_statistics(built):
    _, conn = built
    rows = {
        row["alphagram"]: row
        for row in conn.execute("SELECT * FROM alphagrams")
    }

    assert rows["ACT"]["probability"] == 1
    assert rows["AXZ"]["probability"] == 2
    assert rows["AT"]["probability"] == 1
    assert rows["AXZ"]["point_value"] == 19
    assert rows["AXZ"]["num_vowels"] == 1
    assert rows["AXZ"]["num_anagrams"] == 1
    assert rows["AXZ"]["contains_word_uniq_to_lex_split"] == 1
    assert rows["AXZ"]["contains_update_to_lex"] == 1
    assert rows["ACT"]["contains_update_to_lex"] == 0
    assert rows["AXZ"]["difficulty"] == 87
    assert rows["AT"]["difficulty"] is None


def test_build_records_deletions_and_version(built):
    _, conn = built

    assert [tuple(r) for r in conn.execute("SELECT word, length FROM deletedwords")] == [
        ("QUIZ", 4)
    ]
    assert conn.execute("SELECT version FROM db_version").fetchall()[0][0] == CURRENT_VERSION


def test_first_edition_has_no_deletions(registry, output_dir):
    summary = create_lexicon_database("TWL06", registry, output_dir)

    assert summary.deleted == 0
    conn = connect_sqlite(summary.path, must_exist=True)
    try:
        assert conn.execute("SELECT count(*) FROM deletedwords").fetchone()[0] == 0
        symbols = {r[0] for r in conn.execute("SELECT lexicon_symbols FROM words")}
    finally:
        conn.close()
    # no prior edition, and CSW19 holds every TWL06 word
    assert symbols == {""}


def test_refuses_to_overwrite_without_force(built, registry, output_dir):
    with pytest.raises(SetupError, match="--force"):
        create_lexicon_database("NWL", registry, output_dir)

    again = create_lexicon_database("NWL", registry, output_dir, quit_if_exists=False)
    assert again.words == 3


def test_unknown_lexicon_writes_nothing(registry, output_dir):
    with pytest.raises(UnknownLexiconError):
        create_lexicon_database("NOPE", registry, output_dir)
    assert list(output_dir.iterdir()) == []


def test_log_word_lengths(caplog):
    with caplog.at_level(logging.INFO):
        payload = log_word_lengths({2: 1, 3: 2, 4: 0})

    assert json.loads(payload) == {"2": 1, "3": 2}
    assert "Word lengths: '" in caplog.text


def test_fix_definitions(built, registry):
    summary, conn = built
    word_list = registry.get("NWL").filename
    word_list.write_text(
        "AT to be in a place\nCAT a small feline\nZAX a tool for cutting slate\n",
        encoding="utf-8",
    )

    assert fix_definitions("NWL", registry, summary.path.parent) == 3
    row = conn.execute("SELECT definition FROM words WHERE word = 'CAT'").fetchone()
    assert row[0] == "a small feline"


def test_fix_lexicon_symbols(built, registry):
    summary, conn = built
    conn.execute("UPDATE words SET lexicon_symbols = ''")
    conn.execute(
        "UPDATE alphagrams SET contains_word_uniq_to_lex_split = 0, contains_update_to_lex = 0"
    )

    assert fix_lexicon_symbols("NWL", registry, summary.path.parent) == 3

    assert conn.execute("SELECT lexicon_symbols FROM words WHERE word = 'ZAX'").fetchone()[0] == "+$"
    flags = conn.execute(
        "SELECT contains_word_uniq_to_lex_split, contains_update_to_lex "
        "FROM alphagrams WHERE alphagram = 'AXZ'"
    ).fetchone()
    assert tuple(flags) == (1, 1)


def test_fix_requires_existing_dataset(registry, output_dir):
    with pytest.raises(SetupError):
        fix_definitions("NWL", registry, output_dir)


def test_definition_with_stray_bytes_still_builds(registry, output_dir):
    registry.get("NWL").filename.write_bytes(
        b"AT to be in a place\nCAT caf\xe9 feline\nZAX a tool for cutting slate\n"
    )

    summary = create_lexicon_database("NWL", registry, output_dir)

    conn = connect_sqlite(summary.path, must_exist=True)
    try:
        row = conn.execute("SELECT definition FROM words WHERE word = 'CAT'").fetchone()
    finally:
        conn.close()
    assert row[0] == "caf\ufffd feline"


def test_failed_write_leaves_no_dataset(registry, output_dir, monkeypatch):
    def failing_write(conn, alphagrams, words):
        raise PersistenceError("disk full")

    monkeypatch.setattr(build, "write_lexicon", failing_write)

    with pytest.raises(PersistenceError):
        create_lexicon_database("NWL", registry, output_dir)
    assert list(output_dir.iterdir()) == []

    monkeypatch.undo()
    summary = create_lexicon_database("NWL", registry, output_dir)
    assert summary.words == 3


def test_failed_forced_rebuild_keeps_previous_dataset(built, registry, output_dir, monkeypatch):
    summary, conn = built

    def failing_write(conn, alphagrams, words):
        raise PersistenceError("disk full")

    monkeypatch.setattr(build, "write_lexicon", failing_write)

    with pytest.raises(PersistenceError):
        create_lexicon_database("NWL", registry, output_dir, quit_if_exists=False)

    assert [p.name for p in output_dir.iterdir()] == ["NWL.db"]
    assert conn.execute("SELECT count(*) FROM words").fetchone()[0] == 3
    assert conn.execute("SELECT version FROM db_version").fetchone()[0] == CURRENT_VERSION


def test_existing_dataset_is_rejected_before_loading_word_lists(built, registry_path, output_dir):
    fresh = LexiconRegistry.load(registry_path)
    fresh.get("NWL").filename.unlink()

    with pytest.raises(SetupError, match="--force"):
        create_lexicon_database("NWL", fresh, output_dir)
