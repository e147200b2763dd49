import json

import pytest

from lexicon_db.errors import SetupError, UnknownLexiconError
from lexicon_db.lexicon.difficulty import alphagram_difficulty, load_difficulties
from lexicon_db.lexicon.registry import LexiconRegistry


def test_load_resolves_paths_against_registry(registry, registry_path):
    lex = registry.get("NWL")

    assert lex.family == "TWL"
    assert lex.filename == (registry_path.parent / "lexica" / "NWL.txt").resolve()
    assert lex.difficulties.name == "NWL-difficulty.txt"
    assert [f.name for f in registry.families] == ["TWL", "CSW"]


def test_unknown_lexicon(registry):
    with pytest.raises(UnknownLexiconError) as excinfo:
        registry.get("NOPE")
    assert excinfo.value.name == "NOPE"
    assert isinstance(excinfo.value, SetupError)


def test_prior_edition_and_latest(registry):
    assert registry.prior_edition("TWL", "NWL").name == "TWL06"
    assert registry.prior_edition("TWL", "TWL06") is None
    assert registry.prior_edition("CSW", "CSW19") is None

    latest = registry.latest_in_family("CSW")
    assert latest.name == "CSW19"
    assert latest.initialized
    assert "QUIZ" in latest.dictionary


def test_editions_sorted_by_order(registry):
    assert [lex.name for lex in registry.editions("TWL")] == ["TWL06", "NWL"]


def test_difficulty_table_loads_without_dictionary(registry):
    lex = registry.get("NWL")

    assert lex.difficulty_table == {"AXZ": 87, "ACT": 12}
    assert not lex.initialized
    assert registry.get("TWL06").difficulty_table == {}


def test_initialize_missing_word_list(tmp_path):
    path = tmp_path / "lexica.json"
    path.write_text(
        json.dumps({"lexica": [{"name": "X", "family": "TWL", "order": 1, "filename": "x.txt"}]}),
        encoding="utf-8",
    )
    registry = LexiconRegistry.load(path)

    with pytest.raises(SetupError):
        registry.get("X").initialize()


@pytest.mark.parametrize(
    "lexica",
    [
        [
            {"name": "A", "family": "TWL", "order": 1, "filename": "a.txt"},
            {"name": "B", "family": "TWL", "order": 1, "filename": "b.txt"},
        ],
        [{"name": "A", "family": "OTHER", "order": 1, "filename": "a.txt"}],
        [{"name": "A", "family": "TWL", "order": 1, "filename": "a.txt", "distribution": "klingon"}],
    ],
)
def test_inconsistent_registry_rejected(tmp_path, lexica):
    path = tmp_path / "lexica.json"
    path.write_text(json.dumps({"lexica": lexica}), encoding="utf-8")

    with pytest.raises(SetupError):
        LexiconRegistry.load(path)


def test_missing_registry_file(tmp_path):
    with pytest.raises(SetupError):
        LexiconRegistry.load(tmp_path / "nope.json")


def test_load_difficulties_skips_malformed_lines(tmp_path):
    path = tmp_path / "difficulty.txt"
    path.write_text("AEINRST 12\nbad\nAB x\n\nact 3\n", encoding="utf-8")

    table = load_difficulties(path)

    assert table == {"AEINRST": 12, "ACT": 3}
    assert alphagram_difficulty("ACT", table) == 3
    assert alphagram_difficulty("XYZ", table) is None
    assert alphagram_difficulty("ACT", None) is None
