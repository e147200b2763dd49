from lexicon_db.builder.deletions import find_deleted_words
from lexicon_db.builder.provenance import (
    ProvenanceAnnotator,
    contains_update_to_lex,
    contains_word_unique_to_lex_split,
)
from lexicon_db.lexicon.dictionary import WordDictionary
from lexicon_db.lexicon.registry import LexiconFamily


def _twl_annotator(prior=None, csw=None):
    return ProvenanceAnnotator(
        family=LexiconFamily(name="TWL", symbol="$", siblings=["CSW"]),
        prior=prior,
        sibling_latest={"CSW": csw} if csw is not None else {},
        exclusive_symbols=frozenset({"$", "#"}),
    )


def test_new_word_missing_from_sibling_gets_both_markers():
    annotator = _twl_annotator(
        prior=WordDictionary(["CAT", "AT"]),
        csw=WordDictionary(["CAT", "AT", "QUIZ"]),
    )

    assert annotator.symbols_for("ZAX") == "+$"
    assert annotator.symbols_for("cat") == ""

    symbols = [annotator.symbols_for("ZAX")]
    assert annotator.contains_word_unique_to_lex_split(symbols)
    assert contains_update_to_lex(symbols)


def test_markers_disabled_without_other_editions():
    annotator = _twl_annotator()

    assert annotator.symbols_for("ZAX") == ""


def test_flags_over_a_class():
    assert contains_word_unique_to_lex_split(["", "#"], "$#")
    assert not contains_word_unique_to_lex_split(["", "+"], "$#")
    assert contains_update_to_lex(["", "+"])
    assert not contains_update_to_lex(["", "$"])


def test_for_lexicon_reads_registry(registry):
    annotator = ProvenanceAnnotator.for_lexicon(registry, "NWL")

    assert annotator.family.name == "TWL"
    assert annotator.exclusive_symbols == frozenset({"$", "#"})
    assert annotator.symbols_for("ZAX") == "+$"
    assert annotator.symbols_for("AT") == ""


def test_csw_edition_marks_words_missing_from_latest_twl(registry):
    annotator = ProvenanceAnnotator.for_lexicon(registry, "CSW19")

    # NWL is the newest TWL edition and has no QUIZ
    assert annotator.symbols_for("QUIZ") == "#"
    assert annotator.symbols_for("CAT") == ""


def test_find_deleted_words(tmp_path):
    prior = tmp_path / "prior.txt"
    prior.write_text("QUIZ to question\nCAT\nAA\n", encoding="utf-8")

    deleted = find_deleted_words(prior, WordDictionary(["CAT"]))

    assert deleted == ["AA", "QUIZ"]
