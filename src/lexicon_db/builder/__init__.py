"""Alphagram aggregation, ranking and provenance annotation."""

from .aggregate import AggregateResult, AlphagramClass, aggregate_word_list
from .deletions import find_deleted_words
from .provenance import ProvenanceAnnotator, contains_update_to_lex, contains_word_unique_to_lex_split
from .ranking import MAX_RANKED_LENGTH, RankedAlphagram, RankingResult, rank_alphagrams

__all__ = [
    "AggregateResult",
    "AlphagramClass",
    "MAX_RANKED_LENGTH",
    "ProvenanceAnnotator",
    "RankedAlphagram",
    "RankingResult",
    "aggregate_word_list",
    "contains_update_to_lex",
    "contains_word_unique_to_lex_split",
    "find_deleted_words",
    "rank_alphagrams",
]
