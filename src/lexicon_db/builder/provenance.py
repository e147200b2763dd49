"""Lexicon symbols: where a word stands relative to other editions.

A word gets the update marker when the previous edition of its family lacks
it, and its family's exclusivity marker when the newest edition of a sibling
family lacks it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from lexicon_db.lexicon.dictionary import WordDictionary
from lexicon_db.lexicon.registry import UPDATE_SYMBOL, LexiconFamily, LexiconRegistry

logger = logging.getLogger(__name__)


@dataclass
class ProvenanceAnnotator:
    family: LexiconFamily
    prior: Optional[WordDictionary] = None
    sibling_latest: Mapping[str, WordDictionary] = field(default_factory=dict)
    exclusive_symbols: frozenset[str] = frozenset()

    @classmethod
    def for_lexicon(cls, registry: LexiconRegistry, name: str) -> "ProvenanceAnnotator":
        family = registry.family_of(name)
        prior_info = registry.prior_edition(family.name, name)
        if prior_info is None:
            logger.info("No prior edition; update markers disabled", extra={"lexicon": name})

        siblings: dict[str, WordDictionary] = {}
        for sibling in family.siblings:
            latest = registry.latest_in_family(sibling)
            if latest is None:
                logger.warning(
                    "Sibling family has no editions; skipping exclusivity check",
                    extra={"lexicon": name, "family": sibling},
                )
                continue
            siblings[sibling] = latest.dictionary

        return cls(
            family=family,
            prior=prior_info.dictionary if prior_info is not None else None,
            sibling_latest=siblings,
            exclusive_symbols=frozenset(f.symbol for f in registry.families),
        )

    def symbols_for(self, word: str) -> str:
        symbols = ""
        if self.prior is not None and not self.prior.contains(word):
            symbols = _append_once(symbols, UPDATE_SYMBOL)
        for sibling in self.family.siblings:
            latest = self.sibling_latest.get(sibling)
            if latest is not None and not latest.contains(word):
                symbols = _append_once(symbols, self.family.symbol)
        return symbols

    def contains_word_unique_to_lex_split(self, symbols_list: Iterable[str]) -> bool:
        return contains_word_unique_to_lex_split(symbols_list, self.exclusive_symbols)


def _append_once(symbols: str, marker: str) -> str:
    return symbols if marker in symbols else symbols + marker


def contains_word_unique_to_lex_split(
    symbols_list: Iterable[str], exclusive_symbols: Iterable[str]
) -> bool:
    markers = tuple(exclusive_symbols)
    return any(marker in symbols for symbols in symbols_list for marker in markers)


def contains_update_to_lex(symbols_list: Iterable[str]) -> bool:
    return any(UPDATE_SYMBOL in symbols for symbols in symbols_list)


__all__ = [
    "ProvenanceAnnotator",
    "contains_update_to_lex",
    "contains_word_unique_to_lex_split",
]
