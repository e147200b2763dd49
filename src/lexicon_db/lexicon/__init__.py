"""Lexicon data: letter distributions, dictionaries, word lists and the registry."""

from .alphabet import ENGLISH, LetterDistribution
from .dictionary import InnerHookSide, WordDictionary
from .registry import LexiconFamily, LexiconInfo, LexiconRegistry, UPDATE_SYMBOL

__all__ = [
    "ENGLISH",
    "InnerHookSide",
    "LetterDistribution",
    "LexiconFamily",
    "LexiconInfo",
    "LexiconRegistry",
    "UPDATE_SYMBOL",
    "WordDictionary",
]
