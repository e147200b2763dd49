"""In-memory word dictionary answering membership and hook queries."""
from __future__ import annotations

import enum
import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable

from .alphabet import LetterDistribution
from .wordlist import iter_entries

logger = logging.getLogger(__name__)


class InnerHookSide(enum.Enum):
    FRONT = "front"
    BACK = "back"


class WordDictionary:
    """Immutable set of valid words for one lexicon edition.

    Hook letters are indexed once on construction: every word ``LW`` makes
    ``L`` a front hook of ``W`` and every word ``WL`` makes ``L`` a back hook
    of ``W``.
    """

    def __init__(self, words: Iterable[str], name: str = "") -> None:
        self.name = name
        self._words = frozenset(w.upper() for w in words)
        front: dict[str, set[str]] = defaultdict(set)
        back: dict[str, set[str]] = defaultdict(set)
        for word in self._words:
            if len(word) < 2:
                continue
            front[word[1:]].add(word[0])
            back[word[:-1]].add(word[-1])
        self._front = dict(front)
        self._back = dict(back)

    @classmethod
    def from_word_list(cls, path: str | Path, name: str = "") -> "WordDictionary":
        words = [word for word, _ in iter_entries(path)]
        logger.info(
            "Loaded dictionary",
            extra={"lexicon": name, "path": str(path), "words": len(words)},
        )
        return cls(words, name=name)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.upper() in self._words

    def __len__(self) -> int:
        return len(self._words)

    def contains(self, word: str) -> bool:
        return word.upper() in self._words

    def front_hooks(self, word: str) -> set[str]:
        return set(self._front.get(word.upper(), ()))

    def back_hooks(self, word: str) -> set[str]:
        return set(self._back.get(word.upper(), ()))

    def sorted_front_hooks(self, word: str, dist: LetterDistribution) -> str:
        return dist.sort_letters(self.front_hooks(word))

    def sorted_back_hooks(self, word: str, dist: LetterDistribution) -> str:
        return dist.sort_letters(self.back_hooks(word))

    def has_inner_hook(self, word: str, side: InnerHookSide) -> bool:
        """Whether dropping the first (FRONT) or last (BACK) letter leaves a word."""

        word = word.upper()
        if len(word) < 2:
            return False
        if side is InnerHookSide.FRONT:
            return word[1:] in self._words
        return word[:-1] in self._words


__all__ = ["InnerHookSide", "WordDictionary"]
