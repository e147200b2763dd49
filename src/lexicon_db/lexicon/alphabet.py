"""Letter distributions and the tile arithmetic built on them.

A distribution fixes three things for a lexicon: the canonical letter order
(used for alphagrams and hook strings), how many tiles of each letter are in
the bag, and what each letter scores.
"""
from __future__ import annotations

from collections import Counter
from math import comb
from typing import Iterable, Mapping

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator


class LetterSpec(BaseModel):
    letter: str
    count: int = Field(ge=0)
    score: int = Field(ge=0)

    @field_validator("letter", mode="before")
    def normalize_letter(cls, v: str) -> str:
        return str(v).strip().upper()


class LetterDistribution(BaseModel):
    name: str
    letters: list[LetterSpec]
    vowels: str = "AEIOU"
    blanks: int = Field(default=2, ge=0)

    _order: dict[str, int] = PrivateAttr(default_factory=dict)
    _counts: dict[str, int] = PrivateAttr(default_factory=dict)
    _scores: dict[str, int] = PrivateAttr(default_factory=dict)
    _vowels: frozenset[str] = PrivateAttr(default_factory=frozenset)

    @field_validator("vowels", mode="before")
    def normalize_vowels(cls, v: str) -> str:
        return str(v).strip().upper()

    @model_validator(mode="after")
    def check_unique_letters(self) -> "LetterDistribution":
        seen = [spec.letter for spec in self.letters]
        if len(seen) != len(set(seen)):
            raise ValueError(f"distribution {self.name!r} lists a letter twice")
        return self

    def model_post_init(self, __context: object) -> None:
        self._order = {spec.letter: idx for idx, spec in enumerate(self.letters)}
        self._counts = {spec.letter: spec.count for spec in self.letters}
        self._scores = {spec.letter: spec.score for spec in self.letters}
        self._vowels = frozenset(self.vowels)

    def _sort_key(self, letter: str) -> tuple[int, str]:
        return (self._order.get(letter, len(self._order)), letter)

    def sort_letters(self, letters: Iterable[str]) -> str:
        """Return *letters* joined in canonical distribution order."""

        return "".join(sorted(letters, key=self._sort_key))

    def make_alphagram(self, word: str) -> str:
        return self.sort_letters(word.upper())

    def point_value(self, alphagram: str) -> int:
        return sum(self._scores.get(letter, 0) for letter in alphagram)

    def num_vowels(self, alphagram: str) -> int:
        return sum(1 for letter in alphagram if letter in self._vowels)

    def count_combinations(self, alphagram: str, with_blanks: bool = True) -> int:
        """Count the distinct tile draws from a full bag that spell *alphagram*.

        Tiles are distinguishable, so ``AA`` from nine A tiles is C(9, 2).
        With blanks, any occurrence may be covered by a blank instead: for
        every letter of multiplicity m the ways to use j blanks on it are
        C(count, m - j), and the per-letter polynomials are multiplied before
        choosing which of the bag's blanks are drawn.
        """

        multiplicities = Counter(alphagram)
        # coeffs[j] = ways to draw the real tiles when j occurrences are blanks
        coeffs = [1]
        for letter, mult in multiplicities.items():
            available = self._counts.get(letter, 0)
            per_letter = [comb(available, mult - j) for j in range(mult + 1)]
            if not with_blanks:
                per_letter = per_letter[:1]
            product = [0] * (len(coeffs) + len(per_letter) - 1)
            for i, a in enumerate(coeffs):
                if not a:
                    continue
                for j, b in enumerate(per_letter):
                    product[i + j] += a * b
            coeffs = product

        blanks = self.blanks if with_blanks else 0
        return sum(c * comb(blanks, j) for j, c in enumerate(coeffs) if j <= blanks)


_ENGLISH_TILES: tuple[tuple[str, int, int], ...] = (
    ("A", 9, 1), ("B", 2, 3), ("C", 2, 3), ("D", 4, 2), ("E", 12, 1),
    ("F", 2, 4), ("G", 3, 2), ("H", 2, 4), ("I", 9, 1), ("J", 1, 8),
    ("K", 1, 5), ("L", 4, 1), ("M", 2, 3), ("N", 6, 1), ("O", 8, 1),
    ("P", 2, 3), ("Q", 1, 10), ("R", 6, 1), ("S", 4, 1), ("T", 6, 1),
    ("U", 4, 1), ("V", 2, 4), ("W", 2, 4), ("X", 1, 8), ("Y", 2, 4),
    ("Z", 1, 10),
)

ENGLISH = LetterDistribution(
    name="english",
    letters=[LetterSpec(letter=l, count=c, score=s) for l, c, s in _ENGLISH_TILES],
    vowels="AEIOU",
    blanks=2,
)

BUILTIN_DISTRIBUTIONS: Mapping[str, LetterDistribution] = {ENGLISH.name: ENGLISH}


__all__ = [
    "BUILTIN_DISTRIBUTIONS",
    "ENGLISH",
    "LetterDistribution",
    "LetterSpec",
]
