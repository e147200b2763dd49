"""Probability ordering and per-alphagram statistics."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from lexicon_db.lexicon.alphabet import LetterDistribution
from lexicon_db.lexicon.difficulty import alphagram_difficulty

from .aggregate import AlphagramClass

MAX_RANKED_LENGTH = 15


@dataclass
class RankedAlphagram:
    alph: AlphagramClass
    probability: Optional[int]
    point_value: int
    num_vowels: int
    difficulty: Optional[int]


@dataclass
class RankingResult:
    ranked: list[RankedAlphagram]
    length_counts: dict[int, int]


def probability_sort_key(alph: AlphagramClass) -> tuple[int, str]:
    # Ties on combinations break on the alphagram string. Existing datasets
    # were generated with this order and must keep their ranks.
    return (-alph.combinations, alph.alphagram)


def sort_by_probability(alphagrams: Iterable[AlphagramClass]) -> list[AlphagramClass]:
    return sorted(alphagrams, key=probability_sort_key)


def rank_alphagrams(
    alphagrams: Iterable[AlphagramClass],
    dist: LetterDistribution,
    difficulties: Mapping[str, int] | None = None,
) -> RankingResult:
    """Sort *alphagrams* and assign dense 1-based ranks within each length.

    Lengths above ``MAX_RANKED_LENGTH`` get no probability but still get
    their other statistics.
    """

    counters: dict[int, int] = {}
    ranked: list[RankedAlphagram] = []
    for alph in sort_by_probability(alphagrams):
        length = alph.length
        probability: Optional[int] = None
        if 1 <= length <= MAX_RANKED_LENGTH:
            counters[length] = counters.get(length, 0) + 1
            probability = counters[length]
        ranked.append(
            RankedAlphagram(
                alph=alph,
                probability=probability,
                point_value=dist.point_value(alph.alphagram),
                num_vowels=dist.num_vowels(alph.alphagram),
                difficulty=alphagram_difficulty(alph.alphagram, difficulties),
            )
        )
    return RankingResult(ranked=ranked, length_counts=dict(sorted(counters.items())))


__all__ = [
    "MAX_RANKED_LENGTH",
    "RankedAlphagram",
    "RankingResult",
    "probability_sort_key",
    "rank_alphagrams",
    "sort_by_probability",
]
