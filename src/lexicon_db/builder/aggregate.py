"""Group a word list into alphagram classes."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from lexicon_db.lexicon.alphabet import LetterDistribution
from lexicon_db.lexicon.wordlist import iter_entries

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10_000


@dataclass
class AlphagramClass:
    alphagram: str
    combinations: int
    words: list[str] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.alphagram)

    @property
    def word_count(self) -> int:
        return len(self.words)

    def __str__(self) -> str:
        return f"Alphagram: {self.alphagram} ({self.combinations})"


@dataclass
class AggregateResult:
    alphagrams: dict[str, AlphagramClass]
    definitions: dict[str, str]


def aggregate_word_list(
    path: str | Path,
    dist: LetterDistribution,
    *,
    progress: bool = False,
) -> AggregateResult:
    """Scan *path* once, grouping words by alphagram.

    Combinations are computed (blanks included) the first time an alphagram
    is seen and reused for every later member. A repeated word keeps its
    single class membership and takes the later definition.
    """

    alphagrams: dict[str, AlphagramClass] = {}
    definitions: dict[str, str] = {}

    entries = tqdm(iter_entries(path), desc="Reading word list", unit="word", disable=not progress)
    for idx, (word, definition) in enumerate(entries):
        if idx and idx % PROGRESS_EVERY == 0:
            logger.debug("Aggregated %d words", idx)

        seen_before = word in definitions
        definitions[word] = definition
        if seen_before:
            continue

        alphagram = dist.make_alphagram(word)
        alph = alphagrams.get(alphagram)
        if alph is None:
            alph = AlphagramClass(
                alphagram=alphagram,
                combinations=dist.count_combinations(alphagram, with_blanks=True),
            )
            alphagrams[alphagram] = alph
        alph.words.append(word)

    logger.info(
        "Aggregated word list",
        extra={"path": str(path), "words": len(definitions), "alphagrams": len(alphagrams)},
    )
    return AggregateResult(alphagrams=alphagrams, definitions=definitions)


__all__ = ["AggregateResult", "AlphagramClass", "aggregate_word_list", "PROGRESS_EVERY"]
