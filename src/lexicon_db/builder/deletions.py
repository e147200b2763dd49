from __future__ import annotations

import logging
from pathlib import Path

from lexicon_db.lexicon.dictionary import WordDictionary
from lexicon_db.lexicon.wordlist import load_definitions

logger = logging.getLogger(__name__)


def find_deleted_words(prior_word_list: str | Path, current: WordDictionary) -> list[str]:
    """Words of the prior edition's list that *current* no longer accepts, sorted."""

    prior_words = load_definitions(prior_word_list)
    deleted = sorted(word for word in prior_words if not current.contains(word))
    logger.info(
        "Checked for deleted words",
        extra={"prior": str(prior_word_list), "checked": len(prior_words), "deleted": len(deleted)},
    )
    return deleted


__all__ = ["find_deleted_words"]
