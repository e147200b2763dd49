"""Word-list reader.

Each non-blank line is split on whitespace: the first token is the word
(folded to upper case), the rest joined by single spaces is its definition.
Words must be UTF-8; undecodable bytes in a definition become U+FFFD.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from lexicon_db.errors import SetupError

logger = logging.getLogger(__name__)


def iter_entries(path: str | Path) -> Iterator[tuple[str, str]]:
    """Yield ``(WORD, definition)`` for every non-blank line of *path*."""

    word_list = Path(path)
    try:
        handle = word_list.open("rb")
    except OSError as exc:
        raise SetupError(f"cannot read word list '{word_list}': {exc.strerror or exc}") from exc

    with handle:
        for lineno, line in enumerate(handle, start=1):
            fields = line.split()
            if not fields:
                continue
            try:
                word = fields[0].decode("utf-8")
            except UnicodeDecodeError as exc:
                raise SetupError(
                    f"word on line {lineno} of '{word_list}' is not valid UTF-8: {exc}"
                ) from exc
            definition = b" ".join(fields[1:]).decode("utf-8", errors="replace")
            yield word.upper(), definition


def load_definitions(path: str | Path) -> dict[str, str]:
    """Map every word in *path* to its definition.

    A word listed twice keeps the later definition.
    """

    definitions: dict[str, str] = {}
    for word, definition in iter_entries(path):
        if word in definitions and definitions[word] != definition:
            logger.debug("Definition overridden by later line", extra={"word": word})
        definitions[word] = definition
    return definitions


__all__ = ["iter_entries", "load_definitions"]
