"""Per-alphagram difficulty tables.

A table file holds one ``ALPHAGRAM DIFFICULTY`` pair per line. Lines that do
not parse are skipped with a warning; alphagrams missing from the table have
no difficulty.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from lexicon_db.errors import SetupError

logger = logging.getLogger(__name__)


def load_difficulties(path: str | Path) -> dict[str, int]:
    table_path = Path(path)
    try:
        text = table_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SetupError(f"cannot read difficulty table '{table_path}': {exc}") from exc

    difficulties: dict[str, int] = {}
    skipped = 0
    for line in text.splitlines():
        fields = line.split()
        if not fields:
            continue
        if len(fields) < 2:
            skipped += 1
            continue
        try:
            difficulties[fields[0].upper()] = int(fields[1])
        except ValueError:
            skipped += 1
    if skipped:
        logger.warning(
            "Skipped malformed difficulty lines",
            extra={"path": str(table_path), "skipped": skipped},
        )
    return difficulties


def alphagram_difficulty(alphagram: str, difficulties: Mapping[str, int] | None) -> int | None:
    if not difficulties:
        return None
    return difficulties.get(alphagram)


__all__ = ["alphagram_difficulty", "load_difficulties"]
