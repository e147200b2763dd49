"""Exception taxonomy for dataset builds and migrations.

Components raise; only :func:`lexicon_db.cli.main` turns an error into a
process exit status.
"""
from __future__ import annotations


class LexiconDbError(RuntimeError):
    """Base class for every failure raised by this package."""


class SetupError(LexiconDbError):
    """Inputs or the destination dataset are unusable before any write happens."""


class UnknownLexiconError(SetupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"lexicon {name!r} is not in the registry")
        self.name = name


class PersistenceError(LexiconDbError):
    """A statement failed inside a build or migration transaction."""


class MigrationError(LexiconDbError):
    """The stored schema version cannot be advanced."""

    def __init__(self, message: str, version: int | None = None) -> None:
        super().__init__(message)
        self.version = version
