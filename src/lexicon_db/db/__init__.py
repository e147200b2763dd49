"""Dataset persistence: schema, writer and migrations."""

from .migrate import MigrationContext, MigrationResult, migrate, migrate_lexicon_database, read_version
from .schema import CURRENT_VERSION, connect_sqlite, create_schema, transaction
from .writer import AlphagramRow, WordRow, write_deleted_words, write_lexicon, write_version

__all__ = [
    "AlphagramRow",
    "CURRENT_VERSION",
    "MigrationContext",
    "MigrationResult",
    "WordRow",
    "connect_sqlite",
    "create_schema",
    "migrate",
    "migrate_lexicon_database",
    "read_version",
    "transaction",
    "write_deleted_words",
    "write_lexicon",
    "write_version",
]
