"""Build and migrate SQLite word databases for word-game lexica."""

__version__ = "0.6.0"
