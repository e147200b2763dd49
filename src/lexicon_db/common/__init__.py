"""Shared infrastructure for the lexicon database tooling."""

from __future__ import annotations

from . import sqlite_bootstrap as _sqlite_bootstrap  # noqa: F401
from .config import get_config_paths, load_environment

__all__ = ["get_config_paths", "load_environment"]
