from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

REGISTRY_ENV = "LEXICON_DB_REGISTRY"
OUTPUT_DIR_ENV = "LEXICON_DB_OUTPUT_DIR"
DEFAULT_REGISTRY_NAME = "lexica.json"


def load_environment(filename: str = ".env") -> bool:
    """Load ``filename`` (searched upward from the cwd) into ``os.environ``.

    Values already present in the environment win over the file.
    """

    env_path = find_dotenv(filename, usecwd=True)
    if not env_path:
        return False
    logger.debug("Loading environment file", extra={"path": env_path})
    return load_dotenv(env_path, override=False)


def get_config_paths(
    registry: str | os.PathLike[str] | None = None,
    output_dir: str | os.PathLike[str] | None = None,
) -> dict[str, Path]:
    """Return the registry file and dataset output directory.

    Explicit arguments take precedence over the environment, which takes
    precedence over the current working directory defaults.
    """

    cwd = Path.cwd()
    registry_path = registry or os.getenv(REGISTRY_ENV) or cwd / DEFAULT_REGISTRY_NAME
    output_path = output_dir or os.getenv(OUTPUT_DIR_ENV) or cwd

    return {
        "registry": Path(registry_path).expanduser().resolve(),
        "output_dir": Path(output_path).expanduser().resolve(),
    }
