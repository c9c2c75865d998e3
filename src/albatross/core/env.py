"""Environment variables for the albatross CLI.

ALBATROSS_DATA_DIR and ALBATROSS_NAMESPACE can be exported in the shell or
placed in a .env file next to where the CLI runs.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from albatross.core.constants import (
    DEFAULT_NAMESPACE,
    ENV_DATA_DIR,
    ENV_FILE_NAME,
    ENV_NAMESPACE,
    FILE_ENCODING,
)

logger = logging.getLogger(__name__)


def load_env_file(directory: Path | None = None) -> bool:
    """Export the variables of a .env file into os.environ.

    Variables that are already set keep their value (override=False), so a
    shell export always beats the file.

    Args:
        directory: Where to look for .env. Defaults to the working directory.

    Returns:
        True if a .env file was found and loaded.

    """
    base = Path.cwd() if directory is None else Path(directory).expanduser()
    env_file = base / ENV_FILE_NAME
    if not env_file.is_file():
        logger.debug("No %s file in %s", ENV_FILE_NAME, base)
        return False

    load_dotenv(env_file, encoding=FILE_ENCODING, override=False)
    logger.debug("Loaded %s", env_file)
    return True


def get_data_dir() -> Path:
    """Directory relative file names are resolved against.

    Taken from ALBATROSS_DATA_DIR, defaulting to the current working directory.
    """
    value = os.environ.get(ENV_DATA_DIR)
    return Path(value).expanduser() if value else Path.cwd()


def get_namespace() -> str:
    """Comment key namespace, from ALBATROSS_NAMESPACE or the default."""
    return os.environ.get(ENV_NAMESPACE) or DEFAULT_NAMESPACE
