"""albatross - comment-preserving YAML configuration files.

Keeps YAML configuration and language files human-editable: comments
survive load/modify/save cycles, missing files are bootstrapped from
bundled defaults, and files can be backed up before risky changes.
"""

from albatross.core import (
    AlbatrossError,
    ConfigError,
    ConfigIOError,
    ConfigParseError,
    ConfigurationKeyError,
    ConfigurationSection,
    ConfigurationStore,
    FileManager,
)
from albatross.lang import MISSING_TRANSLATION_MESSAGE, LanguageManager
from albatross.update import UpdateChecker, UpdateCheckResult

__version__ = "1.2.0"

__all__ = [
    "__version__",
    "AlbatrossError",
    "ConfigError",
    "ConfigIOError",
    "ConfigParseError",
    "ConfigurationKeyError",
    "ConfigurationSection",
    "ConfigurationStore",
    "FileManager",
    "LanguageManager",
    "MISSING_TRANSLATION_MESSAGE",
    "UpdateCheckResult",
    "UpdateChecker",
]
