"""Core module for comment-preserving configuration files.

This module provides:
- ConfigurationStore / ConfigurationSection for reading and editing documents
- FileManager for bootstrap, read, atomic write and backup
- CommentTranscoder and the escaping codec behind comment preservation
- Custom exception hierarchy with AlbatrossError as base
"""

from albatross.core.configuration import ConfigurationSection, ConfigurationStore
from albatross.core.escaping import contains_reserved_token, escape, unescape
from albatross.core.exceptions import (
    AlbatrossError,
    ConfigError,
    ConfigIOError,
    ConfigParseError,
    ConfigurationKeyError,
    UpdateCheckError,
)
from albatross.core.file_manager import FileManager
from albatross.core.settings import StoreSettings
from albatross.core.transcoder import CommentTranscoder

__all__ = [
    # Store
    "ConfigurationSection",
    "ConfigurationStore",
    "FileManager",
    "StoreSettings",
    # Comment handling
    "CommentTranscoder",
    "contains_reserved_token",
    "escape",
    "unescape",
    # Exceptions
    "AlbatrossError",
    "ConfigError",
    "ConfigIOError",
    "ConfigParseError",
    "ConfigurationKeyError",
    "UpdateCheckError",
]
