"""Shared constants for albatross modules.

This module provides constants used across the core, language and update
modules to avoid duplication and circular import issues.
"""

# Encoding used for every configuration and language file
FILE_ENCODING: str = "utf-8"

# Suffix appended to the primary file name to build the backup file name
BACKUP_SUFFIX: str = ".bak"

# Infix between the namespace and the counter in synthetic comment keys
COMMENT_KEY_INFIX: str = "_COMMENT_"

# Namespace used by the CLI when none is configured
DEFAULT_NAMESPACE: str = "albatross"

# Separator for nested configuration paths ("section.key")
PATH_SEPARATOR: str = "."

# Package holding the bundled default documents
RESOURCE_PACKAGE: str = "albatross.resources"

# Language files are named lang-<code>.yml
LANGUAGE_FILE_TEMPLATE: str = "lang-{code}.yml"

# SpigotMC legacy endpoint returning the latest version as plain text
DEFAULT_UPDATE_API_URL: str = "https://api.spigotmc.org/legacy/update.php?resource={resource_id}"

# Seconds before an update check request is abandoned
UPDATE_CHECK_TIMEOUT: float = 10.0

# Environment variables read by the CLI
ENV_DATA_DIR: str = "ALBATROSS_DATA_DIR"
ENV_NAMESPACE: str = "ALBATROSS_NAMESPACE"
ENV_FILE_NAME: str = ".env"
