"""File lifecycle management for configuration files.

FileManager owns everything that touches the disk for one file:
- Bootstrapping a missing file from a bundled default resource
- Whole-file UTF-8 reads and atomic rewrites
- Conditional backup to ``<file>.bak``

It knows nothing about YAML or comments; ConfigurationStore layers the
comment transcoding on top of read_raw/write_raw.

Thread Safety:
    FileManager is NOT thread-safe. Callers must serialize access per path.
"""

from __future__ import annotations

import logging
import shutil
from importlib.resources import files
from pathlib import Path

from albatross.core.constants import BACKUP_SUFFIX
from albatross.core.exceptions import ConfigIOError
from albatross.core.io import atomic_write, read_text
from albatross.core.settings import StoreSettings

logger = logging.getLogger(__name__)


class FileManager:
    """Create, read, write and back up a single configuration file.

    Attributes:
        settings: Validated location and resource settings.

    """

    def __init__(
        self,
        data_dir: Path | str,
        file_name: str,
        resource_name: str | None = None,
        resource_package: str | None = None,
    ) -> None:
        """Initialize FileManager.

        Args:
            data_dir: Directory the file lives in (created on demand).
            file_name: Name or relative path of the file.
            resource_name: Bundled default to copy when the file is missing.
                Defaults to file_name.
            resource_package: Package holding resource_name. None means
                missing files are created empty.

        Raises:
            ValueError: If file_name is empty or invalid.

        """
        self.settings = StoreSettings(
            data_dir=Path(data_dir),
            file_name=file_name,
            resource_name=resource_name,
            resource_package=resource_package,
        )

    @classmethod
    def from_settings(cls, settings: StoreSettings) -> FileManager:
        """Build a FileManager from already validated settings."""
        manager = cls.__new__(cls)
        manager.settings = settings
        return manager

    @property
    def path(self) -> Path:
        """Path of the primary file."""
        return self.settings.path

    @property
    def backup_path(self) -> Path:
        """Path of the backup file, next to the primary file."""
        return self.path.with_name(self.path.name + BACKUP_SUFFIX)

    def _default_content(self) -> bytes | None:
        """Load the bundled default, or None when there is none."""
        package = self.settings.resource_package
        if package is None:
            return None
        name = self.settings.effective_resource_name
        try:
            resource = files(package).joinpath(name)
            if not resource.is_file():
                return None
            return resource.read_bytes()
        except (OSError, ModuleNotFoundError) as e:
            logger.warning("Default resource %s/%s unavailable: %s", package, name, e)
            return None

    def ensure_exists(self) -> bool:
        """Create the file from its bundled default if it does not exist.

        Returns:
            True if the file was created, False if it already existed.

        Raises:
            ConfigIOError: If the directory or file cannot be created.

        """
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigIOError(f"Cannot create directory {path.parent}: {e}", path) from e

        if path.exists():
            return False
        content = self._default_content()
        try:
            # "xb" fails if another process created the file meanwhile
            with path.open("xb") as f:
                if content is not None:
                    f.write(content)
        except FileExistsError:
            return False
        except OSError as e:
            raise ConfigIOError(f"Cannot create config file {path}: {e}", path) from e

        logger.info("Successfully created %s file.", path.name)
        return True

    def read_raw(self) -> str:
        """Read the whole file as UTF-8 text.

        Raises:
            ConfigIOError: If the file is missing, unreadable or not UTF-8.

        """
        path = self.path
        try:
            return read_text(path)
        except IsADirectoryError as e:
            raise ConfigIOError(f"{path} is a directory, not a config file.", path) from e
        except PermissionError as e:
            raise ConfigIOError(f"Permission denied reading {path}: {e}", path) from e
        except FileNotFoundError as e:
            raise ConfigIOError(f"Config file not found: {path}", path) from e
        except UnicodeDecodeError as e:
            raise ConfigIOError(f"Config file {path} is not valid UTF-8: {e}", path) from e
        except OSError as e:
            raise ConfigIOError(f"Cannot read config file {path}: {e}", path) from e

    def write_raw(self, text: str) -> None:
        """Replace the whole file with text (UTF-8, atomic replace).

        Raises:
            ConfigIOError: If the file cannot be written.

        """
        path = self.path
        try:
            atomic_write(path, text)
        except OSError as e:
            raise ConfigIOError(f"Cannot write config file {path}: {e}", path) from e

    def backup(self) -> bool:
        """Copy the file to ``<file>.bak`` if it changed since the last backup.

        The copy happens only when the primary file exists and its
        modification time is strictly newer than the backup's (a missing
        backup counts as time zero). The copy keeps the primary's
        modification time, so repeating the call without touching the
        primary file does nothing.

        Returns:
            True if a backup was written, False otherwise.

        Raises:
            ConfigIOError: If the copy fails.

        """
        path = self.path
        backup_path = self.backup_path
        try:
            if not path.exists():
                logger.debug("No backup for %s: file does not exist", path)
                return False
            primary_mtime = path.stat().st_mtime
            backup_mtime = backup_path.stat().st_mtime if backup_path.exists() else 0.0
            if primary_mtime <= backup_mtime:
                logger.debug("Backup %s is up to date", backup_path)
                return False
            shutil.copy2(path, backup_path)
        except OSError as e:
            raise ConfigIOError(f"Cannot back up {path} to {backup_path}: {e}", path) from e

        logger.info("Backed up %s to %s", path.name, backup_path.name)
        return True
