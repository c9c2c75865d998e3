"""Comment-preserving YAML configuration store.

ConfigurationStore keeps a YAML file in memory as an ordered dict and writes
it back with its comments intact. Comments travel through PyYAML as
synthetic entries (see albatross.core.transcoder); they are hidden from every
read operation, so callers only ever see their own keys.

Usage:
    from albatross.core.configuration import ConfigurationStore

    with ConfigurationStore(data_dir, "config.yml", "myplugin",
                            resource_package="myplugin.resources") as config:
        port = config.get_int("server.port", 8080)
        config.set("server.port", 9090, "Port the server listens on")
        config.backup_configuration()
        config.save()

Paths are dot-separated ("server.port"); each segment is a mapping key.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from albatross.core.constants import DEFAULT_NAMESPACE, PATH_SEPARATOR
from albatross.core.escaping import contains_reserved_token
from albatross.core.exceptions import ConfigError, ConfigParseError
from albatross.core.file_manager import FileManager
from albatross.core.settings import StoreSettings
from albatross.core.transcoder import CommentTranscoder

logger = logging.getLogger(__name__)


def _split_path(path: str) -> list[str]:
    """Split a dot-notation path into keys.

    Raises:
        ValueError: If path is empty or has empty segments.

    """
    if not path:
        raise ValueError("Path cannot be empty")
    keys = path.split(PATH_SEPARATOR)
    for key in keys:
        if not key:
            raise ValueError(f"Invalid path '{path}': contains empty segment")
    return keys


def _normalize_value(value: Any) -> Any:
    """Convert a value into plain dicts/lists that yaml.safe_dump can represent."""
    if isinstance(value, ConfigurationSection):
        return value.as_dict()
    if isinstance(value, Mapping):
        return {k: _normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_normalize_value(item) for item in value]
    return value


def _insert_before(mapping: dict[Any, Any], anchor: Any, entries: list[tuple[str, str]]) -> None:
    """Insert entries immediately before anchor, keeping the dict object itself."""
    items = list(mapping.items())
    mapping.clear()
    for key, value in items:
        if key == anchor:
            mapping.update(entries)
        mapping[key] = value


class ConfigurationSection:
    """Live view over one mapping of a configuration document.

    Sections returned by :meth:`get_section` share the underlying dict with
    the document, so changes through any view are visible in all of them and
    are written by the next ``save()``.

    Attributes:
        current_path: Dot-notation path of this section from the root ("" for root).

    """

    def __init__(
        self,
        data: dict[Any, Any],
        transcoder: CommentTranscoder,
        current_path: str = "",
    ) -> None:
        """Initialize ConfigurationSection.

        Args:
            data: The mapping this section views.
            transcoder: Transcoder owning comment keys of the document.
            current_path: Path of this section from the root.

        """
        self._data = data
        self._transcoder = transcoder
        self.current_path = current_path

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.current_path!r}, keys={self.keys()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigurationSection):
            return NotImplemented
        return self._data is other._data

    def __hash__(self) -> int:
        return id(self._data)

    def _child_path(self, path: str) -> str:
        return f"{self.current_path}{PATH_SEPARATOR}{path}" if self.current_path else path

    def _wrap(self, value: Any, path: str) -> Any:
        if isinstance(value, dict):
            return ConfigurationSection(value, self._transcoder, self._child_path(path))
        return value

    def _lookup(self, path: str) -> tuple[Any, bool]:
        """Get raw value at path. Returns (None, False) when absent or reserved."""
        current: Any = self._data
        for key in _split_path(path):
            if self._transcoder.is_comment_key(key):
                return None, False
            if not isinstance(current, dict) or key not in current:
                return None, False
            current = current[key]
        return current, True

    def _check_not_reserved(self, keys: list[str]) -> None:
        for key in keys:
            if self._transcoder.is_comment_key(key):
                raise ValueError(f"Key '{key}' is reserved for comments")

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def get(self, path: str, default: Any = None) -> Any:
        """Get the value at path.

        Mappings are returned as ConfigurationSection views.

        Args:
            path: Dot-notation path (e.g., "server.port").
            default: Returned when the path is absent.

        """
        value, found = self._lookup(path)
        return self._wrap(value, path) if found else default

    def contains(self, path: str) -> bool:
        """Check whether a real (non-comment) key exists at path."""
        return self._lookup(path)[1]

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and bool(path) and self.contains(path)

    def get_string(self, path: str, default: str | None = None) -> str | None:
        """Get the value at path as a string.

        Scalars are converted (``true``/``false`` for booleans); sections and
        lists yield default.
        """
        value, found = self._lookup(path)
        if not found or value is None or isinstance(value, (dict, list)):
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_int(self, path: str, default: int = 0) -> int:
        """Get the integer at path, or default if absent or not an integer."""
        value, found = self._lookup(path)
        if found and isinstance(value, int) and not isinstance(value, bool):
            return value
        return default

    def get_float(self, path: str, default: float = 0.0) -> float:
        """Get the number at path as float, or default if absent or not numeric."""
        value, found = self._lookup(path)
        if found and isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return default

    def get_bool(self, path: str, default: bool = False) -> bool:
        """Get the boolean at path, or default if absent or not a boolean."""
        value, found = self._lookup(path)
        return value if found and isinstance(value, bool) else default

    def get_list(self, path: str) -> list[Any]:
        """Get the list at path.

        Never returns None: a missing or non-list value yields a new empty
        list, and the document is left untouched.
        """
        value, found = self._lookup(path)
        if found and isinstance(value, list):
            return value
        return []

    def get_section(self, path: str) -> ConfigurationSection:
        """Get the section at path, creating empty sections as needed.

        Never returns None. Repeated calls for one path view the same
        underlying mapping.

        Raises:
            ValueError: If a value on the path exists but is not a mapping,
                or the path names a reserved comment key.

        """
        keys = _split_path(path)
        self._check_not_reserved(keys)
        current = self._data
        for key in keys:
            if key not in current:
                current[key] = {}
            elif not isinstance(current[key], dict):
                raise ValueError(
                    f"Cannot get section '{path}': value at '{key}' "
                    f"is {type(current[key]).__name__}, not a section"
                )
            current = current[key]
        return ConfigurationSection(current, self._transcoder, self._child_path(path))

    def keys(self, deep: bool = False) -> list[str]:
        """List keys of this section in document order.

        Args:
            deep: Also list keys of nested sections as dot-notation paths.

        """
        return list(self._iter_keys(self._data, "", deep))

    def _iter_keys(self, data: dict[Any, Any], prefix: str, deep: bool):
        for key, value in data.items():
            if self._transcoder.is_comment_key(key):
                continue
            full_key = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else str(key)
            yield full_key
            if deep and isinstance(value, dict):
                yield from self._iter_keys(value, full_key, deep)

    def values(self, deep: bool = False) -> dict[str, Any]:
        """Map keys of this section to their values, in document order.

        Args:
            deep: Include keys of nested sections as dot-notation paths.

        Returns:
            Dict of key (or path) to value; sections appear as ConfigurationSection.

        """
        return {key: self.get(key) for key in self.keys(deep)}

    def as_dict(self) -> dict[Any, Any]:
        """Return a deep copy of this section as plain dicts, without comments."""
        return self._strip_comments(self._data)

    def _strip_comments(self, data: dict[Any, Any]) -> dict[Any, Any]:
        result: dict[Any, Any] = {}
        for key, value in data.items():
            if self._transcoder.is_comment_key(key):
                continue
            result[key] = self._strip_comments(value) if isinstance(value, dict) else copy.deepcopy(value)
        return result

    # -------------------------------------------------------------------------
    # Write access
    # -------------------------------------------------------------------------

    def set(self, path: str, value: Any, *comments: str | None) -> None:
        """Set the value at path, optionally preceded by comments.

        Intermediate sections are created as needed. Setting None removes the
        key. Each comment becomes its own ``# text`` line placed immediately
        before the key on the next save; an existing key keeps its position.
        None comments are ignored and multi-line comments are split per line.

        Args:
            path: Dot-notation path (e.g., "server.port").
            value: New value. Mappings and sections are stored as plain dicts.
            *comments: Comment lines without the leading ``#``.

        Raises:
            ValueError: If path is invalid, names a reserved comment key, or
                an intermediate value exists but is not a mapping.

        """
        keys = _split_path(path)
        self._check_not_reserved(keys)

        if value is None:
            self.remove(path)
            return

        parent = self._data
        for key in keys[:-1]:
            if key not in parent:
                parent[key] = {}
            elif not isinstance(parent[key], dict):
                raise ValueError(
                    f"Cannot set '{path}': intermediate value at '{key}' "
                    f"is {type(parent[key]).__name__}, not a section"
                )
            parent = parent[key]

        leaf = keys[-1]
        lines = [line for comment in comments if comment is not None for line in comment.splitlines() or [""]]
        if lines:
            entries = []
            for index, line in enumerate(lines):
                if contains_reserved_token(line):
                    logger.warning("Comment %r contains an escape token and will not round-trip", line)
                # Rendered as "# text", matching hand-written comments
                body = f" {line}" if line and not line.startswith(" ") else line
                entries.append(self._transcoder.allocate(body, block_start=index == 0))
            if leaf in parent:
                _insert_before(parent, leaf, entries)
            else:
                parent.update(entries)

        parent[leaf] = _normalize_value(value)

    def remove(self, path: str) -> bool:
        """Remove the value at path.

        Returns:
            True if a value was removed, False if the path didn't exist.

        """
        keys = _split_path(path)
        self._check_not_reserved(keys)
        current: Any = self._data
        for key in keys[:-1]:
            if not isinstance(current, dict) or key not in current:
                return False
            current = current[key]
        if not isinstance(current, dict) or keys[-1] not in current:
            return False
        del current[keys[-1]]
        return True


class ConfigurationStore(ConfigurationSection):
    """A configuration file loaded into memory with its comments preserved.

    Lifecycle:
    - load(): bootstrap the file from its bundled default if missing, read it,
      encode comments, parse with PyYAML
    - get/set/get_section/get_list: work on the in-memory document
    - save(): serialize, decode comments, atomically rewrite the file
    - backup_configuration(): refresh ``<file>.bak`` if the file is newer

    Thread Safety:
        ConfigurationStore is NOT thread-safe. Callers must serialize access,
        for example with one lock per file path.

    Attributes:
        settings: Validated location, namespace and resource settings.

    """

    def __init__(
        self,
        data_dir: Path | str,
        file_name: str,
        namespace: str = DEFAULT_NAMESPACE,
        *,
        resource_name: str | None = None,
        resource_package: str | None = None,
    ) -> None:
        """Initialize ConfigurationStore. Nothing is read until load().

        Args:
            data_dir: Directory the file lives in.
            file_name: Name or relative path of the file.
            namespace: Prefix for synthetic comment keys, typically the
                owning application's name.
            resource_name: Bundled default used when the file is missing.
                Defaults to file_name.
            resource_package: Package holding resource_name.

        Raises:
            ValueError: If file_name or namespace is invalid.

        """
        self.settings = StoreSettings(
            data_dir=Path(data_dir),
            file_name=file_name,
            namespace=namespace,
            resource_name=resource_name,
            resource_package=resource_package,
        )
        self._file_manager = FileManager.from_settings(self.settings)
        super().__init__({}, CommentTranscoder(self.settings.namespace))

    def __enter__(self) -> ConfigurationStore:
        """Context manager entry: load the file."""
        self.load()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit: no auto-save, explicit save() call required."""
        pass

    def __repr__(self) -> str:
        return f"ConfigurationStore(path={str(self.path)!r}, namespace={self.namespace!r})"

    @property
    def path(self) -> Path:
        """Path of the configuration file."""
        return self._file_manager.path

    @property
    def namespace(self) -> str:
        """Namespace of the synthetic comment keys."""
        return self.settings.namespace

    @property
    def file_manager(self) -> FileManager:
        """FileManager handling disk access for this store."""
        return self._file_manager

    @property
    def comment_count(self) -> int:
        """Comments read on load plus comments added since."""
        return self._transcoder.count

    def load(self) -> None:
        """Load or reload the file from disk, replacing the in-memory document.

        Raises:
            ConfigIOError: If the file cannot be created or read.
            ConfigParseError: If the content is not a YAML mapping.

        """
        self._file_manager.ensure_exists()
        raw = self._file_manager.read_raw()
        # The counter must keep matching self._data if the new content is rejected
        state = self._transcoder.snapshot()
        encoded = self._transcoder.encode(raw)
        try:
            parsed = self._parse(encoded)
        except ConfigParseError:
            self._transcoder.restore(state)
            raise

        self._data.clear()
        self._data.update(parsed)
        logger.debug(
            "Loaded %s (%d keys, %d comments)", self.path, len(self.keys()), self.comment_count
        )

    def _parse(self, encoded: str) -> dict[str, Any]:
        """Parse encoded text into the root mapping."""
        try:
            parsed = yaml.safe_load(encoded)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {self.path}: {e}", self.path) from e

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise ConfigParseError(
                f"Config file {self.path} must contain a YAML mapping, got {type(parsed).__name__}.",
                self.path,
            )
        return parsed

    def save_to_string(self) -> str:
        """Serialize the document to commented YAML text."""
        if not self._data:
            return ""
        try:
            text = yaml.safe_dump(
                self._data,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
                width=float("inf"),
            )
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot serialize configuration for {self.path}: {e}", self.path) from e
        return self._transcoder.decode(text)

    def save(self) -> None:
        """Write the document, with its comments, back to the file.

        Raises:
            ConfigIOError: If the file cannot be written.
            ConfigError: If a value cannot be represented in YAML.

        """
        self._file_manager.write_raw(self.save_to_string())
        logger.info("Saved configuration to %s", self.path)

    def backup_configuration(self) -> bool:
        """Copy the file to ``<file>.bak`` if it changed since the last backup.

        Returns:
            True if a backup was written.

        Raises:
            ConfigIOError: If the copy fails.

        """
        return self._file_manager.backup()
