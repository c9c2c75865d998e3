"""Exception hierarchy for albatross.

All library errors derive from AlbatrossError so callers can catch the whole
family with a single handler. File and parse failures during load/save are
always surfaced; the language manager and update checker are the only
components that recover locally.
"""

from pathlib import Path


class AlbatrossError(Exception):
    """Base exception for all albatross errors."""

    pass


class ConfigError(AlbatrossError):
    """Base exception for configuration file errors.

    Attributes:
        path: File the error relates to, if known.

    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize ConfigError with an optional file path."""
        self.path = path
        super().__init__(message)


class ConfigIOError(ConfigError):
    """Raised when a configuration file cannot be created, read, written or copied."""

    pass


class ConfigParseError(ConfigError):
    """Raised when a configuration file is not well-formed YAML after comment encoding.

    This indicates either a corrupt file or a comment that could not be
    encoded into a valid key/value line.
    """

    pass


class ConfigurationKeyError(AlbatrossError, KeyError):
    """Raised when a key is missing from both the localized and fallback documents.

    Attributes:
        key: The dot-notation key that was looked up.

    """

    def __init__(self, key: str) -> None:
        """Initialize ConfigurationKeyError for the missing key."""
        self.key = key
        super().__init__(f"Unable to locate key {key!r} in fallback or localized language file")

    def __str__(self) -> str:
        """Return the message without KeyError's repr quoting."""
        return str(self.args[0])


class UpdateCheckError(AlbatrossError):
    """Raised when the remote version cannot be fetched or understood."""

    pass
