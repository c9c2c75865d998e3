"""Typer CLI entry point for albatross.

This module provides the command-line interface for inspecting and editing
comment-preserving configuration files. It only parses arguments and
delegates to the library - no business logic here.
"""

import logging
from pathlib import Path

import typer
import yaml
from rich.markup import escape

from albatross import __version__
from albatross.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SUCCESS,
    _error,
    _info,
    _setup_logging,
    _success,
    _warning,
    console,
)
from albatross.core.configuration import ConfigurationSection, ConfigurationStore
from albatross.core.constants import DEFAULT_UPDATE_API_URL, RESOURCE_PACKAGE
from albatross.core.env import get_data_dir, get_namespace, load_env_file
from albatross.core.exceptions import ConfigError
from albatross.lang import LanguageManager
from albatross.update import UpdateChecker

# Module logger
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="albatross",
    help="Inspect and edit YAML configuration files without losing comments",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug output (show detailed logging)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
    ),
) -> None:
    """Inspect and edit YAML configuration files without losing comments."""
    if version:
        console.print(f"albatross {__version__}")
        raise typer.Exit(code=EXIT_SUCCESS)

    if verbose and quiet:
        _warning("Both --verbose and --quiet specified, --verbose takes precedence")
    _setup_logging(verbose, quiet)

    # .env must be loaded before ALBATROSS_* variables are read
    load_env_file()

    if ctx.invoked_subcommand is None:
        # Show help when no subcommand is provided
        raise typer.Exit()


def _resolve_file(file: str) -> Path:
    """Resolve a file argument against ALBATROSS_DATA_DIR (or the cwd)."""
    path = Path(file).expanduser()
    if path.is_absolute():
        return path
    return get_data_dir() / path


def _open_store(file: str, must_exist: bool = True) -> ConfigurationStore:
    """Load the configuration file named on the command line.

    Raises:
        typer.Exit: If the file is missing (when must_exist) or cannot be loaded.

    """
    path = _resolve_file(file)
    if must_exist and not path.is_file():
        _error(f"Config file not found: {path}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        store = ConfigurationStore(path.parent, path.name, get_namespace())
        store.load()
    except ValueError as e:
        _error(f"Invalid configuration settings: {escape(str(e))}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    except ConfigError as e:
        _error(escape(str(e)))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    logger.debug("Loaded %s (%d comments)", store.path, store.comment_count)
    return store


def _parse_value(value: str, as_string: bool) -> object:
    """Interpret a command-line value as YAML, unless as_string is set."""
    if as_string:
        return value
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        return value
    return value if parsed is None else parsed


def _render(value: object) -> str:
    """Render a looked-up value for the console."""
    if isinstance(value, ConfigurationSection):
        value = value.as_dict()
    if isinstance(value, (dict, list)):
        return yaml.safe_dump(value, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip("\n")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@app.command()
def show(
    file: str = typer.Argument(..., help="Configuration file (relative to ALBATROSS_DATA_DIR)"),
) -> None:
    """Print a configuration file as it would be written back, comments included."""
    store = _open_store(file)
    console.print(store.save_to_string(), markup=False, highlight=False, soft_wrap=True, end="")


@app.command()
def get(
    file: str = typer.Argument(..., help="Configuration file (relative to ALBATROSS_DATA_DIR)"),
    key: str = typer.Argument(..., help="Dot-notation key (e.g., server.port)"),
) -> None:
    """Print the value stored at KEY."""
    store = _open_store(file)
    try:
        found = store.contains(key)
    except ValueError as e:
        _error(escape(str(e)))
        raise typer.Exit(code=EXIT_ERROR) from None
    if not found:
        _error(f"Key '{key}' not found in {store.path}")
        raise typer.Exit(code=EXIT_ERROR)

    console.print(_render(store.get(key)), markup=False, highlight=False, soft_wrap=True)


@app.command("set")
def set_value(
    file: str = typer.Argument(..., help="Configuration file (created if missing)"),
    key: str = typer.Argument(..., help="Dot-notation key (e.g., server.port)"),
    value: str = typer.Argument(..., help="New value, parsed as YAML (e.g., 8080, true)"),
    comment: list[str] | None = typer.Option(
        None,
        "--comment",
        "-c",
        help="Comment line to place above the key (repeatable)",
    ),
    as_string: bool = typer.Option(
        False,
        "--string",
        "-s",
        help="Store VALUE as a string instead of parsing it as YAML",
    ),
    backup: bool = typer.Option(
        False,
        "--backup",
        "-b",
        help="Back up the file to <file>.bak before writing",
    ),
) -> None:
    """Set KEY to VALUE and save the file, keeping existing comments."""
    store = _open_store(file, must_exist=False)

    try:
        if backup and store.backup_configuration():
            _info(f"Backed up to {store.file_manager.backup_path}")
        store.set(key, _parse_value(value, as_string), *(comment or []))
        store.save()
    except ValueError as e:
        _error(escape(str(e)))
        raise typer.Exit(code=EXIT_ERROR) from None
    except ConfigError as e:
        _error(escape(str(e)))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    _success(f"Set {key} in {store.path}")


@app.command("backup")
def backup_file(
    file: str = typer.Argument(..., help="Configuration file (relative to ALBATROSS_DATA_DIR)"),
) -> None:
    """Copy FILE to FILE.bak if it changed since the last backup."""
    path = _resolve_file(file)
    if not path.is_file():
        _error(f"Config file not found: {path}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        store = ConfigurationStore(path.parent, path.name, get_namespace())
        written = store.backup_configuration()
    except ConfigError as e:
        _error(escape(str(e)))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    if written:
        _success(f"Backed up {path} to {store.file_manager.backup_path}")
    else:
        _info(f"Backup is up to date: {store.file_manager.backup_path}")


@app.command()
def translate(
    key: str = typer.Argument(..., help="Dot-notation key in the language files"),
    locale: str = typer.Option(
        ...,
        "--locale",
        "-l",
        help="Client locale tag (e.g., en_us, de-DE)",
    ),
    lang_dir: str = typer.Option(
        ...,
        "--lang-dir",
        "-d",
        help="Directory holding lang-<code>.yml files",
    ),
    fallback: str = typer.Option(
        "eng",
        "--fallback",
        "-f",
        help="ISO 639-3 code of the fallback language",
    ),
) -> None:
    """Print the localized string for KEY, falling back to the default language."""
    try:
        manager = LanguageManager(
            fallback,
            Path(lang_dir).expanduser(),
            get_namespace(),
            resource_package=RESOURCE_PACKAGE,
        )
    except ValueError as e:
        _error(escape(str(e)))
        raise typer.Exit(code=EXIT_ERROR) from None

    logger.debug("Locale %s resolves to language %s", locale, manager.language_code_for(locale))
    console.print(manager.get_localized_string(key, locale), markup=False, highlight=False)


@app.command("check-update")
def check_update(
    resource_id: int = typer.Option(
        ...,
        "--resource-id",
        help="Resource identifier on the update service",
    ),
    resource_url: str = typer.Option(
        ...,
        "--resource-url",
        help="Download page shown when an update is available",
    ),
    current_version: str = typer.Option(
        ...,
        "--current-version",
        help="Version currently installed",
    ),
    api_url: str = typer.Option(
        DEFAULT_UPDATE_API_URL,
        "--api-url",
        help="Version endpoint; {resource_id} is substituted",
    ),
) -> None:
    """Check whether a newer version of a resource is published."""
    checker = UpdateChecker(resource_url, resource_id, current_version, api_url=api_url)
    result = checker.check()
    if result is None:
        _error("Unable to check for updates")
        raise typer.Exit(code=EXIT_ERROR)

    if result.update_available:
        _warning(
            f"Update available: {result.latest_version} (installed {result.current_version}). "
            f"Download it at {result.download_url}"
        )
    else:
        _success(f"Running the latest version ({result.current_version})")
