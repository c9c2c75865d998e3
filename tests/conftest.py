"""Pytest configuration and fixtures for albatross tests."""

import os
from pathlib import Path

import pytest

from albatross.core.constants import ENV_DATA_DIR, ENV_NAMESPACE


@pytest.fixture(autouse=True)
def clean_albatross_env(monkeypatch: pytest.MonkeyPatch):
    """Keep ALBATROSS_* variables out of tests.

    Variables set by a test (for example through load_dotenv) are removed
    afterwards; monkeypatch then restores any value from the outer shell.
    """
    monkeypatch.delenv(ENV_DATA_DIR, raising=False)
    monkeypatch.delenv(ENV_NAMESPACE, raising=False)
    yield
    for name in (ENV_DATA_DIR, ENV_NAMESPACE):
        os.environ.pop(name, None)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory configuration files are created in."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def write_config(data_dir: Path):
    """Write a file under data_dir and return its path.

    Usage:
        def test_something(write_config):
            path = write_config("config.yml", "# Title\\nname: old\\n")
    """

    def _write(name: str, content: str) -> Path:
        path = data_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
