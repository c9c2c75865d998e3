"""Tests for FileManager: bootstrap, read/write and conditional backup."""

import logging
import os
import stat
from importlib.resources import files
from pathlib import Path

import pytest

from albatross.core.exceptions import ConfigIOError
from albatross.core.file_manager import FileManager


# =============================================================================
# Construction and paths
# =============================================================================


class TestPaths:
    """Tests for path resolution."""

    def test_path_joins_data_dir_and_name(self, data_dir: Path) -> None:
        """The file lives in the data directory."""
        manager = FileManager(data_dir, "config.yml")
        assert manager.path == data_dir / "config.yml"

    def test_leading_slash_is_relative(self, data_dir: Path) -> None:
        """A leading '/' in the name stays inside the data directory."""
        manager = FileManager(data_dir, "/lang/lang-eng.yml")
        assert manager.path == data_dir / "lang" / "lang-eng.yml"

    def test_backup_path_next_to_file(self, data_dir: Path) -> None:
        """Backups are <file>.bak in the same directory."""
        manager = FileManager(data_dir, "lang/lang-eng.yml")
        assert manager.backup_path == data_dir / "lang" / "lang-eng.yml.bak"

    @pytest.mark.parametrize("name", ["", "   ", "/", "lang/"])
    def test_invalid_file_name_raises(self, data_dir: Path, name: str) -> None:
        """Empty names and directory names are rejected."""
        with pytest.raises(ValueError):
            FileManager(data_dir, name)


# =============================================================================
# ensure_exists
# =============================================================================


class TestEnsureExists:
    """Tests for bootstrapping missing files."""

    def test_creates_empty_file_without_resource(self, data_dir: Path) -> None:
        """Without a resource package the new file is empty."""
        manager = FileManager(data_dir, "config.yml")
        assert manager.ensure_exists() is True
        assert manager.path.read_text() == ""

    def test_copies_bundled_default(self, data_dir: Path) -> None:
        """The bundled resource is copied verbatim."""
        manager = FileManager(data_dir, "config.yml", resource_package="albatross.resources")
        assert manager.ensure_exists() is True
        expected = files("albatross.resources").joinpath("config.yml").read_bytes()
        assert manager.path.read_bytes() == expected

    def test_resource_name_overrides_file_name(self, data_dir: Path) -> None:
        """A differently named resource can seed the file."""
        manager = FileManager(
            data_dir,
            "messages.yml",
            resource_name="lang-eng.yml",
            resource_package="albatross.resources",
        )
        manager.ensure_exists()
        assert "messages:" in manager.path.read_text()

    def test_missing_resource_creates_empty_file(self, data_dir: Path) -> None:
        """An absent resource yields an empty file."""
        manager = FileManager(data_dir, "other.yml", resource_package="albatross.resources")
        assert manager.ensure_exists() is True
        assert manager.path.read_text() == ""

    def test_missing_package_logs_warning(
        self, data_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An unknown package is logged and the file is created empty."""
        caplog.set_level(logging.WARNING, logger="albatross.core.file_manager")
        manager = FileManager(data_dir, "config.yml", resource_package="no_such_package_xyz")
        assert manager.ensure_exists() is True
        assert manager.path.read_text() == ""
        assert "unavailable" in caplog.text

    def test_existing_file_untouched(self, write_config) -> None:
        """An existing file is neither replaced nor modified."""
        path = write_config("config.yml", "name: mine\n")
        manager = FileManager(path.parent, "config.yml", resource_package="albatross.resources")
        assert manager.ensure_exists() is False
        assert path.read_text() == "name: mine\n"

    def test_creates_parent_directories(self, data_dir: Path) -> None:
        """Missing directories on the way are created."""
        manager = FileManager(data_dir / "nested", "lang/lang-eng.yml")
        manager.ensure_exists()
        assert manager.path.is_file()

    def test_logs_creation(self, data_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Creating a file is logged at INFO."""
        caplog.set_level(logging.INFO, logger="albatross.core.file_manager")
        FileManager(data_dir, "config.yml").ensure_exists()
        assert "Successfully created config.yml file." in caplog.text

    def test_uncreatable_directory_raises(self, tmp_path: Path) -> None:
        """A data directory blocked by a file raises ConfigIOError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        manager = FileManager(blocker, "config.yml")
        with pytest.raises(ConfigIOError):
            manager.ensure_exists()


# =============================================================================
# read_raw / write_raw
# =============================================================================


class TestReadWrite:
    """Tests for whole-file reads and atomic writes."""

    def test_write_then_read(self, data_dir: Path) -> None:
        """Written text is read back unchanged."""
        manager = FileManager(data_dir, "config.yml")
        manager.write_raw("# Größe\nk: v\n")
        assert manager.read_raw() == "# Größe\nk: v\n"

    def test_read_missing_raises(self, data_dir: Path) -> None:
        """Reading a missing file raises ConfigIOError."""
        with pytest.raises(ConfigIOError, match="not found"):
            FileManager(data_dir, "missing.yml").read_raw()

    def test_read_directory_raises(self, data_dir: Path) -> None:
        """A directory in place of the file raises ConfigIOError."""
        (data_dir / "config.yml").mkdir()
        with pytest.raises(ConfigIOError, match="directory"):
            FileManager(data_dir, "config.yml").read_raw()

    def test_read_invalid_utf8_raises(self, data_dir: Path) -> None:
        """Non-UTF-8 content raises ConfigIOError."""
        (data_dir / "config.yml").write_bytes(b"name: \xff\xfe\n")
        with pytest.raises(ConfigIOError, match="UTF-8"):
            FileManager(data_dir, "config.yml").read_raw()

    def test_error_carries_path(self, data_dir: Path) -> None:
        """ConfigIOError.path names the file."""
        with pytest.raises(ConfigIOError) as exc_info:
            FileManager(data_dir, "missing.yml").read_raw()
        assert exc_info.value.path == data_dir / "missing.yml"


# =============================================================================
# backup
# =============================================================================


class TestBackup:
    """Tests for the mtime-based backup rule."""

    def test_first_backup_copies(self, write_config) -> None:
        """With no backup yet, the file is copied."""
        path = write_config("config.yml", "k: v\n")
        manager = FileManager(path.parent, "config.yml")
        assert manager.backup() is True
        assert manager.backup_path.read_text() == "k: v\n"

    def test_second_backup_is_noop(self, write_config) -> None:
        """An unchanged file is not copied again."""
        path = write_config("config.yml", "k: v\n")
        manager = FileManager(path.parent, "config.yml")
        manager.backup()
        assert manager.backup() is False

    def test_newer_file_is_copied_again(self, write_config) -> None:
        """A file modified after the backup refreshes it."""
        path = write_config("config.yml", "k: v\n")
        manager = FileManager(path.parent, "config.yml")
        manager.backup()

        path.write_text("k: changed\n")
        mtime = manager.backup_path.stat().st_mtime + 10
        os.utime(path, (mtime, mtime))

        assert manager.backup() is True
        assert manager.backup_path.read_text() == "k: changed\n"

    def test_newer_backup_is_kept(self, write_config) -> None:
        """A backup newer than the file is not overwritten."""
        path = write_config("config.yml", "k: v\n")
        backup = write_config("config.yml.bak", "k: old\n")
        mtime = path.stat().st_mtime + 10
        os.utime(backup, (mtime, mtime))

        assert FileManager(path.parent, "config.yml").backup() is False
        assert backup.read_text() == "k: old\n"

    def test_missing_file_no_backup(self, data_dir: Path) -> None:
        """Nothing is backed up when the file does not exist."""
        manager = FileManager(data_dir, "config.yml")
        assert manager.backup() is False
        assert not manager.backup_path.exists()

    def test_backup_keeps_mtime(self, write_config) -> None:
        """The backup carries the primary file's modification time."""
        path = write_config("config.yml", "k: v\n")
        manager = FileManager(path.parent, "config.yml")
        manager.backup()
        assert manager.backup_path.stat().st_mtime == path.stat().st_mtime

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    @pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignores permissions")
    def test_unwritable_backup_raises(self, write_config) -> None:
        """A failed copy raises ConfigIOError."""
        path = write_config("config.yml", "k: v\n")
        path.parent.chmod(stat.S_IRUSR | stat.S_IXUSR)
        try:
            with pytest.raises(ConfigIOError):
                FileManager(path.parent, "config.yml").backup()
        finally:
            path.parent.chmod(stat.S_IRWXU)
