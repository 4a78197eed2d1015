"""Tests for BackupManager."""

import pytest
from structlog.testing import capture_logs

from mobcfg.config.backup import BackupManager
from mobcfg.config.models import FileDescriptor, FileKind


@pytest.fixture
def descriptor(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_bytes(b"# comment kept\r\nfile-version: 30\r\nnametag:\r\n  placeholder: x\r\n")
    return FileDescriptor(name="settings", path=path, kind=FileKind.GENERIC)


def test_backup_is_byte_identical(descriptor):
    """Should copy the file exactly, comments and line endings included."""
    backup_path = BackupManager().backup(descriptor, 30)

    assert backup_path == descriptor.path.parent / "settings.yml.v30.old"
    assert backup_path.read_bytes() == descriptor.path.read_bytes()


def test_backup_logs_file_names(descriptor):
    with capture_logs() as logs:
        BackupManager().backup(descriptor, 30)

    assert logs[0]["event"] == (
        "File Loader: (Migration) settings.yml backed up to settings.yml.v30.old"
    )


def test_backup_of_missing_file_raises(tmp_path):
    """Should propagate copy failures."""
    descriptor = FileDescriptor(
        name="settings", path=tmp_path / "settings.yml", kind=FileKind.GENERIC
    )
    with pytest.raises(FileNotFoundError):
        BackupManager().backup(descriptor, 1)
