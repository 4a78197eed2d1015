"""Pre-migration backups of config files."""

import shutil
from pathlib import Path

import structlog

from mobcfg.config.models import FileDescriptor


class BackupManager:
    """Copies a live config file aside before it is overwritten."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self.logger = logger or structlog.get_logger(__name__)

    def backup(self, descriptor: FileDescriptor, file_version: int) -> Path:
        """Copy the file byte-for-byte to ``<file>.v<file_version>.old``.

        An existing backup for the same version is replaced. Copy failures
        propagate so no migration runs without a backup.

        Returns:
            Path of the backup file
        """
        backup_path = descriptor.backup_path(file_version)
        shutil.copyfile(descriptor.path, backup_path)
        self.logger.info(
            "File Loader: (Migration) %s backed up to %s", descriptor.file_name, backup_path.name
        )
        return backup_path
