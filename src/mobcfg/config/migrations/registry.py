"""Dispatch table mapping each file kind to its migration strategy."""

from collections.abc import Callable
from pathlib import Path

import structlog

from mobcfg.config.migrations.custom_drops import copy_custom_drops
from mobcfg.config.migrations.generic import copy_yml_values
from mobcfg.config.migrations.rules import migrate_rules
from mobcfg.config.models import FileDescriptor, FileKind


def _migrate_generic(
    descriptor: FileDescriptor,
    backup_path: Path,
    old_version: int,
    target_version: int,
    logger: structlog.stdlib.BoundLogger,
) -> None:
    copy_yml_values(backup_path, descriptor.path, old_version, logger=logger)


def _migrate_custom_drops(
    descriptor: FileDescriptor,
    backup_path: Path,
    old_version: int,
    target_version: int,
    logger: structlog.stdlib.BoundLogger,
) -> None:
    copy_custom_drops(backup_path, descriptor.path, old_version, logger=logger)


def _migrate_rules(
    descriptor: FileDescriptor,
    backup_path: Path | None,
    old_version: int,
    target_version: int,
    logger: structlog.stdlib.BoundLogger,
) -> None:
    # The live file is never overwritten for rules, so it is its own source
    migrate_rules(descriptor.path, target_version, logger=logger)


MigrationStrategy = Callable[[FileDescriptor, Path, int, int, structlog.stdlib.BoundLogger], None]

MIGRATIONS: dict[FileKind, MigrationStrategy] = {
    FileKind.GENERIC: _migrate_generic,
    FileKind.CUSTOM_DROPS: _migrate_custom_drops,
    FileKind.RULES: _migrate_rules,
}


def migrate(
    descriptor: FileDescriptor,
    backup_path: Path | None,
    old_version: int,
    target_version: int,
    logger: structlog.stdlib.BoundLogger,
) -> None:
    """Run the migration strategy registered for the descriptor's kind."""
    MIGRATIONS[descriptor.kind](descriptor, backup_path, old_version, target_version, logger)
