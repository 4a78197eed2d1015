"""Config file loading with version checks and migration."""

from pathlib import Path

import structlog
import yaml

from mobcfg.config.backup import BackupManager
from mobcfg.config.document import ConfigDocument, read_file_version
from mobcfg.config.exceptions import ConfigSyntaxError
from mobcfg.config.migrations import migrate
from mobcfg.config.models import (
    COMPATIBLE_VERSIONS,
    FileDescriptor,
    FileKind,
    LoaderSettings,
)
from mobcfg.system.resource_provider import DefaultResourceProvider

# Rules files stopped needing the backup/regenerate flow at this version
RULES_IN_PLACE_VERSION = 2

SYNTAX_ERROR_MESSAGE = """\
LevelledMobs was unable to read file {file_name} due to a user-caused YAML syntax error.
Copy the contents of your file into a YAML Parser website, such as < https://tinyurl.com/yamlp > \
to help locate the line of the mistake.
Failure to resolve this issue will cause LevelledMobs to function improperly, or likely not at all.
Below represents where LevelledMobs became confused while attempting to read your file:
---- START ERROR ----
{parser_message}
---- END ERROR ----
If an attempt to solve this error has come to no avail, you are welcome to ask for assistance \
in the ArcanePlugins Discord Guild.
https://discord.io/arcaneplugins"""


def get_file_load_error_message(file_name: str = "rules.yml") -> str:
    """Short message for a command sender when a file failed to parse."""
    return (
        f"An error occurred whilst attempting to parse the file {file_name} due to a "
        "user-caused YAML syntax error. Please see the console logs for more details."
    )


def needs_migration(kind: FileKind, file_version: int, compatible_version: int) -> bool:
    """Whether a file must go through the backup/regenerate/migrate flow."""
    if kind is FileKind.RULES and file_version >= RULES_IN_PLACE_VERSION:
        return False
    return file_version < compatible_version


def check_file_version(
    file_name: str,
    compatible_version: int,
    installed_version: int,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> None:
    """Log a warning when the installed file version differs from the compatible one."""
    if installed_version == compatible_version:
        return

    logger = logger or structlog.get_logger(__name__)
    what = (
        "outdated"
        if installed_version < compatible_version
        else "ahead of the compatible version of this file for this version of the plugin"
    )
    logger.error(
        "File Loader: The version of %s you have installed is %s! Fix this as soon as "
        "possible, else the plugin will most likely malfunction.",
        file_name,
        what,
    )
    logger.error(
        "File Loader: (You have v%d installed but you are meant to be running v%d)",
        installed_version,
        compatible_version,
    )


class ConfigLoader:
    """Loads config files, migrating them forward when they are outdated."""

    def __init__(
        self,
        settings: LoaderSettings,
        resource_provider: DefaultResourceProvider | None = None,
        backup_manager: BackupManager | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ):
        """Initialize ConfigLoader.

        Args:
            settings: Data and defaults directories plus the file extension
            resource_provider: Supplies packaged defaults. Built from settings if None.
            backup_manager: Writes pre-migration backups. Created if None.
            logger: Logger for operator-facing diagnostics
        """
        self.settings = settings
        self.logger = logger or structlog.get_logger(__name__)
        self.resource_provider = resource_provider or DefaultResourceProvider(
            settings.defaults_dir, settings.data_dir, logger=self.logger
        )
        self.backup_manager = backup_manager or BackupManager(logger=self.logger)

    def describe(self, name: str) -> FileDescriptor:
        """Resolve the on-disk path and kind of a config file."""
        path = self.settings.data_dir / f"{name}{self.settings.extension}"
        return FileDescriptor(name=name, path=path, kind=FileKind.from_name(name))

    def load(self, name: str, compatible_version: int) -> ConfigDocument | None:
        """Load a config file, migrating it if it is older than ``compatible_version``.

        Args:
            name: Logical file name without extension (e.g. "settings")
            compatible_version: File version this build expects

        Returns:
            ConfigDocument: The loaded (possibly migrated) document, or None if the
            file has a YAML syntax error

        Raises:
            ValueError: If compatible_version is negative
            OSError: If the file, its default or its backup cannot be read or written
        """
        if compatible_version < 0:
            raise ValueError(f"compatible_version must be >= 0, got {compatible_version}")

        descriptor = self.describe(name)
        self.logger.info("File Loader: Loading file '%s'...", descriptor.file_name)

        self._ensure_exists(descriptor)

        try:
            self._validate_syntax(descriptor)
        except ConfigSyntaxError as e:
            self.logger.error(
                SYNTAX_ERROR_MESSAGE.format(file_name=e.file_name, parser_message=e.parser_message)
            )
            return None

        document = ConfigDocument.load(descriptor.path)
        file_version = read_file_version(document)

        if needs_migration(descriptor.kind, file_version, compatible_version):
            backup_path = self.backup_manager.backup(descriptor, file_version)
            if descriptor.kind is not FileKind.RULES:
                self.resource_provider.ensure(descriptor.file_name, force=True)
            self._migrate(descriptor, backup_path, file_version, compatible_version)
            return ConfigDocument.load(descriptor.path)

        if descriptor.kind is FileKind.RULES:
            if file_version < compatible_version:
                # rules from v2 onward are upgraded where they stand, no backup
                self._migrate(descriptor, None, file_version, compatible_version)
                return ConfigDocument.load(descriptor.path)
            return document

        check_file_version(descriptor.file_name, compatible_version, file_version, self.logger)
        return document

    def load_all(
        self, versions: dict[str, int] | None = None
    ) -> dict[str, ConfigDocument | None]:
        """Load every known config file in order, as a full plugin reload does.

        Args:
            versions: Mapping of logical name to compatible version

        Returns:
            dict: Logical name to loaded document (None for files with syntax errors)
        """
        versions = versions if versions is not None else COMPATIBLE_VERSIONS
        return {name: self.load(name, version) for name, version in versions.items()}

    def _ensure_exists(self, descriptor: FileDescriptor) -> None:
        if not descriptor.path.exists():
            self.logger.info(
                "File Loader: File '%s' doesn't exist, creating it now...", descriptor.file_name
            )
            self.resource_provider.ensure(descriptor.file_name, force=False)

    def _validate_syntax(self, descriptor: FileDescriptor) -> None:
        """Parse the whole file once, only to surface YAML syntax errors."""
        with open(descriptor.path, encoding="utf-8") as f:
            try:
                yaml.safe_load(f)
            except (yaml.YAMLError, UnicodeDecodeError) as e:
                raise ConfigSyntaxError(descriptor.file_name, str(e)) from e

    def _migrate(
        self,
        descriptor: FileDescriptor,
        backup_path: Path | None,
        file_version: int,
        compatible_version: int,
    ) -> None:
        self.logger.info(
            "File Loader: (Migration) Migrating %s from old version to new version.",
            descriptor.file_name,
        )
        migrate(descriptor, backup_path, file_version, compatible_version, self.logger)
