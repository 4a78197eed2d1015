"""Configuration models for the mobcfg loader.

Holds the compatible file versions shipped with this build, the file-kind
classification used to pick a migration strategy, and the pydantic settings
models for the loader and its logging.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

SETTINGS_FILE_VERSION = 35
MESSAGES_FILE_VERSION = 8
CUSTOMDROPS_FILE_VERSION = 10
RULES_FILE_VERSION = 4

# Load order used by a full reload
COMPATIBLE_VERSIONS: dict[str, int] = {
    "settings": SETTINGS_FILE_VERSION,
    "messages": MESSAGES_FILE_VERSION,
    "customdrops": CUSTOMDROPS_FILE_VERSION,
    "rules": RULES_FILE_VERSION,
}


class FileKind(Enum):
    """Which migration policy applies to a config file."""

    GENERIC = "generic"
    CUSTOM_DROPS = "customdrops"
    RULES = "rules"

    @classmethod
    def from_name(cls, name: str) -> "FileKind":
        """Classify a logical file name (no extension)."""
        if name == "customdrops":
            return cls.CUSTOM_DROPS
        if name == "rules":
            return cls.RULES
        return cls.GENERIC


@dataclass(frozen=True)
class FileDescriptor:
    """A config file resolved for a single load call."""

    name: str
    path: Path
    kind: FileKind

    @property
    def file_name(self) -> str:
        return self.path.name

    def backup_path(self, file_version: int) -> Path:
        """Path of the pre-migration backup for ``file_version``."""
        return self.path.with_name(f"{self.path.name}.v{file_version}.old")


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "mobcfg"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalise and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'")
        return level


class LoaderSettings(BaseModel):
    """Where config files live and how they are named."""

    data_dir: Path
    defaults_dir: Path
    extension: str = ".yml"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Ensure the extension starts with a dot."""
        if not v:
            raise ValueError("extension cannot be empty")
        return v if v.startswith(".") else f".{v}"
