"""Plugin configuration package.

This package provides versioned config file loading with:
- YAML syntax validation with operator-facing diagnostics
- File version tracking against the versions this build expects
- Backup, regeneration and value migration of outdated files
"""

from .document import ConfigDocument
from .loader import ConfigLoader, check_file_version, get_file_load_error_message
from .models import (
    COMPATIBLE_VERSIONS,
    CUSTOMDROPS_FILE_VERSION,
    MESSAGES_FILE_VERSION,
    RULES_FILE_VERSION,
    SETTINGS_FILE_VERSION,
    FileKind,
)

__all__ = [
    "COMPATIBLE_VERSIONS",
    "CUSTOMDROPS_FILE_VERSION",
    "MESSAGES_FILE_VERSION",
    "RULES_FILE_VERSION",
    "SETTINGS_FILE_VERSION",
    "ConfigDocument",
    "ConfigLoader",
    "FileKind",
    "check_file_version",
    "get_file_load_error_message",
]
