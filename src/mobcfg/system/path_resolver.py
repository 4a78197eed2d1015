import os
from pathlib import Path

from mobcfg.config.models import LoaderSettings, LoggingConfig

PACKAGED_DEFAULTS_DIR = Path(__file__).resolve().parent.parent / "defaults"


class PathResolver:
    """Central authority for config file path resolution.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.data_dir = Path(os.getenv("MOBCFG_DATA", "plugins/LevelledMobs"))
        self.defaults_dir = Path(os.getenv("MOBCFG_DEFAULTS", str(PACKAGED_DEFAULTS_DIR)))

    def get_data_dir(self) -> Path:
        """Get the directory holding the live config files."""
        return self.data_dir

    def get_defaults_dir(self) -> Path:
        """Get the directory holding the packaged default config files."""
        return self.defaults_dir

    def get_loader_settings(self, logging_config: LoggingConfig | None = None) -> LoaderSettings:
        """Build loader settings from the resolved directories."""
        return LoaderSettings(
            data_dir=self.get_data_dir(),
            defaults_dir=self.get_defaults_dir(),
            logging=logging_config or LoggingConfig(),
        )
