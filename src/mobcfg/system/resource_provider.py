"""Materializes packaged default config files into the data directory."""

import shutil
from pathlib import Path

import structlog


class DefaultResourceProvider:
    """Copies packaged default files into the live data directory."""

    def __init__(
        self,
        defaults_dir: Path,
        data_dir: Path,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.defaults_dir = defaults_dir
        self.data_dir = data_dir
        self.logger = logger or structlog.get_logger(__name__)

    def ensure(self, file_name: str, force: bool = False) -> Path:
        """Write the packaged default for ``file_name`` to the data directory.

        Args:
            file_name: Config file name including its extension
            force: Overwrite the live file if it already exists

        Returns:
            Path of the live file

        Raises:
            FileNotFoundError: If no packaged default exists for ``file_name``
        """
        target = self.data_dir / file_name
        if target.exists() and not force:
            return target

        source = self.defaults_dir / file_name
        if not source.is_file():
            raise FileNotFoundError(f"No packaged default for {file_name} in {self.defaults_dir}")

        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        self.logger.debug("Wrote packaged default %s (force=%s)", file_name, force)
        return target
