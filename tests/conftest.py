from pathlib import Path

import pytest
import structlog
import yaml

from mobcfg.config import ConfigLoader
from mobcfg.config.models import LoaderSettings
from mobcfg.system.path_resolver import PACKAGED_DEFAULTS_DIR, PathResolver


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Writable directory standing in for the plugin's data folder."""
    path = tmp_path / "plugins" / "LevelledMobs"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def defaults_dir(tmp_path: Path) -> Path:
    """Copy of the packaged defaults that tests may rewrite freely."""
    path = tmp_path / "defaults"
    path.mkdir()
    for default_file in PACKAGED_DEFAULTS_DIR.glob("*.yml"):
        (path / default_file.name).write_bytes(default_file.read_bytes())
    return path


@pytest.fixture
def path_resolver(data_dir: Path, defaults_dir: Path) -> PathResolver:
    """Provide a PathResolver pointing at temporary directories."""
    resolver = PathResolver()
    resolver.data_dir = data_dir
    resolver.defaults_dir = defaults_dir
    return resolver


@pytest.fixture
def loader_settings(path_resolver: PathResolver) -> LoaderSettings:
    return path_resolver.get_loader_settings()


@pytest.fixture
def config_loader(loader_settings: LoaderSettings) -> ConfigLoader:
    """ConfigLoader with its own logger proxy, so capture_logs sees its output."""
    return ConfigLoader(loader_settings, logger=structlog.get_logger("tests.loader"))


@pytest.fixture
def write_yaml():
    """Write a mapping as YAML and return the path."""

    def _write(path: Path, data: dict) -> Path:
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        return path

    return _write
