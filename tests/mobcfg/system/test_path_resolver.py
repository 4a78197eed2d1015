"""Tests for PathResolver."""

import os
from pathlib import Path

from mobcfg.config.models import LoggingConfig
from mobcfg.system.path_resolver import PACKAGED_DEFAULTS_DIR, PathResolver


def test_defaults_without_environment(mocker):
    mocker.patch.dict(os.environ, {}, clear=True)
    resolver = PathResolver()

    assert resolver.get_data_dir() == Path("plugins/LevelledMobs")
    assert resolver.get_defaults_dir() == PACKAGED_DEFAULTS_DIR


def test_environment_overrides(mocker, tmp_path):
    mocker.patch.dict(
        os.environ,
        {"MOBCFG_DATA": str(tmp_path / "data"), "MOBCFG_DEFAULTS": str(tmp_path / "defaults")},
    )
    resolver = PathResolver()

    assert resolver.get_data_dir() == tmp_path / "data"
    assert resolver.get_defaults_dir() == tmp_path / "defaults"


def test_packaged_defaults_ship_every_file():
    names = sorted(p.name for p in PACKAGED_DEFAULTS_DIR.glob("*.yml"))
    assert names == ["customdrops.yml", "messages.yml", "rules.yml", "settings.yml"]


def test_get_loader_settings(path_resolver, data_dir, defaults_dir):
    settings = path_resolver.get_loader_settings(LoggingConfig(level="WARNING"))

    assert settings.data_dir == data_dir
    assert settings.defaults_dir == defaults_dir
    assert settings.extension == ".yml"
    assert settings.logging.level == "WARNING"


def test_packaged_defaults_declare_compatible_versions():
    """Should ship defaults at exactly the versions this build expects."""
    from mobcfg.config import COMPATIBLE_VERSIONS
    from mobcfg.config.document import ConfigDocument, read_file_version

    for name, version in COMPATIBLE_VERSIONS.items():
        document = ConfigDocument.load(PACKAGED_DEFAULTS_DIR / f"{name}.yml")
        assert read_file_version(document) == version, name
