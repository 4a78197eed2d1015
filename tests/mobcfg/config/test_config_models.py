"""Tests for config models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from mobcfg.config.models import (
    COMPATIBLE_VERSIONS,
    FileDescriptor,
    FileKind,
    LoaderSettings,
    LoggingConfig,
)


@pytest.mark.parametrize(
    "name,kind",
    [
        ("customdrops", FileKind.CUSTOM_DROPS),
        ("rules", FileKind.RULES),
        ("settings", FileKind.GENERIC),
        ("messages", FileKind.GENERIC),
        ("Rules", FileKind.GENERIC),
        ("rules.yml", FileKind.GENERIC),
    ],
)
def test_file_kind_from_name(name, kind):
    """Should only match the exact logical names."""
    assert FileKind.from_name(name) is kind


def test_descriptor_backup_path():
    descriptor = FileDescriptor(
        name="messages", path=Path("/data/messages.yml"), kind=FileKind.GENERIC
    )
    assert descriptor.file_name == "messages.yml"
    assert descriptor.backup_path(7) == Path("/data/messages.yml.v7.old")


def test_compatible_versions_load_order():
    assert list(COMPATIBLE_VERSIONS) == ["settings", "messages", "customdrops", "rules"]
    assert COMPATIBLE_VERSIONS["rules"] == 4


class TestLoggingConfig:
    def test_level_normalised(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level_rejected(self):
        with pytest.raises(ValidationError, match="Invalid log level"):
            LoggingConfig(level="chatty")


class TestLoaderSettings:
    def test_extension_gets_leading_dot(self, tmp_path):
        settings = LoaderSettings(data_dir=tmp_path, defaults_dir=tmp_path, extension="yaml")
        assert settings.extension == ".yaml"

    def test_empty_extension_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            LoaderSettings(data_dir=tmp_path, defaults_dir=tmp_path, extension="")

    def test_custom_extension_used_by_loader(self, tmp_path, defaults_dir):
        """Should resolve live files with the configured extension."""
        from mobcfg.config import ConfigLoader

        settings = LoaderSettings(data_dir=tmp_path, defaults_dir=defaults_dir, extension=".yaml")
        assert ConfigLoader(settings).describe("rules").path == tmp_path / "rules.yaml"
