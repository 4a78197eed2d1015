"""Versioned YAML config loading and migration for the LevelledMobs plugin."""

__version__ = "3.13.0"
