"""In-memory YAML document with dotted-path access."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

FILE_VERSION_KEY = "file-version"

_MISSING = object()

KeyPath = str | tuple[Any, ...]


class ConfigDocument:
    """Key-ordered tree parsed from a YAML configuration file.

    Nested mappings are addressed with dotted paths (``"defaults.amount"``) or,
    where keys are not strings (YAML reads ``10:`` as an int and ``on:`` as a
    bool), with a tuple of the keys themselves (``("levels", 10)``).
    A document is a snapshot: once the file it came from is rewritten it is
    stale and the file must be loaded again.
    """

    def __init__(self, data: dict[Any, Any] | None = None, path: Path | None = None):
        self.data: dict[Any, Any] = data if data is not None else {}
        self.path = path

    @classmethod
    def load(cls, path: Path) -> "ConfigDocument":
        """Parse a YAML file into a document.

        Empty files and files whose root is not a mapping yield an empty document.
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            data = {}
        return cls(data, path)

    def save(self, path: Path | None = None) -> None:
        """Write the document back to disk, keeping key order."""
        target = path or self.path
        if target is None:
            raise ValueError("No path to save document to")
        with open(target, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                self.data, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    def get(self, key: KeyPath, default: Any = None) -> Any:
        node: Any = self.data
        for part in _parts(key):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_int(self, key: KeyPath, default: int = 0) -> int:
        """Read an integer value, falling back to ``default`` for missing or non-int values."""
        value = self.get(key, _MISSING)
        # bool is an int subclass; `file-version: true` is not a version
        if isinstance(value, bool) or value is _MISSING:
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return default
        return default

    def contains(self, key: KeyPath) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def set(self, key: KeyPath, value: Any) -> None:
        """Set a value, creating intermediate mappings as needed."""
        parts = _parts(key)
        node = self.data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def leaf_keys(self) -> Iterator[tuple[Any, ...]]:
        """Yield the key tuple of every non-mapping value, in document order.

        Empty mappings are reported as leaves so they can be copied as values.
        """
        yield from _walk(self.data, ())

    def leaf_paths(self) -> Iterator[str]:
        """Yield the dotted path of every non-mapping value, in document order."""
        for keys in self.leaf_keys():
            yield format_key_path(keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigDocument):
            return NotImplemented
        return self.data == other.data

    def __repr__(self) -> str:
        return f"ConfigDocument(path={self.path!r}, keys={list(self.data)!r})"


def _parts(key: KeyPath) -> tuple[Any, ...]:
    if isinstance(key, tuple):
        return key
    return tuple(key.split("."))


def _walk(node: dict[Any, Any], prefix: tuple[Any, ...]) -> Iterator[tuple[Any, ...]]:
    for key, value in node.items():
        path = (*prefix, key)
        if isinstance(value, dict) and value:
            yield from _walk(value, path)
        else:
            yield path


def format_key_path(keys: tuple[Any, ...]) -> str:
    """Render a key tuple as a dotted path for log output."""
    return ".".join(str(key) for key in keys)


def read_file_version(document: ConfigDocument) -> int:
    """Return the schema version declared by a document; absent means 0."""
    return max(document.get_int(FILE_VERSION_KEY, 0), 0)
