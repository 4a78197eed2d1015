"""Generic key-by-key value migration."""

from pathlib import Path

import structlog

from mobcfg.config.document import FILE_VERSION_KEY, ConfigDocument, format_key_path


def copy_matching_values(
    old: ConfigDocument,
    new: ConfigDocument,
    logger: structlog.stdlib.BoundLogger,
    prefix: str = "",
) -> int:
    """Copy every old leaf value whose key path the new document also has.

    Keys are matched as YAML parsed them, so int and bool keys match their
    own kind. Only paths under the dotted ``prefix`` are considered. Paths
    unknown to the new document, and old values sitting where the new
    document has a mapping, are dropped. The version marker is never copied.

    Returns:
        Number of values copied
    """
    scope = tuple(prefix.rstrip(".").split(".")) if prefix else ()
    copied = 0
    for keys in old.leaf_keys():
        if keys == (FILE_VERSION_KEY,) or keys[: len(scope)] != scope:
            continue
        if not new.contains(keys):
            logger.debug("Dropping unknown key %s", format_key_path(keys))
            continue
        current = new.get(keys)
        if isinstance(current, dict) and current:
            logger.debug(
                "Dropping %s: value no longer fits the new structure", format_key_path(keys)
            )
            continue
        new.set(keys, old.get(keys))
        copied += 1
    return copied


def copy_yml_values(
    old_path: Path,
    new_path: Path,
    old_version: int,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> None:
    """Carry values from the backed-up file into the freshly defaulted file."""
    logger = logger or structlog.get_logger(__name__)
    old = ConfigDocument.load(old_path)
    new = ConfigDocument.load(new_path)

    copied = copy_matching_values(old, new, logger)
    new.save(new_path)
    logger.info(
        "File Loader: (Migration) copied %d value(s) from v%d of %s",
        copied,
        old_version,
        new_path.name,
    )
