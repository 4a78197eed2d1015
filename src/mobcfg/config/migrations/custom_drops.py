"""Migration of the custom drops file.

The custom drops file is mostly user data: each root key is a mob type (or
``universal``) holding a list of drop items, ``drop-table`` holds named lists
shared between mobs, and ``defaults`` holds the values items inherit. A drop
item is a bare material name, a single-key mapping of material name to item
fields, or a reference to a drop table::

    ZOMBIE:
      - DIAMOND
      - IRON_SWORD:
          chance: 0.25
          minlevel: 10
      - usedroptable: rare-loot
"""

from pathlib import Path
from typing import Any

import structlog

from mobcfg.config.document import FILE_VERSION_KEY, ConfigDocument
from mobcfg.config.migrations.generic import copy_matching_values

DEFAULTS_KEY = "defaults"
DROP_TABLE_KEY = "drop-table"
USE_DROP_TABLE_KEY = "usedroptable"

# (files older than this version, old field name, new field name)
ITEM_FIELD_RENAMES: list[tuple[int, str, str]] = [
    (8, "minLevel", "minlevel"),
    (8, "maxLevel", "maxlevel"),
    (10, "groupid", "group-id"),
]


def _rename_fields(fields: dict[str, Any], old_version: int) -> dict[str, Any]:
    renames = {
        old_name: new_name
        for before_version, old_name, new_name in ITEM_FIELD_RENAMES
        if old_version < before_version
    }
    renamed: dict[str, Any] = {}
    for key, value in fields.items():
        new_key = renames.get(key, key)
        # an explicit new-style field wins over its legacy spelling
        if new_key != key and new_key in fields:
            continue
        renamed[new_key] = value
    return renamed


def migrate_drop_item(item: Any, old_version: int) -> Any | None:
    """Normalize one drop item, returning None when it cannot be carried over."""
    if isinstance(item, str):
        return item if item.strip() else None
    if not isinstance(item, dict) or len(item) != 1:
        return None

    material, fields = next(iter(item.items()))
    if not isinstance(material, str) or not material.strip():
        return None
    if material == USE_DROP_TABLE_KEY:
        return item if isinstance(fields, str) and fields.strip() else None
    if fields is None:
        return {material: None}
    if not isinstance(fields, dict):
        return None
    return {material: _rename_fields(fields, old_version)}


def migrate_drop_list(
    items: Any, old_version: int, logger: structlog.stdlib.BoundLogger, where: str
) -> list[Any] | None:
    """Normalize a list of drop items; a non-list yields None."""
    if not isinstance(items, list):
        logger.debug("Dropping %s: expected a list of drops", where)
        return None

    migrated = []
    for index, item in enumerate(items):
        result = migrate_drop_item(item, old_version)
        if result is None:
            logger.debug("Dropping item %d of %s: unrecognised drop format", index, where)
            continue
        migrated.append(result)
    return migrated


def copy_custom_drops(
    old_path: Path,
    new_path: Path,
    old_version: int,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> None:
    """Carry custom drops from the backed-up file into the freshly defaulted file."""
    logger = logger or structlog.get_logger(__name__)
    old = ConfigDocument.load(old_path)
    new = ConfigDocument.load(new_path)

    copy_matching_values(old, new, logger, prefix=f"{DEFAULTS_KEY}.")

    carried = 0
    for key, value in old.data.items():
        if key in (FILE_VERSION_KEY, DEFAULTS_KEY):
            continue

        if key == DROP_TABLE_KEY:
            if not isinstance(value, dict):
                logger.debug("Dropping %s: expected a mapping of drop tables", key)
                continue
            tables = {}
            for table_name, items in value.items():
                drops = migrate_drop_list(items, old_version, logger, f"{key}.{table_name}")
                if drops is not None:
                    tables[table_name] = drops
            new.data[key] = tables
            carried += len(tables)
            continue

        drops = migrate_drop_list(value, old_version, logger, key)
        if drops is not None:
            new.data[key] = drops
            carried += 1

    new.save(new_path)
    logger.info(
        "File Loader: (Migration) carried %d drop entr(ies) from v%d of %s",
        carried,
        old_version,
        new_path.name,
    )
