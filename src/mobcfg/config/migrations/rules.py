"""In-place migration of the rules file.

Rules files from version 2 onward describe their own structure well enough to
be upgraded where they stand, one version step at a time, instead of being
regenerated from the packaged defaults.
"""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import structlog

from mobcfg.config.document import FILE_VERSION_KEY, ConfigDocument, read_file_version
from mobcfg.config.models import RULES_FILE_VERSION

FINE_TUNING_RENAMES = {
    "maxHealth": "max-health",
    "attackDamage": "attack-damage",
    "itemDrop": "item-drop",
    "xpDrop": "xp-drop",
    "movementSpeed": "movement-speed",
    "rangedAttackDamage": "ranged-attack-damage",
}

# Oldest version with an in-place upgrade step
FIRST_STEPPED_VERSION = 2


def iter_rules(document: ConfigDocument) -> Iterator[dict[str, Any]]:
    """Yield every rule mapping: the default rule, presets and custom rules."""
    default_rule = document.get("default-rule")
    if isinstance(default_rule, dict):
        yield default_rule

    presets = document.get("presets")
    if isinstance(presets, dict):
        yield from (preset for preset in presets.values() if isinstance(preset, dict))

    custom_rules = document.get("custom-rules")
    if isinstance(custom_rules, list):
        yield from (rule for rule in custom_rules if isinstance(rule, dict))


def _rename_keys(mapping: dict[str, Any], renames: dict[str, str]) -> int:
    renamed = 0
    for old_key, new_key in renames.items():
        if old_key in mapping and new_key not in mapping:
            # rebuild to keep the key in its original position
            items = [(new_key if k == old_key else k, v) for k, v in mapping.items()]
            mapping.clear()
            mapping.update(items)
            renamed += 1
    return renamed


def _apply_settings(rule: dict[str, Any]) -> dict[str, Any] | None:
    settings = rule.get("apply-settings")
    return settings if isinstance(settings, dict) else None


def upgrade_v2_to_v3(document: ConfigDocument) -> int:
    """Rename camelCase fine-tuning attributes to kebab-case."""
    changed = 0
    for rule in iter_rules(document):
        settings = _apply_settings(rule)
        fine_tuning = settings.get("fine-tuning") if settings else None
        if not isinstance(fine_tuning, dict):
            continue
        changed += _rename_keys(fine_tuning, FINE_TUNING_RENAMES)
        # per-entity overrides nest the same attributes one level down
        for entity_values in fine_tuning.values():
            if isinstance(entity_values, dict):
                changed += _rename_keys(entity_values, FINE_TUNING_RENAMES)
    return changed


def upgrade_v3_to_v4(document: ConfigDocument) -> int:
    """Rename creature-death-nametag to death-messages."""
    changed = 0
    for rule in iter_rules(document):
        settings = _apply_settings(rule)
        if settings:
            changed += _rename_keys(settings, {"creature-death-nametag": "death-messages"})
    return changed


# from-version -> step upgrading to from-version + 1
UPGRADE_STEPS: dict[int, Callable[[ConfigDocument], int]] = {
    2: upgrade_v2_to_v3,
    3: upgrade_v3_to_v4,
}


def migrate_rules(
    path: Path,
    target_version: int = RULES_FILE_VERSION,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> int:
    """Upgrade the rules file at ``path`` to ``target_version`` in place.

    Returns:
        The version the file was migrated from
    """
    logger = logger or structlog.get_logger(__name__)
    document = ConfigDocument.load(path)
    from_version = read_file_version(document)
    if from_version >= target_version:
        return from_version

    if from_version < FIRST_STEPPED_VERSION:
        logger.warning(
            "File Loader: (Migration) %s is at v%d, older than any in-place rules upgrade; "
            "only upgrades from v%d onward are applied",
            path.name,
            from_version,
            FIRST_STEPPED_VERSION,
        )

    for version in range(max(from_version, FIRST_STEPPED_VERSION), target_version):
        step = UPGRADE_STEPS.get(version)
        if step is None:
            continue
        changed = step(document)
        logger.info(
            "File Loader: (Migration) %s v%d -> v%d, %d change(s)",
            path.name,
            version,
            version + 1,
            changed,
        )

    document.set(FILE_VERSION_KEY, target_version)
    document.save(path)
    return from_version
