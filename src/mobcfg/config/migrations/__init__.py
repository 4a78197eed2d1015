"""Value migration strategies.

Each file kind has one strategy:
- generic: copy matching keys from the backup into the regenerated defaults
- custom drops: carry drop lists and drop tables, normalizing item fields
- rules: upgrade the live rules file in place, one version step at a time
"""

from .custom_drops import copy_custom_drops
from .generic import copy_yml_values
from .registry import MIGRATIONS, migrate
from .rules import migrate_rules

__all__ = [
    "MIGRATIONS",
    "copy_custom_drops",
    "copy_yml_values",
    "migrate",
    "migrate_rules",
]
