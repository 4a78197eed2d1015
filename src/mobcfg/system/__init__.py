"""System domain package.

This package contains filesystem-facing components:
- PathResolver: Data and packaged-defaults directory resolution
- DefaultResourceProvider: Writes packaged default config files
"""

from mobcfg.system.path_resolver import PathResolver
from mobcfg.system.resource_provider import DefaultResourceProvider

__all__ = [
    "DefaultResourceProvider",
    "PathResolver",
]
