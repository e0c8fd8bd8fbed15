"""Configuration module for dashkit.

Validated settings loaded from defaults, ``DASHKIT_*`` environment variables
and explicit overrides.
"""

from dashkit.config.settings import (
    ENV_PREFIX,
    DashboardSettings,
    load_settings,
)

__all__ = [
    "ENV_PREFIX",
    "DashboardSettings",
    "load_settings",
]
