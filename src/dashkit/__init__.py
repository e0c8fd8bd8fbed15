"""dashkit - pluggable terminal dashboards on Textual."""

__version__ = "0.3.0"

from dashkit.errors import ConfigurationError, DashkitError, ProviderError
from dashkit.tui import (
    AppConfig,
    DashboardApp,
    EventDispatcher,
    ItemStatus,
    SidebarItem,
    launch,
    new_app,
    tick,
)

__all__ = [
    "__version__",
    "AppConfig",
    "ConfigurationError",
    "DashboardApp",
    "DashkitError",
    "EventDispatcher",
    "ItemStatus",
    "ProviderError",
    "SidebarItem",
    "launch",
    "new_app",
    "tick",
]
