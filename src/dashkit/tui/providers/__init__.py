"""Provider contracts, the AppConfig registry and built-in providers."""

from .base import (
    BaseContentProvider,
    BaseHeaderProvider,
    BaseSidebarSection,
    ContentProvider,
    HeaderDataProvider,
    ItemStatus,
    RenderResult,
    SidebarItem,
    SidebarSection,
    StatusValue,
    format_status_value,
    truncate_label,
)
from .config import AppConfig
from .defaults import (
    Server,
    ServersSection,
    StaticContentProvider,
    StaticHeaderProvider,
    StatusSection,
)

__all__ = [
    "AppConfig",
    "BaseContentProvider",
    "BaseHeaderProvider",
    "BaseSidebarSection",
    "ContentProvider",
    "HeaderDataProvider",
    "ItemStatus",
    "RenderResult",
    "Server",
    "ServersSection",
    "SidebarItem",
    "SidebarSection",
    "StaticContentProvider",
    "StaticHeaderProvider",
    "StatusSection",
    "StatusValue",
    "format_status_value",
    "truncate_label",
]
