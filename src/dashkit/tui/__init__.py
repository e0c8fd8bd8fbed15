"""dashkit TUI - pluggable terminal dashboard framework.

A host supplies a content provider, a header-data provider and any number
of sidebar sections; dashkit owns the layout, the responsive compact mode,
styling and the event loop that keeps everything current.

Features:
- Right-aligned sidebar of provider-rendered sections
- Compact mode below configurable width/height breakpoints
- Tick scheduling driven by provider follow-up requests
- Faulty providers degrade to empty regions instead of crashing
"""

from .app import DashboardApp, FrameView, launch, new_app
from .components.core import Frame, LayoutMode, Region, RegionGeometry
from .controllers import EventDispatcher, RefreshScheduler
from .providers import (
    AppConfig,
    BaseContentProvider,
    BaseHeaderProvider,
    BaseSidebarSection,
    ContentProvider,
    HeaderDataProvider,
    ItemStatus,
    ServersSection,
    SidebarItem,
    SidebarSection,
    StaticContentProvider,
    StaticHeaderProvider,
    StatusSection,
    truncate_label,
)
from .state import DashboardEvent, Key, Mouse, Resize, Tick, TickRequest, tick
from .styles import DashboardTheme, get_theme, set_theme

__all__ = [
    # Host entry points
    "DashboardApp",
    "FrameView",
    "new_app",
    "launch",
    # Engine
    "EventDispatcher",
    "RefreshScheduler",
    "Frame",
    "LayoutMode",
    "Region",
    "RegionGeometry",
    # Provider contracts
    "AppConfig",
    "ContentProvider",
    "HeaderDataProvider",
    "SidebarSection",
    "BaseContentProvider",
    "BaseHeaderProvider",
    "BaseSidebarSection",
    "SidebarItem",
    "ItemStatus",
    "truncate_label",
    # Built-in providers
    "ServersSection",
    "StatusSection",
    "StaticContentProvider",
    "StaticHeaderProvider",
    # Events
    "DashboardEvent",
    "Key",
    "Mouse",
    "Resize",
    "Tick",
    "TickRequest",
    "tick",
    # Styling
    "DashboardTheme",
    "get_theme",
    "set_theme",
]
