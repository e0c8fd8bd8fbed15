"""Provider contracts for the three dashboard regions.

A provider is any object that implements one of the role protocols below.
The framework only ever calls these methods; it never reads or writes a
provider's own attributes. Subclassing the ``Base*`` classes is optional and
only saves writing the no-op hooks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Protocol, Union, runtime_checkable

from rich.text import Text

from ..state.events import DashboardEvent, FollowUps
from ..util.truncate import truncate_text

StatusValue = Union[str, int, float, datetime, time]
"""A header status value. Anything else is rendered with ``str()``."""

RenderResult = Union[str, Text]


class ItemStatus(str, Enum):
    """Fixed status vocabulary for sidebar items."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    MUTED = "muted"

    @classmethod
    def coerce(cls, value: "ItemStatus | str | None") -> "ItemStatus":
        """Map any value onto the vocabulary, falling back to MUTED."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.MUTED


@dataclass(frozen=True)
class SidebarItem:
    """One rendered sidebar row."""

    icon: str
    text: str
    value: str = ""
    status: ItemStatus = ItemStatus.MUTED

    def __post_init__(self):
        for name in ("icon", "text", "value"):
            object.__setattr__(self, name, _as_label(getattr(self, name)))
        object.__setattr__(self, "status", ItemStatus.coerce(self.status))


def _as_label(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, Text):
        return value.plain
    return value if isinstance(value, str) else str(value)


def format_status_value(value: object) -> str:
    """Format a header status value for display."""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (datetime, time)):
        return value.strftime("%H:%M:%S")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:.2f}".rstrip("0").rstrip(".")
    if value is None:
        return ""
    return str(value)


def truncate_label(text: str, width: int, reserve: int = 10, marker: str = "...") -> str:
    """Truncate a sidebar label so it fits next to its icon and value.

    The label is limited to ``width - reserve`` characters and ends with
    ``marker`` when shortened.
    """
    return truncate_text(text, width - reserve, suffix=marker)


# ============================================================
# Role Protocols
# ============================================================

@runtime_checkable
class ContentProvider(Protocol):
    """Fills the main content pane."""

    def render_content(self, width: int, height: int) -> RenderResult: ...

    def init_content(self) -> FollowUps: ...

    def handle_content_update(self, event: DashboardEvent) -> FollowUps: ...


@runtime_checkable
class HeaderDataProvider(Protocol):
    """Supplies the data shown in the header bar."""

    def get_brand_name(self) -> str: ...

    def get_app_name(self) -> str: ...

    def get_status_data(self) -> Mapping[str, StatusValue]: ...

    def init_header(self) -> FollowUps: ...

    def handle_header_update(self, event: DashboardEvent) -> FollowUps: ...


@runtime_checkable
class SidebarSection(Protocol):
    """One titled block of rows in the sidebar."""

    def get_title(self) -> str: ...

    def render_items(self, max_items: int, width: int) -> Sequence[SidebarItem]: ...

    def init_section(self) -> FollowUps: ...

    def handle_section_update(self, event: DashboardEvent) -> FollowUps: ...

    def refresh_section(self) -> FollowUps: ...


# ============================================================
# Convenience Base Classes
# ============================================================

class BaseContentProvider(ABC):
    """Content provider with no-op lifecycle hooks."""

    @abstractmethod
    def render_content(self, width: int, height: int) -> RenderResult:
        """Render the pane; must fit inside ``width`` x ``height``."""

    def init_content(self) -> FollowUps:
        return None

    def handle_content_update(self, event: DashboardEvent) -> FollowUps:
        return None


class BaseHeaderProvider(ABC):
    """Header provider with no-op lifecycle hooks and no status fields."""

    @abstractmethod
    def get_brand_name(self) -> str:
        """Short brand shown first in the header."""

    @abstractmethod
    def get_app_name(self) -> str:
        """Application name shown after the brand."""

    def get_status_data(self) -> Mapping[str, StatusValue]:
        return {}

    def init_header(self) -> FollowUps:
        return None

    def handle_header_update(self, event: DashboardEvent) -> FollowUps:
        return None


class BaseSidebarSection(ABC):
    """Sidebar section with no-op lifecycle hooks."""

    @abstractmethod
    def get_title(self) -> str:
        """Section title."""

    @abstractmethod
    def render_items(self, max_items: int, width: int) -> Sequence[SidebarItem]:
        """Return at most ``max_items`` rows for a sidebar ``width`` wide."""

    def init_section(self) -> FollowUps:
        return None

    def handle_section_update(self, event: DashboardEvent) -> FollowUps:
        return None

    def refresh_section(self) -> FollowUps:
        return None
