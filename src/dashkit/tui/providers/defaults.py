"""Built-in providers that hosts can mix with their own.

``ServersSection`` and ``StatusSection`` are ready-made sidebar sections;
``StaticContentProvider`` and ``StaticHeaderProvider`` cover dashboards
whose content or header never changes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..state.events import DashboardEvent, FollowUps, Tick, tick
from ..styles.icons import get_health_icon
from .base import (
    BaseContentProvider,
    BaseHeaderProvider,
    BaseSidebarSection,
    ItemStatus,
    SidebarItem,
    StatusValue,
    truncate_label,
)


# ============================================================
# Servers Section
# ============================================================

_HEALTH_STATUS = {
    "healthy": ItemStatus.SUCCESS,
    "degraded": ItemStatus.WARNING,
    "unhealthy": ItemStatus.ERROR,
    "unknown": ItemStatus.MUTED,
}


@dataclass
class Server:
    """A server entry shown by ServersSection."""

    name: str
    health: str = "unknown"
    latency_ms: Optional[float] = None


class ServersSection(BaseSidebarSection):
    """Health overview for a list of servers."""

    def __init__(self, servers: Optional[list[Server]] = None, title: str = "Servers"):
        self._title = title
        self._servers = list(servers) if servers is not None else [
            Server("api", "healthy", 12),
            Server("database", "healthy", 4),
            Server("cache", "degraded", 48),
            Server("worker", "unknown"),
        ]

    def get_title(self) -> str:
        return self._title

    def set_health(self, name: str, health: str, latency_ms: Optional[float] = None) -> bool:
        """Update one server's health. Returns False for unknown names."""
        for server in self._servers:
            if server.name == name:
                server.health = health.lower()
                server.latency_ms = latency_ms
                return True
        return False

    def render_items(self, max_items: int, width: int) -> list[SidebarItem]:
        items = []
        for server in self._servers[:max(0, max_items)]:
            health = server.health.lower()
            value = health
            if health == "healthy" and server.latency_ms is not None:
                value = f"{server.latency_ms:.0f}ms"
            items.append(SidebarItem(
                icon=get_health_icon(health),
                text=truncate_label(server.name, width),
                value=value,
                status=_HEALTH_STATUS.get(health, ItemStatus.MUTED),
            ))
        return items


# ============================================================
# Status Section
# ============================================================

class StatusSection(BaseSidebarSection):
    """Shows how often the dashboard refreshed and when it last ticked."""

    TICK_TAG = "status"

    def __init__(self, interval: float = 1.0, title: str = "Status"):
        self._title = title
        self._interval = interval
        self.refresh_count = 0
        self.first_tick: Optional[datetime] = None
        self.last_tick: Optional[datetime] = None

    def get_title(self) -> str:
        return self._title

    def init_section(self) -> FollowUps:
        return tick(self._interval, self.TICK_TAG)

    def handle_section_update(self, event: DashboardEvent) -> FollowUps:
        if isinstance(event, Tick) and event.tag == self.TICK_TAG:
            if self.first_tick is None:
                self.first_tick = event.timestamp
            self.last_tick = event.timestamp
            return tick(self._interval, self.TICK_TAG)
        return None

    def refresh_section(self) -> FollowUps:
        self.refresh_count += 1
        return None

    def render_items(self, max_items: int, width: int) -> list[SidebarItem]:
        if self.last_tick is None:
            last_tick, uptime = "--", "--"
            tick_status = ItemStatus.MUTED
        else:
            last_tick = self.last_tick.strftime("%H:%M:%S")
            seconds = int((self.last_tick - self.first_tick).total_seconds())
            uptime = f"{seconds // 60}m{seconds % 60:02d}s"
            tick_status = ItemStatus.SUCCESS

        rows = [
            SidebarItem("↻", truncate_label("Refreshes", width), str(self.refresh_count), ItemStatus.INFO),
            SidebarItem("●", truncate_label("Last tick", width), last_tick, tick_status),
            SidebarItem("◷", truncate_label("Uptime", width), uptime, ItemStatus.MUTED),
        ]
        return rows[:max(0, max_items)]


# ============================================================
# Static Providers
# ============================================================

class StaticContentProvider(BaseContentProvider):
    """Content pane showing fixed text, cropped to the pane."""

    def __init__(self, text: str = ""):
        self._lines = text.splitlines()

    def render_content(self, width: int, height: int) -> str:
        if width <= 0 or height <= 0:
            return ""
        return "\n".join(line[:width] for line in self._lines[:height])


class StaticHeaderProvider(BaseHeaderProvider):
    """Header with fixed brand, app name and status fields."""

    def __init__(
        self,
        brand_name: str,
        app_name: str,
        status: Optional[Mapping[str, StatusValue]] = None,
    ):
        self._brand_name = brand_name
        self._app_name = app_name
        self._status = dict(status or {})

    def get_brand_name(self) -> str:
        return self._brand_name

    def get_app_name(self) -> str:
        return self._app_name

    def get_status_data(self) -> dict[str, StatusValue]:
        return dict(self._status)
