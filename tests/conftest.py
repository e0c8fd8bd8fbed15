"""Shared fixtures for dashkit tests.

Recording providers capture every call the dispatcher makes so tests can
assert on routing without a terminal.
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Any, Callable, Optional

import pytest
import structlog

from dashkit.config.settings import DashboardSettings, load_settings
from dashkit.tui.controllers.dispatcher import EventDispatcher
from dashkit.tui.providers import (
    AppConfig,
    BaseContentProvider,
    BaseHeaderProvider,
    BaseSidebarSection,
    ItemStatus,
    SidebarItem,
)
from dashkit.tui.state.events import DashboardEvent, FollowUps, Tick, tick


# ── Recording providers ──────────────────────────────────────────────

class RecordingContent(BaseContentProvider):
    """Content provider that remembers what it was sent."""

    def __init__(self, text: str = "hello content"):
        self.text = text
        self.init_calls = 0
        self.events: list[DashboardEvent] = []
        self.render_calls: list[tuple[int, int]] = []

    def init_content(self) -> FollowUps:
        self.init_calls += 1
        return None

    def render_content(self, width: int, height: int) -> str:
        self.render_calls.append((width, height))
        return self.text

    def handle_content_update(self, event: DashboardEvent) -> FollowUps:
        self.events.append(event)
        return None


class RecordingHeader(BaseHeaderProvider):
    """Header that optionally asks for a tick on init and re-arms it."""

    TICK_TAG = "header"

    def __init__(
        self,
        brand: str = "ACME",
        app_name: str = "Console",
        status: Optional[dict[str, Any]] = None,
        delay: Optional[float] = None,
        rearm: bool = True,
    ):
        self.brand = brand
        self.app_name = app_name
        self.status = dict(status or {})
        self.delay = delay
        self.rearm = rearm
        self.init_calls = 0
        self.events: list[DashboardEvent] = []

    def get_brand_name(self) -> str:
        return self.brand

    def get_app_name(self) -> str:
        return self.app_name

    def get_status_data(self) -> dict[str, Any]:
        return dict(self.status)

    def init_header(self) -> FollowUps:
        self.init_calls += 1
        if self.delay is None:
            return None
        return tick(self.delay, self.TICK_TAG)

    def handle_header_update(self, event: DashboardEvent) -> FollowUps:
        self.events.append(event)
        if isinstance(event, Tick) and event.tag == self.TICK_TAG and self.rearm:
            return tick(self.delay or 0, self.TICK_TAG)
        return None

    @property
    def ticks(self) -> list[Tick]:
        return [event for event in self.events if isinstance(event, Tick)]


class ListSection(BaseSidebarSection):
    """Section serving a fixed list of items."""

    def __init__(self, title: str, labels: list[str]):
        self.title = title
        self.items = [
            SidebarItem("•", label, str(i), ItemStatus.INFO)
            for i, label in enumerate(labels)
        ]
        self.init_calls = 0
        self.refreshes = 0
        self.events: list[DashboardEvent] = []
        self.requested: list[tuple[int, int]] = []

    def get_title(self) -> str:
        return self.title

    def render_items(self, max_items: int, width: int) -> list[SidebarItem]:
        self.requested.append((max_items, width))
        return self.items[:max(0, max_items)]

    def init_section(self) -> FollowUps:
        self.init_calls += 1
        return None

    def handle_section_update(self, event: DashboardEvent) -> FollowUps:
        self.events.append(event)
        return None

    def refresh_section(self) -> FollowUps:
        self.refreshes += 1
        return None


# ── Fixtures ──────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch):
    """Keep DASHKIT_* variables and structlog config from leaking between tests."""
    for name in list(os.environ):
        if name.startswith("DASHKIT_"):
            monkeypatch.delenv(name)
    yield
    structlog.reset_defaults()


@pytest.fixture()
def settings() -> DashboardSettings:
    """Default settings, independent of the environment."""
    return load_settings(env={})


@pytest.fixture()
def t0() -> datetime:
    """A fixed start time; nothing in dashkit reads the clock in tests."""
    return datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture()
def content() -> RecordingContent:
    return RecordingContent()


@pytest.fixture()
def header() -> RecordingHeader:
    return RecordingHeader(status={"cpu": 12, "mem": "2.1G"})


@pytest.fixture()
def sections() -> list[ListSection]:
    return [
        ListSection("Alpha", ["a1", "a2"]),
        ListSection("Beta", ["b1", "b2", "b3"]),
        ListSection("Gamma", ["g1"]),
    ]


@pytest.fixture()
def make_config(settings, content, header, sections) -> Callable[..., AppConfig]:
    """Factory for AppConfig with the recording providers as defaults."""

    def factory(**overrides: Any) -> AppConfig:
        values: dict[str, Any] = {
            "content_provider": content,
            "header_provider": header,
            "sidebar_sections": sections,
            "settings": settings,
        }
        values.update(overrides)
        return AppConfig(**values)

    return factory


@pytest.fixture()
def dispatcher(make_config, t0) -> EventDispatcher:
    """Started dispatcher over the default recording providers."""
    dispatcher = EventDispatcher(make_config(), clock=lambda: t0)
    dispatcher.start(t0)
    return dispatcher
