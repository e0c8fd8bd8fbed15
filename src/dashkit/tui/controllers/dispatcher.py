"""Event dispatcher: the composition root of a dashboard.

The dispatcher owns the layout state, routes every incoming event to the
providers that should see it, turns the follow-up requests they return into
scheduled ticks, and composes frames. It handles one event to completion
before the next; nothing here blocks or spawns threads.

Provider calls go through ``_call``. A provider that raises is logged and
treated as having returned nothing, so one misbehaving plugin can't stop
the loop.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from numbers import Real
from typing import Any, Optional

from rich.text import Text

from dashkit.errors import ProviderError
from dashkit.utils.logging import get_logger

from ..components.core.frame import (
    Frame,
    RenderedSection,
    compose_frame,
    render_header,
    sidebar_inner_width,
)
from ..components.core.layout import (
    LayoutMode,
    LayoutStateMachine,
    RegionGeometry,
    SectionSlot,
    allocate_sidebar_sections,
    compute_geometry,
)
from ..providers.base import SidebarItem
from ..providers.config import AppConfig
from ..state.events import DashboardEvent, Key, Mouse, Resize, Tick, TickRequest
from ..styles.theme import DashboardTheme, get_theme
from .scheduler import CONTENT, HEADER, REFRESH, RefreshScheduler, Role, Target, section

REFRESH_TAG = "dashkit.refresh"


class EventDispatcher:
    """Single-threaded control loop over one AppConfig.

    Parameters
    ----------
    config : AppConfig
        Providers and layout options.
    scheduler : RefreshScheduler | None
        Trigger queue; a fresh one is created when omitted.
    theme : DashboardTheme | None
        Styling collaborator; defaults to the global theme.
    clock : Callable[[], datetime] | None
        Used only when a caller doesn't pass ``now`` explicitly.
    """

    def __init__(
        self,
        config: AppConfig,
        scheduler: Optional[RefreshScheduler] = None,
        theme: Optional[DashboardTheme] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.settings = config.settings
        self.scheduler = scheduler or RefreshScheduler()
        self.theme = theme or get_theme()
        self.logger = get_logger("dispatcher")
        self._clock = clock or datetime.now

        self.layout = LayoutStateMachine(
            config.compact_width_breakpoint,
            config.compact_height_breakpoint,
        )
        self._sidebar_visible = config.show_sidebar_by_default
        self._width = 0
        self._height = 0
        self._geometry = compute_geometry(0, 0, self.layout.mode, False, self.settings)
        self._slots: list[SectionSlot] = []

        self._subscriptions: dict[str, list[Target]] = {}
        self._warned: set[tuple[str, str]] = set()
        self._started = False
        self._dirty = True

        self.last_frame: Optional[Frame] = None
        self.event_count = 0
        self.frame_count = 0
        self.fault_count = 0

    # ==================== STATE ====================

    @property
    def sections(self) -> tuple:
        return self.config.sidebar_sections

    @property
    def layout_mode(self) -> LayoutMode:
        return self.layout.mode

    @property
    def sidebar_visible(self) -> bool:
        return self._sidebar_visible

    @property
    def geometry(self) -> RegionGeometry:
        return self._geometry

    @property
    def section_slots(self) -> list[SectionSlot]:
        return list(self._slots)

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def started(self) -> bool:
        return self._started

    @property
    def dirty(self) -> bool:
        """True when an event arrived since the last composed frame."""
        return self._dirty

    def next_deadline(self) -> Optional[datetime]:
        return self.scheduler.next_deadline()

    # ==================== LIFECYCLE ====================

    def start(self, now: Optional[datetime] = None) -> None:
        """Run every provider's init hook and start the refresh cadence."""
        if self._started:
            return
        now = now or self._clock()
        self._started = True

        self._arm(self._call(CONTENT, "init_content"), CONTENT, now)
        self._arm(self._call(HEADER, "init_header"), HEADER, now)
        for index in range(len(self.sections)):
            target = section(index)
            self._arm(self._call(target, "init_section"), target, now)

        if self.sections:
            self._arm_refresh(now)

        self._dirty = True
        self.logger.info(
            "dispatcher.started",
            sections=len(self.sections),
            pending=len(self.scheduler),
        )

    # ==================== DISPATCH ====================

    def dispatch(self, event: DashboardEvent, now: Optional[datetime] = None) -> None:
        """Process one event to completion."""
        now = now or self._clock()
        self.event_count += 1

        if isinstance(event, Resize):
            self._on_resize(event, now)
        elif isinstance(event, Tick):
            self._on_tick(event, now)
        elif isinstance(event, (Key, Mouse)):
            self._on_input(event, now)
        else:
            self._deliver(CONTENT, event, now)

        self._dirty = True

    def advance(self, now: Optional[datetime] = None) -> int:
        """Fire every trigger due at ``now``. Returns how many fired."""
        now = now or self._clock()
        due = self.scheduler.pop_due(now)
        for trigger in due:
            self.event_count += 1
            tag = trigger.request.tag
            self._deliver(trigger.target, Tick(timestamp=now, tag=tag), now)
            if trigger.target == REFRESH:
                self._arm_refresh(now)
            elif not self.scheduler.has_pending(trigger.target, tag):
                self._unsubscribe(trigger.target, tag)
        if due:
            self._dirty = True
        return len(due)

    def toggle_sidebar(self) -> bool:
        """Flip sidebar visibility. Returns the new visibility."""
        self._sidebar_visible = not self._sidebar_visible
        self._relayout()
        self._dirty = True
        self.logger.debug("dispatcher.sidebar_toggled", visible=self._sidebar_visible)
        return self._sidebar_visible

    def _on_resize(self, event: Resize, now: datetime) -> None:
        self._width = max(0, event.width)
        self._height = max(0, event.height)
        self.layout.update(self._width, self._height)
        self._relayout()

        self._deliver(CONTENT, event, now)
        self._deliver(HEADER, event, now)
        for index in range(len(self.sections)):
            self._deliver(section(index), event, now)

    def _on_tick(self, event: Tick, now: datetime) -> None:
        """Route an injected tick to every target that asked for its tag."""
        if event.tag == REFRESH_TAG:
            self._deliver(REFRESH, event, now)
            return
        targets = self._subscriptions.get(event.tag, [])
        if not targets:
            self.logger.debug("dispatcher.tick_unrouted", tag=event.tag)
        for target in list(targets):
            self._deliver(target, event, now)

    def _on_input(self, event: Key | Mouse, now: datetime) -> None:
        if isinstance(event, Key) and event.key.lower() == self.settings.toggle_sidebar_key:
            self.toggle_sidebar()
            return

        self._deliver(CONTENT, event, now)

        if isinstance(event, Mouse):
            index = self.section_at(event.x, event.y)
            if index is not None:
                self._deliver(section(index), event, now)

    def section_at(self, x: int, y: int) -> Optional[int]:
        """Index of the sidebar section drawn at terminal cell (x, y)."""
        sidebar = self._geometry.sidebar
        if sidebar is None or not sidebar.contains(x, y):
            return None
        row = y - sidebar.y
        for slot in self._slots:
            if slot.height > 0 and slot.y <= row < slot.y + slot.height:
                return slot.index
        return None

    def _deliver(self, target: Target, event: DashboardEvent, now: datetime) -> None:
        if target.role is Role.REFRESH:
            for index in range(len(self.sections)):
                section_target = section(index)
                self._arm(self._call(section_target, "refresh_section"), section_target, now)
            return

        method = {
            Role.CONTENT: "handle_content_update",
            Role.HEADER: "handle_header_update",
            Role.SECTION: "handle_section_update",
        }[target.role]
        self._arm(self._call(target, method, event), target, now)

    # ==================== FOLLOW-UPS ====================

    def _arm(self, result: Any, target: Target, now: datetime) -> None:
        for request in self._follow_ups(result, target):
            self.scheduler.schedule(request, target, now)
            subscribers = self._subscriptions.setdefault(request.tag, [])
            if target not in subscribers:
                subscribers.append(target)
            self.logger.debug(
                "scheduler.armed",
                target=str(target),
                tag=request.tag,
                delay=request.delay,
            )

    def _unsubscribe(self, target: Target, tag: str) -> None:
        """Stop routing injected ``tag`` ticks to a target whose cadence ended."""
        subscribers = self._subscriptions.get(tag, [])
        if target in subscribers:
            subscribers.remove(target)
        if not subscribers:
            self._subscriptions.pop(tag, None)

    def _arm_refresh(self, now: datetime) -> None:
        self.scheduler.schedule(
            TickRequest(self.settings.refresh_interval, REFRESH_TAG),
            REFRESH,
            now,
        )

    def _follow_ups(self, result: Any, target: Target) -> list[TickRequest]:
        if result is None:
            return []
        if isinstance(result, TickRequest):
            return [result] if self._schedulable(result, target) else []
        if not isinstance(result, Iterable) or isinstance(result, (str, bytes, Mapping)):
            self._contract_violation(target, "follow_up", returned=type(result).__name__)
            return []
        try:
            requests = list(result)
        except Exception as exc:
            self._contract_violation(target, "follow_up", error=repr(exc))
            return []
        valid = [request for request in requests if isinstance(request, TickRequest)]
        if len(valid) != len(requests):
            self._contract_violation(target, "follow_up", dropped=len(requests) - len(valid))
        return [request for request in valid if self._schedulable(request, target)]

    def _schedulable(self, request: TickRequest, target: Target) -> bool:
        """A request needs a finite numeric delay and a string tag."""
        delay = request.delay
        if isinstance(delay, Real) and not isinstance(delay, bool) and math.isfinite(delay):
            if isinstance(request.tag, str):
                return True
        self._contract_violation(
            target, "follow_up", delay=repr(delay), tag=repr(request.tag)
        )
        return False

    # ==================== PROVIDER CALLS ====================

    def _provider(self, target: Target) -> Any:
        if target.role is Role.CONTENT:
            return self.config.content_provider
        if target.role is Role.HEADER:
            return self.config.header_provider
        return self.sections[target.index]

    def _call(self, target: Target, method: str, *args: Any, default: Any = None) -> Any:
        try:
            return getattr(self._provider(target), method)(*args)
        except Exception as exc:
            self.fault_count += 1
            error = ProviderError(str(exc) or type(exc).__name__, str(target), method, exc)
            self.logger.exception(
                "provider.fault",
                role=error.role,
                method=error.method,
                error=str(error),
            )
            return default

    def _contract_violation(self, target: Target, kind: str, **details: Any) -> None:
        key = (str(target), kind)
        log = self.logger.debug if key in self._warned else self.logger.warning
        self._warned.add(key)
        log("provider.contract_violation", role=str(target), kind=kind, **details)

    # ==================== LAYOUT ====================

    def _relayout(self) -> None:
        self._geometry = compute_geometry(
            self._width,
            self._height,
            self.layout.mode,
            self._sidebar_visible and bool(self.sections),
            self.settings,
        )
        sidebar = self._geometry.sidebar
        if sidebar is None:
            self._slots = []
        else:
            self._slots = allocate_sidebar_sections(sidebar.height, len(self.sections))

    # ==================== COMPOSITION ====================

    def compose(self) -> Frame:
        """Render every visible region and assemble the frame."""
        geometry = self._geometry
        mode = self.layout.mode

        header_line = render_header(
            self._text(HEADER, "get_brand_name"),
            self._text(HEADER, "get_app_name"),
            self._status_data(),
            geometry.header.width,
            mode,
            self.theme,
        )

        content: Any = ""
        if not geometry.content.is_empty:
            content = self._call(
                CONTENT,
                "render_content",
                geometry.content.width,
                geometry.content.height,
                default="",
            )
            if content is None:
                content = ""
            elif not isinstance(content, (str, Text)):
                self._contract_violation(CONTENT, "render_content", returned=type(content).__name__)
                content = str(content)

        inner_width = sidebar_inner_width(geometry.sidebar)
        rendered = []
        for slot in self._slots:
            if slot.height <= 0:
                continue
            target = section(slot.index)
            items = self._call(target, "render_items", slot.max_items, inner_width, default=())
            rendered.append(RenderedSection(
                title=self._text(target, "get_title"),
                items=self._clamp_items(items, slot.max_items, target),
                slot=slot,
            ))

        frame = compose_frame(geometry, mode, header_line, content, rendered, self.theme)
        self.last_frame = frame
        self.frame_count += 1
        self._dirty = False
        return frame

    def _text(self, target: Target, method: str) -> str:
        value = self._call(target, method, default="")
        if value is None:
            return ""
        if not isinstance(value, str):
            self._contract_violation(target, method, returned=type(value).__name__)
            return str(value)
        return value

    def _status_data(self) -> Mapping[str, Any]:
        data = self._call(HEADER, "get_status_data", default={})
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            self._contract_violation(HEADER, "get_status_data", returned=type(data).__name__)
            return {}
        return {str(label): value for label, value in data.items()}

    def _clamp_items(self, items: Any, max_items: int, target: Target) -> list[SidebarItem]:
        if items is None:
            return []
        try:
            items = list(items)
        except TypeError:
            self._contract_violation(target, "render_items", returned=type(items).__name__)
            return []

        valid = [item for item in items if isinstance(item, SidebarItem)]
        if len(valid) != len(items):
            self._contract_violation(target, "render_items", dropped=len(items) - len(valid))
        if len(valid) > max_items:
            self._contract_violation(
                target, "render_items", returned=len(valid), max_items=max_items
            )
            valid = valid[:max(0, max_items)]
        return valid
