"""Sample dashboard built on dashkit.

Shows the three provider roles from a host's point of view: a centered
content panel, a clock header that re-arms its own one-second tick, and a
task list section mixed with the built-in servers and status sections.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from rich.text import Text

from dashkit.config.settings import DashboardSettings, load_settings
from dashkit.tui.keys import get_help_text
from dashkit.tui.providers import (
    AppConfig,
    BaseContentProvider,
    BaseHeaderProvider,
    BaseSidebarSection,
    ItemStatus,
    ServersSection,
    SidebarItem,
    StatusSection,
    truncate_label,
)
from dashkit.tui.state.events import DashboardEvent, FollowUps, Key, Tick, tick
from dashkit.tui.styles.icons import ICON_CHECK, ICON_CROSS, ICON_IDLE, ICON_RUNNING
from dashkit.tui.styles.theme import get_theme

FEATURES = [
    "This demonstrates how to create a custom application",
    "using the reusable dashkit framework:",
    "",
    "• Custom content provider",
    "• Custom sidebar sections",
    "• Custom header data",
    "• Consistent theme styling",
    "",
    "The framework handles all the layout, styling,",
    "and responsive behavior automatically.",
]


class CenteredContentProvider(BaseContentProvider):
    """Welcome panel centered inside the content pane."""

    MARGIN = 6

    def __init__(self, app_name: str, footer_lines: Optional[list[str]] = None):
        self.app_name = app_name
        self.footer_lines = list(footer_lines or [])
        self.last_key: Optional[str] = None

    def handle_content_update(self, event: DashboardEvent) -> FollowUps:
        if isinstance(event, Key):
            self.last_key = event.key
        return None

    def _lines(self) -> list[Text]:
        theme = get_theme()
        lines = [
            theme.gradient(self.app_name),
            theme.text("Custom Application Example", "muted"),
            Text(""),
        ]
        for line in FEATURES:
            if line.startswith("•"):
                lines.append(theme.text(line, "success"))
            else:
                lines.append(theme.text(line))
        if self.footer_lines:
            lines.append(Text(""))
            lines.extend(theme.text(line, "subtle") for line in self.footer_lines)
        if self.last_key:
            lines.append(theme.text(f"last key: {self.last_key}", "subtle"))
        return lines

    def render_content(self, width: int, height: int) -> Text:
        available_width = width - self.MARGIN
        available_height = height - self.MARGIN
        if available_width <= 0 or available_height <= 0:
            return Text("")

        lines = self._lines()[:available_height]
        padding_top = (available_height - len(lines)) // 2
        centered = [Text("") for _ in range(padding_top)]
        for line in lines:
            line = line.copy()
            line.truncate(available_width, overflow="ellipsis")
            if line.cell_len < available_width:
                line.pad_left((available_width - line.cell_len) // 2)
            centered.append(line)

        return Text("\n").join(centered)


class ClockHeaderProvider(BaseHeaderProvider):
    """Header whose time field follows its own one-second tick."""

    TICK_TAG = "clock"

    def __init__(self, app_name: str, interval: float = 1.0):
        self.app_name = app_name
        self.interval = interval
        self.last_update: Optional[datetime] = None

    def get_brand_name(self) -> str:
        return "MyApp™"

    def get_app_name(self) -> str:
        return self.app_name

    def get_status_data(self) -> dict:
        return {
            "time": self.last_update or "--:--:--",
            "status": "custom",
            "users": 42,
            "version": "v2.1.0",
        }

    def init_header(self) -> FollowUps:
        return tick(self.interval, self.TICK_TAG)

    def handle_header_update(self, event: DashboardEvent) -> FollowUps:
        if isinstance(event, Tick) and event.tag == self.TICK_TAG:
            self.last_update = event.timestamp
            return tick(self.interval, self.TICK_TAG)
        return None


@dataclass
class Task:
    name: str
    status: str
    priority: str


TASK_ICONS = {
    "completed": ICON_CHECK,
    "in-progress": ICON_RUNNING,
    "pending": ICON_IDLE,
    "blocked": ICON_CROSS,
}

TASK_STATUS = {
    "completed": ItemStatus.SUCCESS,
    "in-progress": ItemStatus.INFO,
    "pending": ItemStatus.WARNING,
    "blocked": ItemStatus.ERROR,
}


class TasksSection(BaseSidebarSection):
    """Task list whose first task flips state every ``toggle_every`` refreshes."""

    def __init__(self, tasks: Optional[list[Task]] = None, toggle_every: int = 10):
        self.tasks = list(tasks) if tasks is not None else [
            Task("Design Review", "in-progress", "high"),
            Task("Code Review", "pending", "medium"),
            Task("Testing", "completed", "high"),
            Task("Documentation", "pending", "low"),
            Task("Deployment", "blocked", "high"),
        ]
        self.toggle_every = toggle_every
        self.refreshes = 0

    def get_title(self) -> str:
        return "Tasks"

    def render_items(self, max_items: int, width: int) -> list[SidebarItem]:
        items = []
        for task in self.tasks[:max(0, max_items)]:
            items.append(SidebarItem(
                icon=TASK_ICONS.get(task.status, ICON_IDLE),
                text=truncate_label(task.name, width),
                value=task.priority,
                status=TASK_STATUS.get(task.status, ItemStatus.MUTED),
            ))
        return items

    def refresh_section(self) -> FollowUps:
        self.refreshes += 1
        if self.tasks and self.refreshes % self.toggle_every == 0:
            first = self.tasks[0]
            first.status = "completed" if first.status == "in-progress" else "in-progress"
        return None


def build_demo_config(
    show_sidebar: bool = True,
    width_breakpoint: int = 100,
    height_breakpoint: int = 25,
    settings: Optional[DashboardSettings] = None,
) -> AppConfig:
    """Assemble the sample dashboard."""
    settings = settings or load_settings()
    return AppConfig(
        content_provider=CenteredContentProvider(
            "CUSTOM APP",
            footer_lines=get_help_text(settings).splitlines(),
        ),
        header_provider=ClockHeaderProvider("Custom App"),
        sidebar_sections=[
            TasksSection(),
            ServersSection(),  # mix custom with built-in sections
            StatusSection(),
        ],
        show_sidebar_by_default=show_sidebar,
        compact_width_breakpoint=width_breakpoint,
        compact_height_breakpoint=height_breakpoint,
        settings=settings,
    )
