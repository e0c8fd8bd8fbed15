"""Layout engine for dashkit.

Decides the layout mode from the terminal size, splits the terminal into
header, content and sidebar regions, and shares the sidebar height among
its sections.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from transitions import Machine

from dashkit.config.settings import DashboardSettings
from dashkit.utils.logging import get_logger


class LayoutMode(str, Enum):
    """Rendering mode selected from terminal size."""

    NORMAL = "normal"
    COMPACT = "compact"


def compute_layout_mode(
    width: int,
    height: int,
    width_breakpoint: int,
    height_breakpoint: int,
) -> LayoutMode:
    """Compact iff the terminal is narrower or shorter than a breakpoint.

    The comparison is strict, so a terminal exactly at a breakpoint is
    NORMAL.
    """
    if width < width_breakpoint or height < height_breakpoint:
        return LayoutMode.COMPACT
    return LayoutMode.NORMAL


# ==================== REGIONS ====================


@dataclass(frozen=True)
class Region:
    """A rectangle of terminal cells. Negative sizes clamp to zero."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self):
        object.__setattr__(self, "width", max(0, self.width))
        object.__setattr__(self, "height", max(0, self.height))

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.area == 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def overlaps(self, other: "Region") -> bool:
        if self.is_empty or other.is_empty:
            return False
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


@dataclass(frozen=True)
class RegionGeometry:
    """Regions computed for one frame."""

    width: int
    height: int
    header: Region
    content: Region
    sidebar: Optional[Region] = None

    def regions(self) -> list[Region]:
        regions = [self.header, self.content]
        if self.sidebar is not None:
            regions.append(self.sidebar)
        return regions


def compute_geometry(
    width: int,
    height: int,
    mode: LayoutMode,
    sidebar_visible: bool,
    settings: DashboardSettings,
) -> RegionGeometry:
    """Split the terminal into header, content and (optional) sidebar.

    The header spans the top ``header_height`` rows. The sidebar sits on the
    right below the header; it is only placed in NORMAL mode, when visible,
    and when at least ``min_content_width`` columns remain for content.
    """
    width = max(0, width)
    height = max(0, height)

    header_height = min(settings.header_height, height) if width > 0 else 0
    header = Region(0, 0, width if header_height > 0 else 0, header_height)

    body_y = header_height
    body_height = height - header_height

    sidebar = None
    content_width = width
    if mode is LayoutMode.NORMAL and sidebar_visible and body_height > 0:
        sidebar_width = min(settings.sidebar_width, width)
        if sidebar_width > 0 and width - sidebar_width >= settings.min_content_width:
            sidebar = Region(width - sidebar_width, body_y, sidebar_width, body_height)
            content_width = width - sidebar_width

    if content_width > 0 and body_height > 0:
        content = Region(0, body_y, content_width, body_height)
    else:
        content = Region(0, body_y, 0, 0)

    return RegionGeometry(width, height, header, content, sidebar)


# ==================== LAYOUT STATE MACHINE ====================


LAYOUT_TRANSITIONS = [
    {
        "trigger": "enter_compact",
        "source": LayoutMode.NORMAL.value,
        "dest": LayoutMode.COMPACT.value,
    },
    {
        "trigger": "enter_normal",
        "source": LayoutMode.COMPACT.value,
        "dest": LayoutMode.NORMAL.value,
    },
]


class LayoutStateMachine:
    """Two-state machine tracking NORMAL/COMPACT across resizes.

    There is no hysteresis: each resize re-evaluates the breakpoint rule, so
    a jittery resize sequence may flip the mode on every event.
    """

    def __init__(self, width_breakpoint: int, height_breakpoint: int):
        self.width_breakpoint = width_breakpoint
        self.height_breakpoint = height_breakpoint
        self.logger = get_logger("layout")
        self.history: list[str] = []
        self.state: str = LayoutMode.NORMAL.value

        self._machine = Machine(
            model=self,
            states=[mode.value for mode in LayoutMode],
            transitions=LAYOUT_TRANSITIONS,
            initial=LayoutMode.NORMAL.value,
            auto_transitions=False,
            ignore_invalid_triggers=True,
            after_state_change=self._record_transition,
        )

    @property
    def mode(self) -> LayoutMode:
        return LayoutMode(self.state)

    @property
    def transition_count(self) -> int:
        return len(self.history)

    def _record_transition(self) -> None:
        self.history.append(self.state)
        self.logger.info("layout.mode_changed", mode=self.state)

    def update(self, width: int, height: int) -> LayoutMode:
        """Re-evaluate the mode for a new terminal size."""
        target = compute_layout_mode(
            width, height, self.width_breakpoint, self.height_breakpoint
        )
        if target is not self.mode:
            if target is LayoutMode.COMPACT:
                self.enter_compact()
            else:
                self.enter_normal()
        return self.mode


# ==================== HEIGHT ALLOCATION ====================


@dataclass
class SizeConstraints:
    """Size constraints for a component."""

    min_height: int = 0
    preferred_height: int = 0
    max_height: int = -1  # -1 means unlimited


def calculate_height(
    available: int,
    components: list[tuple[str, SizeConstraints]],
    priorities: Optional[dict[str, int]] = None,
) -> dict[str, int]:
    """Calculate heights for multiple components.

    Distributes available height among components based on their
    constraints and priorities. When even the minimum heights don't fit,
    the lowest-priority components give up rows first, so the total never
    exceeds ``available``.

    Args:
        available: Total available height
        components: List of (name, constraints) tuples
        priorities: Optional dict of name -> priority (higher = more space)

    Returns:
        Dict of component name to allocated height
    """
    if not components:
        return {}

    available = max(0, available)
    priorities = priorities or {}

    # Start with minimum heights
    allocated = {name: max(0, constraints.min_height) for name, constraints in components}

    # Sort by priority (higher first)
    sorted_components = sorted(
        components,
        key=lambda x: priorities.get(x[0], 0),
        reverse=True,
    )

    remaining = available - sum(allocated.values())

    # Not even the minimums fit: take rows back from the lowest priority
    if remaining < 0:
        for name, _ in reversed(sorted_components):
            if remaining >= 0:
                break
            take = min(allocated[name], -remaining)
            allocated[name] -= take
            remaining += take
        return allocated

    # Try to reach preferred heights
    for name, constraints in sorted_components:
        if remaining <= 0:
            break

        current = allocated[name]
        preferred = constraints.preferred_height
        max_height = constraints.max_height if constraints.max_height > 0 else available

        if current < preferred:
            add = max(0, min(preferred - current, remaining, max_height - current))
            allocated[name] += add
            remaining -= add

    # If still remaining, give to highest priority with room
    for name, constraints in sorted_components:
        if remaining <= 0:
            break

        current = allocated[name]
        max_height = constraints.max_height if constraints.max_height > 0 else available

        if current < max_height:
            add = min(max_height - current, remaining)
            allocated[name] += add
            remaining -= add

    return allocated


@dataclass(frozen=True)
class SectionSlot:
    """Rows assigned to one sidebar section."""

    index: int
    y: int
    height: int
    max_items: int
    has_separator: bool = False


SECTION_TITLE_ROWS = 1


def allocate_sidebar_sections(height: int, count: int) -> list[SectionSlot]:
    """Share the sidebar height among ``count`` sections.

    Each section spends one row on its title and, unless it is last, one
    blank separator row; the rest of its allotment is item rows. Earlier
    sections get leftover rows first. Sections that receive no rows get a
    zero-height slot.

    Args:
        height: Sidebar height in rows
        count: Number of sections

    Returns:
        One slot per section, in declaration order
    """
    if count <= 0:
        return []

    components = []
    for index in range(count):
        overhead = SECTION_TITLE_ROWS + (1 if index < count - 1 else 0)
        components.append((
            str(index),
            SizeConstraints(
                min_height=overhead,
                preferred_height=max(overhead, max(0, height) // count),
            ),
        ))

    allocated = calculate_height(
        height,
        components,
        priorities={str(index): count - index for index in range(count)},
    )

    slots = []
    y = 0
    for index in range(count):
        rows = allocated[str(index)]
        has_separator = index < count - 1 and rows > SECTION_TITLE_ROWS
        max_items = max(0, rows - SECTION_TITLE_ROWS - (1 if has_separator else 0))
        slots.append(SectionSlot(index, y, rows, max_items, has_separator))
        y += rows
    return slots
