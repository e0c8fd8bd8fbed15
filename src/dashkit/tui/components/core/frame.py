"""Frame composition for dashkit.

Pure render functions that turn already-fetched provider output into one
``rich.text.Text`` exactly as wide and tall as the terminal. Nothing here
calls a provider; the dispatcher does that and hands the results over.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from rich.text import Text

from ...providers.base import RenderResult, SidebarItem, format_status_value
from ...styles.icons import SEP_DOT, SEP_THIN, SEP_VERTICAL
from ...styles.theme import DashboardTheme
from .layout import LayoutMode, Region, RegionGeometry, SectionSlot

SIDEBAR_GUTTER = 2  # border column + one space


@dataclass(frozen=True)
class RenderedSection:
    """Title and items fetched from one sidebar section for one frame."""

    title: str
    items: Sequence[SidebarItem]
    slot: SectionSlot


@dataclass(frozen=True)
class Frame:
    """One composed frame plus the layout it was composed for."""

    text: Text
    mode: LayoutMode
    geometry: RegionGeometry
    section_titles: tuple[str, ...] = field(default_factory=tuple)

    @property
    def width(self) -> int:
        return self.geometry.width

    @property
    def height(self) -> int:
        return self.geometry.height

    @property
    def has_sidebar(self) -> bool:
        return self.geometry.sidebar is not None

    @property
    def plain(self) -> str:
        return self.text.plain

    def lines(self) -> list[str]:
        return self.text.plain.split("\n")


def blank(width: int) -> Text:
    return Text(" " * max(0, width), no_wrap=True)


def fit(line: Text, width: int) -> Text:
    """Crop or pad ``line`` to exactly ``width`` cells."""
    if width <= 0:
        return Text(no_wrap=True)
    fitted = line.copy()
    fitted.no_wrap = True
    fitted.truncate(width, overflow="crop", pad=True)
    return fitted


def sidebar_inner_width(sidebar: Optional[Region]) -> int:
    """Columns available to section rows inside the sidebar."""
    if sidebar is None:
        return 0
    return max(0, sidebar.width - SIDEBAR_GUTTER)


# ============================================================
# Header
# ============================================================

def render_header(
    brand: str,
    app_name: str,
    status: Mapping[str, object],
    width: int,
    mode: LayoutMode,
    theme: DashboardTheme,
) -> Text:
    """Render the single header line.

    NORMAL shows brand, app name and ``label value`` fields. COMPACT drops
    the app name and the labels. Status fields are dropped from the end
    until the line fits.
    """
    if width <= 0:
        return Text(no_wrap=True)

    left = theme.gradient(brand)
    if mode is LayoutMode.NORMAL and app_name:
        left.append(" ")
        left.append(app_name, style=theme.style("text"))

    fields = []
    for label, value in status.items():
        formatted = format_status_value(value)
        part = Text(no_wrap=True)
        if mode is LayoutMode.NORMAL:
            part.append(f"{label} ", style=theme.style("subtle"))
        part.append(formatted, style=theme.style("muted"))
        fields.append(part)

    separator = Text(f" {SEP_DOT} ", style=theme.style("border"))
    while fields:
        right = separator.join(fields)
        if left.cell_len + 1 + right.cell_len <= width:
            line = left.copy()
            line.append(" " * (width - left.cell_len - right.cell_len))
            line.append_text(right)
            return line
        fields.pop()

    line = left.copy()
    line.truncate(width, overflow="ellipsis", pad=True)
    return line


def render_header_region(header_line: Text, region: Region, theme: DashboardTheme) -> list[Text]:
    """Header rows: the header line, blank rows, and a rule on the last row."""
    if region.is_empty:
        return []
    rows = [fit(header_line, region.width)]
    for row in range(1, region.height):
        if row == region.height - 1:
            rows.append(Text(SEP_THIN * region.width, style=theme.style("border"), no_wrap=True))
        else:
            rows.append(blank(region.width))
    return rows


# ============================================================
# Content
# ============================================================

def to_text(result: RenderResult) -> Text:
    """Convert a provider's render result to Text without parsing markup."""
    if isinstance(result, Text):
        return result
    return Text(str(result) if result is not None else "", no_wrap=True)


def render_content_region(content: RenderResult, region: Region) -> list[Text]:
    """Crop the provider's content to the region, padding missing rows."""
    if region.is_empty:
        return [Text(no_wrap=True) for _ in range(region.height)]
    text = to_text(content).copy()
    text.expand_tabs()
    lines = list(text.split("\n", allow_blank=True))[:region.height]
    rows = [fit(line, region.width) for line in lines]
    rows.extend(blank(region.width) for _ in range(region.height - len(rows)))
    return rows


# ============================================================
# Sidebar
# ============================================================

def render_sidebar_item(item: SidebarItem, width: int, theme: DashboardTheme) -> Text:
    """``icon text`` on the left, ``value`` right-aligned, cropped to width."""
    if width <= 0:
        return Text(no_wrap=True)

    color = theme.status_color(item.status)
    left = Text(no_wrap=True)
    left.append(item.icon, style=f"bold {color}")
    left.append(" ")
    left.append(item.text, style=theme.style("text"))

    value = Text(item.value, style=theme.style("muted"), no_wrap=True)
    if item.value and left.cell_len + 1 + value.cell_len <= width:
        line = left
        line.append(" " * (width - left.cell_len - value.cell_len))
        line.append_text(value)
        return line

    return fit(left, width)


def render_section(section: RenderedSection, width: int, theme: DashboardTheme) -> list[Text]:
    """Rows for one section: title rule, items, then the separator."""
    slot = section.slot
    if slot.height <= 0:
        return []

    title = Text(no_wrap=True)
    title.append(section.title, style=theme.style("title"))
    if width > len(section.title) + 1:
        title.append(" ")
        title.append(SEP_THIN * (width - len(section.title) - 1), style=theme.style("border"))
    rows = [fit(title, width)]

    for item in list(section.items)[:slot.max_items]:
        rows.append(fit(render_sidebar_item(item, width, theme), width))

    body_rows = slot.height - (1 if slot.has_separator else 0)
    rows.extend(blank(width) for _ in range(body_rows - len(rows)))
    rows = rows[:body_rows]
    if slot.has_separator:
        rows.append(blank(width))
    return rows


def render_sidebar_region(
    sections: Sequence[RenderedSection],
    region: Optional[Region],
    theme: DashboardTheme,
) -> list[Text]:
    """Sidebar rows: a left border, one gutter space, then section rows."""
    if region is None or region.is_empty:
        return []

    inner = sidebar_inner_width(region)
    section_rows: list[Text] = []
    for section in sections:
        section_rows.extend(render_section(section, inner, theme))
    section_rows = section_rows[:region.height]
    section_rows.extend(blank(inner) for _ in range(region.height - len(section_rows)))

    rows = []
    for section_row in section_rows:
        line = Text(no_wrap=True)
        line.append(SEP_VERTICAL, style=theme.style("border"))
        line.append(" ")
        line.append_text(section_row)
        rows.append(fit(line, region.width))
    return rows


# ============================================================
# Whole Frame
# ============================================================

def compose_frame(
    geometry: RegionGeometry,
    mode: LayoutMode,
    header_line: Text,
    content: RenderResult,
    sections: Sequence[RenderedSection],
    theme: DashboardTheme,
) -> Frame:
    """Assemble header, content and sidebar rows into one frame."""
    titles = tuple(section.title for section in sections if section.slot.height > 0)
    if geometry.width <= 0 or geometry.height <= 0:
        return Frame(Text(no_wrap=True), mode, geometry, ())

    header_rows = render_header_region(header_line, geometry.header, theme)
    content_rows = render_content_region(content, geometry.content)
    sidebar_rows = render_sidebar_region(sections, geometry.sidebar, theme)

    lines = list(header_rows)
    body_height = geometry.height - len(header_rows)
    for row in range(body_height):
        line = Text(no_wrap=True)
        if row < len(content_rows):
            line.append_text(content_rows[row])
        if row < len(sidebar_rows):
            line.append_text(sidebar_rows[row])
        lines.append(fit(line, geometry.width))

    text = Text("\n", no_wrap=True).join(lines)
    text.no_wrap = True
    text.overflow = "crop"
    return Frame(text, mode, geometry, titles if geometry.sidebar is not None else ())
