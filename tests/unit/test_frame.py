"""Tests for the pure frame-composition helpers."""

from __future__ import annotations

from rich.text import Text

from dashkit.tui.components.core.frame import (
    RenderedSection,
    compose_frame,
    fit,
    render_content_region,
    render_header,
    render_header_region,
    render_section,
    render_sidebar_item,
    sidebar_inner_width,
)
from dashkit.tui.components.core.layout import LayoutMode, Region, SectionSlot, compute_geometry
from dashkit.tui.providers import ItemStatus, SidebarItem
from dashkit.tui.styles import get_theme

THEME = get_theme()


class TestFit:

    def test_pads_short_lines(self) -> None:
        assert fit(Text("ab"), 5).plain == "ab   "

    def test_crops_long_lines(self) -> None:
        assert fit(Text("abcdefgh"), 3).plain == "abc"

    def test_zero_width(self) -> None:
        assert fit(Text("abc"), 0).plain == ""

    def test_does_not_mutate_input(self) -> None:
        original = Text("abcdef")
        fit(original, 2)
        assert original.plain == "abcdef"


class TestRenderHeader:

    STATUS = {"cpu": 12, "mem": "2.1G"}

    def test_drops_fields_from_the_end(self) -> None:
        line = render_header("ACME", "Console", self.STATUS, 20, LayoutMode.NORMAL, THEME)
        assert line.plain == "ACME Console  cpu 12"

    def test_all_fields_fit(self) -> None:
        line = render_header("ACME", "Console", self.STATUS, 40, LayoutMode.NORMAL, THEME)
        assert line.plain.endswith("cpu 12 • mem 2.1G")
        assert line.cell_len == 40

    def test_brand_truncated_when_nothing_fits(self) -> None:
        line = render_header("ACME", "Console", self.STATUS, 8, LayoutMode.NORMAL, THEME)
        assert line.plain == "ACME Co…"

    def test_compact_shows_values_only(self) -> None:
        line = render_header("ACME", "Console", self.STATUS, 30, LayoutMode.COMPACT, THEME)
        assert line.plain.startswith("ACME ")
        assert line.plain.endswith("12 • 2.1G")
        assert "Console" not in line.plain

    def test_zero_width(self) -> None:
        assert render_header("ACME", "", {}, 0, LayoutMode.NORMAL, THEME).plain == ""

    def test_status_values_are_formatted(self) -> None:
        line = render_header("A", "", {"load": 0.5, "up": True}, 30, LayoutMode.NORMAL, THEME)
        assert line.plain.endswith("load 0.5 • up yes")


class TestHeaderRegion:

    def test_rule_on_last_row_of_tall_header(self) -> None:
        rows = render_header_region(Text("hdr"), Region(0, 0, 6, 2), THEME)
        assert [row.plain for row in rows] == ["hdr   ", "──────"]

    def test_empty_region(self) -> None:
        assert render_header_region(Text("hdr"), Region(0, 0, 0, 0), THEME) == []


class TestContentRegion:

    def test_crops_and_pads(self) -> None:
        rows = render_content_region("one\ntwo\nthree\nfour", Region(0, 1, 4, 3))
        assert [row.plain for row in rows] == ["one ", "two ", "thre"]

    def test_short_content_gets_blank_rows(self) -> None:
        rows = render_content_region("x", Region(0, 1, 2, 3))
        assert [row.plain for row in rows] == ["x ", "  ", "  "]

    def test_markup_is_not_parsed(self) -> None:
        (row,) = render_content_region("[bold]x[/]", Region(0, 0, 10, 1))
        assert row.plain == "[bold]x[/]"


class TestSidebarRows:

    def test_value_right_aligned(self) -> None:
        item = SidebarItem("●", "api", "12ms", ItemStatus.SUCCESS)
        line = render_sidebar_item(item, 12, THEME)
        assert line.plain == "● api   12ms"

    def test_value_dropped_when_too_narrow(self) -> None:
        item = SidebarItem("●", "database", "healthy", ItemStatus.SUCCESS)
        line = render_sidebar_item(item, 8, THEME)
        assert line.plain == "● databa"

    def test_section_rows_fill_slot(self) -> None:
        items = [SidebarItem("•", f"item{i}") for i in range(5)]
        slot = SectionSlot(index=0, y=0, height=5, max_items=3, has_separator=True)
        rows = render_section(RenderedSection("Tasks", items, slot), 10, THEME)

        assert [row.plain for row in rows] == [
            "Tasks ────",
            "• item0   ",
            "• item1   ",
            "• item2   ",
            "          ",
        ]

    def test_zero_height_slot(self) -> None:
        slot = SectionSlot(index=1, y=3, height=0, max_items=0)
        assert render_section(RenderedSection("X", [], slot), 10, THEME) == []

    def test_inner_width(self) -> None:
        assert sidebar_inner_width(Region(10, 1, 32, 5)) == 30
        assert sidebar_inner_width(Region(10, 1, 1, 5)) == 0
        assert sidebar_inner_width(None) == 0


class TestComposeFrame:

    def test_zero_sized_frame(self, settings) -> None:
        geometry = compute_geometry(0, 0, LayoutMode.COMPACT, False, settings)
        frame = compose_frame(geometry, LayoutMode.COMPACT, Text(""), "", [], THEME)
        assert frame.plain == ""
        assert frame.section_titles == ()

    def test_content_and_sidebar_side_by_side(self, settings) -> None:
        geometry = compute_geometry(60, 4, LayoutMode.NORMAL, True, settings)
        slot = SectionSlot(index=0, y=0, height=3, max_items=2)
        section = RenderedSection("Servers", [SidebarItem("●", "api", "ok")], slot)

        frame = compose_frame(geometry, LayoutMode.NORMAL, Text("hdr"), "body", [section], THEME)
        lines = frame.lines()

        assert frame.section_titles == ("Servers",)
        assert len(lines) == 4
        assert lines[1].startswith("body")
        assert lines[1][28:].startswith("│ Servers ─")
        assert lines[2][28:].rstrip().endswith("ok")
        assert all(len(line) == 60 for line in lines)
