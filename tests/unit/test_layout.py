"""Tests for the layout engine: mode rule, geometry and sidebar allocation."""

from __future__ import annotations

import itertools

import pytest

from dashkit.config.settings import load_settings
from dashkit.tui.components.core.layout import (
    LayoutMode,
    LayoutStateMachine,
    Region,
    SizeConstraints,
    allocate_sidebar_sections,
    calculate_height,
    compute_geometry,
    compute_layout_mode,
)

pytestmark = pytest.mark.layout


# ── Mode rule ─────────────────────────────────────────────────────────

class TestComputeLayoutMode:
    """COMPACT iff narrower or shorter than a breakpoint, strictly."""

    @pytest.mark.parametrize("bw,bh", [(100, 25), (120, 30), (0, 0), (1, 1)])
    def test_boundary_values_are_normal(self, bw: int, bh: int) -> None:
        assert compute_layout_mode(bw, bh, bw, bh) is LayoutMode.NORMAL

    @pytest.mark.parametrize(
        "w,h,expected",
        [
            (99, 25, LayoutMode.COMPACT),
            (100, 24, LayoutMode.COMPACT),
            (99, 24, LayoutMode.COMPACT),
            (101, 26, LayoutMode.NORMAL),
            (80, 20, LayoutMode.COMPACT),
            (0, 0, LayoutMode.COMPACT),
        ],
    )
    def test_against_breakpoints(self, w: int, h: int, expected: LayoutMode) -> None:
        assert compute_layout_mode(w, h, 100, 25) is expected

    def test_rule_holds_over_grid(self) -> None:
        for w, h, bw, bh in itertools.product(range(0, 6), range(0, 6), range(0, 6), range(0, 6)):
            compact = w < bw or h < bh
            mode = compute_layout_mode(w, h, bw, bh)
            assert (mode is LayoutMode.COMPACT) == compact, (w, h, bw, bh)


# ── Regions ───────────────────────────────────────────────────────────

class TestRegion:

    def test_negative_sizes_clamp(self) -> None:
        region = Region(3, 4, -10, -1)
        assert region.width == 0
        assert region.height == 0
        assert region.is_empty

    def test_contains_is_half_open(self) -> None:
        region = Region(10, 5, 4, 2)
        assert region.contains(10, 5)
        assert region.contains(13, 6)
        assert not region.contains(14, 6)
        assert not region.contains(13, 7)
        assert not region.contains(9, 5)

    def test_overlaps(self) -> None:
        assert Region(0, 0, 5, 5).overlaps(Region(4, 4, 5, 5))
        assert not Region(0, 0, 5, 5).overlaps(Region(5, 0, 5, 5))
        assert not Region(0, 0, 5, 5).overlaps(Region(1, 1, 0, 3))


# ── Geometry ──────────────────────────────────────────────────────────

class TestComputeGeometry:

    def test_normal_with_sidebar(self, settings) -> None:
        geometry = compute_geometry(200, 50, LayoutMode.NORMAL, True, settings)

        assert geometry.header == Region(0, 0, 200, 1)
        assert geometry.sidebar == Region(168, 1, 32, 49)
        assert geometry.content == Region(0, 1, 168, 49)

    def test_compact_has_no_sidebar(self, settings) -> None:
        geometry = compute_geometry(80, 20, LayoutMode.COMPACT, True, settings)

        assert geometry.sidebar is None
        assert geometry.content == Region(0, 1, 80, 19)

    def test_hidden_sidebar(self, settings) -> None:
        geometry = compute_geometry(200, 50, LayoutMode.NORMAL, False, settings)

        assert geometry.sidebar is None
        assert geometry.content.width == 200

    def test_sidebar_needs_room_for_content(self, settings) -> None:
        # 32 sidebar + 20 minimum content
        assert compute_geometry(52, 10, LayoutMode.NORMAL, True, settings).sidebar is not None
        assert compute_geometry(51, 10, LayoutMode.NORMAL, True, settings).sidebar is None

    def test_custom_widths(self) -> None:
        settings = load_settings(env={}, sidebar_width=40, header_height=2, min_content_width=0)
        geometry = compute_geometry(100, 30, LayoutMode.NORMAL, True, settings)

        assert geometry.header.height == 2
        assert geometry.sidebar == Region(60, 2, 40, 28)
        assert geometry.content == Region(0, 2, 60, 28)

    @pytest.mark.parametrize("w,h", [(0, 0), (0, 10), (10, 0), (-5, -3), (1, 1), (1, 2), (3, 1)])
    def test_degenerate_sizes_never_negative(self, settings, w: int, h: int) -> None:
        for mode in LayoutMode:
            geometry = compute_geometry(w, h, mode, True, settings)
            for region in geometry.regions():
                assert region.width >= 0
                assert region.height >= 0

    def test_regions_stay_in_bounds_and_disjoint(self, settings) -> None:
        sizes = itertools.product([0, 1, 5, 20, 51, 52, 80, 120, 300], [0, 1, 2, 10, 30, 60])
        for (w, h), mode, visible in itertools.product(sizes, LayoutMode, [True, False]):
            geometry = compute_geometry(w, h, mode, visible, settings)
            regions = geometry.regions()
            for region in regions:
                if region.is_empty:
                    continue
                assert region.x >= 0 and region.y >= 0
                assert region.right <= w
                assert region.bottom <= h
            for first, second in itertools.combinations(regions, 2):
                assert not first.overlaps(second), (w, h, mode, visible)


# ── State machine ─────────────────────────────────────────────────────

class TestLayoutStateMachine:

    def test_starts_normal(self) -> None:
        machine = LayoutStateMachine(100, 25)
        assert machine.mode is LayoutMode.NORMAL
        assert machine.transition_count == 0

    def test_transitions_follow_resizes(self) -> None:
        machine = LayoutStateMachine(100, 25)

        assert machine.update(80, 20) is LayoutMode.COMPACT
        assert machine.update(100, 25) is LayoutMode.NORMAL
        assert machine.update(150, 40) is LayoutMode.NORMAL

        assert machine.history == ["compact", "normal"]
        assert machine.transition_count == 2

    def test_no_hysteresis(self) -> None:
        machine = LayoutStateMachine(100, 25)
        for _ in range(3):
            machine.update(99, 30)
            machine.update(100, 30)
        assert machine.transition_count == 6

    def test_same_mode_does_not_transition(self) -> None:
        machine = LayoutStateMachine(100, 25)
        machine.update(50, 10)
        machine.update(60, 12)
        assert machine.transition_count == 1


# ── Height allocation ─────────────────────────────────────────────────

class TestCalculateHeight:

    def test_empty(self) -> None:
        assert calculate_height(10, []) == {}

    def test_preferred_then_priority(self) -> None:
        allocated = calculate_height(
            10,
            [
                ("a", SizeConstraints(min_height=1, preferred_height=3)),
                ("b", SizeConstraints(min_height=1, preferred_height=3)),
            ],
            priorities={"a": 2, "b": 1},
        )
        assert allocated == {"a": 7, "b": 3}

    def test_respects_max_height(self) -> None:
        allocated = calculate_height(
            10,
            [
                ("a", SizeConstraints(min_height=1, preferred_height=2, max_height=2)),
                ("b", SizeConstraints(min_height=1, preferred_height=2)),
            ],
            priorities={"a": 2, "b": 1},
        )
        assert allocated == {"a": 2, "b": 8}

    def test_shrinks_lowest_priority_when_minimums_overflow(self) -> None:
        allocated = calculate_height(
            3,
            [
                ("a", SizeConstraints(min_height=2)),
                ("b", SizeConstraints(min_height=2)),
            ],
            priorities={"a": 2, "b": 1},
        )
        assert allocated == {"a": 2, "b": 1}


class TestAllocateSidebarSections:

    def test_earlier_sections_win_leftovers(self) -> None:
        slots = allocate_sidebar_sections(10, 3)

        assert [slot.height for slot in slots] == [4, 3, 3]
        assert [slot.y for slot in slots] == [0, 4, 7]
        assert [slot.max_items for slot in slots] == [2, 1, 2]
        assert [slot.has_separator for slot in slots] == [True, True, False]

    def test_single_section_has_no_separator(self) -> None:
        (slot,) = allocate_sidebar_sections(6, 1)
        assert slot.height == 6
        assert slot.max_items == 5
        assert not slot.has_separator

    def test_too_short_starves_later_sections(self) -> None:
        slots = allocate_sidebar_sections(2, 3)
        assert [slot.height for slot in slots] == [2, 0, 0]
        assert all(slot.max_items == 0 for slot in slots)

    def test_no_sections(self) -> None:
        assert allocate_sidebar_sections(10, 0) == []

    def test_allocation_invariants(self) -> None:
        for height, count in itertools.product(range(0, 40), range(1, 6)):
            slots = allocate_sidebar_sections(height, count)
            assert len(slots) == count
            assert sum(slot.height for slot in slots) <= height
            assert [slot.index for slot in slots] == list(range(count))
            for slot in slots:
                assert slot.height >= 0
                assert slot.max_items >= 0
                assert slot.max_items <= slot.height
