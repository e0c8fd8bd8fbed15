"""Core layout and frame composition."""

from .frame import Frame, RenderedSection, compose_frame
from .layout import (
    LayoutMode,
    LayoutStateMachine,
    Region,
    RegionGeometry,
    SectionSlot,
    SizeConstraints,
    allocate_sidebar_sections,
    calculate_height,
    compute_geometry,
    compute_layout_mode,
)

__all__ = [
    "Frame",
    "RenderedSection",
    "compose_frame",
    "LayoutMode",
    "LayoutStateMachine",
    "Region",
    "RegionGeometry",
    "SectionSlot",
    "SizeConstraints",
    "allocate_sidebar_sections",
    "calculate_height",
    "compute_geometry",
    "compute_layout_mode",
]
