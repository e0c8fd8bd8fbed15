"""dashkit TUI state package.

Contains event and follow-up request definitions.
"""

from .events import (
    DashboardEvent,
    FollowUps,
    Key,
    Mouse,
    Resize,
    Tick,
    TickRequest,
    tick,
)

__all__ = [
    "DashboardEvent",
    "FollowUps",
    "Key",
    "Mouse",
    "Resize",
    "Tick",
    "TickRequest",
    "tick",
]
