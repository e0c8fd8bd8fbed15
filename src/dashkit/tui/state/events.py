"""Event and follow-up request definitions for dashkit.

Events flow into the dispatcher one at a time. Follow-up requests flow the
other way: providers return them from their handlers to ask for a future
``Tick``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Union


# ============================================================
# Base Event Class
# ============================================================

@dataclass(frozen=True)
class DashboardEvent:
    """Base class for all events delivered to providers."""
    pass


# ============================================================
# Terminal Events
# ============================================================

@dataclass(frozen=True)
class Resize(DashboardEvent):
    """Terminal was resized."""

    width: int
    height: int


@dataclass(frozen=True)
class Key(DashboardEvent):
    """A key was pressed."""

    key: str
    character: str | None = None


@dataclass(frozen=True)
class Mouse(DashboardEvent):
    """Mouse moved or clicked at a terminal cell."""

    x: int
    y: int
    action: str = "move"
    button: int = 0


# ============================================================
# Timer Events
# ============================================================

@dataclass(frozen=True)
class Tick(DashboardEvent):
    """A timer requested through ``TickRequest`` fired."""

    timestamp: datetime
    tag: str = "tick"


# ============================================================
# Follow-up Requests
# ============================================================

@dataclass(frozen=True)
class TickRequest:
    """Ask for a ``Tick`` to be delivered back no earlier than ``delay`` seconds."""

    delay: float
    tag: str = "tick"


FollowUps = Union[TickRequest, Iterable[TickRequest], None]


def tick(delay: float = 1.0, tag: str = "tick") -> TickRequest:
    """Shorthand for a single ``TickRequest``."""
    return TickRequest(delay=delay, tag=tag)
