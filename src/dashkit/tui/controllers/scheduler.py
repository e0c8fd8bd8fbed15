"""Refresh scheduler for dashkit.

Holds the timed triggers providers asked for. The scheduler never sleeps
and never reads a clock: callers pass ``now`` in, and whoever drives the
event loop asks for ``next_deadline()`` and calls ``pop_due()`` when it
arrives.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from ..state.events import TickRequest

MAX_DELAY = 365 * 24 * 60 * 60
"""Longest delay in seconds a trigger can wait; longer requests are clamped."""


class Role(str, Enum):
    """Which provider (or dispatcher duty) a trigger belongs to."""

    CONTENT = "content"
    HEADER = "header"
    SECTION = "section"
    REFRESH = "refresh"


@dataclass(frozen=True)
class Target:
    """Recipient of a fired trigger. ``index`` is set for sections only."""

    role: Role
    index: Optional[int] = None

    def __str__(self) -> str:
        if self.index is None:
            return self.role.value
        return f"{self.role.value}[{self.index}]"


CONTENT = Target(Role.CONTENT)
HEADER = Target(Role.HEADER)
REFRESH = Target(Role.REFRESH)


def section(index: int) -> Target:
    return Target(Role.SECTION, index)


@dataclass(order=True, frozen=True)
class PendingTrigger:
    """A scheduled tick waiting for its deadline."""

    fire_at: datetime
    seq: int
    target: Target = field(compare=False)
    request: TickRequest = field(compare=False)
    scheduled_at: datetime = field(compare=False)


class RefreshScheduler:
    """Queue of pending timed triggers ordered by deadline, then arrival.

    Duplicate requests are never merged; each provider's cadence is
    independent. A trigger fires no earlier than its requested delay.
    """

    def __init__(self):
        self._queue: list[PendingTrigger] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._queue)

    def schedule(self, request: TickRequest, target: Target, now: datetime) -> PendingTrigger:
        """Queue ``request`` for ``target``.

        Negative delays fire immediately and delays beyond ``MAX_DELAY`` are
        clamped to it. The delay must be a finite number.
        """
        delay = min(max(0.0, float(request.delay)), MAX_DELAY)
        trigger = PendingTrigger(
            fire_at=now + timedelta(seconds=delay),
            seq=next(self._counter),
            target=target,
            request=request,
            scheduled_at=now,
        )
        heapq.heappush(self._queue, trigger)
        return trigger

    def next_deadline(self) -> Optional[datetime]:
        """Earliest pending deadline, or None when idle."""
        return self._queue[0].fire_at if self._queue else None

    def pop_due(self, now: datetime) -> list[PendingTrigger]:
        """Remove and return every trigger due at ``now``, in firing order."""
        due = []
        while self._queue and self._queue[0].fire_at <= now:
            due.append(heapq.heappop(self._queue))
        return due

    def has_pending(self, target: Target, tag: str) -> bool:
        """True while ``target`` still waits on a trigger tagged ``tag``."""
        return any(t.target == target and t.request.tag == tag for t in self._queue)

    def pending(self) -> list[PendingTrigger]:
        """Snapshot of pending triggers in firing order."""
        return sorted(self._queue)

    def clear(self) -> None:
        self._queue.clear()
