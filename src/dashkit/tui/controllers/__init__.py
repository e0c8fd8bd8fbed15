"""dashkit controllers package.

The event dispatcher and the refresh scheduler that feeds it.
"""

from .dispatcher import REFRESH_TAG, EventDispatcher
from .scheduler import (
    CONTENT,
    HEADER,
    REFRESH,
    PendingTrigger,
    RefreshScheduler,
    Role,
    Target,
    section,
)

__all__ = [
    "EventDispatcher",
    "REFRESH_TAG",
    "RefreshScheduler",
    "PendingTrigger",
    "Role",
    "Target",
    "CONTENT",
    "HEADER",
    "REFRESH",
    "section",
]
