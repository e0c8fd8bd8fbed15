"""
Shared utilities module.
"""

from dashkit.utils.logging import (
    bind_dashboard_context,
    clear_dashboard_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    timed_operation,
)

__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_dashboard_context",
    "clear_dashboard_context",
    "timed_operation",
]
