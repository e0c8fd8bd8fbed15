"""Keybinding definitions for dashkit.

Keys the framework handles itself. Every other key is delivered to the
content provider.
"""

from dataclasses import dataclass
from typing import List

from dashkit.config.settings import DashboardSettings


@dataclass(frozen=True)
class KeyBinding:
    """A keyboard binding definition."""

    key: str
    action: str
    description: str
    context: str = "global"  # global = Textual app binding, dispatcher = handled by the dispatcher


# Handled by the Textual app before events reach the dispatcher
GLOBAL_KEYS: List[KeyBinding] = [
    KeyBinding("ctrl+q", "quit", "Quit"),
]


def get_dashboard_keys(settings: DashboardSettings) -> List[KeyBinding]:
    """All framework-level keys for the given settings."""
    return GLOBAL_KEYS + [
        KeyBinding(
            settings.toggle_sidebar_key,
            "toggle_sidebar",
            "Toggle sidebar",
            "dispatcher",
        ),
    ]


def get_help_text(settings: DashboardSettings) -> str:
    """One line per framework key, for help panes."""
    return "\n".join(
        f"{binding.key:<12} {binding.description}"
        for binding in get_dashboard_keys(settings)
    )
