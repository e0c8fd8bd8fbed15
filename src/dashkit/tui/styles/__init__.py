"""dashkit styles package.

Contains the theme definition and icon glyphs.
"""

from .theme import DashboardTheme, get_theme, set_theme
from .icons import *

__all__ = [
    "DashboardTheme",
    "get_theme",
    "set_theme",
]
