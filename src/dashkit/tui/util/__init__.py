"""dashkit TUI utilities package.

Gradient and truncation helpers shared by the styling layer and providers.
"""

from .gradient import apply_gradient, blend_colors, interpolate_color
from .truncate import truncate_text

__all__ = [
    "apply_gradient",
    "blend_colors",
    "interpolate_color",
    "truncate_text",
]
