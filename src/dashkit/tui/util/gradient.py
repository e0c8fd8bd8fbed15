"""Gradient color utilities for dashkit.

Functions for creating color ramps and gradient-styled text.
"""

from typing import List, Tuple

from rich.style import Style
from rich.text import Text


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple.

    Args:
        hex_color: Hex color string (e.g., '#FF00FF')

    Returns:
        Tuple of (r, g, b) values 0-255
    """
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB values to hex color."""
    return f"#{r:02x}{g:02x}{b:02x}"


def interpolate_color(color1: str, color2: str, factor: float) -> str:
    """Interpolate between two colors.

    Args:
        color1: Start color (hex)
        color2: End color (hex)
        factor: Interpolation factor (0.0 = color1, 1.0 = color2)

    Returns:
        Interpolated color (hex)
    """
    factor = max(0.0, min(1.0, factor))

    r1, g1, b1 = hex_to_rgb(color1)
    r2, g2, b2 = hex_to_rgb(color2)

    r = int(r1 + (r2 - r1) * factor)
    g = int(g1 + (g2 - g1) * factor)
    b = int(b1 + (b2 - b1) * factor)

    return rgb_to_hex(r, g, b)


def blend_colors(size: int, *colors: str) -> List[str]:
    """Generate color ramp between multiple color stops.

    Args:
        size: Number of colors to generate
        *colors: Color stops (hex strings)

    Returns:
        List of interpolated colors
    """
    if size <= 0 or not colors:
        return []
    if size == 1 or len(colors) == 1:
        return [colors[0]] * size

    result = []
    segments = len(colors) - 1
    colors_per_segment = (size - 1) / segments

    for i in range(size):
        segment_index = min(int(i / colors_per_segment), segments - 1)
        segment_start = segment_index * colors_per_segment
        factor = (i - segment_start) / colors_per_segment
        result.append(
            interpolate_color(colors[segment_index], colors[segment_index + 1], factor)
        )

    return result


def apply_gradient(text: str, color_start: str, color_end: str, bold: bool = False) -> Text:
    """Apply a horizontal gradient to text.

    Args:
        text: Text to colorize
        color_start: Starting color (hex)
        color_end: Ending color (hex)
        bold: Whether to make text bold

    Returns:
        Rich Text with one color span per character
    """
    result = Text(no_wrap=True)
    if not text:
        return result

    for char, color in zip(text, blend_colors(len(text), color_start, color_end)):
        result.append(char, style=Style(color=color, bold=bold))

    return result
