"""Unicode icons and symbols for dashkit.

Glyphs used by the frame composer, the built-in sidebar sections and the
demo.
"""

# Status Icons
ICON_CHECK = "✓"
ICON_CROSS = "×"
ICON_RUNNING = "●"
ICON_IDLE = "○"

# Server Icons
ICON_HEALTHY = "●"
ICON_DEGRADED = "◐"
ICON_UNAVAILABLE = "○"

# Separators
SEP_THIN = "─"
SEP_VERTICAL = "│"
SEP_DOT = "•"


def get_health_icon(status: str) -> str:
    """Get server health icon.

    Args:
        status: Health status ('healthy', 'degraded', 'unhealthy', 'unknown')

    Returns:
        Health icon
    """
    icons = {
        "healthy": ICON_HEALTHY,
        "degraded": ICON_DEGRADED,
        "unhealthy": ICON_UNAVAILABLE,
        "unknown": ICON_UNAVAILABLE,
    }
    return icons.get(status.lower(), ICON_UNAVAILABLE)
