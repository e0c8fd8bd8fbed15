"""dashkit theme - dark palette with magenta/purple accents.

The styling collaborator used by the frame composer. Everything it returns
is a ``rich.text.Text`` or ``rich.style.Style`` that the composer embeds
as-is.
"""

from dataclasses import dataclass

from rich.style import Style
from rich.text import Text

from ..util.gradient import apply_gradient


@dataclass(frozen=True)
class DashboardTheme:
    """Dark theme with magenta accents."""

    name: str = "dashkit-dark"
    is_dark: bool = True

    # Accent colors
    primary: str = "#FF00FF"          # Magenta
    secondary: str = "#AA00FF"        # Purple
    accent: str = "#00FFFF"           # Cyan

    # Foreground colors
    fg_base: str = "#FFFFFF"          # Primary text
    fg_muted: str = "#B0B0B0"         # Secondary text
    fg_subtle: str = "#707070"        # Very dim text

    # Border
    border: str = "#333333"

    # Status colors
    success: str = "#00FF66"
    info: str = "#00AAFF"
    warning: str = "#FFAA00"
    error: str = "#FF3333"

    def status_color(self, status: str) -> str:
        """Get color for a sidebar item status."""
        status_colors = {
            "success": self.success,
            "info": self.info,
            "warning": self.warning,
            "error": self.error,
            "muted": self.fg_subtle,
        }
        key = str(getattr(status, "value", status)).lower()
        return status_colors.get(key, self.fg_subtle)

    def style(self, name: str) -> Style:
        """Get a named semantic style (text, muted, success, ...)."""
        styles = {
            "text": Style(color=self.fg_base),
            "muted": Style(color=self.fg_muted),
            "subtle": Style(color=self.fg_subtle),
            "title": Style(color=self.fg_subtle, bold=True),
            "border": Style(color=self.border),
            "primary": Style(color=self.primary, bold=True),
            "success": Style(color=self.success),
            "info": Style(color=self.info),
            "warning": Style(color=self.warning),
            "error": Style(color=self.error),
        }
        return styles.get(name, styles["text"])

    def text(self, content: str, name: str = "text") -> Text:
        """Render ``content`` in a named semantic style."""
        return Text(content, style=self.style(name), no_wrap=True)

    def gradient(
        self,
        content: str,
        start: str | None = None,
        end: str | None = None,
        bold: bool = True,
    ) -> Text:
        """Render ``content`` with a horizontal gradient (primary to secondary)."""
        return apply_gradient(
            content,
            start or self.primary,
            end or self.secondary,
            bold=bold,
        )


# Global theme instance
_current_theme: DashboardTheme = DashboardTheme()


def get_theme() -> DashboardTheme:
    """Get the current theme."""
    return _current_theme


def set_theme(theme: DashboardTheme) -> None:
    """Set the current theme."""
    global _current_theme
    _current_theme = theme
