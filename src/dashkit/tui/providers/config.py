"""AppConfig: the provider registry handed to the framework."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from dashkit.config.settings import DashboardSettings, load_settings
from dashkit.errors import ConfigurationError

from .base import ContentProvider, HeaderDataProvider, SidebarSection


@dataclass(frozen=True)
class AppConfig:
    """Providers plus layout options for one dashboard.

    ``sidebar_sections`` is copied into a tuple, so the host can't change
    the registered sections after construction. Sections render in the
    order given here.
    """

    content_provider: ContentProvider
    header_provider: HeaderDataProvider
    sidebar_sections: Sequence[SidebarSection] = ()
    show_sidebar_by_default: bool = True
    compact_width_breakpoint: int = 120
    compact_height_breakpoint: int = 30
    settings: DashboardSettings = field(default_factory=load_settings)

    def __post_init__(self):
        if self.content_provider is None:
            raise ConfigurationError("a content provider is required", field="content_provider")
        if self.header_provider is None:
            raise ConfigurationError("a header provider is required", field="header_provider")
        if not isinstance(self.content_provider, ContentProvider):
            raise ConfigurationError(
                f"{type(self.content_provider).__name__} does not implement ContentProvider",
                field="content_provider",
            )
        if not isinstance(self.header_provider, HeaderDataProvider):
            raise ConfigurationError(
                f"{type(self.header_provider).__name__} does not implement HeaderDataProvider",
                field="header_provider",
            )

        sections = tuple(self.sidebar_sections or ())
        for index, section in enumerate(sections):
            if section is None or not isinstance(section, SidebarSection):
                raise ConfigurationError(
                    f"sidebar section {index} ({type(section).__name__}) "
                    "does not implement SidebarSection",
                    field="sidebar_sections",
                )
        object.__setattr__(self, "sidebar_sections", sections)

        for name in ("compact_width_breakpoint", "compact_height_breakpoint"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative integer", field=name)
