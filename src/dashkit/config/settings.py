"""Pydantic-backed dashboard settings.

Settings are layered: explicit overrides win over ``DASHKIT_*`` environment
variables, which win over the defaults declared on the model.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dashkit.errors import ConfigurationError

ENV_PREFIX = "DASHKIT_"

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class DashboardSettings(BaseModel):
    """Layout and behaviour tunables shared by every dashboard."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sidebar_width: int = Field(default=32, ge=10, le=120)
    header_height: int = Field(default=1, ge=0, le=5)
    min_content_width: int = Field(default=20, ge=0)
    refresh_interval: float = Field(default=1.0, gt=0)
    toggle_sidebar_key: str = "ctrl+b"
    log_level: str = "info"
    log_format: Literal["text", "json"] = "text"
    log_file: Path | None = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.lower()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("toggle_sidebar_key")
    @classmethod
    def _check_toggle_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("toggle_sidebar_key must not be empty")
        return value.strip().lower()


def _from_environment(env: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name in DashboardSettings.model_fields:
        raw = env.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw != "":
            values[name] = raw
    return values


def load_settings(
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> DashboardSettings:
    """Build settings from the environment plus explicit overrides.

    Args:
        env: Environment mapping (defaults to ``os.environ``)
        **overrides: Field values that take precedence over the environment

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If any value fails validation
    """
    values = _from_environment(os.environ if env is None else env)
    values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return DashboardSettings(**values)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ConfigurationError(
            f"invalid dashboard setting: {first.get('msg', exc)}",
            field=field,
        ) from exc
