"""CLI module for dashkit."""

from dashkit.cli.main import app

__all__ = ["app"]
