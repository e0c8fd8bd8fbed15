"""
Dashboard CLI commands.

Launch the sample dashboard and check the terminal stack.
"""

from pathlib import Path
from typing import Optional

import typer

from dashkit.config.settings import load_settings
from dashkit.errors import ConfigurationError


def demo(
    no_sidebar: bool = typer.Option(False, "--no-sidebar", help="Start with the sidebar hidden"),
    width_breakpoint: int = typer.Option(100, "--width-breakpoint", help="Compact below this width"),
    height_breakpoint: int = typer.Option(25, "--height-breakpoint", help="Compact below this height"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write logs to this file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="debug|info|warning|error"),
    no_mouse: bool = typer.Option(False, "--no-mouse", help="Don't capture the mouse"),
) -> None:
    """Run the sample dashboard."""
    try:
        from dashkit.demo import build_demo_config
        from dashkit.tui.app import launch

        settings = load_settings(log_file=log_file, log_level=log_level)
        config = build_demo_config(
            show_sidebar=not no_sidebar,
            width_breakpoint=width_breakpoint,
            height_breakpoint=height_breakpoint,
            settings=settings,
        )
    except ImportError as e:
        typer.echo(f"TUI dependencies not installed: {e}", err=True)
        typer.echo("Install with: pip install textual rich", err=True)
        raise typer.Exit(1)
    except ConfigurationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(2)

    launch(config, mouse=not no_mouse)


def check() -> None:
    """Check if TUI dependencies are available."""
    dependencies = {
        "textual": "TUI framework",
        "rich": "Rich text rendering",
    }

    all_ok = True
    for pkg, desc in dependencies.items():
        try:
            __import__(pkg)
            typer.echo(f"✓ {pkg}: {desc}")
        except ImportError:
            typer.echo(f"✗ {pkg}: {desc} (not installed)")
            all_ok = False

    if all_ok:
        typer.echo("\n✓ All TUI dependencies are available")
        typer.echo("Run 'dashkit demo' to launch")
    else:
        typer.echo("\n✗ Some dependencies are missing")
        typer.echo("Install with: pip install textual rich")
        raise typer.Exit(1)
