"""dashkit TUI components package."""
