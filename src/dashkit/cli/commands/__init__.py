"""
CLI commands module.

Command submodules are registered by main.py.
"""

__all__ = [
    "ui",
]
