"""prompt_toolkit TUI for the tip splitter.

Usage:
    python -m tipsplit.tui                       # Defaults or ./.tip-splitter.yaml
    python -m tipsplit.tui -s my-settings.yaml   # Explicit settings file
"""

from __future__ import annotations

__all__ = [
    "TipSplitterApp",
    "run_app",
]


def __getattr__(name: str):
    """Lazy import of TUI components."""
    if name == "TipSplitterApp":
        from tipsplit.tui.app import TipSplitterApp
        return TipSplitterApp
    if name == "run_app":
        from tipsplit.tui.app import run_app
        return run_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
