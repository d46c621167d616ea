"""
Console utilities for CLI.
"""

import os
import sys
from typing import Optional

from rich.console import Console
from rich.theme import Theme

_THEME = Theme(
    {
        "primary": "white",
        "accent": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "green",
        "muted": "grey70",
        "box_title": "bold cyan",
    }
)


def _should_enable_color(enable: Optional[bool]) -> bool:
    """
    Respect NO_COLOR unless SEARCH_DISPATCH_FORCE_COLOR is set; when enable is
    None, auto-detect via isatty.
    """
    force_color = (os.getenv("SEARCH_DISPATCH_FORCE_COLOR") or "").lower() in ("1", "true", "yes", "on")
    if force_color:
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if enable is None:
        return bool(getattr(sys.stdout, "isatty", lambda: False)())
    return bool(enable)


def make_console(use_color: Optional[bool] = None, file=None) -> Console:
    """Create a Rich console with the CLI theme and color policy."""
    desired = _should_enable_color(use_color)
    return Console(
        theme=_THEME,
        file=file,
        no_color=not desired,
        color_system="auto" if desired else None,
        markup=True,       # render style tags like [warning]...[/warning]
        highlight=False,
    )


__all__ = ["make_console"]
