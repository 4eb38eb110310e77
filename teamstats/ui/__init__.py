"""Public exports for the :mod:`teamstats.ui` package."""

from __future__ import annotations

from .confirm import confirm_delete
from .feedback import render_flash, show_error, show_success
from .nav import go
from .sidebar import build_sidebar

__all__ = [
    "build_sidebar",
    "confirm_delete",
    "go",
    "render_flash",
    "show_error",
    "show_success",
]
