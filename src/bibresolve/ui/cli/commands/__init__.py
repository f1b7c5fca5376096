"""CLI command implementations."""

from __future__ import annotations

from .library import export, styles
from .resolve import keys, render


__all__ = ["export", "keys", "render", "styles"]
