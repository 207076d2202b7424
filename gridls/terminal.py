"""Terminal width lookup for grid layout."""

from __future__ import annotations

import shutil


def resolve_terminal_width(fallback: int) -> int:
    """Return the output terminal's column count, or ``fallback`` when unknown."""
    term = shutil.get_terminal_size((fallback, 24))
    return max(1, term.columns)
