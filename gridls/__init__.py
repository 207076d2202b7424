"""Public package surface for gridls.

Exports ``main`` for programmatic CLI invocation.
The color formatter lives in ``gridls.ansi`` and the renderer in
``gridls.listing``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
