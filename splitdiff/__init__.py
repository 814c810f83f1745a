"""Public package surface for splitdiff.

Re-exports the split-diff rendering entry points and ``main`` for
programmatic CLI invocation.
"""

from __future__ import annotations

from .parser import build_split_rows
from .render import SplitDiffView
from .summary import render_edit_result


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["SplitDiffView", "build_split_rows", "main", "render_edit_result"]
