"""
The `diff` package builds and renders the line-level view a code pair is
reviewed from.

Contents
--------
- engine
    `build_diff(old, new)` — unified diff items (unchanged / added / removed /
    collapsed) with line numbers and context collapsing.
- render
    `render_unified(items)` — plain-text rendering of those items.
"""

from taxonomy_buddy.diff.engine import (
    COLLAPSE_THRESHOLD,
    CONTEXT_LINES,
    AddedLine,
    CollapsedLines,
    DiffItem,
    RemovedLine,
    UnchangedLine,
    build_diff,
)
from taxonomy_buddy.diff.render import render_unified

__all__ = [
    "COLLAPSE_THRESHOLD",
    "CONTEXT_LINES",
    "AddedLine",
    "CollapsedLines",
    "DiffItem",
    "RemovedLine",
    "UnchangedLine",
    "build_diff",
    "render_unified",
]
