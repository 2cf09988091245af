"""Plain-text rendering of diff items, one output line per item."""

from taxonomy_buddy.diff.engine import DiffItem

GUTTER_WIDTH = 4


def _gutter(number) -> str:
    return ("" if number is None else str(number)).rjust(GUTTER_WIDTH)


def render_item(item: DiffItem) -> str:
    """Render one item as ``<old> <new> <marker> <text>``."""
    if item.kind == "unchanged":
        return f"{_gutter(item.old_line)} {_gutter(item.new_line)}   {item.line}"
    elif item.kind == "added":
        return f"{_gutter(None)} {_gutter(item.new_line)} + {item.line}"
    elif item.kind == "removed":
        return f"{_gutter(item.old_line)} {_gutter(None)} - {item.line}"
    elif item.kind == "collapsed":
        return f"{'⋮'.rjust(GUTTER_WIDTH)} {'⋮'.rjust(GUTTER_WIDTH)}   ... {item.skipped} unchanged lines ..."
    raise ValueError(f"Unknown diff item kind: {item.kind!r}")


def render_unified(items, title: str | None = None) -> str:
    """Render a whole diff, optionally preceded by the commit message."""
    out = []
    if title:
        out.append(title.strip())
        out.append("")
    out.extend(render_item(item) for item in items)
    return "\n".join(out)
