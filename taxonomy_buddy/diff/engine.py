"""
Line-level unified diff with context collapsing.

`build_diff(old, new)` turns two texts into the ordered list of items a code
pair is reviewed from. Each item is one of four tagged models:

- ``UnchangedLine``  (line, old_line, new_line)
- ``AddedLine``      (line, new_line)            old_line is always None
- ``RemovedLine``    (line, old_line)            new_line is always None
- ``CollapsedLines`` (skipped, old_line_start, new_line_start)

Runs of equal lines longer than `COLLAPSE_THRESHOLD` keep `CONTEXT_LINES`
lines on each side and hide the middle behind a single ``CollapsedLines``
item; line counters still advance over the hidden lines. The order of the
returned list is the rendering order.
"""

from difflib import SequenceMatcher
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CONTEXT_LINES = 3
COLLAPSE_THRESHOLD = 6


class _DiffItem(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class UnchangedLine(_DiffItem):
    kind: Literal["unchanged"] = "unchanged"
    line: str
    old_line: int
    new_line: int


class AddedLine(_DiffItem):
    kind: Literal["added"] = "added"
    line: str
    old_line: None = None
    new_line: int


class RemovedLine(_DiffItem):
    kind: Literal["removed"] = "removed"
    line: str
    old_line: int
    new_line: None = None


class CollapsedLines(_DiffItem):
    kind: Literal["collapsed"] = "collapsed"
    skipped: int
    old_line_start: int
    new_line_start: int


DiffItem = Annotated[
    Union[UnchangedLine, AddedLine, RemovedLine, CollapsedLines],
    Field(discriminator="kind"),
]


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping the empty tail left by a final newline."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def diff_runs(old_lines: list[str], new_lines: list[str]):
    """
    Yield ``(tag, lines)`` runs where tag is ``equal``, ``removed`` or ``added``.

    A replaced block is reported as its removed run followed by its added run.
    """
    matcher = SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            yield "equal", old_lines[i1:i2]
            continue
        if tag in ("delete", "replace"):
            yield "removed", old_lines[i1:i2]
        if tag in ("insert", "replace"):
            yield "added", new_lines[j1:j2]


def build_diff(old: str, new: str) -> list[DiffItem]:
    """
    Build the unified, collapsed diff of two texts.

    Parameters
    ----------
    old : str
        Text before the change (``version1``).
    new : str
        Text after the change (``version2``).

    Returns
    -------
    list[DiffItem]
        Items in rendering order. Line numbers start at 1.

    Example
    -------
    >>> [item.kind for item in build_diff("a\\nb\\nc\\n", "a\\nX\\nc\\n")]
    ['unchanged', 'removed', 'added', 'unchanged']
    """
    old_line = 1
    new_line = 1
    items: list[DiffItem] = []

    for tag, lines in diff_runs(split_lines(old), split_lines(new)):
        if tag == "added":
            for line in lines:
                items.append(AddedLine(line=line, new_line=new_line))
                new_line += 1
        elif tag == "removed":
            for line in lines:
                items.append(RemovedLine(line=line, old_line=old_line))
                old_line += 1
        else:
            if len(lines) > COLLAPSE_THRESHOLD:
                head = lines[:CONTEXT_LINES]
                tail = lines[-CONTEXT_LINES:]
                skipped = len(lines) - 2 * CONTEXT_LINES
            else:
                head, tail, skipped = lines, [], 0

            for line in head:
                items.append(UnchangedLine(line=line, old_line=old_line, new_line=new_line))
                old_line += 1
                new_line += 1
            if skipped:
                items.append(CollapsedLines(skipped=skipped, old_line_start=old_line, new_line_start=new_line))
                old_line += skipped
                new_line += skipped
            for line in tail:
                items.append(UnchangedLine(line=line, old_line=old_line, new_line=new_line))
                old_line += 1
                new_line += 1

    return items
