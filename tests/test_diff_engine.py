"""Tests for the unified diff engine and its text rendering."""

from __future__ import annotations

import random

import pytest

from taxonomy_buddy.diff import (
    COLLAPSE_THRESHOLD,
    CONTEXT_LINES,
    AddedLine,
    CollapsedLines,
    RemovedLine,
    UnchangedLine,
    build_diff,
    render_unified,
)
from taxonomy_buddy.diff.engine import diff_runs, split_lines


def _text(lines):
    return "".join(f"{line}\n" for line in lines)


def _rebuild(items, old_lines, new_lines):
    """Rebuild both sides from the items, re-inserting hidden lines at each collapse marker."""
    old_out, new_out = [], []
    for item in items:
        if item.kind == "unchanged":
            old_out.append(item.line)
            new_out.append(item.line)
        elif item.kind == "removed":
            old_out.append(item.line)
        elif item.kind == "added":
            new_out.append(item.line)
        else:
            start = item.old_line_start - 1
            hidden = old_lines[start:start + item.skipped]
            assert hidden == new_lines[item.new_line_start - 1:item.new_line_start - 1 + item.skipped]
            old_out.extend(hidden)
            new_out.extend(hidden)
    return old_out, new_out


def _random_pair(rng: random.Random):
    vocabulary = ["a", "b", "c", "d", "x", "y", "{", "}", "return 0;", ""]
    old = [rng.choice(vocabulary) for _ in range(rng.randint(0, 30))]
    new = list(old)
    for _ in range(rng.randint(0, 5)):
        op = rng.choice(["insert", "delete", "replace"])
        if op == "insert" or not new:
            new.insert(rng.randint(0, len(new)), rng.choice(vocabulary))
        elif op == "delete":
            del new[rng.randrange(len(new))]
        else:
            new[rng.randrange(len(new))] = rng.choice(vocabulary)
    return old, new


RANDOM_PAIRS = [_random_pair(random.Random(seed)) for seed in range(40)]


# ---------------------------------------------------------------------------
# Line splitting
# ---------------------------------------------------------------------------


class TestSplitLines:
    def test_trailing_newline_is_dropped(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_no_trailing_newline(self):
        assert split_lines("a\nb") == ["a", "b"]

    def test_empty_text_has_no_lines(self):
        assert split_lines("") == []

    def test_only_one_trailing_empty_line_is_dropped(self):
        assert split_lines("a\n\n") == ["a", ""]


# ---------------------------------------------------------------------------
# End-to-end examples
# ---------------------------------------------------------------------------


class TestBuildDiffExamples:
    def test_single_line_change(self):
        items = build_diff("a\nb\nc\n", "a\nX\nc\n")
        assert items == [
            UnchangedLine(line="a", old_line=1, new_line=1),
            RemovedLine(line="b", old_line=2),
            AddedLine(line="X", new_line=2),
            UnchangedLine(line="c", old_line=3, new_line=3),
        ]
        assert items[1].new_line is None
        assert items[2].old_line is None

    def test_ten_identical_lines_between_changes_collapse(self):
        middle = [f"same {n}" for n in range(10)]
        old = _text(["old head"] + middle + ["old tail"])
        new = _text(["new head"] + middle + ["new tail"])

        items = build_diff(old, new)
        collapsed = [item for item in items if item.kind == "collapsed"]

        assert len(collapsed) == 1
        assert collapsed[0].skipped == 4
        position = items.index(collapsed[0])
        assert [item.kind for item in items[position - 3:position]] == ["unchanged"] * 3
        assert [item.kind for item in items[position + 1:position + 4]] == ["unchanged"] * 3
        assert [item.line for item in items[position - 3:position]] == middle[:3]
        assert [item.line for item in items[position + 1:position + 4]] == middle[-3:]

    def test_collapse_marker_carries_counters_at_skip_start(self):
        lines = [str(n) for n in range(1, 11)]
        items = build_diff(_text(lines), _text(lines))
        assert items[3] == CollapsedLines(skipped=4, old_line_start=4, new_line_start=4)
        assert items[4] == UnchangedLine(line="8", old_line=8, new_line=8)

    def test_collapse_after_insertion_uses_shifted_new_counter(self):
        lines = [str(n) for n in range(1, 9)]
        items = build_diff(_text(lines), _text(["new"] + lines))
        assert items[0] == AddedLine(line="new", new_line=1)
        collapsed = next(item for item in items if item.kind == "collapsed")
        assert collapsed == CollapsedLines(skipped=2, old_line_start=4, new_line_start=5)


# ---------------------------------------------------------------------------
# Edge cases
# ---------------------------------------------------------------------------


class TestBuildDiffEdgeCases:
    def test_both_empty(self):
        assert build_diff("", "") == []

    def test_empty_old_text_is_all_added(self):
        items = build_diff("", "a\nb\n")
        assert items == [AddedLine(line="a", new_line=1), AddedLine(line="b", new_line=2)]

    def test_empty_new_text_is_all_removed(self):
        items = build_diff("a\nb\n", "")
        assert items == [RemovedLine(line="a", old_line=1), RemovedLine(line="b", old_line=2)]

    def test_identical_short_texts_do_not_collapse(self):
        lines = [str(n) for n in range(COLLAPSE_THRESHOLD)]
        items = build_diff(_text(lines), _text(lines))
        assert [item.kind for item in items] == ["unchanged"] * COLLAPSE_THRESHOLD

    def test_identical_long_texts_collapse_once(self):
        lines = [str(n) for n in range(COLLAPSE_THRESHOLD + 1)]
        items = build_diff(_text(lines), _text(lines))
        assert [item.kind for item in items] == ["unchanged"] * 3 + ["collapsed"] + ["unchanged"] * 3
        assert items[3].skipped == 1

    def test_replacement_lists_removed_before_added(self):
        runs = list(diff_runs(["a", "b"], ["c"]))
        assert [tag for tag, _ in runs] == ["removed", "added"]

    def test_items_are_immutable(self):
        item = build_diff("a\n", "b\n")[0]
        with pytest.raises(Exception):
            item.line = "changed"


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestBuildDiffProperties:
    @pytest.mark.parametrize("old_lines,new_lines", RANDOM_PAIRS)
    def test_collapse_is_lossless(self, old_lines, new_lines):
        items = build_diff(_text(old_lines), _text(new_lines))
        assert _rebuild(items, old_lines, new_lines) == (old_lines, new_lines)

    @pytest.mark.parametrize("old_lines,new_lines", RANDOM_PAIRS)
    def test_line_numbers_advance_by_one_per_consumed_line(self, old_lines, new_lines):
        expected_old, expected_new = 1, 1
        for item in build_diff(_text(old_lines), _text(new_lines)):
            if item.kind == "collapsed":
                assert (item.old_line_start, item.new_line_start) == (expected_old, expected_new)
                expected_old += item.skipped
                expected_new += item.skipped
                continue
            if item.kind in ("unchanged", "removed"):
                assert item.old_line == expected_old
                expected_old += 1
            else:
                assert item.old_line is None
            if item.kind in ("unchanged", "added"):
                assert item.new_line == expected_new
                expected_new += 1
            else:
                assert item.new_line is None
        assert expected_old == len(old_lines) + 1
        assert expected_new == len(new_lines) + 1

    @pytest.mark.parametrize("run_length", range(1, 16))
    def test_collapse_count_per_equal_run(self, run_length):
        same = [f"s{n}" for n in range(run_length)]
        items = build_diff(_text(["A"] + same + ["B"]), _text(["C"] + same + ["D"]))
        collapsed = [item for item in items if item.kind == "collapsed"]
        if run_length <= COLLAPSE_THRESHOLD:
            assert collapsed == []
        else:
            assert len(collapsed) == 1
            assert collapsed[0].skipped == run_length - 2 * CONTEXT_LINES


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRenderUnified:
    def test_markers_and_gutters(self):
        text = render_unified(build_diff("a\nb\nc\n", "a\nX\nc\n"))
        lines = text.split("\n")
        assert lines[0] == "   1    1   a"
        assert lines[1] == "   2      - b"
        assert lines[2] == "        2 + X"
        assert lines[3] == "   3    3   c"

    def test_collapsed_placeholder(self):
        lines = [str(n) for n in range(10)]
        text = render_unified(build_diff(_text(lines), _text(lines)))
        assert "... 4 unchanged lines ..." in text

    def test_title_is_printed_first(self):
        text = render_unified(build_diff("a\n", "b\n"), title="  Fix bug\n")
        assert text.startswith("Fix bug\n\n")

    def test_json_shape_uses_camel_case(self):
        item = build_diff("", "x\n")[0]
        assert item.model_dump(by_alias=True) == {"kind": "added", "line": "x", "oldLine": None, "newLine": 1}
