"""
Tests for the Span Editor.

Verifies:
1. Untouched regions print byte for byte.
2. Outer edits absorb nested inner edits.
3. Conflicting edits are rejected.
4. Deletions merge when they overlap.
"""

import pytest

from jest_codemods.core.editor import EditConflictError, SourceEditor


def test_no_edits_prints_source():
  editor = SourceEditor(b"const a = 1;\n")
  assert not editor.changed
  assert editor.render() == "const a = 1;\n"


def test_identical_replacement_is_not_recorded():
  editor = SourceEditor(b"test(x)")
  editor.replace(0, 4, "test")
  assert not editor.changed


def test_nested_edits_compose_innermost_first():
  src = b"outer(inner(x))"
  editor = SourceEditor(src)
  editor.replace(6, 14, "INNER")
  assert editor.text(0, len(src)) == "outer(INNER)"

  editor.replace(0, len(src), f"wrap[{editor.text(6, 14)}]")
  assert editor.render() == "wrap[INNER]"
  assert len(editor.edits) == 1


def test_partial_overlap_raises():
  editor = SourceEditor(b"abcdefgh")
  editor.replace(2, 5, "X")
  with pytest.raises(EditConflictError):
    editor.replace(4, 7, "Y")


def test_edit_inside_existing_edit_raises():
  editor = SourceEditor(b"abcdefgh")
  editor.replace(1, 7, "X")
  with pytest.raises(EditConflictError):
    editor.replace(2, 3, "Y")


def test_text_cutting_through_edit_raises():
  editor = SourceEditor(b"abcdefgh")
  editor.replace(2, 5, "X")
  with pytest.raises(EditConflictError):
    editor.text(3, 8)


def test_overlapping_removals_merge():
  editor = SourceEditor(b"a; b; c;")
  editor.remove(0, 3)
  editor.remove(1, 5)
  assert editor.render() == " c;"


def test_multibyte_text_is_preserved():
  src = "const s = 'ü'; t.is(s)".encode("utf-8")
  editor = SourceEditor(src)
  start = src.index(b"t.is")
  editor.replace(start, len(src), "expect(s)")
  assert editor.render() == "const s = 'ü'; expect(s)"
