"""
Span Editor.

tree-sitter trees are immutable, so rewrites are recorded as byte-range
replacements against the original source and spliced in when printing.

Edits must nest or be disjoint. Rewriters work innermost-first: an outer
replacement is built from `text()` of its children (which already reflects the
inner edits) and then absorbs them. Regions nobody touched are copied through
byte for byte.
"""

from dataclasses import dataclass
from typing import List

from tree_sitter import Node


class EditConflictError(RuntimeError):
  """Raised when two edits partially overlap."""


@dataclass(frozen=True)
class TextEdit:
  """Replacement of `source[start:end]` by `text` (all in bytes)."""

  start: int
  end: int
  text: bytes


class SourceEditor:
  """
  Accumulates non-overlapping edits over an immutable source buffer.
  """

  def __init__(self, source: bytes):
    """
    Args:
        source: The original UTF-8 encoded file contents.
    """
    self.source = source
    self._edits: List[TextEdit] = []

  @property
  def changed(self) -> bool:
    return bool(self._edits)

  @property
  def edits(self) -> List[TextEdit]:
    return list(self._edits)

  def replace(self, start: int, end: int, text: str) -> None:
    """
    Replaces the byte range `[start, end)` with `text`.

    Edits already recorded inside the range are dropped: the caller is expected
    to have built `text` from `self.text(...)` of that range. Replacing a range
    with its own original bytes records nothing.

    Raises:
        EditConflictError: If the range partially overlaps an existing edit, or
            lies strictly inside one.
    """
    payload = text.encode("utf-8")
    kept: List[TextEdit] = []
    for edit in self._edits:
      if start <= edit.start and edit.end <= end:
        continue
      if edit.end <= start or end <= edit.start:
        kept.append(edit)
        continue
      raise EditConflictError(f"Edit [{start}, {end}) overlaps existing edit [{edit.start}, {edit.end})")

    if self.source[start:end] != payload:
      kept.append(TextEdit(start, end, payload))
      kept.sort(key=lambda e: (e.start, e.end))
    self._edits = kept

  def replace_node(self, node: Node, text: str) -> None:
    self.replace(node.start_byte, node.end_byte, text)

  def remove(self, start: int, end: int) -> None:
    """
    Deletes `[start, end)`. Overlapping deletions are merged into one, so two
    adjacent statements can each take their separating whitespace with them.
    """
    merged = True
    while merged:
      merged = False
      for edit in self._edits:
        if not edit.text and edit.start < end and start < edit.end and (edit.start < start or end < edit.end):
          start, end = min(start, edit.start), max(end, edit.end)
          merged = True
    self.replace(start, end, "")

  def text(self, start: int, end: int) -> str:
    """
    Returns the current text of `[start, end)`, with nested edits applied.
    """
    return self._render(start, end).decode("utf-8")

  def node_text(self, node: Node) -> str:
    return self.text(node.start_byte, node.end_byte)

  def render(self) -> str:
    """Prints the whole buffer with every edit applied."""
    return self._render(0, len(self.source)).decode("utf-8")

  def _render(self, start: int, end: int) -> bytes:
    chunks: List[bytes] = []
    cursor = start
    for edit in self._edits:
      if start <= edit.start and edit.end <= end:
        chunks.append(self.source[cursor : edit.start])
        chunks.append(edit.text)
        cursor = edit.end
      elif edit.start < end and start < edit.end:
        raise EditConflictError(f"Range [{start}, {end}) cuts through edit [{edit.start}, {edit.end})")
    chunks.append(self.source[cursor:end])
    return b"".join(chunks)
