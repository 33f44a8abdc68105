"""
Base Rewriter Implementation.

This module provides the ``BaseRewriter`` class, the foundation of the
``AvaRewriter``. It handles:

1.  **Traversal**: A post-order walk of the tree-sitter tree dispatching to
    ``leave_<node type>`` methods, so inner constructs are rewritten before the
    constructs that contain them read their text back.
2.  **Statement Removal**: Deleting a statement together with the whitespace
    that separates it from its neighbour.
3.  **Error Reporting**: Routing line-addressed warnings to the collector.
"""

from typing import Callable, Dict, Optional

from tree_sitter import Node

from jest_codemods.core.parser import node_line
from jest_codemods.core.rewriter.context import RewriterContext


class BaseRewriter:
  """
  The base class for the rewriting traversal.

  Provides the walk, text helpers and error routing used by the mixins.
  """

  def __init__(self, context: RewriterContext):
    """
    Initializes the rewriter.

    Args:
        context: Shared state for this conversion.
    """
    self.ctx = context
    self.table = context.table
    self.editor = context.editor
    self._handlers: Dict[str, Optional[Callable[[Node], None]]] = {}

  def rewrite(self, root: Node) -> None:
    """
    Visits every node of `root` in post-order, then finalizes the module.

    Args:
        root: The `program` node.
    """
    stack = [(root, False)]
    while stack:
      node, expanded = stack.pop()
      if expanded:
        handler = self._handler_for(node.type)
        if handler is not None:
          handler(node)
        continue
      stack.append((node, True))
      for child in reversed(node.named_children):
        stack.append((child, False))
    self.leave_program_end(root)

  def _handler_for(self, node_type: str) -> Optional[Callable[[Node], None]]:
    if node_type not in self._handlers:
      self._handlers[node_type] = getattr(self, f"leave_{node_type}", None)
    return self._handlers[node_type]

  def leave_program_end(self, root: Node) -> None:
    """Hook run once after the walk. Overridden by mixins."""

  def _report(self, node: Node, message: str) -> None:
    self.ctx.diagnostics.warn(message, line=node_line(node))

  def _text(self, node: Node) -> str:
    return self.editor.node_text(node)

  def _remove_statement(self, node: Node) -> None:
    """
    Deletes a statement (or declarator) and the separator that follows it, or
    the one that precedes it when it is the last of its list.

    Args:
        node: The statement to delete.
    """
    following = _statement_sibling(node, node.next_named_sibling)
    preceding = _statement_sibling(node, node.prev_named_sibling)
    if following is not None:
      self.editor.remove(node.start_byte, following.start_byte)
    elif preceding is not None:
      self.editor.remove(preceding.end_byte, node.end_byte)
    else:
      self.editor.remove(node.start_byte, node.end_byte)


def _statement_sibling(node: Node, sibling: Optional[Node]) -> Optional[Node]:
  """Returns `sibling` unless it is the `case` label of an enclosing switch case."""
  if sibling is None or node.parent is None:
    return sibling
  label = node.parent.child_by_field_name("value")
  if label is not None and label.id == sibling.id:
    return None
  return sibling
