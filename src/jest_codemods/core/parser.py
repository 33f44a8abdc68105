"""
JavaScript Ingestion.

Parses JavaScript (including JSX) source text into a tree-sitter syntax tree.
The codemod never builds nodes itself: it reads the tree produced here and
records text edits against the original bytes (see `core.editor`).

Also hosts the small node helpers every pass needs (argument lists without
comments, 1-based line numbers, member-chain flattening).
"""

from functools import cache
from typing import List, Optional, Tuple

import tree_sitter_javascript
from tree_sitter import LANGUAGE_VERSION, MIN_COMPATIBLE_LANGUAGE_VERSION, Language, Node, Parser, Tree

JS_LANGUAGE = Language(tree_sitter_javascript.language())

FUNCTION_TYPES = frozenset(
  {
    "function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "generator_function_declaration",
    "arrow_function",
    "method_definition",
  }
)
"""Node types that open a function scope. `function` is the pre-0.21 grammar name."""

CALLBACK_TYPES = frozenset({"arrow_function", "function_expression", "function"})
"""Function expressions that can be passed inline as a test implementation."""


class ParseError(ValueError):
  """Raised when the source cannot be parsed without syntax errors."""

  def __init__(self, message: str, line: Optional[int] = None):
    super().__init__(message)
    self.line = line


def _assert_language_abi(lang: Language) -> None:
  if not (MIN_COMPATIBLE_LANGUAGE_VERSION <= lang.abi_version <= LANGUAGE_VERSION):
    raise ValueError(f"Tree-sitter ABI mismatch: {lang.abi_version}")


@cache
def _language() -> Language:
  _assert_language_abi(JS_LANGUAGE)
  return JS_LANGUAGE


def parse_source(source: bytes) -> Tree:
  """
  Parses UTF-8 encoded JavaScript.

  Args:
      source: The raw file contents.

  Returns:
      Tree: The tree-sitter syntax tree.

  Raises:
      ParseError: If tree-sitter had to recover from a syntax error.
  """
  # Parser instances are not thread-safe; one per call.
  tree = Parser(_language()).parse(source)
  if tree.root_node.has_error:
    bad = _first_error(tree.root_node)
    line = node_line(bad) if bad is not None else None
    raise ParseError(f"Syntax error near line {line}", line=line)
  return tree


def _first_error(node: Node) -> Optional[Node]:
  if node.type == "ERROR" or node.is_missing:
    return node
  for child in node.children:
    if child.has_error:
      found = _first_error(child)
      if found is not None:
        return found
  return None


def node_line(node: Node) -> int:
  """Returns the 1-based line on which `node` starts."""
  return node.start_point[0] + 1


def call_arguments(call: Node) -> List[Node]:
  """
  Returns the argument expressions of a call, skipping comments.

  Tagged template calls have no `arguments` node and yield an empty list.
  """
  args = call.child_by_field_name("arguments")
  if args is None or args.type != "arguments":
    return []
  return [child for child in args.named_children if child.type != "comment"]


def property_name(member: Node) -> Optional[str]:
  """Returns the identifier after the dot of a `member_expression`, if any."""
  prop = member.child_by_field_name("property")
  if prop is None or prop.type != "property_identifier":
    return None
  return prop.text.decode("utf-8")


def flatten_member_chain(node: Node) -> Optional[Tuple[Node, List[str]]]:
  """
  Flattens `a.b.c` into (`a` identifier node, ["b", "c"]).

  Returns None when the chain contains anything other than plain identifiers
  and dotted property accesses (calls, subscripts, optional chaining, ...).
  """
  names: List[str] = []
  current = node
  while current.type == "member_expression":
    if any(child.type == "optional_chain" for child in current.children):
      return None
    name = property_name(current)
    if name is None:
      return None
    names.append(name)
    current = current.child_by_field_name("object")
  if current.type != "identifier":
    return None
  names.reverse()
  return current, names


def string_value(node: Node) -> Optional[str]:
  """Returns the contents of a plain string literal, or None for other nodes."""
  if node.type != "string":
    return None
  raw = node.text.decode("utf-8")
  return raw[1:-1]
