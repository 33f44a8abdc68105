"""
Tests for Lexical Scope Analysis.

Verifies:
1. References resolve to the nearest enclosing binding.
2. Shadowing by parameters, `const` and catch clauses.
3. `var` hoisting and function declaration hoisting.
4. Destructuring patterns declare every bound name.
"""

from typing import List

from tree_sitter import Node

from jest_codemods.analysis.scopes import ScopeTable
from jest_codemods.core.parser import parse_source


def analyse(code: str):
  tree = parse_source(code.encode("utf-8"))
  return tree, ScopeTable.build(tree.root_node)


def identifiers(root: Node, name: str) -> List[Node]:
  found = []
  stack = [root]
  while stack:
    node = stack.pop()
    if node.type == "identifier" and node.text == name.encode("utf-8"):
      found.append(node)
    stack.extend(node.named_children)
  return sorted(found, key=lambda n: n.start_byte)


def test_parameter_shadowing():
  tree, scopes = analyse("function outer(t) { t.a(); const f = (t) => t.b(); t.c(); }")
  outer_t, use_a, inner_t, use_b, use_c = identifiers(tree.root_node, "t")

  assert scopes.resolve(use_a).node.id == outer_t.id
  assert scopes.resolve(use_b).node.id == inner_t.id
  assert scopes.resolve(use_c).node.id == outer_t.id


def test_references_lists_only_bound_uses():
  tree, scopes = analyse("const x = 1; x; { const x = 2; x; } x;")
  outer_decl = identifiers(tree.root_node, "x")[0]
  binding = scopes.resolve(identifiers(tree.root_node, "x")[1])

  assert binding.node.id == outer_decl.id
  assert len(scopes.references(binding)) == 2


def test_var_is_hoisted_out_of_blocks():
  tree, scopes = analyse("function f() { if (a) { var v = 1; } return v; }")
  decl, use = identifiers(tree.root_node, "v")
  assert scopes.resolve(use).node.id == decl.id


def test_function_declarations_are_visible_before_definition():
  tree, scopes = analyse("helper(); function helper() {}")
  use, decl = identifiers(tree.root_node, "helper")
  assert scopes.resolve(use).node.id == decl.id
  assert scopes.resolve(use).kind == "function"


def test_unresolved_globals():
  tree, scopes = analyse("console.log(value);")
  (use,) = identifiers(tree.root_node, "value")
  assert scopes.is_reference(use)
  assert scopes.resolve(use) is None


def test_destructuring_declares_all_names():
  _, scopes = analyse("const { a, b: { c }, ...rest } = obj; const [d, e = a] = list;")
  names = {b.name for b in scopes.program.bindings.values()}
  assert names == {"a", "c", "rest", "d", "e"}


def test_catch_parameter_shadows():
  tree, scopes = analyse("const err = 1; try { x(); } catch (err) { err.message; } err;")
  outer, inner, inner_use, outer_use = identifiers(tree.root_node, "err")
  assert scopes.resolve(inner_use).node.id == inner.id
  assert scopes.resolve(outer_use).node.id == outer.id


def test_imports_and_for_of_bindings():
  tree, scopes = analyse("import test, { x as y } from 'ava';\nfor (const item of y) { test(item); }")
  assert scopes.program.bindings["test"].kind == "import"
  assert "y" in scopes.program.bindings
  item_decl, item_use = identifiers(tree.root_node, "item")
  assert scopes.resolve(item_use).node.id == item_decl.id


def test_property_names_are_not_references():
  tree, scopes = analyse("const t = 1; obj.t; ({ t: 2 });")
  binding = scopes.program.bindings["t"]
  assert scopes.references(binding) == []
