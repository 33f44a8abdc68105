"""
Lexical Scope Analysis for JavaScript.

Builds, in one pre-pass over a tree-sitter tree, an arena of `Scope` records
(program, function and block scopes with parent links) and resolves every
identifier reference to the nearest enclosing `Binding` of the same name.

The rewriters only ever consult the finished `ScopeTable`; nothing is resolved
while edits are being recorded.

Handled binding sites:
1.  `var` (hoisted to the enclosing function), `let`, `const`, including
    object / array destructuring, defaults and rest elements.
2.  Function and class declarations, named function expressions.
3.  Function parameters (any pattern), catch parameters, `for (x of ...)` heads.
4.  Module imports.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tree_sitter import Node

from jest_codemods.core.parser import FUNCTION_TYPES

BLOCK_SCOPE_TYPES = frozenset({"statement_block", "for_statement", "for_in_statement", "catch_clause", "class_body"})
DECLARATION_FUNCTION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})


@dataclass(frozen=True)
class Binding:
  """
  A name declared in a scope.

  Two bindings are equal when they share name and scope; within one scope a
  name is declared at most once (re-declarations merge into the first).
  """

  name: str
  scope_id: int
  kind: str
  node: Node = field(compare=False, hash=False, repr=False)
  """The declaring identifier node."""


class Scope:
  """
  One lexical scope.
  """

  def __init__(self, scope_id: int, kind: str, node: Node, parent: Optional["Scope"] = None):
    """
    Args:
        scope_id: Index of the scope in the table arena.
        kind: 'program', 'function' or 'block'.
        node: The node that opens the scope.
        parent: The enclosing scope (None for the program).
    """
    self.scope_id = scope_id
    self.kind = kind
    self.node = node
    self.parent = parent
    self.bindings: Dict[str, Binding] = {}

  def lookup(self, name: str) -> Optional[Binding]:
    """
    Resolves `name` from this scope outwards.

    Returns:
        The nearest Binding, or None if the name is global/undeclared.
    """
    scope: Optional[Scope] = self
    while scope is not None:
      if name in scope.bindings:
        return scope.bindings[name]
      scope = scope.parent
    return None

  def function_scope(self) -> "Scope":
    """Returns the nearest enclosing function (or program) scope, for `var` hoisting."""
    scope = self
    while scope.kind == "block" and scope.parent is not None:
      scope = scope.parent
    return scope


class ScopeTable:
  """
  Read-only result of the scope pre-pass.
  """

  def __init__(self) -> None:
    self.scopes: List[Scope] = []
    self._scope_by_node: Dict[int, Scope] = {}
    self._pending: List[tuple] = []
    self._resolved: Dict[int, Optional[Binding]] = {}
    self._references: Dict[Binding, List[Node]] = {}

  @classmethod
  def build(cls, root: Node) -> "ScopeTable":
    """
    Analyses a whole program.

    Args:
        root: The `program` node.

    Returns:
        ScopeTable: Scopes, bindings and resolved references.
    """
    table = cls()
    program = table._new_scope("program", root, None)
    for child in root.named_children:
      table._visit(child, program)
    table._resolve_all()
    return table

  @property
  def program(self) -> Scope:
    return self.scopes[0]

  def resolve(self, identifier: Node) -> Optional[Binding]:
    """
    Returns the binding an identifier reference resolves to.

    Args:
        identifier: An `identifier` (or shorthand property) node in expression position.

    Returns:
        The Binding, or None if unresolved or if the node is not a reference.
    """
    return self._resolved.get(identifier.id)

  def is_reference(self, identifier: Node) -> bool:
    return identifier.id in self._resolved

  def references(self, binding: Binding) -> List[Node]:
    """Returns every reference resolving to `binding`, in source order."""
    return list(self._references.get(binding, []))

  def scope_of(self, node: Node) -> Optional[Scope]:
    """Returns the scope opened by `node`, if it opens one."""
    return self._scope_by_node.get(node.id)

  # --- Construction ---

  def _new_scope(self, kind: str, node: Node, parent: Optional[Scope]) -> Scope:
    scope = Scope(len(self.scopes), kind, node, parent)
    self.scopes.append(scope)
    self._scope_by_node[node.id] = scope
    return scope

  def _declare(self, scope: Scope, identifier: Node, kind: str) -> None:
    name = identifier.text.decode("utf-8")
    if name not in scope.bindings:
      scope.bindings[name] = Binding(name=name, scope_id=scope.scope_id, kind=kind, node=identifier)

  def _reference(self, identifier: Node, scope: Scope) -> None:
    self._pending.append((identifier, scope))

  def _resolve_all(self) -> None:
    for identifier, scope in self._pending:
      binding = scope.lookup(identifier.text.decode("utf-8"))
      self._resolved[identifier.id] = binding
      if binding is not None:
        self._references.setdefault(binding, []).append(identifier)
    self._pending = []

  def _visit(self, node: Node, scope: Scope) -> None:
    node_type = node.type

    if node_type in ("identifier", "shorthand_property_identifier"):
      self._reference(node, scope)
      return

    if node_type in FUNCTION_TYPES:
      self._visit_function(node, scope)
      return

    if node_type in ("class_declaration", "class"):
      name = node.child_by_field_name("name")
      if name is not None and node_type == "class_declaration":
        self._declare(scope, name, "class")
      for child in node.named_children:
        if child != name:
          self._visit(child, scope)
      return

    if node_type in ("lexical_declaration", "variable_declaration"):
      target = scope.function_scope() if node_type == "variable_declaration" else scope
      kind = "var" if node_type == "variable_declaration" else node.child(0).type
      for declarator in node.named_children:
        if declarator.type != "variable_declarator":
          self._visit(declarator, scope)
          continue
        self._declare_pattern(declarator.child_by_field_name("name"), target, scope, kind)
        value = declarator.child_by_field_name("value")
        if value is not None:
          self._visit(value, scope)
      return

    if node_type == "import_statement":
      self._visit_import(node, scope)
      return

    if node_type in BLOCK_SCOPE_TYPES:
      block = self._new_scope("block", node, scope)
      if node_type == "catch_clause":
        param = node.child_by_field_name("parameter")
        if param is not None:
          self._declare_pattern(param, block, block, "catch")
        body = node.child_by_field_name("body")
        if body is not None:
          for child in body.named_children:
            self._visit(child, block)
        return
      if node_type == "for_in_statement":
        self._visit_for_in(node, block)
        return
      for child in node.named_children:
        self._visit(child, block)
      return

    for child in node.named_children:
      self._visit(child, scope)

  def _visit_function(self, node: Node, scope: Scope) -> None:
    name = node.child_by_field_name("name")
    if name is not None and name.type == "identifier" and node.type in DECLARATION_FUNCTION_TYPES:
      self._declare(scope, name, "function")
    elif name is not None and name.type != "identifier":
      # computed method keys belong to the enclosing scope
      self._visit(name, scope)

    fn_scope = self._new_scope("function", node, scope)
    if name is not None and name.type == "identifier" and node.type not in DECLARATION_FUNCTION_TYPES:
      self._declare(fn_scope, name, "function")

    params = node.child_by_field_name("parameters")
    if params is None:
      params = node.child_by_field_name("parameter")
    if params is not None:
      if params.type == "formal_parameters":
        for param in params.named_children:
          self._declare_pattern(param, fn_scope, fn_scope, "param")
      else:
        self._declare_pattern(params, fn_scope, fn_scope, "param")

    body = node.child_by_field_name("body")
    if body is None:
      return
    if body.type == "statement_block":
      # parameters and top-level body declarations share the function scope
      for child in body.named_children:
        self._visit(child, fn_scope)
    else:
      self._visit(body, fn_scope)

  def _visit_for_in(self, node: Node, block: Scope) -> None:
    left = node.child_by_field_name("left")
    kind_node = node.child_by_field_name("kind")
    for child in node.named_children:
      if child == left and left is not None:
        if kind_node is not None:
          kind = kind_node.type
          target = block.function_scope() if kind == "var" else block
          self._declare_pattern(left, target, block, kind)
        else:
          self._visit(left, block)
        continue
      self._visit(child, block)

  def _visit_import(self, node: Node, scope: Scope) -> None:
    for clause in node.named_children:
      if clause.type != "import_clause":
        continue
      for part in clause.named_children:
        if part.type == "identifier":
          self._declare(scope, part, "import")
        elif part.type == "namespace_import":
          for ident in part.named_children:
            if ident.type == "identifier":
              self._declare(scope, ident, "import")
        elif part.type == "named_imports":
          for specifier in part.named_children:
            if specifier.type != "import_specifier":
              continue
            local = specifier.child_by_field_name("alias")
            if local is None:
              local = specifier.child_by_field_name("name")
            if local is not None and local.type == "identifier":
              self._declare(scope, local, "import")

  def _declare_pattern(self, pattern: Optional[Node], target: Scope, scope: Scope, kind: str) -> None:
    """
    Declares every name bound by a destructuring pattern.

    Args:
        pattern: identifier, object/array pattern, assignment or rest pattern.
        target: Scope receiving the bindings.
        scope: Scope in which default values and computed keys are evaluated.
        kind: Binding kind recorded on the bindings.
    """
    if pattern is None:
      return
    ptype = pattern.type
    if ptype in ("identifier", "shorthand_property_identifier_pattern"):
      self._declare(target, pattern, kind)
    elif ptype in ("object_pattern", "array_pattern"):
      for child in pattern.named_children:
        self._declare_pattern(child, target, scope, kind)
    elif ptype == "pair_pattern":
      key = pattern.child_by_field_name("key")
      if key is not None and key.type == "computed_property_name":
        self._visit(key, scope)
      self._declare_pattern(pattern.child_by_field_name("value"), target, scope, kind)
    elif ptype in ("assignment_pattern", "object_assignment_pattern"):
      self._declare_pattern(pattern.child_by_field_name("left"), target, scope, kind)
      right = pattern.child_by_field_name("right")
      if right is not None:
        self._visit(right, scope)
    elif ptype == "rest_pattern":
      for child in pattern.named_children:
        self._declare_pattern(child, target, scope, kind)
    elif ptype == "comment":
      return
    else:
      # member expressions and other assignment targets are plain references
      self._visit(pattern, scope)
