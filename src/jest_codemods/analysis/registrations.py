"""
Test Registration Discovery.

Finds every call whose callee resolves, through the `ScopeTable`, to the legacy
framework binding (``test(...)``, ``foo.serial.skip(...)``) and records, once and
up front:

1.  The normalized modifier chain.
2.  The callback and its context parameter (plain identifier or destructuring pattern).
3.  A classification of every reference to that parameter (`ReferenceKind`).

The classifications decide both whether the parameter can be dropped or renamed
and how each reference is rewritten later, so the rewriters never have to
look at the result of another rewrite.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from tree_sitter import Node

from jest_codemods.analysis.imports import FrameworkUsage, ImportBinding
from jest_codemods.analysis.modifiers import NormalizedChain, normalize_chain
from jest_codemods.analysis.scopes import Binding, ScopeTable
from jest_codemods.config import RuntimeConfig
from jest_codemods.core.parser import CALLBACK_TYPES, call_arguments, flatten_member_chain, property_name
from jest_codemods.enums import ArgTransform, ImportStyle, ReferenceKind
from jest_codemods.semantics.schema import RuleEntry, RuleTable

DEFAULT_CONTEXT_NAME = "t"
STATEMENT_LIST_TYPES = frozenset({"program", "statement_block", "switch_case", "switch_default"})
REWRITABLE_KINDS = frozenset({ReferenceKind.ASSERTION, ReferenceKind.REMOVE})
CALLBACK_REWRITABLE_KINDS = REWRITABLE_KINDS | {ReferenceKind.COMPLETION}


@dataclass
class ContextUse:
  """
  One classified reference to a context parameter.

  Attributes:
      reference: The identifier node that resolves to the parameter.
      kind: How the reference will be treated.
      method: Context member involved (``is`` for ``t.is(...)`` or destructured ``is(...)``).
      site: Node the rewriter replaces: the call for assertions, the member
          expression for completion members.
      registration: The owning registration.
  """

  reference: Node
  kind: ReferenceKind
  method: Optional[str] = None
  site: Optional[Node] = None
  registration: Optional["TestRegistration"] = field(default=None, repr=False)

  @property
  def label(self) -> str:
    """Source spelling used in diagnostics, e.g. ``t.is``."""
    return f"{self.registration.context_name}.{self.method}"


@dataclass
class TestRegistration:
  """
  A legacy test or hook registration call.
  """

  call: Node
  chain: List[str]
  normalized: NormalizedChain
  callback: Optional[Node] = None
  parameter: Optional[Node] = None
  bindings: List[Binding] = field(default_factory=list)
  uses: List[ContextUse] = field(default_factory=list)
  destructured: bool = False
  pattern_simple: bool = True
  callback_style: bool = False
  token: Optional[str] = None

  __test__ = False

  @property
  def is_async(self) -> bool:
    return self.callback is not None and any(child.type == "async" for child in self.callback.children)

  @property
  def context_name(self) -> str:
    if self.parameter is not None and self.parameter.type == "identifier":
      return self.parameter.text.decode("utf-8")
    return DEFAULT_CONTEXT_NAME

  @property
  def fully_rewritable(self) -> bool:
    allowed = CALLBACK_REWRITABLE_KINDS if self.callback_style else REWRITABLE_KINDS
    return self.pattern_simple and all(use.kind in allowed for use in self.uses)

  @property
  def drop_parameter(self) -> bool:
    """True if the parameter disappears from the signature."""
    return self.parameter is not None and not self.callback_style and self.fully_rewritable

  @property
  def rename_parameter(self) -> bool:
    return self.parameter is not None and self.token is not None and self.token != self.context_name


@dataclass
class RegistrationIndex:
  """Lookup tables consumed by the rewriters, keyed by node id."""

  registrations: Dict[int, TestRegistration] = field(default_factory=dict)
  uses: Dict[int, ContextUse] = field(default_factory=dict)

  def registration_for(self, call: Node) -> Optional[TestRegistration]:
    return self.registrations.get(call.id)

  def use_at(self, site: Node) -> Optional[ContextUse]:
    return self.uses.get(site.id)


def _is_field(parent: Node, field_name: str, child: Node) -> bool:
  value = parent.child_by_field_name(field_name)
  return value is not None and value.id == child.id


def _in_statement_position(call: Node) -> bool:
  stmt = call.parent
  return (
    stmt is not None
    and stmt.type == "expression_statement"
    and stmt.parent is not None
    and stmt.parent.type in STATEMENT_LIST_TYPES
  )


def classify_reference(reference: Node, table: RuleTable, method: Optional[str] = None) -> ContextUse:
  """
  Classifies one reference to a context parameter.

  Args:
      reference: Identifier resolving to the parameter (or to a destructured member).
      table: Rule table used to look up methods.
      method: For destructured members, the context method the name was bound to.

  Returns:
      ContextUse: The classification, without its registration.
  """
  parent = reference.parent

  if method is not None:
    # destructured member: only direct calls are understood
    rule = table.lookup(method)
    called = parent is not None and parent.type == "call_expression" and _is_field(parent, "function", reference)
    if not called:
      if rule is not None and rule.transform == ArgTransform.COMPLETION:
        return ContextUse(reference, ReferenceKind.UNSUPPORTED, method, reference)
      return ContextUse(reference, ReferenceKind.OTHER, method)
    return _classify_call(reference, parent, rule, method, destructured=True)

  if parent is None or parent.type != "member_expression" or not _is_field(parent, "object", reference):
    return ContextUse(reference, ReferenceKind.OTHER)
  if any(child.type == "optional_chain" for child in parent.children):
    return ContextUse(reference, ReferenceKind.OTHER)
  method = property_name(parent)
  if method is None:
    return ContextUse(reference, ReferenceKind.OTHER)

  rule = table.lookup(method)
  outer = parent.parent
  called = outer is not None and outer.type == "call_expression" and _is_field(outer, "function", parent)

  if rule is not None and rule.transform == ArgTransform.COMPLETION:
    return ContextUse(reference, ReferenceKind.COMPLETION, method, parent)
  if not called:
    if rule is None:
      return ContextUse(reference, ReferenceKind.OTHER, method)
    return ContextUse(reference, ReferenceKind.UNSUPPORTED, method, parent)
  return _classify_call(reference, outer, rule, method, destructured=False)


def _classify_call(
  reference: Node, call: Node, rule: Optional[RuleEntry], method: str, destructured: bool
) -> ContextUse:
  if rule is None:
    return ContextUse(reference, ReferenceKind.UNMAPPED, method, call)
  if rule.transform == ArgTransform.COMPLETION and destructured:
    return ContextUse(reference, ReferenceKind.UNSUPPORTED, method, call)
  if rule.transform == ArgTransform.REMOVE:
    kind = ReferenceKind.REMOVE if _in_statement_position(call) else ReferenceKind.UNSUPPORTED
    return ContextUse(reference, kind, method, call)
  if call.child_by_field_name("arguments") is None or call.child_by_field_name("arguments").type != "arguments":
    # tagged template
    return ContextUse(reference, ReferenceKind.UNSUPPORTED, method, call)
  if any(arg.type == "spread_element" for arg in call_arguments(call)):
    return ContextUse(reference, ReferenceKind.UNSUPPORTED, method, call)
  return ContextUse(reference, ReferenceKind.ASSERTION, method, call)


class RegistrationScanner:
  """
  Builds the `RegistrationIndex` for one file.
  """

  def __init__(self, table: RuleTable, scopes: ScopeTable, usage: FrameworkUsage, config: RuntimeConfig):
    """
    Args:
        table: The rule table.
        scopes: Finished scope analysis of the file.
        usage: Output of the usage detector.
        config: Run options (detection bypass and binding name).
    """
    self.table = table
    self.scopes = scopes
    self.config = config
    self._roots: Dict[int, ImportBinding] = {b.node.id: b for b in usage.bindings if b.node is not None}
    self._bypass_names: Set[str] = set()
    if config.skip_import_detection:
      self._bypass_names.add(config.framework_name or table.framework.default_binding)

  def scan(self, root: Node) -> RegistrationIndex:
    """
    Walks the whole tree and indexes registrations and context uses.

    Args:
        root: The `program` node.

    Returns:
        RegistrationIndex: Registrations by call id and classified uses by site id.
    """
    index = RegistrationIndex()
    stack = [root]
    while stack:
      node = stack.pop()
      if node.type == "call_expression":
        registration = self._match(node)
        if registration is not None:
          index.registrations[node.id] = registration
          if registration.normalized.rewrite_body:
            for use in registration.uses:
              if use.site is not None:
                index.uses[use.site.id] = use
      stack.extend(reversed(node.named_children))
    return index

  def chain_of(self, call: Node) -> Optional[List[str]]:
    """
    Returns the modifier chain of `call` if its callee is a framework binding.

    ``test.serial.skip(...)`` yields ``["serial", "skip"]``; a plain ``test(...)`` yields ``[]``.
    """
    callee = call.child_by_field_name("function")
    if callee is None:
      return None
    flat = flatten_member_chain(callee)
    if flat is None:
      return None
    ident, names = flat
    if not self.scopes.is_reference(ident):
      return None

    binding = self.scopes.resolve(ident)
    if binding is None:
      if ident.text.decode("utf-8") in self._bypass_names:
        return names
      return None

    imported = self._roots.get(binding.node.id)
    if imported is None:
      return None
    if imported.style == ImportStyle.NAMESPACE:
      # `ava.default(...)` / `ava.test(...)`; the namespace itself is not callable
      if not names or names[0] not in self.table.framework.root_exports:
        return None
      return names[1:]
    return names

  def _match(self, call: Node) -> Optional[TestRegistration]:
    chain = self.chain_of(call)
    if chain is None:
      return None

    registration = TestRegistration(call=call, chain=chain, normalized=normalize_chain(chain, self.table))
    registration.callback = next((arg for arg in call_arguments(call) if arg.type in CALLBACK_TYPES), None)
    if registration.callback is None:
      return registration

    registration.parameter = _first_parameter(registration.callback)
    if registration.parameter is not None:
      self._collect_uses(registration)

    registration.callback_style = registration.normalized.callback_style or any(
      use.kind == ReferenceKind.COMPLETION for use in registration.uses
    )
    if registration.callback_style and registration.parameter is not None and not registration.destructured:
      registration.token = self._completion_token(registration)
    return registration

  def _collect_uses(self, registration: TestRegistration) -> None:
    param = registration.parameter
    fn_scope = self.scopes.scope_of(registration.callback)
    if fn_scope is None:
      return

    if param.type == "identifier":
      binding = fn_scope.bindings.get(param.text.decode("utf-8"))
      if binding is None or binding.node.id != param.id:
        return
      registration.bindings.append(binding)
      for ref in self.scopes.references(binding):
        registration.uses.append(self._attach(classify_reference(ref, self.table), registration))
      return

    registration.destructured = True
    if param.type != "object_pattern":
      registration.pattern_simple = False
      return
    for member in param.named_children:
      if member.type == "comment":
        continue
      if member.type == "shorthand_property_identifier_pattern":
        method, local = member.text.decode("utf-8"), member
      elif member.type == "pair_pattern":
        key = member.child_by_field_name("key")
        local = member.child_by_field_name("value")
        if key is None or key.type != "property_identifier" or local is None or local.type != "identifier":
          registration.pattern_simple = False
          continue
        method = key.text.decode("utf-8")
      else:
        registration.pattern_simple = False
        continue

      binding = fn_scope.bindings.get(local.text.decode("utf-8"))
      if binding is None or binding.node.id != local.id:
        registration.pattern_simple = False
        continue
      registration.bindings.append(binding)
      for ref in self.scopes.references(binding):
        registration.uses.append(self._attach(classify_reference(ref, self.table, method), registration))

  def _completion_token(self, registration: TestRegistration) -> str:
    token = self.table.target.completion_token
    if not registration.fully_rewritable:
      return registration.context_name
    if registration.context_name != token and _mentions(registration.callback, token):
      return registration.context_name
    return token

  @staticmethod
  def _attach(use: ContextUse, registration: TestRegistration) -> ContextUse:
    use.registration = registration
    return use


def _first_parameter(callback: Node) -> Optional[Node]:
  single = callback.child_by_field_name("parameter")
  if single is not None:
    return single
  params = callback.child_by_field_name("parameters")
  if params is None:
    return None
  return next((p for p in params.named_children if p.type != "comment"), None)


def _mentions(node: Node, name: str) -> bool:
  encoded = name.encode("utf-8")
  stack = [node]
  while stack:
    current = stack.pop()
    if current.type in ("identifier", "shorthand_property_identifier", "shorthand_property_identifier_pattern"):
      if current.text == encoded:
        return True
    stack.extend(current.named_children)
  return False
