"""
Framework Usage Detection.

Inspects the module-level `import` statements and `require(...)` declarations
of a file to decide whether the legacy test framework is used at all, and under
which local name(s) its registration function is reachable.

The same scan reports companion packages known to misbehave under the target
framework (e.g. `testdouble`); those produce file-level diagnostics only.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from tree_sitter import Node

from jest_codemods.core.parser import call_arguments, string_value
from jest_codemods.enums import ImportStyle
from jest_codemods.semantics.schema import RuleTable

INCOMPATIBLE_PACKAGE_MESSAGE = 'Usage of package "{package}" might be incompatible with Jest'


@dataclass(frozen=True)
class ImportBinding:
  """
  A local name bound by a module-level import or require.
  """

  local: str
  package: str
  style: ImportStyle
  imported: Optional[str] = None
  """Exported name for named imports (`import { test as t }` -> 'test')."""
  node: Optional[Node] = field(default=None, compare=False, hash=False, repr=False)
  """The declaring identifier node."""


@dataclass
class FrameworkUsage:
  """
  Outcome of scanning one file.

  Attributes:
      bindings: Legacy-framework bindings usable as registration roots.
      declarations: Statements / declarators to delete once the file is migrated.
      incompatible: Companion packages found, in source order, without repeats.
  """

  bindings: List[ImportBinding] = field(default_factory=list)
  declarations: List[Node] = field(default_factory=list)
  incompatible: List[str] = field(default_factory=list)

  @property
  def detected(self) -> bool:
    return bool(self.declarations)

  @property
  def root_node_ids(self) -> Set[int]:
    return {b.node.id for b in self.bindings if b.node is not None}


def _require_source(value: Optional[Node]) -> Optional[str]:
  """Returns 'pkg' for `require('pkg')`, else None."""
  if value is None or value.type != "call_expression":
    return None
  func = value.child_by_field_name("function")
  if func is None or func.type != "identifier" or func.text != b"require":
    return None
  args = call_arguments(value)
  if len(args) != 1:
    return None
  return string_value(args[0])


class UsageDetector:
  """
  Scans the top level of a program for imports of the legacy framework.
  """

  def __init__(self, table: RuleTable):
    """
    Args:
        table: Rule table naming the legacy package and its incompatible companions.
    """
    self.table = table
    self.package = table.framework.package

  def scan(self, program: Node) -> FrameworkUsage:
    """
    Collects framework bindings and companion packages.

    Args:
        program: The root `program` node.

    Returns:
        FrameworkUsage: What was found. `detected` is False when the legacy
        package is neither imported nor required.
    """
    usage = FrameworkUsage()
    for stmt in program.named_children:
      if stmt.type == "import_statement":
        self._scan_import(stmt, usage)
      elif stmt.type in ("lexical_declaration", "variable_declaration"):
        self._scan_declaration(stmt, usage)
      elif stmt.type == "expression_statement":
        source = _require_source(stmt.named_children[0] if stmt.named_children else None)
        if source is not None:
          self._note_companion(source, usage)
    return usage

  def _note_companion(self, package: str, usage: FrameworkUsage) -> None:
    if package in self.table.incompatible_packages and package not in usage.incompatible:
      usage.incompatible.append(package)

  def _scan_import(self, stmt: Node, usage: FrameworkUsage) -> None:
    source_node = stmt.child_by_field_name("source")
    source = string_value(source_node) if source_node is not None else None
    if source is None:
      return
    if source != self.package:
      self._note_companion(source, usage)
      return

    usage.declarations.append(stmt)
    for clause in stmt.named_children:
      if clause.type != "import_clause":
        continue
      for part in clause.named_children:
        if part.type == "identifier":
          usage.bindings.append(self._binding(part, ImportStyle.DEFAULT))
        elif part.type == "namespace_import":
          for ident in part.named_children:
            if ident.type == "identifier":
              usage.bindings.append(self._binding(ident, ImportStyle.NAMESPACE))
        elif part.type == "named_imports":
          for specifier in part.named_children:
            if specifier.type != "import_specifier":
              continue
            name = specifier.child_by_field_name("name")
            alias = specifier.child_by_field_name("alias")
            local = alias if alias is not None else name
            imported = name.text.decode("utf-8") if name is not None else None
            if local is None or local.type != "identifier" or imported not in self.table.framework.root_exports:
              continue
            usage.bindings.append(self._binding(local, ImportStyle.NAMED, imported))

  def _scan_declaration(self, stmt: Node, usage: FrameworkUsage) -> None:
    declarators = [d for d in stmt.named_children if d.type == "variable_declarator"]
    for declarator in declarators:
      source = _require_source(declarator.child_by_field_name("value"))
      if source is None:
        continue
      if source != self.package:
        self._note_companion(source, usage)
        continue
      name = declarator.child_by_field_name("name")
      if name is not None and name.type == "identifier":
        usage.bindings.append(self._binding(name, ImportStyle.REQUIRE))
      usage.declarations.append(stmt if len(declarators) == 1 else declarator)

  def _binding(self, identifier: Node, style: ImportStyle, imported: Optional[str] = None) -> ImportBinding:
    return ImportBinding(
      local=identifier.text.decode("utf-8"),
      package=self.package,
      style=style,
      imported=imported,
      node=identifier,
    )
