"""
Assertion Rewriting.

Renders legacy context calls (``t.is(a, b)``, destructured ``ok(x)``) as target
expectations (``expect(a).toBe(b)``) according to the rule table.

Rendering is a pure function of the rule and the current argument texts
(`render_assertion`), so it can be tested without a tree. Short argument lists
are padded with an explicit `MISSING` placeholder; the caller reports the arity
problem separately and still applies the rewrite.
"""

from dataclasses import dataclass
from typing import List, Optional

from tree_sitter import Node

from jest_codemods.analysis.registrations import ContextUse
from jest_codemods.core.parser import call_arguments
from jest_codemods.enums import ArgTransform, ArityKind, ReferenceKind
from jest_codemods.semantics.schema import RuleEntry, RuleTable

UNSUPPORTED_MESSAGE = '"{label}" is currently not supported'
ARITY_MESSAGE = '"{label}" should have {count} {noun}'


@dataclass(frozen=True)
class Argument:
  """
  Current source text of one call argument.

  Attributes:
      text: Argument text with inner rewrites already applied.
      kind: tree-sitter node type of the original argument (e.g. 'object', 'string').
  """

  text: str
  kind: str = "expression"


MISSING = Argument("undefined", "undefined")


def pad_arguments(rule: RuleEntry, args: List[Argument]) -> List[Argument]:
  """Fills absent required positions with `MISSING`."""
  padded = list(args)
  while len(padded) < rule.required_args:
    padded.append(MISSING)
  return padded


def arity_problem(rule: RuleEntry, count: int) -> Optional[int]:
  """
  Checks the argument count of a call.

  Returns:
      The required count when `count` falls short of it, else None.
  """
  if rule.arity == ArityKind.NONE:
    return None
  return rule.args if count < rule.args else None


def render_assertion(rule: RuleEntry, args: List[Argument], table: RuleTable) -> Optional[str]:
  """
  Builds the target expression for a legacy assertion.

  Args:
      rule: The rule-table entry for the method.
      args: Current argument texts, in order.
      table: Rule table supplying the target `expect` name.

  Returns:
      The replacement text, or None for rules that are not rendered as an
      expression (statement removal, completion members).
  """
  args = pad_arguments(rule, args)
  expect = table.target.expect

  if rule.transform == ArgTransform.CALL:
    callee = rule.target.format(expect=expect, token=table.target.completion_token)
    return f"{callee}({', '.join(a.text for a in args)})"
  if rule.transform in (ArgTransform.REMOVE, ArgTransform.COMPLETION):
    return None

  subject = args[0].text if args else MISSING.text
  prefix = f"{expect}({subject}){'.not' if rule.negate else ''}"

  if rule.transform == ArgTransform.THROWS:
    if len(args) >= 2:
      return f"{prefix}.{rule.alt_matcher or rule.matcher}({args[1].text})"
    return f"{prefix}.{rule.matcher}()"

  if rule.transform == ArgTransform.SNAPSHOT:
    # snapshot(value[, options][, message]): only a string message is kept
    rest = args[1:]
    if rest and rest[-1].kind in ("string", "template_string"):
      return f"{prefix}.{rule.matcher}({rest[-1].text})"
    return f"{prefix}.{rule.matcher}()"

  expected = [a.text for a in args[1 : max(rule.required_args, 1)]]
  if rule.expected is not None:
    expected.append(rule.expected)
  return f"{prefix}.{rule.matcher}({', '.join(expected)})"


class AssertionMixin:
  """
  Mixin rewriting classified context calls.

  Assumes the host class provides ``ctx``, ``table``, ``editor``, ``_report``,
  ``_text`` and ``_remove_statement`` (from BaseRewriter).
  """

  def _rewrite_context_call(self, call: Node, use: ContextUse) -> None:
    """
    Rewrites (or reports) one call whose callee is a context member.

    Args:
        call: The `call_expression` node.
        use: Its classification.
    """
    if use.kind in (ReferenceKind.UNMAPPED, ReferenceKind.UNSUPPORTED):
      self._report(call, UNSUPPORTED_MESSAGE.format(label=use.label))
      return

    if use.kind == ReferenceKind.REMOVE:
      self._remove_statement(call.parent)
      return

    if use.kind != ReferenceKind.ASSERTION:
      return

    rule = self.table.lookup(use.method)
    arg_nodes = call_arguments(call)
    required = arity_problem(rule, len(arg_nodes))
    if required is not None:
      noun = "argument" if required == 1 else "arguments"
      self._report(call, ARITY_MESSAGE.format(label=use.label, count=required, noun=noun))

    args = [Argument(self._text(node), node.type) for node in arg_nodes]
    rendered = render_assertion(rule, args, self.table)
    if rendered is not None:
      self.editor.replace_node(call, rendered)

  def _rewrite_context_member(self, member: Node, use: ContextUse) -> None:
    """
    Rewrites a completion member (``t.end`` -> ``done``) or reports a mapped
    method used as a value (``const is = t.is``).
    """
    if use.kind == ReferenceKind.UNSUPPORTED:
      self._report(member, UNSUPPORTED_MESSAGE.format(label=use.label))
      return
    if use.kind != ReferenceKind.COMPLETION:
      return

    rule = self.table.lookup(use.method)
    token = use.registration.token or use.registration.context_name
    self.editor.replace_node(member, rule.target.format(expect=self.table.target.expect, token=token))
