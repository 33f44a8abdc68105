"""
Modifier Chain Normalization.

A legacy registration carries its modifiers as runtime member accesses on the
framework binding (``test.serial.skip(...)``, ``test.after.always(...)``). The
chain is first tokenized left to right into `Modifier` tags, then reduced by a
pure function to the canonical target callee, independent of the order the
chain was written in:

- ``serial`` is dropped (target registrations run serially).
- ``skip`` / ``only`` anywhere in the chain become ``test.skip`` / ``test.only``.
- Hooks map through the rule table (``before`` -> ``beforeAll``); ``always`` is
  accepted after ``after`` / ``afterEach`` only.
- ``todo`` passes through as ``test.todo``.
- ``cb`` switches the callback to completion style.
- Anything else is reported and the registration left as written.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from jest_codemods.enums import ModifierKind
from jest_codemods.semantics.schema import RuleTable

HOOK_KINDS = (ModifierKind.BEFORE, ModifierKind.AFTER, ModifierKind.BEFORE_EACH, ModifierKind.AFTER_EACH)
ALWAYS_HOOKS = (ModifierKind.AFTER, ModifierKind.AFTER_EACH)

UNKNOWN_METHOD_MESSAGE = 'Unknown {framework} method "{name}"'
SKIPPED_HOOK_MESSAGE = "Skipping setup/teardown hooks is currently not supported"
EXCLUSIVE_HOOK_MESSAGE = "Exclusive setup/teardown hooks are currently not supported"

_BY_NAME = {kind.value: kind for kind in ModifierKind if kind != ModifierKind.UNKNOWN}


@dataclass(frozen=True)
class Modifier:
  """One member of a registration chain."""

  kind: ModifierKind
  name: str


@dataclass(frozen=True)
class NormalizedChain:
  """
  Canonical form of a registration chain.

  Attributes:
      callee: Target callee text (``test.only``, ``afterAll``), or None when the
          chain has no target equivalent and must stay as written.
      callback_style: True if the chain requested completion-callback style.
      problem: Diagnostic message to report for the registration, if any.
      rewrite_body: False when the whole call (body included) is left alone.
  """

  callee: Optional[str]
  callback_style: bool = False
  problem: Optional[str] = None
  rewrite_body: bool = True


def tokenize_chain(names: Sequence[str]) -> List[Modifier]:
  """
  Tags each member name of a registration chain.

  Args:
      names: Property names after the framework binding, e.g. ``["serial", "skip"]``.

  Returns:
      List[Modifier]: One tag per name; unrecognised names become UNKNOWN.
  """
  return [Modifier(_BY_NAME.get(name, ModifierKind.UNKNOWN), name) for name in names]


def reduce_chain(modifiers: Sequence[Modifier], table: RuleTable) -> NormalizedChain:
  """
  Computes the canonical target callee of a tokenized chain.

  Args:
      modifiers: Output of `tokenize_chain`.
      table: Rule table supplying the target test and hook names.

  Returns:
      NormalizedChain: The canonical form, or a problem description.
  """
  kinds = [m.kind for m in modifiers]
  callback_style = ModifierKind.CALLBACK in kinds

  unknown = next((m for m in modifiers if m.kind == ModifierKind.UNKNOWN), None)
  hooks = [m for m in modifiers if m.kind in HOOK_KINDS]
  if unknown is None and len(hooks) > 1:
    unknown = hooks[1]
  if unknown is None and ModifierKind.ALWAYS in kinds and not (hooks and hooks[0].kind in ALWAYS_HOOKS):
    unknown = next(m for m in modifiers if m.kind == ModifierKind.ALWAYS)
  if unknown is not None:
    message = UNKNOWN_METHOD_MESSAGE.format(framework=table.framework.display_name, name=unknown.name)
    return NormalizedChain(callee=None, callback_style=callback_style, problem=message, rewrite_body=False)

  test = table.target.test
  if ModifierKind.TODO in kinds:
    return NormalizedChain(callee=f"{test}.todo", callback_style=callback_style)

  if hooks:
    if ModifierKind.SKIP in kinds:
      return NormalizedChain(callee=None, callback_style=callback_style, problem=SKIPPED_HOOK_MESSAGE)
    if ModifierKind.ONLY in kinds:
      return NormalizedChain(callee=None, callback_style=callback_style, problem=EXCLUSIVE_HOOK_MESSAGE)
    return NormalizedChain(callee=table.hook_target(hooks[0].kind.value), callback_style=callback_style)

  # skip beats only when both are present
  if ModifierKind.SKIP in kinds:
    return NormalizedChain(callee=f"{test}.skip", callback_style=callback_style)
  if ModifierKind.ONLY in kinds:
    return NormalizedChain(callee=f"{test}.only", callback_style=callback_style)
  return NormalizedChain(callee=test, callback_style=callback_style)


def normalize_chain(names: Sequence[str], table: RuleTable) -> NormalizedChain:
  """Tokenizes and reduces a chain in one step."""
  return reduce_chain(tokenize_chain(names), table)
