"""
Registration Rewriting.

Handles the calls that register tests and hooks (``test.serial.skip(...)``,
``test.after.always(...)``): replaces the callee with its canonical target
form, reports chains without an equivalent, and hands the callback to the
signature rewriter. Removes the legacy import once the walk is over.
"""

from tree_sitter import Node

from jest_codemods.analysis.imports import INCOMPATIBLE_PACKAGE_MESSAGE
from jest_codemods.analysis.registrations import TestRegistration


class RegistrationMixin:
  """
  Mixin rewriting registration calls.

  Assumes the host class provides ``ctx``, ``editor``, ``_report``,
  ``_remove_statement`` (from BaseRewriter) and ``_rewrite_signature``
  (from CallbackSignatureMixin).
  """

  def _rewrite_registration(self, registration: TestRegistration) -> None:
    """
    Rewrites one registration. The body has already been visited.

    Args:
        registration: The indexed registration.
    """
    normalized = registration.normalized
    if normalized.problem is not None:
      self._report(registration.call, normalized.problem)
    if not normalized.rewrite_body:
      return

    if normalized.callee is not None:
      self.editor.replace_node(registration.call.child_by_field_name("function"), normalized.callee)
    if registration.callback is not None and registration.parameter is not None:
      self._rewrite_signature(registration)

  def _remove_framework_imports(self) -> None:
    for declaration in self.ctx.usage.declarations:
      self._remove_statement(declaration)

  def _report_companions(self) -> None:
    for package in self.ctx.usage.incompatible:
      self.ctx.diagnostics.warn(INCOMPATIBLE_PACKAGE_MESSAGE.format(package=package))

  def leave_program_end(self, root: Node) -> None:
    self._report_companions()
    self._remove_framework_imports()
