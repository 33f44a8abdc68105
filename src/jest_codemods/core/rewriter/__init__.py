"""
Rewriter Package.

This package provides the `AvaRewriter` class, composed of several mixins
to handle specific aspects of the transformation:
- Registrations: test and hook calls, their modifier chains and the legacy import.
- Signatures: removal or renaming of the context parameter.
- Assertions: context calls mapped through the rule table.
"""

from tree_sitter import Node

from jest_codemods.core.rewriter.assertions import AssertionMixin
from jest_codemods.core.rewriter.base import BaseRewriter
from jest_codemods.core.rewriter.context import RewriterContext
from jest_codemods.core.rewriter.func_signature import CallbackSignatureMixin
from jest_codemods.core.rewriter.registrations import RegistrationMixin


class AvaRewriter(
  RegistrationMixin,
  CallbackSignatureMixin,
  AssertionMixin,
  BaseRewriter,
):
  """
  The main transformer for jest-codemods.

  Dispatches the post-order walk of `BaseRewriter` to the mixins. This class is
  the entry point for the `CodemodEngine`.
  """

  def leave_call_expression(self, node: Node) -> None:
    use = self.ctx.index.use_at(node)
    if use is not None:
      self._rewrite_context_call(node, use)
      return
    registration = self.ctx.index.registration_for(node)
    if registration is not None:
      self._rewrite_registration(registration)

  def leave_member_expression(self, node: Node) -> None:
    use = self.ctx.index.use_at(node)
    if use is not None:
      self._rewrite_context_member(node, use)

  def leave_identifier(self, node: Node) -> None:
    # destructured completion members used as values
    use = self.ctx.index.use_at(node)
    if use is not None:
      self._rewrite_context_member(node, use)


__all__ = ["AvaRewriter", "RewriterContext"]
