"""
Signature Rewriting Logic for Test Callbacks.

This module provides the `CallbackSignatureMixin` used by the registration
rewriter. It handles stripping the context parameter from a callback and
renaming it to the completion token in callback-style tests.

``async`` keywords, bodies and any further parameters are never touched here.
"""

from tree_sitter import Node

from jest_codemods.analysis.registrations import TestRegistration


class CallbackSignatureMixin:
  """
  Mixin for modifying test callback signatures.

  Assumes the host class provides ``editor`` (from BaseRewriter).
  """

  def _rewrite_signature(self, registration: TestRegistration) -> None:
    """
    Drops or renames the context parameter of a registration callback.

    Args:
        registration: The registration whose callback is rewritten.
    """
    if registration.drop_parameter:
      self._strip_parameter(registration.callback, registration.parameter)
    elif registration.rename_parameter:
      self.editor.replace_node(registration.parameter, registration.token)

  def _strip_parameter(self, callback: Node, param: Node) -> None:
    """
    Removes `param` from the signature of `callback`.

    ``t => x`` becomes ``() => x``; with further parameters only `param` and
    its trailing comma are removed.

    Args:
        callback: Arrow function or function expression.
        param: Its first parameter.
    """
    single = callback.child_by_field_name("parameter")
    if single is not None:
      self.editor.replace_node(single, "()")
      return

    params = callback.child_by_field_name("parameters")
    following = param.next_named_sibling
    while following is not None and following.type == "comment":
      following = following.next_named_sibling
    if following is None:
      self.editor.replace_node(params, "()")
    else:
      self.editor.remove(param.start_byte, following.start_byte)
