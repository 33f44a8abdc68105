"""
Rewriter Context Module.

This module provides the `RewriterContext` container, which holds the shared
state of one conversion: configuration, the rule table, the analysis results
computed before rewriting starts (scopes, framework usage, registration index)
and the two sinks written during the walk (span editor and diagnostics).

The analysis results are read-only once the context is built.
"""

from dataclasses import dataclass

from jest_codemods.analysis.imports import FrameworkUsage
from jest_codemods.analysis.registrations import RegistrationIndex
from jest_codemods.analysis.scopes import ScopeTable
from jest_codemods.config import RuntimeConfig
from jest_codemods.core.diagnostics import DiagnosticsCollector
from jest_codemods.core.editor import SourceEditor
from jest_codemods.semantics.schema import RuleTable


@dataclass
class RewriterContext:
  """
  Shared state container for the rewriting pass.
  """

  config: RuntimeConfig
  table: RuleTable
  scopes: ScopeTable
  usage: FrameworkUsage
  index: RegistrationIndex
  editor: SourceEditor
  diagnostics: DiagnosticsCollector
