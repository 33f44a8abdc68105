"""
Orchestration Engine for the AVA to Jest Codemod.

This module provides the `CodemodEngine`, the primary driver of a conversion.
It sequences the analysis and rewriting passes over one file.

The Engine pipeline consists of:

1.  **Ingestion Phase**: Parses the source text into a tree-sitter tree.
    Unparsable input is reported as a failed `ConversionResult`.

2.  **Detection Gate**: Scans module-level imports/requires for the legacy
    framework. Without it (and without `skip_import_detection`) the input is
    returned unchanged and nothing is reported.

3.  **Analysis**:
    - **Scopes**: Builds the scope arena and resolves every reference.
    - **Registrations**: Finds registration calls, normalizes their modifier
      chains and classifies every use of their context parameters.

4.  **Rewriting**: Executes the `AvaRewriter` walk, recording span edits and
    diagnostics, then removes the legacy import.

5.  **Output**: Prints the edited source (the original string when no edit
    was recorded) and flushes the diagnostics.

The engine holds no per-file state between runs, and the rule table it shares
is immutable, so one engine may serve concurrent conversions.
"""

from typing import Optional

from jest_codemods.analysis.imports import UsageDetector
from jest_codemods.analysis.registrations import RegistrationScanner
from jest_codemods.analysis.scopes import ScopeTable
from jest_codemods.config import RuntimeConfig
from jest_codemods.core.conversion_result import ConversionResult
from jest_codemods.core.diagnostics import DiagnosticsCollector
from jest_codemods.core.editor import SourceEditor
from jest_codemods.core.parser import ParseError, parse_source
from jest_codemods.core.rewriter import AvaRewriter, RewriterContext
from jest_codemods.semantics.manager import get_rule_table
from jest_codemods.semantics.schema import RuleTable
from jest_codemods.utils.console import log_error


class CodemodEngine:
  """
  The main conversion unit.

  Encapsulates the configuration and rule table used to convert files one at a time.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None, rules: Optional[RuleTable] = None):
    """
    Initializes the Engine.

    Args:
        config: The runtime configuration. Defaults to `RuntimeConfig()`.
        rules: The rule table. Defaults to the bundled AVA table.
    """
    self.config = config or RuntimeConfig()
    self.rules = rules or get_rule_table()

  def run(self, code: str, filename: str = "test.js") -> ConversionResult:
    """
    Executes the full conversion pipeline on one file.

    Args:
        code: The input source text.
        filename: Name used in diagnostics.

    Returns:
        ConversionResult: The transformed code and its warnings.
    """
    source = code.encode("utf-8")
    try:
      tree = parse_source(source)
    except ParseError as e:
      message = f"Parse Error: {filename}: {e}"
      log_error(message)
      return ConversionResult(code=code, errors=[message], success=False)

    root = tree.root_node
    usage = UsageDetector(self.rules).scan(root)
    if not usage.detected and not self.config.skip_import_detection:
      return ConversionResult(code=code)

    scopes = ScopeTable.build(root)
    index = RegistrationScanner(self.rules, scopes, usage, self.config).scan(root)
    editor = SourceEditor(source)
    diagnostics = DiagnosticsCollector(filename)

    context = RewriterContext(
      config=self.config,
      table=self.rules,
      scopes=scopes,
      usage=usage,
      index=index,
      editor=editor,
      diagnostics=diagnostics,
    )
    AvaRewriter(context).rewrite(root)

    warnings = diagnostics.flush(emit=self.config.emit_warnings)
    output = editor.render() if editor.changed else code
    return ConversionResult(code=output, warnings=warnings, changed=output != code)
