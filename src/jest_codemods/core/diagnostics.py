"""
Diagnostics Emitter.

Collects the warnings produced while a file is rewritten. Nothing here ever
interrupts the pass: a construct that cannot be migrated is left as written and
described by a diagnostic instead.

Diagnostics are either line-addressed (an unmapped `t.foo()` call, a skipped
hook) or file-level (an incompatible companion package). When flushed they are
ordered file-level first, then by line, keeping the order of discovery for
entries on the same line, and rendered as::

    jest-codemods warning: (test.js line 4) "t.unknownAssert" is currently not supported
"""

from typing import List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict

from jest_codemods.utils.console import log_warning

WARNING_PREFIX = "jest-codemods warning"


class Diagnostic(BaseModel):
  """
  A single non-fatal warning.
  """

  model_config = ConfigDict(frozen=True)

  message: str
  line: Optional[int] = None

  def format(self, filename: str) -> str:
    """
    Renders the diagnostic for the given file.

    Args:
        filename: Name shown in the location prefix.

    Returns:
        str: e.g. ``jest-codemods warning: (test.js line 3) Unknown AVA method "failing"``.
    """
    location = filename if self.line is None else f"{filename} line {self.line}"
    return f"{WARNING_PREFIX}: ({location}) {self.message}"


class DiagnosticsCollector:
  """
  Append-only, de-duplicating store of diagnostics for one file.
  """

  def __init__(self, filename: str = "test.js"):
    self.filename = filename
    self._entries: List[Diagnostic] = []
    self._seen: Set[Tuple[Optional[int], str]] = set()

  def warn(self, message: str, line: Optional[int] = None) -> None:
    """
    Records a warning. Repeats of the same message on the same line are ignored.

    Args:
        message: Human readable description.
        line: 1-based source line, or None for file-level issues.
    """
    key = (line, message)
    if key in self._seen:
      return
    self._seen.add(key)
    self._entries.append(Diagnostic(message=message, line=line))

  @property
  def diagnostics(self) -> List[Diagnostic]:
    """Entries in output order (file-level first, then ascending line)."""
    indexed = list(enumerate(self._entries))
    indexed.sort(key=lambda pair: (pair[1].line is not None, pair[1].line or 0, pair[0]))
    return [diag for _, diag in indexed]

  def flush(self, emit: bool = True) -> List[str]:
    """
    Formats every diagnostic and optionally writes them to the log.

    Args:
        emit: If True, each line is also sent through `log_warning`.

    Returns:
        List[str]: The formatted warnings in output order.
    """
    lines = [diag.format(self.filename) for diag in self.diagnostics]
    if emit:
      for line in lines:
        log_warning(line)
    return lines
