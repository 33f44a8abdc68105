"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A `transform` fixture running the engine with warnings captured, not logged.
- Console capture for tests asserting on log output.
"""

import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'jest_codemods' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from jest_codemods.config import RuntimeConfig  # noqa: E402
from jest_codemods.core.engine import CodemodEngine  # noqa: E402
from jest_codemods.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture
def engine_factory():
  """Builds engines with warnings kept out of the log."""

  def create(**options) -> CodemodEngine:
    options.setdefault("emit_warnings", False)
    return CodemodEngine(config=RuntimeConfig(**options))

  return create


@pytest.fixture
def transform(engine_factory):
  """
  Runs the codemod on a snippet.

  Returns:
      Callable returning the `ConversionResult` for `(code, **config_options)`.
  """

  def run(code: str, **options):
    return engine_factory(**options).run(code)

  return run


@pytest.fixture
def captured_console():
  """Redirects logging into a recording console for the duration of a test."""
  capture = Console(record=True, width=200, color_system=None)
  set_console(capture)
  yield capture
  reset_console()
