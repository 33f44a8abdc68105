"""
Tests for Centralized Logging Utility and Injection Mechanics.

Verifies:
1. Proxy forwarding to the active Rich console.
2. Injection capabilities (`set_console`).
3. Standard logging wrappers, including markup escaping for warnings.
"""

import pytest
from rich.console import Console

from jest_codemods.utils.console import (
  console,
  get_console,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
)


@pytest.fixture(autouse=True)
def cleanup_console():
  """Ensures console is reset after every test."""
  reset_console()
  yield
  reset_console()


def test_console_proxy_forwards():
  assert callable(console.print)
  assert hasattr(console, "export_text")
  assert isinstance(get_console(), Console)


def test_custom_console_injection():
  capture = Console(record=True, width=200)
  set_console(capture)

  log_info("Captured Log")
  log_success("Done")
  log_error("Broken")

  output = capture.export_text()
  assert "Captured Log" in output
  assert "Done" in output
  assert "Broken" in output


def test_warning_text_is_not_markup():
  capture = Console(record=True, width=200)
  set_console(capture)

  log_warning("[bold]t.is[/bold]")

  assert "[bold]t.is[/bold]" in capture.export_text()


def test_reset_restores_fresh_backend():
  temp = Console()
  set_console(temp)
  assert get_console() is temp

  reset_console()
  assert get_console() is not temp
