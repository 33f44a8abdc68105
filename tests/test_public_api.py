"""
Tests for the top-level `convert` helper.
"""

import pytest

import jest_codemods


def test_convert_returns_code():
  code = "import test from 'ava'\ntest(t => { t.is(a, 1) })\n"
  assert jest_codemods.convert(code) == "test(() => { expect(a).toBe(1) })\n"


def test_convert_bypass():
  assert jest_codemods.convert("it(t => t.pass())", skip_import_detection=True, framework_name="it") == (
    "test(t => t.pass())"
  )


def test_convert_raises_on_syntax_error():
  with pytest.raises(ValueError, match="Conversion failed"):
    jest_codemods.convert("test(t => {")
