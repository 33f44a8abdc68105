"""
Tests for Assertion Rendering.

Verifies the pure `render_assertion` function for every transform kind,
including best-effort rendering of short argument lists.
"""

import pytest

from jest_codemods.core.rewriter.assertions import MISSING, Argument, arity_problem, render_assertion
from jest_codemods.semantics.manager import get_rule_table


@pytest.fixture
def table():
  return get_rule_table()


def render(table, method, *texts, kinds=None):
  kinds = kinds or ["expression"] * len(texts)
  args = [Argument(text, kind) for text, kind in zip(texts, kinds)]
  return render_assertion(table.lookup(method), args, table)


@pytest.mark.parametrize(
  "method, args, expected",
  [
    ("ok", ["a"], "expect(a).toBeTruthy()"),
    ("falsy", ["a", "'message'"], "expect(a).toBeFalsy()"),
    ("true", ["a"], "expect(a).toBe(true)"),
    ("false", ["a"], "expect(a).toBe(false)"),
    ("is", ["a", "b", "'message'"], "expect(a).toBe(b)"),
    ("not", ["a", "b"], "expect(a).not.toBe(b)"),
    ("deepEqual", ["a", "b"], "expect(a).toEqual(b)"),
    ("notSame", ["a", "b"], "expect(a).not.toEqual(b)"),
    ("regex", ["a", "/x/"], "expect(a).toMatch(/x/)"),
    ("notRegex", ["a", "/x/"], "expect(a).not.toMatch(/x/)"),
    ("throws", ["fn"], "expect(fn).toThrow()"),
    ("throws", ["fn", "TypeError"], "expect(fn).toThrowError(TypeError)"),
    ("notThrows", ["fn"], "expect(fn).not.toThrow()"),
    ("plan", ["2"], "expect.assertions(2)"),
    ("log", ["a", "b"], "console.log(a, b)"),
  ],
)
def test_matcher_rendering(table, method, args, expected):
  assert render(table, method, *args) == expected


def test_snapshot_variants(table):
  assert render(table, "snapshot", "v") == "expect(v).toMatchSnapshot()"
  assert render(table, "snapshot", "v", '"msg"', kinds=["identifier", "string"]) == 'expect(v).toMatchSnapshot("msg")'
  assert render(table, "snapshot", "v", "{id: 'x'}", kinds=["identifier", "object"]) == "expect(v).toMatchSnapshot()"
  assert render(table, "snapshot", "v", "opts", kinds=["identifier", "identifier"]) == "expect(v).toMatchSnapshot()"
  assert render(table, "snapshot", "v", "`m`", kinds=["identifier", "template_string"]) == "expect(v).toMatchSnapshot(`m`)"
  assert (
    render(table, "snapshot", "v", "{}", '"msg"', kinds=["identifier", "object", "string"])
    == 'expect(v).toMatchSnapshot("msg")'
  )


def test_missing_arguments_are_padded(table):
  assert render(table, "is", "1") == f"expect(1).toBe({MISSING.text})"
  assert render(table, "ok") == "expect(undefined).toBeTruthy()"
  assert render(table, "plan") == "expect.assertions(undefined)"


def test_non_expression_rules_render_nothing(table):
  assert render(table, "pass", "'x'") is None
  assert render(table, "end") is None


def test_arity_problem(table):
  assert arity_problem(table.lookup("is"), 1) == 2
  assert arity_problem(table.lookup("is"), 3) is None
  assert arity_problem(table.lookup("ok"), 0) == 1
  assert arity_problem(table.lookup("log"), 0) is None
