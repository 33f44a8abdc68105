"""
Tests for Modifier Chain Normalization.

Verifies:
1. Order independence of serial / skip / only.
2. Hook mapping, `always`, and unsupported hook combinations.
3. Unknown members.
"""

import pytest

from jest_codemods.analysis.modifiers import (
  EXCLUSIVE_HOOK_MESSAGE,
  SKIPPED_HOOK_MESSAGE,
  Modifier,
  normalize_chain,
  reduce_chain,
  tokenize_chain,
)
from jest_codemods.enums import ModifierKind
from jest_codemods.semantics.manager import get_rule_table


@pytest.fixture
def table():
  return get_rule_table()


def test_tokenize_tags_known_and_unknown_names():
  assert tokenize_chain(["serial", "cb", "failing"]) == [
    Modifier(ModifierKind.SERIAL, "serial"),
    Modifier(ModifierKind.CALLBACK, "cb"),
    Modifier(ModifierKind.UNKNOWN, "failing"),
  ]


@pytest.mark.parametrize(
  "chain, callee",
  [
    ([], "test"),
    (["serial"], "test"),
    (["serial", "skip"], "test.skip"),
    (["skip", "serial"], "test.skip"),
    (["only", "serial"], "test.only"),
    (["serial", "only"], "test.only"),
    (["skip", "only"], "test.skip"),
    (["todo"], "test.todo"),
    (["serial", "todo"], "test.todo"),
    (["before"], "beforeAll"),
    (["after"], "afterAll"),
    (["beforeEach"], "beforeEach"),
    (["afterEach"], "afterEach"),
    (["after", "always"], "afterAll"),
    (["afterEach", "always"], "afterEach"),
    (["serial", "beforeEach"], "beforeEach"),
  ],
)
def test_canonical_callee(table, chain, callee):
  result = normalize_chain(chain, table)
  assert result.callee == callee
  assert result.problem is None


def test_cb_is_dropped_and_flags_callback_style(table):
  result = normalize_chain(["cb", "skip"], table)
  assert result.callee == "test.skip"
  assert result.callback_style


@pytest.mark.parametrize("hook", ["before", "after", "beforeEach", "afterEach"])
@pytest.mark.parametrize("flip", [False, True])
def test_skipped_hooks_are_reported(table, hook, flip):
  chain = ["skip", hook] if flip else [hook, "skip"]
  result = normalize_chain(chain, table)
  assert result.callee is None
  assert result.problem == SKIPPED_HOOK_MESSAGE
  assert result.rewrite_body


def test_exclusive_hooks_are_reported(table):
  result = reduce_chain(tokenize_chain(["only", "after"]), table)
  assert result.problem == EXCLUSIVE_HOOK_MESSAGE
  assert result.callee is None


@pytest.mark.parametrize(
  "chain, name",
  [
    (["failing"], "failing"),
    (["serial", "macro"], "macro"),
    (["always"], "always"),
    (["before", "always"], "always"),
    (["before", "after"], "after"),
  ],
)
def test_unknown_members(table, chain, name):
  result = normalize_chain(chain, table)
  assert result.callee is None
  assert result.problem == f'Unknown AVA method "{name}"'
  assert result.rewrite_body is False
