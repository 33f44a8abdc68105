"""
Tests for Framework Usage Detection.

Verifies:
1. Every supported import / require form yields a root binding.
2. Files without the framework are not detected.
3. Companion packages are listed once, in source order.
"""

import pytest

from jest_codemods.analysis.imports import UsageDetector
from jest_codemods.core.parser import parse_source
from jest_codemods.enums import ImportStyle
from jest_codemods.semantics.manager import get_rule_table


def scan(code: str):
  tree = parse_source(code.encode("utf-8"))
  return UsageDetector(get_rule_table()).scan(tree.root_node)


@pytest.mark.parametrize(
  "code, local, style",
  [
    ("import test from 'ava';", "test", ImportStyle.DEFAULT),
    ("import foo from 'ava';", "foo", ImportStyle.DEFAULT),
    ("import * as ava from 'ava';", "ava", ImportStyle.NAMESPACE),
    ("import { default as check } from 'ava';", "check", ImportStyle.NAMED),
    ("import { test } from 'ava';", "test", ImportStyle.NAMED),
    ("const test = require('ava');", "test", ImportStyle.REQUIRE),
    ("var it = require(\"ava\");", "it", ImportStyle.REQUIRE),
  ],
)
def test_detects_import_forms(code, local, style):
  usage = scan(code)
  assert usage.detected
  assert [(b.local, b.style) for b in usage.bindings] == [(local, style)]
  assert len(usage.root_node_ids) == 1


def test_non_root_named_imports_are_ignored():
  usage = scan("import { serial } from 'ava';")
  assert usage.detected
  assert usage.bindings == []


def test_not_detected_without_ava():
  usage = scan("const test = require('testlib');\ntest(t => {});")
  assert not usage.detected
  assert usage.bindings == []


def test_nested_require_is_not_module_level():
  usage = scan("function f() { const test = require('ava'); }")
  assert not usage.detected


def test_companion_packages_listed_once():
  usage = scan(
    "import td from 'testdouble';\nimport test from 'ava';\nconst td2 = require('testdouble');\nrequire('testdouble');"
  )
  assert usage.incompatible == ["testdouble"]


def test_declaration_nodes_for_shared_declarations():
  usage = scan("const a = 1, test = require('ava');")
  assert [d.type for d in usage.declarations] == ["variable_declarator"]
