"""
Tests for running the engine with a caller-supplied rule table.
"""

import json

from jest_codemods.config import RuntimeConfig
from jest_codemods.core.engine import CodemodEngine
from jest_codemods.semantics.manager import load_rule_table


def test_engine_uses_supplied_rules(tmp_path):
  path = tmp_path / "rules.json"
  path.write_text(
    json.dumps(
      {
        "framework": {"package": "ava", "display_name": "AVA"},
        "target": {"expect": "assertThat", "hooks": {"before": "setupAll"}},
        "assertions": {"is": {"matcher": "isEqualTo", "arity": "exact", "args": 2}},
      }
    ),
    encoding="utf-8",
  )
  engine = CodemodEngine(config=RuntimeConfig(emit_warnings=False), rules=load_rule_table(path))

  result = engine.run("import test from 'ava';\ntest.before(t => { t.is(a, b); t.ok(a); });\n")

  assert result.code == "setupAll(t => { assertThat(a).isEqualTo(b); t.ok(a); });\n"
  assert result.warnings == ['jest-codemods warning: (test.js line 2) "t.ok" is currently not supported']
