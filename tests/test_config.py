"""
Tests for Runtime Configuration.

Verifies:
1. Defaults and camelCase aliases.
2. pyproject.toml discovery and CLI override precedence.
3. Validation of the framework binding name.
"""

import pytest
from pydantic import ValidationError

from jest_codemods.config import RuntimeConfig


def test_defaults():
  config = RuntimeConfig()
  assert config.skip_import_detection is False
  assert config.framework_name is None
  assert config.emit_warnings is True


def test_camel_case_alias():
  config = RuntimeConfig.model_validate({"skipImportDetection": True, "frameworkName": "it"})
  assert config.skip_import_detection is True
  assert config.framework_name == "it"


@pytest.mark.parametrize("name", ["1test", "te st", "a.b", ""])
def test_invalid_framework_name(name):
  with pytest.raises(ValidationError):
    RuntimeConfig(framework_name=name)


def test_load_from_pyproject(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    "[tool.jest_codemods]\nskipImportDetection = true\nframework_name = 'check'\n", encoding="utf-8"
  )
  nested = tmp_path / "tests" / "unit"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)
  assert config.skip_import_detection is True
  assert config.framework_name == "check"


def test_explicit_values_override_toml(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.jest_codemods]\nskip_import_detection = true\n", encoding="utf-8")
  config = RuntimeConfig.load(skip_import_detection=False, emit_warnings=False, search_path=tmp_path)
  assert config.skip_import_detection is False
  assert config.emit_warnings is False


def test_broken_toml_is_ignored(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.jest_codemods\n", encoding="utf-8")
  assert RuntimeConfig.load(search_path=tmp_path) == RuntimeConfig()
