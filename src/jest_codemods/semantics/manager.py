"""
Rule Table Loading.

Locates and validates the JSON rule tables shipped with the package. The
default table is parsed once per process (`get_rule_table`) and then shared
read-only, so concurrent conversions need no coordination.
"""

import json
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from jest_codemods.semantics.schema import RuleTable

DEFAULT_TABLE = "ava.json"


def resolve_semantics_dir() -> Path:
  """
  Locates the directory containing the rule table JSON files.

  The source tree is preferred so tests and editable installs read the working
  copy; installed distributions fall back to package resources.

  Returns:
      Path: The absolute path to the 'semantics' directory.
  """
  local_path = Path(__file__).parent
  if (local_path / DEFAULT_TABLE).exists():
    return local_path

  try:
    return Path(str(files("jest_codemods.semantics")))
  except ModuleNotFoundError:
    return local_path


def load_rule_table(path: Optional[Path] = None) -> RuleTable:
  """
  Reads and validates a rule table.

  Args:
      path: JSON file to load. Defaults to the bundled AVA table.

  Returns:
      RuleTable: The validated, frozen table.

  Raises:
      ValueError: If the file is not valid JSON or does not match the schema.
  """
  table_path = path or resolve_semantics_dir() / DEFAULT_TABLE
  try:
    with open(table_path, "r", encoding="utf-8") as f:
      content = json.load(f)
    return RuleTable.model_validate(content)
  except (json.JSONDecodeError, ValidationError) as e:
    raise ValueError(f"Invalid rule table {table_path.name}: {e}") from e


@lru_cache(maxsize=1)
def get_rule_table() -> RuleTable:
  """
  Returns:
      RuleTable: The process-wide bundled table.
  """
  return load_rule_table()
