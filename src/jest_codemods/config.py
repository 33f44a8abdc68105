"""
Runtime Configuration Store.

Options for one codemod run. Values come from explicit arguments first, then
from a `[tool.jest_codemods]` table in the nearest `pyproject.toml`, then from
the defaults below.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib


class RuntimeConfig(BaseModel):
  """
  Configuration record consumed by the `CodemodEngine`.

  Accepts both snake_case and the camelCase spelling used by jest-codemods
  option objects (``skipImportDetection``).
  """

  model_config = ConfigDict(populate_by_name=True, frozen=True)

  skip_import_detection: bool = Field(
    False,
    alias="skipImportDetection",
    description="Transform even when no import/require of the legacy framework is visible.",
  )
  framework_name: Optional[str] = Field(
    None,
    alias="frameworkName",
    description="Global name treated as the registration function when detection is bypassed.",
  )
  emit_warnings: bool = Field(True, description="Also write diagnostics to the log.")

  @field_validator("framework_name")
  @classmethod
  def validate_framework_name(cls, v: Optional[str]) -> Optional[str]:
    """
    Ensures the configured name is a plain JavaScript identifier.

    Raises:
        ValueError: If the name contains anything but identifier characters.
    """
    if v is None:
      return v
    v_clean = v.strip()
    if not v_clean or not all(c.isalnum() or c in "_$" for c in v_clean) or v_clean[0].isdigit():
      raise ValueError(f"Invalid framework binding name: '{v}'")
    return v_clean

  @classmethod
  def load(
    cls,
    skip_import_detection: Optional[bool] = None,
    framework_name: Optional[str] = None,
    emit_warnings: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides it with explicit values.

    Args:
        skip_import_detection: Override for the detection bypass.
        framework_name: Override for the bypass binding name.
        emit_warnings: Override for logging diagnostics.
        search_path: Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    values: Dict[str, Any] = {}
    for key, override in (
      ("skip_import_detection", skip_import_detection),
      ("framework_name", framework_name),
      ("emit_warnings", emit_warnings),
    ):
      if override is not None:
        values[key] = override
      elif key in toml_config:
        values[key] = toml_config[key]

    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Both ``skip_import_detection`` and ``skipImportDetection`` spellings are accepted.

  Args:
      start_path: Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      section = data.get("tool", {}).get("jest_codemods", {})
      aliases = {"skipImportDetection": "skip_import_detection", "frameworkName": "framework_name"}
      return {aliases.get(k, k): v for k, v in section.items()}, parent

  return {}, None
