"""
Convert Command Handler.

This module implements the logic for the `jest-codemods convert` command.
It orchestrates:
1. Configuration loading (pyproject.toml plus CLI overrides).
2. Collecting the JavaScript files to migrate.
3. Transformation via the Engine.
4. Output writing and a summary report.
"""

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError
from rich.table import Table

from jest_codemods.config import RuntimeConfig
from jest_codemods.core.conversion_result import ConversionResult
from jest_codemods.core.engine import CodemodEngine
from jest_codemods.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)

JS_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs")


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  skip_import_detection: Optional[bool] = None,
  framework_name: Optional[str] = None,
  dry_run: bool = False,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the test file or directory to convert.
      output_path: Where converted code is written. None rewrites files in place.
      skip_import_detection: Override for the detection bypass.
      framework_name: Override for the bypass binding name.
      dry_run: If True, print converted code instead of writing it.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      skip_import_detection=skip_import_detection,
      framework_name=framework_name,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValidationError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  engine = CodemodEngine(config=config)
  batch_results: Dict[str, ConversionResult] = {}

  if input_path.is_file():
    result = _convert_single_file(input_path, output_path or input_path, engine, dry_run, input_path.name)
    batch_results[input_path.name] = result
  else:
    if not output_path and not dry_run:
      log_error("Directory conversion requires --out destination directory (or --dry-run).")
      return 1

    js_files = collect_js_files(input_path)
    if not js_files:
      log_warning(f"No JavaScript files found in {input_path}")
      return 0

    log_info(f"Processing {len(js_files)} files from [path]{input_path}[/path]...")
    for src_file in js_files:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / rel_path if output_path else src_file
      batch_results[str(rel_path)] = _convert_single_file(src_file, dest_file, engine, dry_run, str(rel_path))

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def collect_js_files(root: Path) -> List[Path]:
  """
  Lists JavaScript sources below `root`, skipping `node_modules`.

  Args:
      root: Directory to search recursively.

  Returns:
      List[Path]: Matching files in sorted order.
  """
  return sorted(
    path
    for path in root.rglob("*")
    if path.is_file() and path.suffix in JS_SUFFIXES and "node_modules" not in path.relative_to(root).parts
  )


def _convert_single_file(
  input_path: Path,
  output_path: Path,
  engine: CodemodEngine,
  dry_run: bool,
  display_name: str,
) -> ConversionResult:
  """
  Helper to execute the codemod on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path.
      engine: The configured engine.
      dry_run: Print instead of writing.
      display_name: Name shown in warnings.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    code = input_path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])

  result = engine.run(code, filename=display_name)
  if not result.success:
    return result

  if dry_run:
    print(result.code, end="")
    return result

  if output_path == input_path and not result.changed:
    return result

  try:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.code, encoding="utf-8")
  except OSError as e:
    log_error(f"Failed to write {output_path}: {e}")
    return ConversionResult(code=result.code, warnings=result.warnings, errors=[str(e)], success=False)

  if result.changed:
    log_success(f"Migrated: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  return result


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of conversion results to the console.

  Args:
      results: Dictionary mapping filenames to conversion results.
  """
  total = len(results)
  changed = sum(1 for r in results.values() if r.success and r.changed)
  failures = sum(1 for r in results.values() if not r.success)

  table = Table(title="Migration Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Warnings", justify="right")

  for filename, res in results.items():
    if not res.success:
      status = "❌ Failed"
    elif res.changed:
      status = "✅ Changed"
    else:
      status = "Unchanged"
    table.add_row(filename, status, str(len(res.warnings)))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {changed}/{total} changed, {failures} failed.")
