"""
Main Entry Point for jest-codemods CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `jest_codemods.cli.handlers`.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from jest_codemods import __version__
from jest_codemods.cli.handlers import handle_convert


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="jest-codemods: Migrate AVA test files to Jest")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Migrate a test file or a directory of test files")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir). Defaults to in-place.")
  cmd_conv.add_argument(
    "--skip-import-detection",
    action="store_true",
    default=None,
    help="Transform files even if they do not import or require 'ava' (Overrides config)",
  )
  cmd_conv.add_argument(
    "--framework-name",
    default=None,
    help="Global treated as the AVA test function when detection is skipped (default: test)",
  )
  cmd_conv.add_argument("--dry-run", action="store_true", help="Print results instead of writing files")

  args = parser.parse_args(argv)

  if args.command == "convert":
    return handle_convert(
      input_path=args.path,
      output_path=args.out,
      skip_import_detection=args.skip_import_detection,
      framework_name=args.framework_name,
      dry_run=args.dry_run,
    )

  parser.print_help()
  return 1


if __name__ == "__main__":
  raise SystemExit(main())
