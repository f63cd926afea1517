"""
Main Entry Point for declint CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `declint.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from declint import __version__
from declint.cli import commands
from declint.config import parse_cli_rule_values
from declint.utils.console import log_error


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 clean, 1 problems found, 2 usage or IO errors).
  """
  parser = argparse.ArgumentParser(description="declint: JavaScript declaration style linter")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: LINT ---
  cmd_lint = subparsers.add_parser("lint", help="Lint JavaScript files or directories")
  cmd_lint.add_argument("paths", type=Path, nargs="+", help="Input files or directories")
  cmd_lint.add_argument("--fix", action="store_true", help="Apply autofixes and write files back")
  cmd_lint.add_argument(
    "--rule",
    action="append",
    default=None,
    help='Rule override in name=value format (e.g. one-var=never or one-var=\'{"var": "always"}\')',
  )
  cmd_lint.add_argument(
    "--max-fix-passes",
    type=int,
    default=None,
    help="Upper bound on fix passes per file (Overrides config)",
  )
  cmd_lint.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

  # --- Command: RULES ---
  subparsers.add_parser("rules", help="List available rules")

  args = parser.parse_args(argv)

  if args.command == "lint":
    try:
      rules = parse_cli_rule_values(args.rule)
    except ValueError as e:
      log_error(str(e))
      return 2
    return commands.handle_lint(args.paths, rules, args.fix, args.format, args.max_fix_passes)

  elif args.command == "rules":
    return commands.handle_rules()

  return 0


if __name__ == "__main__":
  sys.exit(main())
