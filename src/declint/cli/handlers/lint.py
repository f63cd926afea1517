"""
Lint Command Handler.

This module implements the logic for the `declint lint` command.
It orchestrates:
1. Configuration loading (TOML + `--rule` overrides).
2. File collection from files and directories.
3. Linting (and optionally fixing) each file with one shared `Linter`.
4. Writing fixed files back and reporting the remaining problems.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.markup import escape

from declint.config import RuntimeConfig
from declint.core.linter import Linter
from declint.core.report import LintResult
from declint.utils.console import console, log_error, log_info, log_success, log_warning


def handle_lint(
  paths: Sequence[Path],
  rules: Dict[str, Any],
  fix: bool,
  output_format: str = "text",
  max_fix_passes: Optional[int] = None,
) -> int:
  """
  Handles the 'lint' command execution.

  Args:
      paths: Files or directories to lint.
      rules: Rule overrides parsed from `--rule`.
      fix: If True, fixes are applied and files rewritten.
      output_format: "text" for the console report, "json" for machine output.
      max_fix_passes: Override for the fix pass limit.

  Returns:
      int: 0 if no errors remain, 1 if errors remain, 2 on configuration or
      IO failures.
  """
  search_path = paths[0] if paths and paths[0].is_dir() else (paths[0].parent if paths else Path.cwd())
  try:
    config = RuntimeConfig.load(rules=rules, max_fix_passes=max_fix_passes, search_path=search_path)
    linter = Linter(config)
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 2

  missing = [p for p in paths if not p.exists()]
  if missing:
    for path in missing:
      log_error(f"Input not found: [path]{escape(str(path))}[/path]")
    return 2

  files = collect_files(paths, config.extensions)
  if not files:
    log_warning("No JavaScript files found.")
    return 0

  if output_format == "text":
    log_info(f"Linting {len(files)} file(s)...")

  results: Dict[Path, LintResult] = {}
  io_failed = False
  for path in files:
    result = lint_file(path, linter, fix, quiet=output_format == "json")
    if result is None:
      io_failed = True
      continue
    results[path] = result

  if output_format == "json":
    print(json.dumps(_json_report(results), indent=2))
  else:
    _print_report(results)

  if io_failed:
    return 2
  if any(r.error_count or not r.success for r in results.values()):
    return 1
  return 0


def collect_files(paths: Sequence[Path], extensions: Sequence[str]) -> List[Path]:
  """
  Expands directories into the files with a lintable suffix.

  Explicit file arguments are always kept, whatever their suffix.

  Args:
      paths: Files or directories.
      extensions: Accepted suffixes for files found in directories.

  Returns:
      List[Path]: Files in argument order, directory contents sorted.
  """
  files: List[Path] = []
  for path in paths:
    if path.is_dir():
      files.extend(sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in extensions))
    elif path.is_file():
      files.append(path)
  return files


def lint_file(path: Path, linter: Linter, fix: bool, quiet: bool = False) -> Optional[LintResult]:
  """
  Lints one file, writing the fixed output back when fixing.

  Args:
      path: The file to lint.
      linter: The configured linter.
      fix: Whether to apply fixes.
      quiet: Suppress the success log, e.g. when stdout carries JSON.

  Returns:
      Optional[LintResult]: None if the file could not be read or written.
  """
  try:
    with open(path, "rt", encoding="utf-8") as f:
      code = f.read()
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read [path]{escape(str(path))}[/path]: {e}")
    return None

  result = linter.run(code, fix=fix)

  if fix and result.fixed:
    try:
      with open(path, "wt", encoding="utf-8") as f:
        f.write(result.output)
    except OSError as e:
      log_error(f"Failed to write [path]{escape(str(path))}[/path]: {e}")
      return None
    if not quiet:
      log_success(f"Fixed: [path]{escape(str(path))}[/path]")

  return result


def _json_report(results: Dict[Path, LintResult]) -> List[Dict[str, Any]]:
  report = []
  for path, result in results.items():
    entry: Dict[str, Any] = {
      "filePath": str(path),
      "messages": [m.model_dump(exclude={"fix"}) for m in result.messages],
      "errorCount": result.error_count,
      "warningCount": result.warning_count,
    }
    if result.fixed:
      entry["output"] = result.output
    report.append(entry)
  return report


def _print_report(results: Dict[Path, LintResult]) -> None:
  """
  Renders remaining problems grouped by file, followed by a summary line.

  Args:
      results: Lint results keyed by file.
  """
  errors = sum(r.error_count for r in results.values())
  warnings = sum(r.warning_count for r in results.values())

  for path, result in results.items():
    if not result.messages:
      continue
    console.print(f"\n[path]{escape(str(path))}[/path]")
    for message in result.messages:
      label = "[error]error[/error]" if message.severity == 2 else "[warning]warning[/warning]"
      rule = f"  [rule]{message.rule_id}[/rule]" if message.rule_id else ""
      console.print(f"  {message.line}:{message.column}  {label}  {escape(message.message)}{rule}")

  total = errors + warnings
  if total == 0:
    log_success(f"{len(results)} file(s) checked, no problems found.")
    return
  console.print(f"\n[bold]✖ {total} problem(s)[/bold] ({errors} error(s), {warnings} warning(s))")
