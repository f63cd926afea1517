"""
CLI Command Handlers Facade.

Re-exports handlers from `declint.cli.handlers` so the dispatcher (and test
patches) have a single target module.
"""

from declint.cli.handlers.lint import handle_lint, collect_files, lint_file
from declint.cli.handlers.rules import handle_rules

__all__ = [
  "collect_files",
  "handle_lint",
  "handle_rules",
  "lint_file",
]
