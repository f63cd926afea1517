from .lint import handle_lint, collect_files, lint_file
from .rules import handle_rules

__all__ = [
  "collect_files",
  "handle_lint",
  "handle_rules",
  "lint_file",
]
