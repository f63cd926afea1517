"""
declint Package.

A JavaScript linter focused on variable declaration style. It ships the
`one-var` rule (declare variables together or separately per scope) and the
`no-undefined` rule, both with a shared tree-sitter based engine and an
autofixer.

Usage
-----

Simple String Linting
^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import declint
    messages = declint.lint("var a = 1; var b = 2;")
    print(messages[0].message)
    # Combine this with the previous 'var' statement.

Fixing
^^^^^^

.. code-block:: python

    import declint
    print(declint.fix("var a, b;", rules={"one-var": "never"}))
    # var a; var b;
"""

from typing import Any, Dict, List, Optional

from declint.config import RuntimeConfig
from declint.core.linter import Linter
from declint.core.report import LintMessage, LintResult

__version__ = "0.1.0"


def lint(code: str, rules: Optional[Dict[str, Any]] = None) -> List[LintMessage]:
  """
  Lints a string of JavaScript code.

  Args:
      code (str): The source to lint.
      rules (dict, optional): Rule name -> severity/options entries. Defaults
          to `one-var` with its default options.

  Returns:
      List[LintMessage]: The diagnostics, sorted by position.

  Raises:
      ValueError: If a rule is unknown or misconfigured.
  """
  config = RuntimeConfig(rules=rules) if rules is not None else RuntimeConfig()
  return Linter(config).verify(code)


def fix(code: str, rules: Optional[Dict[str, Any]] = None) -> str:
  """
  Applies all autofixes to a string of JavaScript code.

  Args:
      code (str): The source to fix.
      rules (dict, optional): Rule name -> severity/options entries.

  Returns:
      str: The fixed source. Unchanged if it cannot be parsed.
  """
  config = RuntimeConfig(rules=rules) if rules is not None else RuntimeConfig()
  return Linter(config).verify_and_fix(code).output


__all__ = [
  "LintMessage",
  "LintResult",
  "Linter",
  "RuntimeConfig",
  "fix",
  "lint",
  "__version__",
]
