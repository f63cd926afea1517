"""
Enumerations for declint.

This module defines the closed sets of values shared across the linter:
declaration kinds, consolidation modes, message identifiers and severities.
"""

from enum import Enum


class BindingKind(str, Enum):
  """
  The three mutually exclusive JavaScript declaration forms.

  `VAR` bindings are function-scoped; `LET` and `CONST` are block-scoped.
  """

  VAR = "var"
  LET = "let"
  CONST = "const"


class Mode(str, Enum):
  """
  Consolidation policy for one initialization bucket of a binding kind.
  """

  ALWAYS = "always"  # one statement per scope
  NEVER = "never"  # one declarator per statement
  CONSECUTIVE = "consecutive"  # no two adjacent statements


class MessageId(str, Enum):
  """
  Diagnostic identifiers reported by the `one-var` rule.
  """

  COMBINE = "combine"
  COMBINE_INITIALIZED = "combineInitialized"
  COMBINE_UNINITIALIZED = "combineUninitialized"
  SPLIT = "split"
  SPLIT_INITIALIZED = "splitInitialized"
  SPLIT_UNINITIALIZED = "splitUninitialized"
  SPLIT_REQUIRES = "splitRequires"


class Severity(str, Enum):
  """
  Reporting level of a configured rule.
  """

  OFF = "off"
  WARN = "warn"
  ERROR = "error"

  @property
  def level(self) -> int:
    """Numeric level (0 off, 1 warn, 2 error)."""
    return {"off": 0, "warn": 1, "error": 2}[self.value]
