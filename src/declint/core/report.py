"""
Data structures representing the output of the lint pipeline.

`LintMessage` is one located diagnostic, `LintResult` the outcome of linting
(and optionally fixing) a single source text.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from declint.core.fixer import Fix


class LintMessage(BaseModel):
  """
  A single diagnostic produced by a rule, or a fatal parsing error.
  """

  rule_id: Optional[str] = Field(default=None, description="Rule name, None for parsing errors.")
  message_id: Optional[str] = Field(default=None, description="Identifier of the message template.")
  message: str = Field(description="The rendered message text.")
  severity: int = Field(default=2, description="1 for warnings, 2 for errors.")
  line: int = Field(description="1-based start line.")
  column: int = Field(description="1-based start column.")
  end_line: Optional[int] = Field(default=None, description="1-based end line.")
  end_column: Optional[int] = Field(default=None, description="1-based end column.")
  fix: Optional[Fix] = Field(default=None, description="Autofix, only computed when fixing.")
  fatal: bool = Field(default=False, description="True for parsing errors.")


class LintResult(BaseModel):
  """
  Container for the results of linting one source text.
  """

  code: str = Field(default="", description="The original source code.")
  output: str = Field(default="", description="The source after applying fixes.")
  messages: List[LintMessage] = Field(default_factory=list, description="Remaining diagnostics.")
  fixed: bool = Field(default=False, description="True if at least one fix was applied.")
  success: bool = Field(default=True, description="False if the source could not be parsed.")

  @property
  def error_count(self) -> int:
    """Number of error-severity messages."""
    return sum(1 for m in self.messages if m.severity == 2)

  @property
  def warning_count(self) -> int:
    """Number of warning-severity messages."""
    return sum(1 for m in self.messages if m.severity == 1)

  @property
  def has_problems(self) -> bool:
    return len(self.messages) > 0
