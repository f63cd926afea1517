"""
Text Edit Primitives and Fix Application.

Rules describe autofixes as `Fix` objects: a character range of the original
text and its replacement. This module provides:

1.  `RuleFixer`: the helper handed to a rule's fix callable to build fixes
    relative to nodes, tokens or ranges.
2.  `merge_fixes`: folds the several edits of one report into a single fix.
3.  `apply_fixes`: applies the fixes of many reports in one pass, skipping
    any fix that overlaps an earlier one.
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from declint.core.source_code import SourceCode, Target

if TYPE_CHECKING:
  from declint.core.report import LintMessage

logger = logging.getLogger(__name__)


class Fix(BaseModel):
  """
  A single replacement of `range` in the original text by `text`.
  """

  range: Tuple[int, int] = Field(description="Character offsets (start, end) of the replaced span.")
  text: str = Field(default="", description="Replacement text.")


class RuleFixer:
  """
  Builds `Fix` objects relative to nodes, tokens or ranges of a source.
  """

  def __init__(self, source_code: SourceCode):
    self.source_code = source_code

  def insert_text_after(self, target: Target, text: str) -> Fix:
    """Inserts `text` right after `target`."""
    _, end = self.source_code.range_of(target)
    return Fix(range=(end, end), text=text)

  def insert_text_before(self, target: Target, text: str) -> Fix:
    """Inserts `text` right before `target`."""
    start, _ = self.source_code.range_of(target)
    return Fix(range=(start, start), text=text)

  def replace_text(self, target: Target, text: str) -> Fix:
    """Replaces the text of `target`."""
    return Fix(range=self.source_code.range_of(target), text=text)

  def replace_text_range(self, span: Tuple[int, int], text: str) -> Fix:
    """Replaces an explicit character range."""
    return Fix(range=span, text=text)

  def remove(self, target: Target) -> Fix:
    """Removes the text of `target`."""
    return self.replace_text(target, "")


def merge_fixes(fixes: Iterable[Optional[Fix]], source_code: SourceCode) -> Optional[Fix]:
  """
  Combines the edits of one report into a single fix.

  Gaps between edits are filled with the original text.

  Args:
      fixes: Edits returned by a fix callable; `None` entries are ignored.
      source_code: The source the ranges refer to.

  Returns:
      Optional[Fix]: None if no edit remains.

  Raises:
      ValueError: If two edits of the same report overlap.
  """
  edits = sorted((f for f in fixes if f is not None), key=lambda f: f.range)
  if not edits:
    return None
  if len(edits) == 1:
    return edits[0]

  start = edits[0].range[0]
  end = max(f.range[1] for f in edits)
  text = source_code.text
  parts: List[str] = []
  last_pos = start

  for fix in edits:
    if fix.range[0] < last_pos:
      raise ValueError("Fix objects must not be overlapped in a report.")
    parts.append(text[last_pos : fix.range[0]])
    parts.append(fix.text)
    last_pos = fix.range[1]

  parts.append(text[last_pos:end])
  return Fix(range=(start, end), text="".join(parts))


def apply_fixes(text: str, messages: Sequence["LintMessage"]) -> Tuple[str, bool, List["LintMessage"]]:
  """
  Applies every non-overlapping fix carried by `messages`.

  Fixes are applied in range order; a fix starting at or before the end of
  the previously applied one is skipped and its message kept.

  Args:
      text: The text the fixes were computed against.
      messages: Lint messages, with or without fixes.

  Returns:
      Tuple[str, bool, List[LintMessage]]: The output text, whether anything
      changed, and the messages whose fix was not applied (or that had none).
  """
  remaining: List["LintMessage"] = [m for m in messages if m.fix is None]
  fixable = sorted((m for m in messages if m.fix is not None), key=lambda m: m.fix.range)

  parts: List[str] = []
  last_pos = -1
  applied = 0

  for message in fixable:
    start, end = message.fix.range
    if last_pos >= start or start > end:
      logger.debug("Skipping overlapping fix for %s at %s", message.rule_id, message.fix.range)
      remaining.append(message)
      continue
    parts.append(text[max(0, last_pos) : start])
    parts.append(message.fix.text)
    last_pos = end
    applied += 1

  parts.append(text[max(0, last_pos) :])
  remaining.sort(key=lambda m: (m.line, m.column))
  return "".join(parts), applied > 0, remaining
