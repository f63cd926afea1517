"""
Policy evaluation for `one-var`.

Given the classification of a declaration (and of its previous sibling), the
active policy and the scope records, decides which diagnostics apply. Four
independent checks run in a fixed order and each yields at most one verdict:

1.  mixed special calls (`splitRequires`, never fixable);
2.  consecutive merge with the previous sibling statement;
3.  one statement per scope for ALWAYS buckets;
4.  one binding per statement for NEVER buckets.

Checks 2 and 3 may both fire for the same statement; verdicts are not
deduplicated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from declint.enums import MessageId, Mode
from declint.rules.one_var.classifier import Classification
from declint.rules.one_var.options import KindPolicy, OneVarPolicy
from declint.rules.one_var.scope_stack import ScopeRecord, ScopeStack


class FixStrategy(str, Enum):
  NONE = "none"
  JOIN = "join"
  SPLIT = "split"


@dataclass(frozen=True)
class Verdict:
  """
  One diagnostic to report on the evaluated statement.

  Attributes:
      message_id: The diagnostic kind.
      fix: Which fix synthesizer builds its autofix.
  """

  message_id: MessageId
  fix: FixStrategy


class PolicyEvaluator:
  """
  Applies a `OneVarPolicy` to declarations, updating scope records.
  """

  def __init__(self, policy: OneVarPolicy, scopes: ScopeStack):
    """
    Args:
        policy: The resolved rule configuration.
        scopes: The scope stacks of the current traversal.
    """
    self.policy = policy
    self.scopes = scopes

  def evaluate(
    self,
    current: Classification,
    previous: Optional[Classification] = None,
    for_initializer: bool = False,
    for_in_left: bool = False,
  ) -> List[Verdict]:
    """
    Runs the four checks for one declaration statement.

    Args:
        current: The evaluated statement.
        previous: The immediately preceding sibling, if it is a declaration.
        for_initializer: The statement is the init clause of a `for(;;)` header.
        for_in_left: The statement is the left side of a for-in/of header.

    Returns:
        List[Verdict]: Diagnostics in check order.
    """
    modes = self.policy.for_kind(current.kind)
    verdicts: List[Verdict] = []

    if self.policy.separate_requires and current.mixed:
      verdicts.append(Verdict(MessageId.SPLIT_REQUIRES, FixStrategy.NONE))

    consecutive = self._check_consecutive(current, previous, modes)
    if consecutive is not None:
      verdicts.append(consecutive)

    if not self.has_only_one_statement(current):
      verdicts.extend(self._combine_verdicts(current, modes, for_in_left))

    if not for_initializer:
      split = self._check_split(current, modes)
      if split is not None:
        verdicts.append(split)

    return verdicts

  def has_only_one_statement(self, current: Classification) -> bool:
    """
    Checks the ALWAYS buckets against the current scope record.

    When no violation is found, the statement's bindings are recorded so that
    later statements of the same scope are compared against it.

    Args:
        current: The evaluated statement.

    Returns:
        bool: True if the statement is the first of its buckets in scope.
    """
    modes = self.policy.for_kind(current.kind)
    record = self.scopes.current(current.kind)
    counts = current.counts

    if modes.both(Mode.ALWAYS) and (record.uninitialized or record.initialized):
      if not current.all_special_calls:
        return False

    if counts.uninitialized > 0 and modes.uninitialized is Mode.ALWAYS and record.uninitialized:
      return False

    if counts.initialized > 0 and modes.initialized is Mode.ALWAYS and record.initialized:
      if not current.all_special_calls:
        return False

    if record.required and current.has_special_calls:
      return False

    self._record(current, modes, record)
    return True

  def _record(self, current: Classification, modes: KindPolicy, record: ScopeRecord) -> None:
    if current.counts.uninitialized > 0 and modes.uninitialized is Mode.ALWAYS:
      record.uninitialized = True

    if current.counts.initialized > 0 and modes.initialized is Mode.ALWAYS:
      plain_initialized = current.counts.initialized
      if self.policy.separate_requires and current.has_special_calls:
        record.required = True
        plain_initialized -= current.counts.special_calls
      if plain_initialized > 0:
        record.initialized = True

  def _check_consecutive(
    self, current: Classification, previous: Optional[Classification], modes: KindPolicy
  ) -> Optional[Verdict]:
    if previous is None or previous.kind is not current.kind or current.mixed_with(previous):
      return None

    if modes.both(Mode.CONSECUTIVE):
      return Verdict(MessageId.COMBINE, FixStrategy.JOIN)
    if modes.initialized is Mode.CONSECUTIVE and current.counts.initialized > 0 and previous.counts.initialized > 0:
      return Verdict(MessageId.COMBINE_INITIALIZED, FixStrategy.JOIN)
    if (
      modes.uninitialized is Mode.CONSECUTIVE
      and current.counts.uninitialized > 0
      and previous.counts.uninitialized > 0
    ):
      return Verdict(MessageId.COMBINE_UNINITIALIZED, FixStrategy.JOIN)
    return None

  def _combine_verdicts(self, current: Classification, modes: KindPolicy, for_in_left: bool) -> List[Verdict]:
    if modes.both(Mode.ALWAYS):
      return [Verdict(MessageId.COMBINE, FixStrategy.JOIN)]

    verdicts = []
    if modes.initialized is Mode.ALWAYS and current.counts.initialized > 0:
      verdicts.append(Verdict(MessageId.COMBINE_INITIALIZED, FixStrategy.JOIN))
    if modes.uninitialized is Mode.ALWAYS and current.counts.uninitialized > 0 and not for_in_left:
      verdicts.append(Verdict(MessageId.COMBINE_UNINITIALIZED, FixStrategy.JOIN))
    return verdicts

  def _check_split(self, current: Classification, modes: KindPolicy) -> Optional[Verdict]:
    counts = current.counts
    if counts.total <= 1:
      return None

    if modes.both(Mode.NEVER):
      return Verdict(MessageId.SPLIT, FixStrategy.SPLIT)
    if modes.initialized is Mode.NEVER and counts.initialized > 0:
      return Verdict(MessageId.SPLIT_INITIALIZED, FixStrategy.SPLIT)
    if modes.uninitialized is Mode.NEVER and counts.uninitialized > 0:
      return Verdict(MessageId.SPLIT_UNINITIALIZED, FixStrategy.SPLIT)
    return None
