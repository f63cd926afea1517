"""
Nested scope bookkeeping for the ALWAYS policy.

Two parallel stacks are kept: one record per function-like region (for
`var`, which is function scoped) and one record pair per block-like region
(for `let` and `const`). A function boundary is also a block boundary.
"""

from dataclasses import dataclass, field
from typing import List

from declint.enums import BindingKind


@dataclass
class ScopeRecord:
  """
  Which buckets have already been claimed by a statement in this scope.

  Attributes:
      initialized: A statement with initialized bindings was recorded.
      uninitialized: A statement with uninitialized bindings was recorded.
      required: A statement with special-call bindings was recorded.
  """

  initialized: bool = False
  uninitialized: bool = False
  required: bool = False


@dataclass
class BlockRecord:
  """The `let` and `const` records of one block."""

  let: ScopeRecord = field(default_factory=ScopeRecord)
  const: ScopeRecord = field(default_factory=ScopeRecord)


class ScopeStack:
  """
  The function and block record stacks of one traversal.

  Enter/exit calls must be balanced by the caller.
  """

  def __init__(self) -> None:
    self._functions: List[ScopeRecord] = []
    self._blocks: List[BlockRecord] = []

  def enter_function(self) -> None:
    self._functions.append(ScopeRecord())
    self.enter_block()

  def enter_block(self) -> None:
    self._blocks.append(BlockRecord())

  def exit_function(self) -> None:
    self._functions.pop()
    self.exit_block()

  def exit_block(self) -> None:
    self._blocks.pop()

  def current(self, kind: BindingKind) -> ScopeRecord:
    """
    The record consulted for declarations of `kind`.

    Args:
        kind: The binding kind of the declaration.

    Returns:
        ScopeRecord: The top function record for `var`, otherwise the
        matching field of the top block record.
    """
    if kind is BindingKind.VAR:
      return self._functions[-1]
    if kind is BindingKind.LET:
      return self._blocks[-1].let
    if kind is BindingKind.CONST:
      return self._blocks[-1].const
    raise ValueError(f"Unknown binding kind: {kind!r}")
