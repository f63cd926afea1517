"""
Declaration classification.

Reduces a declaration to the facts the policy needs: how many bindings are
initialized or not, and whether some or all of them are special calls.
"""

from dataclasses import dataclass
from typing import Sequence

from declint.enums import BindingKind
from declint.rules.one_var.declaration import Declarator


@dataclass(frozen=True)
class DeclarationCounts:
  initialized: int = 0
  uninitialized: int = 0
  special_calls: int = 0  # subset of initialized

  @property
  def total(self) -> int:
    return self.initialized + self.uninitialized


@dataclass(frozen=True)
class Classification:
  """
  The facts derived from one declaration statement.

  Attributes:
      kind: The binding kind.
      counts: Initialized / uninitialized binding counts.
      has_special_calls: At least one binding is a special call.
      all_special_calls: Every binding is a special call.
  """

  kind: BindingKind
  counts: DeclarationCounts
  has_special_calls: bool = False
  all_special_calls: bool = False

  @property
  def mixed(self) -> bool:
    """Some, but not all, bindings are special calls."""
    return self.has_special_calls and not self.all_special_calls

  def mixed_with(self, other: "Classification") -> bool:
    """Whether the union of both statements' bindings would be mixed."""
    has_any = self.has_special_calls or other.has_special_calls
    return has_any and not (self.all_special_calls and other.all_special_calls)


def classify(kind: BindingKind, declarators: Sequence[Declarator]) -> Classification:
  """
  Classifies the bindings of a declaration.

  Args:
      kind: The declaration's binding kind.
      declarators: Its bindings in source order.

  Returns:
      Classification: Counts and special-call flags.
  """
  initialized = sum(1 for d in declarators if d.initialized)
  special_calls = sum(1 for d in declarators if d.special_call)
  return Classification(
    kind=kind,
    counts=DeclarationCounts(
      initialized=initialized,
      uninitialized=len(declarators) - initialized,
      special_calls=special_calls,
    ),
    has_special_calls=special_calls > 0,
    all_special_calls=special_calls == len(declarators),
  )
