"""
Option schema and policy derivation for `one-var`.

Three option shapes are accepted:

1.  A mode string applied to every kind and both buckets: ``"never"``.
2.  Per-kind modes plus the special-call flag:
    ``{"var": "always", "let": "never", "separateRequires": true}``.
3.  Per-bucket modes applied to every kind:
    ``{"initialized": "never", "uninitialized": "always"}``.

Shapes 2 and 3 cannot be mixed in one object. Without options the rule runs
in ``"always"`` mode.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from declint.enums import BindingKind, Mode


class KindOptions(BaseModel):
  """Per-kind option shape."""

  model_config = ConfigDict(extra="forbid", populate_by_name=True)

  separate_requires: bool = Field(
    default=False,
    validation_alias=AliasChoices("separateRequires", "separateSpecialCalls", "separate_requires"),
    description="Keep require() initializers in their own statements.",
  )
  var: Optional[Mode] = None
  let: Optional[Mode] = None
  const: Optional[Mode] = None


class InitStateOptions(BaseModel):
  """Per-initialization-state option shape."""

  model_config = ConfigDict(extra="forbid")

  initialized: Optional[Mode] = None
  uninitialized: Optional[Mode] = None


@dataclass(frozen=True)
class KindPolicy:
  """
  The modes of the two initialization buckets of one binding kind.

  A bucket whose mode is None is never checked.
  """

  initialized: Optional[Mode] = None
  uninitialized: Optional[Mode] = None

  def both(self, mode: Mode) -> bool:
    return self.initialized is mode and self.uninitialized is mode


@dataclass(frozen=True)
class OneVarPolicy:
  """
  Resolved configuration of the rule.
  """

  var: KindPolicy = KindPolicy()
  let: KindPolicy = KindPolicy()
  const: KindPolicy = KindPolicy()
  separate_requires: bool = False

  @classmethod
  def uniform(cls, mode: Mode) -> "OneVarPolicy":
    policy = KindPolicy(initialized=mode, uninitialized=mode)
    return cls(var=policy, let=policy, const=policy)

  def for_kind(self, kind: BindingKind) -> KindPolicy:
    if kind is BindingKind.VAR:
      return self.var
    if kind is BindingKind.LET:
      return self.let
    if kind is BindingKind.CONST:
      return self.const
    raise ValueError(f"Unknown binding kind: {kind!r}")


def parse_one_var_options(raw: Any) -> OneVarPolicy:
  """
  Validates raw options and derives the per-kind policy.

  Args:
      raw: None, a mode string, or one of the two object shapes.

  Returns:
      OneVarPolicy: The resolved policy.

  Raises:
      ValueError: If the options match none of the accepted shapes.
  """
  if raw is None:
    return OneVarPolicy.uniform(Mode.ALWAYS)

  if isinstance(raw, str):
    try:
      return OneVarPolicy.uniform(Mode(raw))
    except ValueError:
      raise ValueError(f"Invalid one-var mode '{raw}'. Expected one of: always, never, consecutive")

  if not isinstance(raw, dict):
    raise ValueError(f"one-var options must be a string or an object, got {type(raw).__name__}")

  try:
    kinds = KindOptions.model_validate(raw)
  except ValidationError as kind_error:
    try:
      states = InitStateOptions.model_validate(raw)
    except ValidationError:
      raise ValueError(f"Invalid one-var options {raw!r}: {kind_error}")
    shared = KindPolicy(initialized=states.initialized, uninitialized=states.uninitialized)
    return OneVarPolicy(var=shared, let=shared, const=shared)

  return OneVarPolicy(
    var=KindPolicy(initialized=kinds.var, uninitialized=kinds.var),
    let=KindPolicy(initialized=kinds.let, uninitialized=kinds.let),
    const=KindPolicy(initialized=kinds.const, uninitialized=kinds.const),
    separate_requires=kinds.separate_requires,
  )
