"""
Rule Registry.

Rules register themselves with the `register_rule` decorator when their
module is imported. Importing this package loads the built-in rules.
"""

from typing import Callable, Dict, List, Optional, Type

from declint.rules.base import Rule, RuleContext

_RULE_REGISTRY: Dict[str, Type[Rule]] = {}


def register_rule(name: str) -> Callable[[Type[Rule]], Type[Rule]]:
  """
  Decorator registering a rule class under `name`.

  Args:
      name: The rule id used in configuration (e.g. "one-var").
  """

  def wrapper(cls: Type[Rule]) -> Type[Rule]:
    cls.name = name
    _RULE_REGISTRY[name] = cls
    return cls

  return wrapper


def get_rule(name: str) -> Optional[Type[Rule]]:
  """
  Looks up a rule class.

  Returns:
      Optional[Type[Rule]]: None if no rule is registered under `name`.
  """
  return _RULE_REGISTRY.get(name)


def available_rules() -> List[str]:
  """Sorted names of all registered rules."""
  return sorted(_RULE_REGISTRY.keys())


# Built-in rules register on import.
from declint.rules import no_undefined  # noqa: E402,F401
from declint.rules.one_var import rule as _one_var  # noqa: E402,F401

__all__ = ["Rule", "RuleContext", "available_rules", "get_rule", "register_rule"]
