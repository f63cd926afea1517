"""
Rule Protocol and Reporting Context.

A rule is a class whose instances are created once per linted source. The
instance receives a `RuleContext` and implements `visit_<node_type>` /
`leave_<node_type>` hooks, which the `Traverser` calls in document order.

Rules report problems through `RuleContext.report`. A report may carry a fix
callable; it is only invoked by the linter when fixes are requested, after
the traversal has finished.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Optional, Union

from declint.core.fixer import Fix, RuleFixer
from declint.core.source_code import SourceCode, Target

FixResult = Union[Fix, Iterable[Optional[Fix]], None]
FixFunction = Callable[[RuleFixer], FixResult]


@dataclass
class Problem:
  """
  A raw report collected during traversal.

  Attributes:
      target: The reported node, token or character range.
      message_id: Key into the rule's `messages`.
      message: The rendered message.
      fix: Deferred fix computation, or None if the problem is not fixable.
  """

  target: Target
  message_id: str
  message: str
  fix: Optional[FixFunction] = None


@dataclass
class RuleContext:
  """
  Context object passed to every rule instance.

  Provides read-only access to the source and the parsed options, and write
  access to the problem list.
  """

  rule_id: str
  source_code: SourceCode
  options: Any
  messages: Dict[str, str]
  problems: List[Problem] = field(default_factory=list)

  def report(
    self,
    node: Target,
    message_id: str,
    data: Optional[Dict[str, Any]] = None,
    fix: Optional[FixFunction] = None,
  ) -> None:
    """
    Records a problem.

    Args:
        node: The node, token or `(start, end)` character range to flag.
        message_id: Key of the message template (e.g. "combine").
        data: Values interpolated into the template (`{type}`).
        fix: Optional callable building the autofix from a `RuleFixer`.

    Raises:
        KeyError: If the rule does not declare `message_id`.
    """
    template = self.messages[message_id]
    message = template.format(**data) if data else template
    self.problems.append(Problem(target=node, message_id=message_id, message=message, fix=fix))


class Rule:
  """
  Base class of all rules.

  Attributes:
      name: Registry key (e.g. "one-var").
      description: One-line summary shown by `declint rules`.
      messages: Message templates keyed by message id.
      fixable: True if the rule may attach fixes.
  """

  name: ClassVar[str] = ""
  description: ClassVar[str] = ""
  messages: ClassVar[Dict[str, str]] = {}
  fixable: ClassVar[bool] = False

  def __init__(self, context: RuleContext):
    self.context = context

  @property
  def source_code(self) -> SourceCode:
    return self.context.source_code

  @classmethod
  def parse_options(cls, raw: Any) -> Any:
    """
    Validates raw options before the rule runs.

    Args:
        raw: The options from configuration, None if absent.

    Returns:
        Any: The parsed options handed to `RuleContext.options`.

    Raises:
        ValueError: If the options are invalid for this rule.
    """
    return raw
