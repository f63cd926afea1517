"""
Orchestration Engine for Linting.

The `Linter` is the driver of a lint run over one source text:

1.  **Parsing**: the text is parsed with tree-sitter. A tree containing a
    syntax error yields a single fatal "Parsing error" message and no rule
    runs.
2.  **Rule Resolution**: enabled rules are looked up in the registry and
    their options validated once, when the linter is built.
3.  **Traversal**: one instance per rule is created and all of them are fed
    by a single depth-first traversal.
4.  **Reporting**: problems are located (1-based line and column) and, when
    fixing, their deferred fixes are computed and merged.
5.  **Fix Loop**: `verify_and_fix` applies non-overlapping fixes and re-lints
    the output until nothing changes or the pass limit is reached.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Type

from declint.config import RuntimeConfig
from declint.core.fixer import Fix, RuleFixer, apply_fixes, merge_fixes
from declint.core.parser import find_syntax_problem, parse
from declint.core.report import LintMessage, LintResult
from declint.core.source_code import SourceCode
from declint.core.traverser import Traverser
from declint.enums import Severity
from declint.rules import Rule, RuleContext, available_rules, get_rule
from declint.rules.base import Problem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveRule:
  """
  An enabled rule with its resolved severity and parsed options.
  """

  name: str
  rule_class: Type[Rule]
  severity: Severity
  options: Any


class Linter:
  """
  Runs the enabled rules over JavaScript source text.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Resolves the enabled rules of `config`.

    Args:
        config: Runtime configuration. Defaults to `RuntimeConfig()`.

    Raises:
        ValueError: If a rule is unknown or its options are invalid.
    """
    self.config = config or RuntimeConfig()
    self.rules: List[ActiveRule] = self._resolve_rules()

  def _resolve_rules(self) -> List[ActiveRule]:
    active = []
    for name, (severity, raw_options) in self.config.enabled_rules().items():
      rule_class = get_rule(name)
      if rule_class is None:
        raise ValueError(f"Unknown rule '{name}'. Available rules: {', '.join(available_rules())}")
      try:
        options = rule_class.parse_options(raw_options)
      except ValueError as e:
        raise ValueError(f"Invalid options for rule '{name}': {e}") from e
      active.append(ActiveRule(name=name, rule_class=rule_class, severity=severity, options=options))
    return active

  def verify(self, code: str, fix: bool = False) -> List[LintMessage]:
    """
    Lints `code` once.

    Args:
        code: The JavaScript source.
        fix: If True, reported fixes are computed and attached to messages.

    Returns:
        List[LintMessage]: Diagnostics sorted by position.
    """
    tree = parse(code.encode("utf-8"))
    source_code = SourceCode(code, tree)

    syntax_problem = find_syntax_problem(tree)
    if syntax_problem is not None:
      line, column = source_code.location(source_code.offset(syntax_problem.start_byte))
      return [
        LintMessage(
          message=f"Parsing error: {syntax_problem.message}",
          severity=Severity.ERROR.level,
          line=line,
          column=column + 1,
          fatal=True,
        )
      ]

    contexts = []
    instances = []
    for active in self.rules:
      context = RuleContext(
        rule_id=active.name,
        source_code=source_code,
        options=active.options,
        messages=dict(active.rule_class.messages),
      )
      contexts.append((active, context))
      instances.append(active.rule_class(context))

    Traverser(instances).traverse(source_code.ast)

    messages = []
    for active, context in contexts:
      for problem in context.problems:
        messages.append(self._to_message(problem, active, source_code, fix))

    messages.sort(key=lambda m: (m.line, m.column))
    return messages

  def _to_message(self, problem: Problem, active: ActiveRule, source_code: SourceCode, fix: bool) -> LintMessage:
    start, end = source_code.range_of(problem.target)
    line, column = source_code.location(start)
    end_line, end_column = source_code.location(end)

    merged: Optional[Fix] = None
    if fix and problem.fix is not None and active.rule_class.fixable:
      result = problem.fix(RuleFixer(source_code))
      edits = [result] if isinstance(result, Fix) else list(result or [])
      merged = merge_fixes(edits, source_code)

    return LintMessage(
      rule_id=active.name,
      message_id=problem.message_id,
      message=problem.message,
      severity=active.severity.level,
      line=line,
      column=column + 1,
      end_line=end_line,
      end_column=end_column + 1,
      fix=merged,
    )

  def verify_and_fix(self, code: str) -> LintResult:
    """
    Lints `code` and applies fixes until the output is stable.

    Each pass applies every non-overlapping fix and re-lints the output. The
    loop stops when a pass applies nothing or after `max_fix_passes` passes;
    the final output is then linted once more to report what is left.

    Args:
        code: The JavaScript source.

    Returns:
        LintResult: The fixed output and the remaining messages.
    """
    text = code
    fixed = False
    messages: List[LintMessage] = []

    for index in range(self.config.max_fix_passes):
      messages = self.verify(text, fix=True)
      output, applied, _ = apply_fixes(text, messages)
      if not applied:
        break
      logger.debug("Fix pass %d changed the source", index + 1)
      fixed = True
      text = output

    if fixed:
      messages = self.verify(text)

    return LintResult(
      code=code,
      output=text,
      messages=messages,
      fixed=fixed,
      success=not any(m.fatal for m in messages),
    )

  def run(self, code: str, fix: bool = False) -> LintResult:
    """
    Lints `code`, optionally fixing it.

    Args:
        code: The JavaScript source.
        fix: Whether to apply autofixes.

    Returns:
        LintResult: Outcome of the run.
    """
    if fix:
      return self.verify_and_fix(code)

    messages = self.verify(code)
    return LintResult(
      code=code,
      output=code,
      messages=messages,
      success=not any(m.fatal for m in messages),
    )
