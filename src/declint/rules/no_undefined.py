"""
The `no-undefined` rule.

Disallows the use of `undefined` as an identifier: reading it, assigning it,
or declaring a binding named `undefined`. Initializing writes of a declared
`undefined` are covered by the report on its definition.
"""

from typing import List, Set

from tree_sitter import Node

from declint.analysis.scope import ScopeManager, Variable
from declint.rules import register_rule
from declint.rules.base import Rule

UNEXPECTED_UNDEFINED = "unexpectedUndefined"


@register_rule("no-undefined")
class NoUndefinedRule(Rule):
  description = "Disallow the use of `undefined` as an identifier"
  messages = {UNEXPECTED_UNDEFINED: "Unexpected use of undefined."}

  def leave_program(self, node: Node) -> None:
    manager = ScopeManager(node)
    reported: Set[int] = set()

    for scope in manager.iter_scopes():
      variable = scope.variables.get("undefined")
      if variable is not None:
        self._report_variable(variable, reported)

  def _report_variable(self, variable: Variable, reported: Set[int]) -> None:
    targets: List[Node] = [ref.identifier for ref in variable.references if not ref.init]
    targets.extend(definition.name for definition in variable.defs)
    for target in sorted(targets, key=lambda n: n.start_byte):
      if target.id in reported:
        continue
      reported.add(target.id)
      self.context.report(target, UNEXPECTED_UNDEFINED)
