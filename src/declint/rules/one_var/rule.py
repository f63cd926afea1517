"""
The `one-var` rule.

Enforces variables to be declared either together or separately per scope.
Wires the traversal hooks to the scope stacks, classifies every declaration
statement, runs the policy checks and attaches join/split fixes.
"""

from typing import Any, Optional

from tree_sitter import Node

from declint.enums import MessageId
from declint.rules import register_rule
from declint.rules.base import Rule, RuleContext
from declint.rules.one_var.classifier import Classification, classify
from declint.rules.one_var.declaration import (
  DECLARATION_TYPES,
  Declaration,
  declaration_from_for_header,
  declaration_from_statement,
  previous_statement,
)
from declint.rules.one_var.fixes import join_declarations, split_declarations
from declint.rules.one_var.options import OneVarPolicy, parse_one_var_options
from declint.rules.one_var.policy import FixStrategy, PolicyEvaluator
from declint.rules.one_var.scope_stack import ScopeStack


@register_rule("one-var")
class OneVarRule(Rule):
  """
  Reports declarations that should be combined with a previous statement or
  split into several statements.
  """

  description = "Enforce variables to be declared either together or separately in functions"
  fixable = True
  messages = {
    MessageId.COMBINE_UNINITIALIZED.value: (
      "Combine this with the previous '{type}' statement with uninitialized variables."
    ),
    MessageId.COMBINE_INITIALIZED.value: "Combine this with the previous '{type}' statement with initialized variables.",
    MessageId.SPLIT_UNINITIALIZED.value: "Split uninitialized '{type}' declarations into multiple statements.",
    MessageId.SPLIT_INITIALIZED.value: "Split initialized '{type}' declarations into multiple statements.",
    MessageId.SPLIT_REQUIRES.value: "Split requires to be separated into a single block.",
    MessageId.COMBINE.value: "Combine this with the previous '{type}' statement.",
    MessageId.SPLIT.value: "Split '{type}' declarations into multiple statements.",
  }

  @classmethod
  def parse_options(cls, raw: Any) -> OneVarPolicy:
    return parse_one_var_options(raw)

  def __init__(self, context: RuleContext):
    super().__init__(context)
    self.policy: OneVarPolicy = context.options
    self.scopes = ScopeStack()
    self.evaluator = PolicyEvaluator(self.policy, self.scopes)

  # --- Scope boundaries ---

  def _enter_function(self, node: Node) -> None:
    self.scopes.enter_function()

  def _exit_function(self, node: Node) -> None:
    self.scopes.exit_function()

  def _enter_block(self, node: Node) -> None:
    self.scopes.enter_block()

  def _exit_block(self, node: Node) -> None:
    self.scopes.exit_block()

  visit_program = _enter_function
  leave_program = _exit_function
  visit_function_declaration = visit_function_expression = visit_function = _enter_function
  leave_function_declaration = leave_function_expression = leave_function = _exit_function
  visit_generator_function_declaration = visit_generator_function = _enter_function
  leave_generator_function_declaration = leave_generator_function = _exit_function
  visit_arrow_function = visit_method_definition = visit_class_static_block = _enter_function
  leave_arrow_function = leave_method_definition = leave_class_static_block = _exit_function

  visit_statement_block = visit_for_statement = visit_switch_statement = _enter_block
  leave_statement_block = leave_for_statement = leave_switch_statement = _exit_block
  leave_for_in_statement = _exit_block

  def visit_for_in_statement(self, node: Node) -> None:
    """
    Opens the loop's block and checks a declaration in its header, which
    the grammar does not expose as a separate node.
    """
    self.scopes.enter_block()
    declaration = declaration_from_for_header(node, self.source_code)
    if declaration is not None:
      self._check(declaration)

  # --- Declarations ---

  def visit_variable_declaration(self, node: Node) -> None:
    declaration = declaration_from_statement(node)
    if declaration is not None:
      self._check(declaration)

  visit_lexical_declaration = visit_variable_declaration

  def _previous_classification(self, declaration: Declaration) -> Optional[Classification]:
    if declaration.in_for_header:
      return None
    previous = previous_statement(declaration.node)
    if previous is None or previous.type not in DECLARATION_TYPES:
      return None
    previous_declaration = declaration_from_statement(previous)
    if previous_declaration is None:
      return None
    return classify(previous_declaration.kind, previous_declaration.declarators)

  def _check(self, declaration: Declaration) -> None:
    current = classify(declaration.kind, declaration.declarators)
    verdicts = self.evaluator.evaluate(
      current,
      self._previous_classification(declaration),
      for_initializer=declaration.is_for_initializer,
      for_in_left=declaration.in_for_header,
    )

    for verdict in verdicts:
      fix = None
      if verdict.fix is FixStrategy.JOIN:
        fix = join_declarations(self.source_code, declaration)
      elif verdict.fix is FixStrategy.SPLIT:
        fix = split_declarations(self.source_code, declaration)
      self.context.report(declaration.span, verdict.message_id.value, {"type": declaration.kind.value}, fix)
