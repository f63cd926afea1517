"""
Tests for the function/block record stacks.
"""

from declint.enums import BindingKind
from declint.rules.one_var.scope_stack import ScopeStack


def test_var_uses_function_record_across_blocks():
  stack = ScopeStack()
  stack.enter_function()
  stack.current(BindingKind.VAR).initialized = True

  stack.enter_block()
  assert stack.current(BindingKind.VAR).initialized is True
  stack.exit_block()


def test_let_and_const_use_block_records():
  stack = ScopeStack()
  stack.enter_function()
  stack.current(BindingKind.LET).uninitialized = True

  stack.enter_block()
  assert stack.current(BindingKind.LET).uninitialized is False
  assert stack.current(BindingKind.CONST) is not stack.current(BindingKind.LET)
  stack.exit_block()

  assert stack.current(BindingKind.LET).uninitialized is True


def test_function_boundary_opens_fresh_records():
  stack = ScopeStack()
  stack.enter_function()
  stack.current(BindingKind.VAR).uninitialized = True
  stack.current(BindingKind.CONST).initialized = True

  stack.enter_function()
  assert stack.current(BindingKind.VAR).uninitialized is False
  assert stack.current(BindingKind.CONST).initialized is False
  stack.exit_function()

  assert stack.current(BindingKind.VAR).uninitialized is True
  assert stack.current(BindingKind.CONST).initialized is True
