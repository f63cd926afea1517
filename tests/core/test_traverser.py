"""
Tests for enter/exit hook dispatch.
"""

from declint.core.traverser import Traverser


class Recorder:
  def __init__(self):
    self.events = []

  def visit_program(self, node):
    self.events.append("enter program")

  def leave_program(self, node):
    self.events.append("leave program")

  def visit_statement_block(self, node):
    self.events.append("enter block")

  def leave_statement_block(self, node):
    self.events.append("leave block")

  def visit_variable_declaration(self, node):
    self.events.append(f"var {node.named_children[0].text.decode()}")


def test_hooks_run_in_document_order(make_source):
  source = make_source("var a; { var b; } var c;")
  recorder = Recorder()

  Traverser([recorder]).traverse(source.ast)

  assert recorder.events == [
    "enter program",
    "var a",
    "enter block",
    "var b",
    "leave block",
    "var c",
    "leave program",
  ]


def test_every_visitor_is_called(make_source):
  source = make_source("{ }")
  first, second = Recorder(), Recorder()

  Traverser([first, second]).traverse(source.ast)

  assert first.events == second.events == ["enter program", "enter block", "leave block", "leave program"]


def test_deep_nesting_does_not_recurse(make_source):
  depth = 1500
  source = make_source("{" * depth + "}" * depth)
  recorder = Recorder()

  Traverser([recorder]).traverse(source.ast)

  assert recorder.events.count("enter block") == depth
