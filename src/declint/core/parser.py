"""
JavaScript parsing on top of tree-sitter.

Wraps the `tree-sitter-javascript` grammar and exposes a single `parse`
function returning either a tree or a located syntax error.
"""

from dataclasses import dataclass
from typing import Optional

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser, Tree

JS_LANGUAGE = Language(tsjs.language())
_parser = Parser(JS_LANGUAGE)


@dataclass(frozen=True)
class SyntaxProblem:
  """
  The first syntax error found in a parse tree.

  Attributes:
      message: Human readable description.
      start_byte: Byte offset of the offending node.
  """

  message: str
  start_byte: int


def parse(data: bytes) -> Tree:
  """
  Parses UTF-8 encoded JavaScript source.

  Args:
      data: The source bytes.

  Returns:
      Tree: The tree-sitter tree. Always produced, even for invalid input.
  """
  return _parser.parse(data)


def find_syntax_problem(tree: Tree) -> Optional[SyntaxProblem]:
  """
  Locates the first ERROR or MISSING node of a tree in document order.

  Args:
      tree: A parsed tree.

  Returns:
      Optional[SyntaxProblem]: None if the tree is error free.
  """
  root = tree.root_node
  if not root.has_error:
    return None

  stack = [root]
  while stack:
    node = stack.pop()
    if node.type == "ERROR":
      return SyntaxProblem(f"Unexpected token near {_snippet(node)}", node.start_byte)
    if node.is_missing:
      return SyntaxProblem(f"Missing '{node.type}'", node.start_byte)
    # Only descend into subtrees that contain the error.
    stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))

  return SyntaxProblem("Unexpected token", root.start_byte)


def _snippet(node: Node) -> str:
  text = (node.text or b"").decode("utf-8", errors="replace").strip()
  first_line = text.splitlines()[0] if text else ""
  if len(first_line) > 20:
    first_line = first_line[:20] + "..."
  return repr(first_line)
