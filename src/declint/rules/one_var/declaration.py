"""
Read-only views over declaration statements.

Builds `Declaration` objects from the two places a declaration keyword can
appear in the tree-sitter JavaScript grammar:

- `variable_declaration` / `lexical_declaration` statements (including the
  initializer clause of a `for(;;)` header and `export` wrappers);
- the left side of a `for ... in` / `for ... of` header, which the grammar
  does not wrap in a declaration node.
"""

from dataclasses import dataclass
from typing import AbstractSet, Optional, Tuple

from tree_sitter import Node

from declint.core.source_code import SourceCode, Target
from declint.enums import BindingKind

DECLARATION_TYPES = frozenset({"variable_declaration", "lexical_declaration"})

# Parents whose children form a statement list (splitting there is safe).
STATEMENT_LIST_PARENTS = frozenset({"program", "statement_block", "switch_case", "switch_default"})

# Parents whose statements are compared with their previous sibling.
SIBLING_LIST_PARENTS = frozenset({"program", "statement_block"})

NON_STATEMENT_TYPES = frozenset({"comment", "hash_bang_line"})

SPECIAL_CALLEES = frozenset({"require"})

_KEYWORDS = {kind.value: kind for kind in BindingKind}


@dataclass(frozen=True)
class Declarator:
  """
  One binding of a declaration.

  Attributes:
      node: The `variable_declarator` (or the bound pattern of a for-in/of header).
      initialized: Whether the binding carries a value expression.
      special_call: Whether the value is a call to a special callee (`require`).
  """

  node: Optional[Node]
  initialized: bool
  special_call: bool = False


@dataclass(frozen=True)
class Declaration:
  """
  A declaration statement as seen by the `one-var` rule.

  Attributes:
      node: The declaration node, or the `for_in_statement` for header bindings.
      kind: `var`, `let` or `const`.
      declarators: The bindings in source order.
      span: What a report on this declaration points at.
      in_for_header: True for the left side of a for-in/of header.
  """

  node: Node
  kind: BindingKind
  declarators: Tuple[Declarator, ...]
  span: Target
  in_for_header: bool = False

  @property
  def is_exported(self) -> bool:
    parent = self.node.parent
    return not self.in_for_header and parent is not None and parent.type == "export_statement"

  @property
  def is_for_initializer(self) -> bool:
    parent = self.node.parent
    if self.in_for_header or parent is None or parent.type != "for_statement":
      return False
    return parent.child_by_field_name("initializer") == self.node


def binding_kind(node: Optional[Node]) -> Optional[BindingKind]:
  """
  The kind of a declaration statement node, None for any other node.
  """
  if node is None or node.type not in DECLARATION_TYPES or node.child_count == 0:
    return None
  return _KEYWORDS.get(node.children[0].type)


def is_special_call(value: Optional[Node], callees: AbstractSet[str] = SPECIAL_CALLEES) -> bool:
  """
  True if `value` is a call whose callee is a bare identifier in `callees`.
  """
  if value is None or value.type != "call_expression":
    return False
  callee = value.child_by_field_name("function")
  if callee is None or callee.type != "identifier":
    return False
  return _node_text(callee) in callees


def declaration_from_statement(node: Node, callees: AbstractSet[str] = SPECIAL_CALLEES) -> Optional[Declaration]:
  """
  Builds the view of a `variable_declaration` / `lexical_declaration`.

  Returns:
      Optional[Declaration]: None if `node` is not a declaration statement.
  """
  kind = binding_kind(node)
  if kind is None:
    return None

  declarators = []
  for child in node.named_children:
    if child.type != "variable_declarator":
      continue
    value = child.child_by_field_name("value")
    declarators.append(
      Declarator(node=child, initialized=value is not None, special_call=is_special_call(value, callees))
    )

  return Declaration(node=node, kind=kind, declarators=tuple(declarators), span=node)


def declaration_from_for_header(
  node: Node, source_code: SourceCode, callees: AbstractSet[str] = SPECIAL_CALLEES
) -> Optional[Declaration]:
  """
  Builds the view of the binding in a `for (kind x in/of y)` header.

  Returns:
      Optional[Declaration]: None if the header assigns to an existing target.
  """
  left = node.child_by_field_name("left")
  if left is None:
    return None

  keyword = None
  for child in node.children:
    if child.start_byte >= left.start_byte:
      break
    if not child.is_named and child.type in _KEYWORDS:
      keyword = child
  if keyword is None:
    return None

  value = node.child_by_field_name("value")
  declarator = Declarator(node=left, initialized=value is not None, special_call=is_special_call(value, callees))
  end_node = value if value is not None else left
  span = (source_code.range_of(keyword)[0], source_code.range_of(end_node)[1])

  return Declaration(
    node=node,
    kind=_KEYWORDS[keyword.type],
    declarators=(declarator,),
    span=span,
    in_for_header=True,
  )


def previous_statement(node: Node) -> Optional[Node]:
  """
  The statement immediately preceding `node` in its parent's statement list.

  Comments are skipped. Returns None when the parent is not a program or
  block body, or when `node` comes first.
  """
  parent = node.parent
  if parent is None or parent.type not in SIBLING_LIST_PARENTS:
    return None

  previous = None
  for child in parent.named_children:
    if child.type in NON_STATEMENT_TYPES:
      continue
    if child == node:
      return previous
    previous = child
  return None


def is_in_statement_list(node: Node) -> bool:
  """True if `node` is a direct member of a statement list."""
  parent = node.parent
  return parent is not None and parent.type in STATEMENT_LIST_PARENTS


def _node_text(node: Node) -> str:
  return (node.text or b"").decode("utf-8")
