"""
Depth-first Tree Traversal with Enter/Exit Dispatch.

Walks a tree-sitter tree in document order and, for every named node, calls
`visit_<node_type>(node)` on each visitor before the children and
`leave_<node_type>(node)` after them, the same way LibCST visitors expose
`visit_X` / `leave_X`. Anonymous nodes (punctuation, keywords) are not
dispatched.

The walk uses an explicit stack, so deeply nested sources do not hit the
interpreter recursion limit.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from tree_sitter import Node

Handler = Callable[[Node], Any]


class Traverser:
  """
  Dispatches enter/exit hooks of a fixed set of visitors.
  """

  def __init__(self, visitors: Sequence[Any]):
    """
    Args:
        visitors: Objects exposing `visit_<type>` / `leave_<type>` methods.
    """
    self.visitors = list(visitors)
    self._cache: Dict[Tuple[str, str], List[Handler]] = {}

  def traverse(self, root: Node) -> None:
    """
    Walks `root` and its named descendants.

    Args:
        root: The node to start from, usually the `program` node.
    """
    stack: List[Tuple[Node, bool]] = [(root, False)]

    while stack:
      node, leaving = stack.pop()
      if leaving:
        self._dispatch("leave", node)
        continue

      self._dispatch("visit", node)
      stack.append((node, True))
      stack.extend((child, False) for child in reversed(node.named_children))

  def _dispatch(self, phase: str, node: Node) -> None:
    for handler in self._handlers(phase, node.type):
      handler(node)

  def _handlers(self, phase: str, node_type: str) -> List[Handler]:
    key = (phase, node_type)
    handlers = self._cache.get(key)
    if handlers is None:
      name = f"{phase}_{node_type}"
      handlers = []
      for visitor in self.visitors:
        method: Optional[Handler] = getattr(visitor, name, None)
        if method is not None:
          handlers.append(method)
      self._cache[key] = handlers
    return handlers
