"""
Read-only Source Text Accessor.

`SourceCode` pairs the original text with its tree-sitter tree and provides
the token-level queries rules need to build fixes:

- a flat token stream (optionally including comments),
- the token immediately before/after a node or token,
- text and line/column lookup by character offset.

Tree-sitter reports byte offsets. Everything exposed here is converted to
character offsets into `SourceCode.text`, so fixes can be applied to the
Python string directly.
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from tree_sitter import Node, Tree

# Subtrees reported as a single token.
ATOMIC_TYPES = frozenset({"string", "regex", "comment"})

Range = Tuple[int, int]


@dataclass(frozen=True)
class Token:
  """
  A lexical token of the source.

  Attributes:
      type: The tree-sitter node type, or "Line" / "Block" for comments.
      value: The token text.
      start: Start character offset (inclusive).
      end: End character offset (exclusive).
  """

  type: str
  value: str
  start: int
  end: int

  @property
  def range(self) -> Range:
    return (self.start, self.end)

  @property
  def is_comment(self) -> bool:
    return self.type in ("Line", "Block")


Target = Union[Node, Token, Range]


class SourceCode:
  """
  Source text plus the token index derived from its syntax tree.
  """

  def __init__(self, text: str, tree: Tree):
    """
    Builds the token index.

    Args:
        text: The decoded source text.
        tree: The tree-sitter tree parsed from `text.encode("utf-8")`.
    """
    self.text = text
    self.tree = tree
    self.ast: Node = tree.root_node
    self._byte_to_char = None if text.isascii() else _byte_offset_table(text)

    self.tokens_and_comments: List[Token] = list(self._collect_tokens())
    self.tokens: List[Token] = [t for t in self.tokens_and_comments if not t.is_comment]
    self.comments: List[Token] = [t for t in self.tokens_and_comments if t.is_comment]

    self._all_starts = [t.start for t in self.tokens_and_comments]
    self._all_ends = [t.end for t in self.tokens_and_comments]
    self._code_starts = [t.start for t in self.tokens]
    self._code_ends = [t.end for t in self.tokens]

    self._line_starts = [0]
    for index, char in enumerate(text):
      if char == "\n":
        self._line_starts.append(index + 1)

  def offset(self, byte_offset: int) -> int:
    """
    Converts a tree-sitter byte offset to a character offset.

    Args:
        byte_offset: Offset into the UTF-8 encoding of the text.

    Returns:
        int: Offset into `self.text`.
    """
    if self._byte_to_char is None:
      return byte_offset
    return self._byte_to_char[byte_offset]

  def range_of(self, target: Target) -> Range:
    """
    Character range of a node, token or explicit range.

    Args:
        target: A tree-sitter node, a `Token`, or a `(start, end)` tuple.

    Returns:
        Tuple[int, int]: The `(start, end)` character offsets.
    """
    if isinstance(target, Token):
      return target.range
    if isinstance(target, tuple):
      return target
    return (self.offset(target.start_byte), self.offset(target.end_byte))

  def get_text(self, target: Optional[Target] = None) -> str:
    """
    Returns the source text of a node/token, or the whole text.
    """
    if target is None:
      return self.text
    start, end = self.range_of(target)
    return self.text[start:end]

  def get_token_before(self, target: Target, include_comments: bool = False) -> Optional[Token]:
    """
    Finds the last token ending at or before the start of `target`.

    Args:
        target: Node, token or range to look before.
        include_comments: Whether comments count as tokens.

    Returns:
        Optional[Token]: None at the start of the file.
    """
    start, _ = self.range_of(target)
    tokens, ends = (self.tokens_and_comments, self._all_ends) if include_comments else (self.tokens, self._code_ends)
    index = bisect_right(ends, start) - 1
    return tokens[index] if index >= 0 else None

  def get_token_after(self, target: Target, include_comments: bool = False) -> Optional[Token]:
    """
    Finds the first token starting at or after the end of `target`.

    Args:
        target: Node, token or range to look after.
        include_comments: Whether comments count as tokens.

    Returns:
        Optional[Token]: None at the end of the file.
    """
    _, end = self.range_of(target)
    tokens, starts = (
      (self.tokens_and_comments, self._all_starts) if include_comments else (self.tokens, self._code_starts)
    )
    index = bisect_left(starts, end)
    return tokens[index] if index < len(tokens) else None

  def location(self, offset: int) -> Tuple[int, int]:
    """
    Converts a character offset to a 1-based line and 0-based column.
    """
    line_index = bisect_right(self._line_starts, offset) - 1
    return line_index + 1, offset - self._line_starts[line_index]

  def _collect_tokens(self) -> Iterator[Token]:
    stack = [self.ast]
    while stack:
      node = stack.pop()
      if node.child_count == 0 or node.type in ATOMIC_TYPES:
        if node.end_byte > node.start_byte:
          yield self._make_token(node)
        continue
      stack.extend(reversed(node.children))

  def _make_token(self, node: Node) -> Token:
    start, end = self.range_of(node)
    value = self.text[start:end]
    kind = node.type
    if kind == "comment":
      kind = "Block" if value.startswith("/*") else "Line"
    return Token(type=kind, value=value, start=start, end=end)


def _byte_offset_table(text: str) -> List[int]:
  table: List[int] = []
  for index, char in enumerate(text):
    table.extend([index] * len(char.encode("utf-8")))
  table.append(len(text))
  return table
