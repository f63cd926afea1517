"""
Fix synthesis for `one-var`.

- `join_declarations` merges a statement into the previous sibling statement
  of the same kind: the previous terminator becomes a comma and the keyword
  of the current statement is removed.
- `split_declarations` turns every separating comma into a terminator plus a
  repeated keyword (and `export` when the statement is exported), keeping any
  comments and line breaks that follow the comma.

Both return the deferred computation; nothing is evaluated until the linter
asks for fixes.
"""

from typing import List, Optional

from declint.core.fixer import Fix, RuleFixer
from declint.core.source_code import SourceCode
from declint.rules.base import FixFunction
from declint.rules.one_var.declaration import Declaration, binding_kind, is_in_statement_list, previous_statement


def join_declarations(source_code: SourceCode, declaration: Declaration) -> FixFunction:
  """
  Builds the fix joining `declaration` to its previous sibling.

  The fix is empty when the previous sibling is not a declaration of the same
  kind (e.g. exported statements or for-loop headers).

  Args:
      source_code: The linted source.
      declaration: The statement to merge upwards.

  Returns:
      FixFunction: Callable producing the edits.
  """
  first = declaration.declarators[0].node if declaration.declarators else None
  previous = None if declaration.in_for_header else previous_statement(declaration.node)

  def fix(fixer: RuleFixer) -> List[Fix]:
    if first is None or previous is None:
      return []
    keyword = source_code.get_token_before(first)
    terminator = source_code.get_token_before(keyword) if keyword is not None else None
    previous_kind = binding_kind(previous)
    if terminator is None or previous_kind is None or previous_kind.value != keyword.value:
      return []

    edits = []
    if terminator.value == ";":
      edits.append(fixer.replace_text(terminator, ","))
    else:
      edits.append(fixer.insert_text_after(terminator, ","))
    edits.append(fixer.remove(keyword))
    return edits

  return fix


def split_declarations(source_code: SourceCode, declaration: Declaration) -> Optional[FixFunction]:
  """
  Builds the fix splitting `declaration` into one statement per binding.

  Args:
      source_code: The linted source.
      declaration: The statement to split.

  Returns:
      Optional[FixFunction]: None when the statement is not part of a
      statement list (e.g. `if (x) var a, b;`), where splitting would also
      require adding braces.
  """
  if declaration.in_for_header:
    return None

  container = declaration.node.parent if declaration.is_exported else declaration.node
  if not is_in_statement_list(container):
    return None

  prefix = "export " if declaration.is_exported else ""
  keyword = declaration.kind.value

  def fix(fixer: RuleFixer) -> List[Fix]:
    edits = []
    for declarator in declaration.declarators:
      comma = source_code.get_token_after(declarator.node)
      if comma is None or comma.value != ",":
        continue
      after = source_code.get_token_after(comma, include_comments=True)
      if after is None:
        continue

      # `var x,y`
      if after.start == comma.end:
        edits.append(fixer.replace_text(comma, f"; {prefix}{keyword} "))
        continue

      # `var x,` followed by a comment or a line break before `y`
      if after.is_comment or source_code.location(after.start)[0] > source_code.location(comma.end)[0]:
        last = after
        while last is not None and last.is_comment:
          last = source_code.get_token_after(last, include_comments=True)
        if last is None:
          continue
        between = source_code.text[comma.end : last.start]
        edits.append(fixer.replace_text_range((comma.start, last.start), f";{between}{prefix}{keyword} "))
        continue

      edits.append(fixer.replace_text(comma, f"; {prefix}{keyword}"))
    return edits

  return fix
