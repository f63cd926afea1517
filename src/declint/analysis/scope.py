"""
Scope Analysis for JavaScript.

This module builds a lexical scope tree over a tree-sitter JavaScript tree:

1.  **Scopes**: global, function, block, for, catch, class and switch scopes,
    keyed by the node that opens them.
2.  **Variables**: bindings declared in each scope, with their definitions.
    `var` bindings are hoisted to the nearest function (or global) scope.
3.  **References**: every identifier read or written outside a binding
    position, resolved outwards through the enclosing scopes once the whole
    tree has been seen (so hoisted declarations resolve too).

Names that are never declared resolve to an implicit global variable when
they are well-known builtins (`undefined`, `NaN`, ...); anything else stays in
`global_scope.through`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

from tree_sitter import Node

IDENTIFIER_TYPES = frozenset({"identifier", "undefined"})

FUNCTION_TYPES = frozenset(
  {
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "generator_function",
    "arrow_function",
    "method_definition",
  }
)

DECLARED_FUNCTION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})

CLASS_TYPES = frozenset({"class_declaration", "class"})

IMPLICIT_GLOBALS = frozenset(
  {
    "undefined",
    "NaN",
    "Infinity",
    "globalThis",
    "eval",
    "isFinite",
    "isNaN",
    "parseFloat",
    "parseInt",
    "Object",
    "Function",
    "Array",
    "String",
    "Number",
    "Boolean",
    "Symbol",
    "Error",
    "Math",
    "JSON",
    "Promise",
  }
)


class ScopeType(str, Enum):
  GLOBAL = "global"
  FUNCTION = "function"
  BLOCK = "block"
  FOR = "for"
  CATCH = "catch"
  CLASS = "class"
  SWITCH = "switch"


@dataclass(eq=False)
class Definition:
  """
  Where and how a variable is bound.

  Attributes:
      type: "Variable", "Parameter", "FunctionName", "ClassName",
          "CatchClause" or "ImportBinding".
      name: The bound identifier node.
      node: The enclosing declaring node (declarator, function, ...).
  """

  type: str
  name: Node
  node: Node


@dataclass(eq=False)
class Reference:
  """
  One occurrence of a name outside a binding position.

  Attributes:
      identifier: The identifier node.
      from_scope: The scope the occurrence appears in.
      is_write: The occurrence is assigned to.
      init: The write initializes a declaration (`var x = 1`).
      resolved: The variable it resolves to, None if unresolved.
  """

  identifier: Node
  from_scope: "Scope"
  is_write: bool = False
  init: bool = False
  resolved: Optional["Variable"] = None

  @property
  def name(self) -> str:
    return _text(self.identifier)


@dataclass(eq=False)
class Variable:
  name: str
  scope: "Scope"
  defs: List[Definition] = field(default_factory=list)
  references: List[Reference] = field(default_factory=list)


class Scope:
  """
  A lexical region holding variables and the references made inside it.
  """

  def __init__(self, scope_type: ScopeType, block: Node, upper: Optional["Scope"] = None):
    """
    Args:
        scope_type: The kind of region.
        block: The node opening the scope.
        upper: The enclosing scope, None for the global scope.
    """
    self.type = scope_type
    self.block = block
    self.upper = upper
    self.child_scopes: List["Scope"] = []
    self.variables: Dict[str, Variable] = {}
    self.references: List[Reference] = []
    self.through: List[Reference] = []
    if upper is not None:
      upper.child_scopes.append(self)

  @property
  def is_variable_scope(self) -> bool:
    return self.type in (ScopeType.GLOBAL, ScopeType.FUNCTION)

  def variable_scope(self) -> "Scope":
    """The nearest enclosing scope that receives `var` bindings."""
    scope = self
    while not scope.is_variable_scope and scope.upper is not None:
      scope = scope.upper
    return scope

  def define(self, name: str, definition: Definition) -> Variable:
    variable = self.variables.get(name)
    if variable is None:
      variable = Variable(name=name, scope=self)
      self.variables[name] = variable
    variable.defs.append(definition)
    return variable

  def lookup(self, name: str) -> Optional[Variable]:
    """Finds `name` in this scope or any enclosing one."""
    scope: Optional[Scope] = self
    while scope is not None:
      if name in scope.variables:
        return scope.variables[name]
      scope = scope.upper
    return None


class ScopeManager:
  """
  Builds and holds the scope tree of one program.
  """

  def __init__(self, root: Node):
    """
    Analyzes `root` eagerly.

    Args:
        root: The `program` node.
    """
    self.global_scope = Scope(ScopeType.GLOBAL, root)
    self.scopes: List[Scope] = [self.global_scope]
    self._by_node: Dict[int, Scope] = {root.id: self.global_scope}

    for child in root.named_children:
      self._walk(child, self.global_scope)
    self._resolve()

  def acquire(self, node: Node) -> Optional[Scope]:
    """The scope opened by `node`, if any."""
    return self._by_node.get(node.id)

  def iter_scopes(self) -> Iterator[Scope]:
    """All scopes, depth-first from the global scope."""
    stack = [self.global_scope]
    while stack:
      scope = stack.pop()
      yield scope
      stack.extend(scope.child_scopes)

  # --- Building ---

  def _open(self, scope_type: ScopeType, node: Node, upper: Scope) -> Scope:
    scope = Scope(scope_type, node, upper)
    self.scopes.append(scope)
    self._by_node[node.id] = scope
    return scope

  def _reference(self, node: Node, scope: Scope, is_write: bool = False, init: bool = False) -> None:
    scope.references.append(Reference(identifier=node, from_scope=scope, is_write=is_write, init=init))

  def _walk_children(self, node: Node, scope: Scope) -> None:
    for child in node.named_children:
      self._walk(child, scope)

  def _walk(self, node: Optional[Node], scope: Scope) -> None:
    if node is None:
      return
    kind = node.type

    if kind in IDENTIFIER_TYPES or kind == "shorthand_property_identifier":
      self._reference(node, scope)
    elif kind in FUNCTION_TYPES:
      self._function(node, scope)
    elif kind in CLASS_TYPES:
      self._class(node, scope)
    elif kind == "statement_block":
      self._walk_children(node, self._open(ScopeType.BLOCK, node, scope))
    elif kind == "for_statement":
      self._walk_children(node, self._open(ScopeType.FOR, node, scope))
    elif kind == "for_in_statement":
      self._for_in(node, self._open(ScopeType.FOR, node, scope))
    elif kind == "catch_clause":
      catch_scope = self._open(ScopeType.CATCH, node, scope)
      parameter = node.child_by_field_name("parameter")
      if parameter is not None:
        self._bind(parameter, catch_scope, catch_scope, "CatchClause", node)
      self._walk(node.child_by_field_name("body"), catch_scope)
    elif kind == "switch_statement":
      self._walk(node.child_by_field_name("value"), scope)
      body = node.child_by_field_name("body")
      if body is not None:
        self._walk_children(body, self._open(ScopeType.SWITCH, node, scope))
    elif kind in ("variable_declaration", "lexical_declaration"):
      self._declaration(node, scope)
    elif kind in ("assignment_expression", "augmented_assignment_expression"):
      self._assignment_target(node.child_by_field_name("left"), scope)
      self._walk(node.child_by_field_name("right"), scope)
    elif kind == "import_statement":
      self._import(node, scope)
    elif kind == "export_statement":
      if node.child_by_field_name("source") is None:
        self._walk_children(node, scope)
    elif kind == "export_specifier":
      self._walk(node.child_by_field_name("name"), scope)
    else:
      self._walk_children(node, scope)

  def _function(self, node: Node, scope: Scope) -> None:
    name = node.child_by_field_name("name")
    if name is not None and name.type in IDENTIFIER_TYPES and node.type in DECLARED_FUNCTION_TYPES:
      scope.define(_text(name), Definition("FunctionName", name, node))
    elif name is not None and name.type == "computed_property_name":
      self._walk(name, scope)

    function_scope = self._open(ScopeType.FUNCTION, node, scope)
    if name is not None and name.type in IDENTIFIER_TYPES and node.type not in DECLARED_FUNCTION_TYPES:
      function_scope.define(_text(name), Definition("FunctionName", name, node))

    parameters = node.child_by_field_name("parameters")
    if parameters is not None:
      for parameter in parameters.named_children:
        self._bind(parameter, function_scope, function_scope, "Parameter", node)
    single = node.child_by_field_name("parameter")
    if single is not None:
      self._bind(single, function_scope, function_scope, "Parameter", node)

    body = node.child_by_field_name("body")
    if body is not None and body.type == "statement_block":
      # The function body shares the function scope.
      self._by_node[body.id] = function_scope
      self._walk_children(body, function_scope)
    else:
      self._walk(body, function_scope)

  def _class(self, node: Node, scope: Scope) -> None:
    name = node.child_by_field_name("name")
    if name is not None and node.type == "class_declaration":
      scope.define(_text(name), Definition("ClassName", name, node))

    class_scope = self._open(ScopeType.CLASS, node, scope)
    if name is not None and node.type == "class":
      class_scope.define(_text(name), Definition("ClassName", name, node))
    for child in node.named_children:
      if name is None or child != name:
        self._walk(child, class_scope)

  def _declaration(self, node: Node, scope: Scope) -> None:
    keyword = node.children[0].type if node.child_count else ""
    target = scope.variable_scope() if keyword == "var" else scope

    for declarator in node.named_children:
      if declarator.type != "variable_declarator":
        self._walk(declarator, scope)
        continue
      value = declarator.child_by_field_name("value")
      name = declarator.child_by_field_name("name")
      if name is not None:
        self._bind(name, scope, target, "Variable", declarator, init=value is not None)
      self._walk(value, scope)

  def _for_in(self, node: Node, scope: Scope) -> None:
    left = node.child_by_field_name("left")
    keyword = None
    for child in node.children:
      if left is not None and child.start_byte >= left.start_byte:
        break
      if not child.is_named and child.type in ("var", "let", "const"):
        keyword = child.type

    if left is not None and keyword is not None:
      target = scope.variable_scope() if keyword == "var" else scope
      self._bind(left, scope, target, "Variable", node, init=True)
    else:
      self._assignment_target(left, scope)

    self._walk(node.child_by_field_name("value"), scope)
    self._walk(node.child_by_field_name("right"), scope)
    self._walk(node.child_by_field_name("body"), scope)

  def _import(self, node: Node, scope: Scope) -> None:
    module_scope = scope.variable_scope()
    stack = [c for c in node.named_children if c.type == "import_clause"]
    while stack:
      current = stack.pop()
      if current.type in IDENTIFIER_TYPES:
        module_scope.define(_text(current), Definition("ImportBinding", current, node))
      elif current.type == "import_specifier":
        local = current.child_by_field_name("alias") or current.child_by_field_name("name")
        if local is not None and local.type in IDENTIFIER_TYPES:
          module_scope.define(_text(local), Definition("ImportBinding", local, node))
      else:
        stack.extend(current.named_children)

  def _assignment_target(self, target: Optional[Node], scope: Scope) -> None:
    if target is None:
      return
    if target.type in IDENTIFIER_TYPES:
      self._reference(target, scope, is_write=True)
    elif target.type in ("object_pattern", "array_pattern"):
      for child in target.named_children:
        self._assignment_target(child, scope)
    elif target.type in ("assignment_pattern", "object_assignment_pattern"):
      self._assignment_target(target.child_by_field_name("left"), scope)
      self._walk(target.child_by_field_name("right"), scope)
    elif target.type == "shorthand_property_identifier_pattern":
      self._reference(target, scope, is_write=True)
    elif target.type == "pair_pattern":
      self._walk(_computed_key(target), scope)
      self._assignment_target(target.child_by_field_name("value"), scope)
    elif target.type == "rest_pattern":
      for child in target.named_children:
        self._assignment_target(child, scope)
    else:
      self._walk(target, scope)

  def _bind(
    self,
    pattern: Node,
    scope: Scope,
    target: Scope,
    def_type: str,
    declaring: Node,
    init: bool = False,
  ) -> None:
    """
    Defines every name bound by `pattern` in `target`.

    Default values inside the pattern are walked as references of `scope`.
    With `init`, each bound name also gets an initializing write reference.
    """
    kind = pattern.type
    if kind in IDENTIFIER_TYPES or kind == "shorthand_property_identifier_pattern":
      target.define(_text(pattern), Definition(def_type, pattern, declaring))
      if init:
        self._reference(pattern, scope, is_write=True, init=True)
    elif kind in ("assignment_pattern", "object_assignment_pattern"):
      left = pattern.child_by_field_name("left")
      if left is not None:
        self._bind(left, scope, target, def_type, declaring, init)
      self._walk(pattern.child_by_field_name("right"), scope)
    elif kind in ("object_pattern", "array_pattern", "rest_pattern"):
      for child in pattern.named_children:
        self._bind(child, scope, target, def_type, declaring, init)
    elif kind == "pair_pattern":
      self._walk(_computed_key(pattern), scope)
      value = pattern.child_by_field_name("value")
      if value is not None:
        self._bind(value, scope, target, def_type, declaring, init)
    else:
      self._walk(pattern, scope)

  # --- Resolution ---

  def _resolve(self) -> None:
    for scope in self.scopes:
      for reference in scope.references:
        variable = scope.lookup(reference.name)
        if variable is None and reference.name in IMPLICIT_GLOBALS:
          variable = self.global_scope.variables.get(reference.name)
          if variable is None:
            variable = Variable(name=reference.name, scope=self.global_scope)
            self.global_scope.variables[reference.name] = variable
        if variable is None:
          self.global_scope.through.append(reference)
          continue
        reference.resolved = variable
        variable.references.append(reference)


def _computed_key(pair: Node) -> Optional[Node]:
  key = pair.child_by_field_name("key")
  if key is not None and key.type == "computed_property_name":
    return key
  return None


def _text(node: Node) -> str:
  return (node.text or b"").decode("utf-8")
