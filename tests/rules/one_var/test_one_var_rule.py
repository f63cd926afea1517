"""
End-to-end tests of the `one-var` rule through the linter: diagnostics for
each mode and the fixed output.
"""

import pytest

from declint.core.parser import parse


def _ids(messages):
  return [m.message_id for m in messages]


# --- always ---


def test_always_combines_second_statement(one_var_linter):
  linter = one_var_linter("always")
  messages = linter.verify("var a; var b;")

  assert _ids(messages) == ["combine"]
  assert (messages[0].line, messages[0].column) == (1, 8)
  assert linter.verify_and_fix("var a; var b;").output == "var a,  b;"


def test_always_is_per_function(one_var_linter):
  code = "var a;\nfunction f() { var b; }\n(function () { var c; })();\n(() => { var d; })();"
  assert one_var_linter().verify(code) == []


def test_always_let_const_are_per_block(one_var_linter):
  code = "let a; { let b; } const c = 1; if (x) { const d = 2; }"
  assert one_var_linter().verify(code) == []


def test_always_var_in_nested_block_is_reported_without_fix(one_var_linter):
  linter = one_var_linter()
  code = "var a; { var b; }"

  assert _ids(linter.verify(code)) == ["combine"]
  result = linter.verify_and_fix(code)
  assert result.fixed is False
  assert result.output == code


def test_always_kinds_do_not_interact(one_var_linter):
  assert one_var_linter().verify("var a; let b; const c = 1;") == []


def test_always_join_without_semicolon(one_var_linter):
  result = one_var_linter().verify_and_fix("var a = 1\nvar b = 2")
  assert result.output == "var a = 1,\n b = 2"


def test_always_require_statements_are_exempt(one_var_linter):
  code = 'var a = require("a");\nvar b = require("b");'
  assert one_var_linter().verify(code) == []


def test_always_for_in_header(one_var_linter):
  code = "var y; for (var x in obj) {}"
  messages = one_var_linter().verify(code)

  assert _ids(messages) == ["combine"]
  assert messages[0].column == code.index("var x") + 1
  assert one_var_linter().verify_and_fix(code).output == code


def test_always_let_in_for_of_has_own_scope(one_var_linter):
  assert one_var_linter().verify("let y; for (let x of items) { let z; }") == []


# --- never ---


@pytest.mark.parametrize(
  "code, expected",
  [
    ("var a, b;", "var a; var b;"),
    ("var a,b;", "var a; var b;"),
    ("var a,\n    b;", "var a;\n    var b;"),
    ("var a, /* keep */ b;", "var a; /* keep */ var b;"),
    ("var a, // one\n  /* two */ // three\n  b = 2;", "var a; // one\n  /* two */ // three\n  var b = 2;"),
    ("let a = 1, b = 2, c;", "let a = 1; let b = 2; let c;"),
    ("export const a = 1, b = 2;", "export const a = 1; export const b = 2;"),
    ("switch (x) { case 1: var a, b; }", "switch (x) { case 1: var a; var b; }"),
  ],
)
def test_never_splits(one_var_linter, code, expected):
  linter = one_var_linter("never")

  assert _ids(linter.verify(code)) == ["split"]
  result = linter.verify_and_fix(code)
  assert result.output == expected
  assert result.messages == []


def test_never_ignores_for_initializer(one_var_linter):
  assert one_var_linter("never").verify("for (var i = 0, n = 3; i < n; i++) {}") == []


def test_never_split_without_statement_list_has_no_fix(one_var_linter):
  linter = one_var_linter("never")
  code = "if (x) var a, b;"

  assert _ids(linter.verify(code)) == ["split"]
  assert linter.verify_and_fix(code).output == code


def test_never_split_message(one_var_linter):
  message = one_var_linter("never").verify("const a = 1, b = 2;")[0]
  assert message.message == "Split 'const' declarations into multiple statements."


def test_join_then_split_keeps_program_structure(one_var_linter):
  code = "var a = 1; var b; var c = 2;"
  joined = one_var_linter("always").verify_and_fix(code).output
  split = one_var_linter("never").verify_and_fix(joined).output

  assert joined == "var a = 1,  b,  c = 2;"
  assert split == "var a = 1; var  b; var  c = 2;"
  assert str(parse(split.encode("utf-8")).root_node) == str(parse(code.encode("utf-8")).root_node)


# --- consecutive ---


def test_consecutive_combines_adjacent(one_var_linter):
  linter = one_var_linter("consecutive")

  assert _ids(linter.verify("var a = 1; var b = 2;")) == ["combine"]
  assert linter.verify_and_fix("var a = 1; var b = 2;").output == "var a = 1,  b = 2;"


def test_consecutive_ignores_separated_statements(one_var_linter):
  linter = one_var_linter("consecutive")

  assert linter.verify("var a = 1; foo(); var b = 2;") == []
  assert linter.verify("var a; let b;") == []


def test_consecutive_comment_between_statements(one_var_linter):
  linter = one_var_linter("consecutive")
  assert _ids(linter.verify("let a;\n// note\nlet b;")) == ["combine"]


def test_consecutive_initialized_only(one_var_linter):
  linter = one_var_linter({"initialized": "consecutive"})

  assert _ids(linter.verify("var a = 1; var b = 2;")) == ["combineInitialized"]
  assert linter.verify("var a; var b;") == []


# --- object options ---


def test_per_initialization_state(one_var_linter):
  linter = one_var_linter({"uninitialized": "always", "initialized": "never"})
  messages = linter.verify("var a, b = 1, c = 2;")

  assert _ids(messages) == ["splitInitialized"]
  assert messages[0].message == "Split initialized 'var' declarations into multiple statements."


def test_per_kind_modes_fix_together(one_var_linter):
  linter = one_var_linter({"var": "always", "let": "never"})
  code = "var a; var b; let c, d;"

  assert _ids(linter.verify(code)) == ["combine", "split"]
  assert linter.verify_and_fix(code).output == "var a,  b; let c; let d;"


def test_unset_kind_is_not_checked(one_var_linter):
  linter = one_var_linter({"var": "never"})
  assert linter.verify("const a = 1; const b = 2, c = 3;") == []


# --- separateRequires ---


def test_split_requires_regardless_of_modes(one_var_linter):
  linter = one_var_linter({"separateRequires": True})
  messages = linter.verify('var a = require("x"), b = 1;')

  assert _ids(messages) == ["splitRequires"]
  assert messages[0].message == "Split requires to be separated into a single block."
  assert linter.verify_and_fix('var a = require("x"), b = 1;').fixed is False


def test_separate_requires_groups(one_var_linter):
  linter = one_var_linter({"var": "always", "separateRequires": True})

  assert linter.verify('var a = require("a");\nvar b = 1;') == []
  assert _ids(linter.verify('var a = require("a");\nvar b = require("b");')) == ["combine"]
  assert (
    linter.verify_and_fix('var a = require("a");\nvar b = require("b");').output
    == 'var a = require("a"),\n b = require("b");'
  )
