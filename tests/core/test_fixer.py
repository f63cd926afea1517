"""
Tests for fix construction, merging and application.
"""

import pytest

from declint.core.fixer import Fix, RuleFixer, apply_fixes, merge_fixes
from declint.core.report import LintMessage


def _message(line, column, fix=None):
  return LintMessage(rule_id="one-var", message="m", line=line, column=column, fix=fix)


def test_rule_fixer_helpers(make_source):
  source = make_source("var a;")
  fixer = RuleFixer(source)
  keyword = source.tokens[0]

  assert fixer.insert_text_after(keyword, "!") == Fix(range=(3, 3), text="!")
  assert fixer.insert_text_before(keyword, "!") == Fix(range=(0, 0), text="!")
  assert fixer.replace_text(keyword, "let") == Fix(range=(0, 3), text="let")
  assert fixer.remove(keyword) == Fix(range=(0, 3), text="")
  assert fixer.replace_text_range((4, 5), "b") == Fix(range=(4, 5), text="b")


def test_merge_fills_gaps_with_original_text(make_source):
  source = make_source("var a; var b;")
  merged = merge_fixes([Fix(range=(7, 11), text=""), None, Fix(range=(5, 6), text=",")], source)

  assert merged == Fix(range=(5, 11), text=", ")


def test_merge_single_and_empty(make_source):
  source = make_source("var a;")
  only = Fix(range=(0, 3), text="let")

  assert merge_fixes([only], source) is only
  assert merge_fixes([], source) is None
  assert merge_fixes([None], source) is None


def test_merge_rejects_overlap(make_source):
  source = make_source("var a;")
  with pytest.raises(ValueError, match="overlapped"):
    merge_fixes([Fix(range=(0, 3), text=""), Fix(range=(2, 4), text="")], source)


def test_apply_fixes_in_range_order():
  text = "abcdef"
  messages = [
    _message(1, 5, Fix(range=(4, 5), text="E")),
    _message(1, 1, Fix(range=(0, 1), text="A")),
    _message(1, 3),
  ]
  output, fixed, remaining = apply_fixes(text, messages)

  assert output == "AbcdEf"
  assert fixed is True
  assert [m.column for m in remaining] == [3]


def test_apply_fixes_skips_overlapping_and_touching():
  text = "abcdef"
  first = _message(1, 1, Fix(range=(0, 3), text="X"))
  overlapping = _message(1, 2, Fix(range=(2, 4), text="Y"))
  touching = _message(1, 4, Fix(range=(3, 5), text="Z"))

  output, fixed, remaining = apply_fixes(text, [first, overlapping, touching])

  assert output == "Xdef"
  assert fixed is True
  assert remaining == [overlapping, touching]


def test_apply_fixes_without_fixes():
  output, fixed, remaining = apply_fixes("abc", [_message(1, 1)])
  assert output == "abc"
  assert fixed is False
  assert len(remaining) == 1
