"""
Tests for the CLI 'lint' and 'rules' commands.

Verifies that:
1.  Arguments are parsed and dispatched to the handlers.
2.  Invalid `--rule` values are rejected with exit code 2.
3.  Linting real files produces the documented exit codes and fixes files
    in place.
"""

import json
from pathlib import Path
from unittest.mock import patch

from rich.console import Console

from declint.cli.__main__ import main
from declint.utils.console import reset_console, set_console


@patch("declint.cli.commands.handle_lint")
def test_lint_arguments_are_dispatched(mock_handle):
  mock_handle.return_value = 0

  assert main(["lint", "src", "lib/a.js", "--rule", "one-var=never", "--rule", 'no-undefined="warn"']) == 0

  mock_handle.assert_called_once()
  args = mock_handle.call_args[0]
  assert args[0] == [Path("src"), Path("lib/a.js")]
  assert args[1] == {"one-var": "never", "no-undefined": "warn"}
  assert args[2] is False
  assert args[3] == "text"
  assert args[4] is None


@patch("declint.cli.commands.handle_lint")
def test_rule_values_are_json_decoded(mock_handle):
  mock_handle.return_value = 0
  main(["lint", "a.js", "--fix", "--format", "json", "--rule", 'one-var=["warn", {"var": "never"}]'])

  args = mock_handle.call_args[0]
  assert args[1] == {"one-var": ["warn", {"var": "never"}]}
  assert args[2] is True
  assert args[3] == "json"


@patch("declint.cli.commands.handle_lint")
def test_invalid_rule_value_exits_2(mock_handle):
  assert main(["lint", "a.js", "--rule", "one-var"]) == 2
  mock_handle.assert_not_called()


@patch("declint.cli.commands.handle_rules")
def test_rules_command_dispatch(mock_handle):
  mock_handle.return_value = 0
  assert main(["rules"]) == 0
  mock_handle.assert_called_once_with()


def test_rules_command_lists_rules(capsys):
  assert main(["rules"]) == 0
  out = capsys.readouterr().out
  assert "one-var" in out
  assert "no-undefined" in out


def test_lint_file_with_problems_exits_1(tmp_path):
  target = tmp_path / "a.js"
  target.write_text("var a; var b;\n", encoding="utf-8")

  assert main(["lint", str(target)]) == 1
  assert target.read_text(encoding="utf-8") == "var a; var b;\n"


def test_lint_fix_rewrites_file(tmp_path):
  target = tmp_path / "a.js"
  target.write_text("var a, b;\n", encoding="utf-8")

  assert main(["lint", str(target), "--fix", "--rule", "one-var=never"]) == 0
  assert target.read_text(encoding="utf-8") == "var a; var b;\n"


def test_lint_directory_collects_js_files(tmp_path):
  (tmp_path / "ok.js").write_text("var a, b;\n", encoding="utf-8")
  (tmp_path / "notes.txt").write_text("var a; var b;\n", encoding="utf-8")
  nested = tmp_path / "lib"
  nested.mkdir()
  (nested / "b.mjs").write_text("let x = 1;\n", encoding="utf-8")

  assert main(["lint", str(tmp_path)]) == 0


def test_warnings_do_not_fail(tmp_path):
  target = tmp_path / "a.js"
  target.write_text("var a; var b;\n", encoding="utf-8")

  assert main(["lint", str(target), "--rule", "one-var=warn"]) == 0


def test_json_output(tmp_path, capsys):
  target = tmp_path / "a.js"
  target.write_text("var a; var b;\n", encoding="utf-8")

  assert main(["lint", str(target), "--format", "json"]) == 1
  report = json.loads(capsys.readouterr().out)

  assert report[0]["filePath"] == str(target)
  assert report[0]["errorCount"] == 1
  assert report[0]["messages"][0]["message_id"] == "combine"
  assert report[0]["messages"][0]["line"] == 1


def test_parse_error_exits_1(tmp_path):
  target = tmp_path / "bad.js"
  target.write_text("var = ;\n", encoding="utf-8")

  assert main(["lint", str(target)]) == 1


def test_missing_path_exits_2(tmp_path):
  assert main(["lint", str(tmp_path / "missing.js")]) == 2


def test_unknown_rule_exits_2(tmp_path):
  target = tmp_path / "a.js"
  target.write_text("var a;\n", encoding="utf-8")

  assert main(["lint", str(target), "--rule", "no-such-rule=error"]) == 2


def test_json_output_with_fix_is_parseable(tmp_path, capsys):
  target = tmp_path / "a.js"
  target.write_text("var a; var b;\n", encoding="utf-8")

  assert main(["lint", str(target), "--fix", "--format", "json"]) == 0
  report = json.loads(capsys.readouterr().out)

  assert report[0]["output"] == "var a,  b;\n"
  assert report[0]["messages"] == []
  assert target.read_text(encoding="utf-8") == "var a,  b;\n"


def test_paths_with_brackets_are_printed_literally(tmp_path):
  folder = tmp_path / "[x]"
  folder.mkdir()
  target = folder / "a.js"
  target.write_text("var a; var b;\n", encoding="utf-8")
  capture = Console(record=True, width=1000)
  set_console(capture)

  try:
    assert main(["lint", str(target), "--fix"]) == 0
    assert main(["lint", str(folder / "missing.js")]) == 2
  finally:
    reset_console()

  output = capture.export_text()
  assert f"Fixed: {target}" in output
  assert f"Input not found: {folder / 'missing.js'}" in output
