"""
Tests for configuration loading and rule entry normalization.
"""

import pytest
from pydantic import ValidationError

from declint.config import RuntimeConfig, normalize_rule_entry, parse_cli_rule_values
from declint.enums import Severity


@pytest.mark.parametrize(
  "value, expected",
  [
    (None, (Severity.ERROR, None)),
    (True, (Severity.ERROR, None)),
    (False, None),
    ("off", None),
    ("warn", (Severity.WARN, None)),
    ("error", (Severity.ERROR, None)),
    (["warn"], (Severity.WARN, None)),
    (["error", "never"], (Severity.ERROR, "never")),
    (["off", "never"], None),
    ("never", (Severity.ERROR, "never")),
    ({"var": "never"}, (Severity.ERROR, {"var": "never"})),
  ],
)
def test_normalize_rule_entry(value, expected):
  assert normalize_rule_entry(value) == expected


@pytest.mark.parametrize("value", [[], ["error", {}, "extra"], ["loud", "never"]])
def test_normalize_rejects_bad_lists(value):
  with pytest.raises(ValueError):
    normalize_rule_entry(value)


def test_defaults():
  config = RuntimeConfig()
  assert config.enabled_rules() == {"one-var": (Severity.ERROR, None)}
  assert config.max_fix_passes == 10
  assert ".js" in config.extensions


def test_max_fix_passes_must_be_positive():
  with pytest.raises(ValidationError):
    RuntimeConfig(max_fix_passes=0)


def test_load_from_pyproject(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    "[tool.declint]\n"
    "max_fix_passes = 3\n"
    'extensions = [".js"]\n'
    "[tool.declint.rules]\n"
    '"one-var" = ["warn", { var = "never" }]\n'
    '"no-undefined" = "error"\n',
    encoding="utf-8",
  )
  nested = tmp_path / "src" / "lib"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)

  assert config.max_fix_passes == 3
  assert config.extensions == [".js"]
  assert config.enabled_rules() == {
    "one-var": (Severity.WARN, {"var": "never"}),
    "no-undefined": (Severity.ERROR, None),
  }


def test_cli_overrides_replace_toml_entries(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    '[tool.declint.rules]\n"one-var" = "warn"\n"no-undefined" = "error"\n',
    encoding="utf-8",
  )

  config = RuntimeConfig.load(rules={"one-var": "never"}, max_fix_passes=2, search_path=tmp_path)

  assert config.rules == {"one-var": "never", "no-undefined": "error"}
  assert config.max_fix_passes == 2


def test_load_without_pyproject_uses_defaults(tmp_path, monkeypatch):
  monkeypatch.setattr("declint.config._load_toml_settings", lambda path: {})
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config.rules == {"one-var": "error"}


def test_parse_cli_rule_values():
  values = parse_cli_rule_values(["one-var=never", 'no-undefined=["warn"]', "x = 1"])
  assert values == {"one-var": "never", "no-undefined": ["warn"], "x": 1}
  assert parse_cli_rule_values(None) == {}


def test_parse_cli_rule_values_requires_separator():
  with pytest.raises(ValueError, match="Expected 'name=value'"):
    parse_cli_rule_values(["one-var"])
