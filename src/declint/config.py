"""
Runtime Configuration Store.

Holds the set of enabled rules (with their severity and raw options) and the
fixer limits. Configuration is read from the nearest `pyproject.toml`
(`[tool.declint]` table) and overridden by command line values.

Example `pyproject.toml`::

    [tool.declint]
    max_fix_passes = 10

    [tool.declint.rules]
    one-var = ["error", { var = "never", let = "consecutive" }]
    no-undefined = "warn"
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from declint.enums import Severity

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_RULES: Dict[str, Any] = {"one-var": "error"}

RuleEntry = Tuple[Severity, Any]


def normalize_rule_entry(value: Any) -> Optional[RuleEntry]:
  """
  Splits a raw rule configuration value into severity and options.

  Accepted forms:
      - ``None`` / ``True``: enabled as error with default options.
      - ``False`` / ``"off"``: disabled.
      - ``"warn"`` / ``"error"``: enabled with default options.
      - ``[severity]`` or ``[severity, options]``.
      - anything else: options, enabled as error.

  Args:
      value: The raw value from TOML, JSON or the CLI.

  Returns:
      Optional[Tuple[Severity, Any]]: None if the rule is disabled.

  Raises:
      ValueError: If a list form carries an unknown severity.
  """
  if value is None or value is True:
    return Severity.ERROR, None
  if value is False:
    return None

  if isinstance(value, str) and value in {s.value for s in Severity}:
    severity = Severity(value)
    return None if severity is Severity.OFF else (severity, None)

  if isinstance(value, (list, tuple)):
    if not value or len(value) > 2:
      raise ValueError(f"Rule entry must be [severity] or [severity, options], got {value!r}")
    try:
      severity = Severity(value[0])
    except ValueError:
      raise ValueError(f"Unknown severity {value[0]!r}. Expected one of: off, warn, error")
    if severity is Severity.OFF:
      return None
    return severity, (value[1] if len(value) == 2 else None)

  return Severity.ERROR, value


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the lint engine.
  """

  rules: Dict[str, Any] = Field(
    default_factory=lambda: dict(DEFAULT_RULES),
    description="Rule name -> severity/options entry.",
  )
  max_fix_passes: int = Field(10, description="Upper bound on re-lint passes while fixing.")
  extensions: List[str] = Field(
    default_factory=lambda: [".js", ".mjs", ".cjs"],
    description="File suffixes collected when linting directories.",
  )

  @field_validator("max_fix_passes")
  @classmethod
  def validate_passes(cls, v: int) -> int:
    """
    Ensures at least one fix pass is allowed.

    Raises:
        ValueError: If the value is lower than 1.
    """
    if v < 1:
      raise ValueError("max_fix_passes must be at least 1")
    return v

  def enabled_rules(self) -> Dict[str, RuleEntry]:
    """
    Resolves the enabled rules.

    Returns:
        Dict[str, Tuple[Severity, Any]]: Rule name -> (severity, raw options).
    """
    resolved: Dict[str, RuleEntry] = {}
    for name, value in self.rules.items():
      entry = normalize_rule_entry(value)
      if entry is not None:
        resolved[name] = entry
    return resolved

  @classmethod
  def load(
    cls,
    rules: Optional[Dict[str, Any]] = None,
    max_fix_passes: Optional[int] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Rules given on the command line replace the TOML entry of the same name;
    other TOML rules are kept.

    Args:
        rules (Optional[Dict]): Rule overrides.
        max_fix_passes (Optional[int]): Override for the fix pass limit.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    toml_config = _load_toml_settings(search_path or Path.cwd())

    final_rules = dict(toml_config.get("rules", DEFAULT_RULES))
    final_rules.update(rules or {})

    if max_fix_passes is not None:
      final_passes = max_fix_passes
    else:
      final_passes = toml_config.get("max_fix_passes", 10)

    kwargs: Dict[str, Any] = {"rules": final_rules, "max_fix_passes": final_passes}
    if "extensions" in toml_config:
      kwargs["extensions"] = toml_config["extensions"]
    return cls(**kwargs)


def _load_toml_settings(start_path: Path) -> Dict[str, Any]:
  """
  Searches start_path and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Dict[str, Any]: The `[tool.declint]` table, or an empty dict.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}
      return data.get("tool", {}).get("declint", {})

  return {}


def parse_cli_rule_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'name=value' strings into a rule dictionary.

  Values are decoded as JSON when possible (``one-var={"var": "never"}``),
  otherwise kept as plain strings (``one-var=never``).

  Args:
      items (Optional[List[str]]): Raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed rule entries.

  Raises:
      ValueError: If an item has no '=' separator.
  """
  if not items:
    return {}

  rules: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      raise ValueError(f"Invalid rule format: '{item}'. Expected 'name=value'.")

    name, raw = item.split("=", 1)
    raw = raw.strip()
    try:
      value: Any = json.loads(raw)
    except json.JSONDecodeError:
      value = raw
    rules[name.strip()] = value

  return rules
