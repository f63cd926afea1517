"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Source and linter factories shared by the engine and rule tests.
"""

import sys
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

# Add src to path so we can import 'declint' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from declint.config import RuntimeConfig  # noqa: E402
from declint.core.linter import Linter  # noqa: E402
from declint.core.parser import parse  # noqa: E402
from declint.core.source_code import SourceCode  # noqa: E402


@pytest.fixture
def make_source() -> Callable[[str], SourceCode]:
  """Factory building a `SourceCode` from JavaScript text."""

  def _make(code: str) -> SourceCode:
    return SourceCode(code, parse(code.encode("utf-8")))

  return _make


@pytest.fixture
def one_var_linter() -> Callable[[Optional[Any]], Linter]:
  """Factory building a linter running only `one-var` with the given options."""

  def _make(options: Optional[Any] = None) -> Linter:
    entry = "error" if options is None else ["error", options]
    return Linter(RuntimeConfig(rules={"one-var": entry}))

  return _make
