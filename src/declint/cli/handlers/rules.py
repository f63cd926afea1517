"""
Rules Command Handler.

Prints the registered rules as a table.
"""

from rich.table import Table

from declint.rules import available_rules, get_rule
from declint.utils.console import console


def handle_rules() -> int:
  """
  Handles the 'rules' command.

  Returns:
      int: Exit code (always 0).
  """
  table = Table(title="Available Rules")
  table.add_column("Rule", style="rule")
  table.add_column("Fixable", justify="center", style="fixable")
  table.add_column("Description")

  for name in available_rules():
    rule_class = get_rule(name)
    table.add_row(name, "yes" if rule_class.fixable else "", rule_class.description)

  console.print(table)
  return 0
