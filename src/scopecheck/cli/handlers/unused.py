"""
Unused Variables Command Handler.

Lists variables that are declared (or received as parameters) but never used.
"""

from pathlib import Path
from typing import Optional
from rich.markup import escape
from rich.table import Table

from scopecheck.analysis.runner import AnalysisRunner
from scopecheck.cli.handlers.common import EXIT_USAGE, print_json, read_program
from scopecheck.config import RuntimeConfig
from scopecheck.utils.console import console, log_error, log_success


def handle_unused_variables(path: Path, separator: Optional[str] = None, json_mode: bool = False) -> int:
  """
  Reports unused variables of the program in ``path``.

  Args:
      path: Input JSON document.
      separator: Joins function and variable names (overrides config).
      json_mode: If True, print the report as JSON on stdout.

  Returns:
      int: 0 on success, 2 if the program or configuration could not be loaded.
  """
  program = read_program(path)
  if program is None:
    return EXIT_USAGE

  try:
    config = RuntimeConfig.load(separator=separator)
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return EXIT_USAGE

  report = AnalysisRunner(config).unused_variables(program)

  if json_mode:
    print_json(report)
    return 0

  if not report.unused_variables:
    log_success("No unused variables.")
    return 0

  table = Table(title="Unused Variables")
  table.add_column("Qualified Name", style="yellow")
  for name in report.unused_variables:
    table.add_row(escape(name))
  console.print(table)
  return 0
