"""
Function Dependencies Command Handler.

Prints, for each function, every function it calls directly or indirectly.
"""

from pathlib import Path
from rich.markup import escape
from rich.table import Table

from scopecheck.analysis.runner import AnalysisRunner
from scopecheck.cli.handlers.common import EXIT_USAGE, print_json, read_program
from scopecheck.utils.console import console


def handle_dependencies(path: Path, json_mode: bool = False) -> int:
  """
  Reports the transitive call dependencies of the program in ``path``.

  Args:
      path: Input JSON document.
      json_mode: If True, print the report as JSON on stdout.

  Returns:
      int: 0 on success, 2 if the program could not be loaded.
  """
  program = read_program(path)
  if program is None:
    return EXIT_USAGE

  report = AnalysisRunner().dependencies(program)

  if json_mode:
    print_json(report)
    return 0

  table = Table(title="Function Dependencies")
  table.add_column("Function", style="cyan")
  table.add_column("Depends On", style="magenta")
  for name, deps in report.dependencies.items():
    table.add_row(escape(name), escape(", ".join(deps)) if deps else "[dim]-[/dim]")
  console.print(table)
  return 0
