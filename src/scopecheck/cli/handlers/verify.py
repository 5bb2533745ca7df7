"""
Verify Command Handler.

Validates a program and reports the verdict.
"""

from pathlib import Path
from typing import Optional
from rich.markup import escape

from scopecheck.analysis.runner import AnalysisRunner
from scopecheck.cli.handlers.common import EXIT_USAGE, print_json, read_program
from scopecheck.config import RuntimeConfig
from scopecheck.utils.console import console, log_error, log_info


def handle_verify(
  path: Path,
  verbose: Optional[bool] = None,
  scope_mode: Optional[str] = None,
  json_mode: bool = False,
) -> int:
  """
  Checks whether the program in ``path`` is valid.

  Args:
      path: Input JSON document.
      verbose: Report the reason for a rejection (overrides config).
      scope_mode: 'forward' or 'lexical' (overrides config).
      json_mode: If True, print the report as JSON on stdout.

  Returns:
      int: 0 if the program is valid, 1 if not, 2 if it could not be loaded.
  """
  program = read_program(path)
  if program is None:
    return EXIT_USAGE

  try:
    config = RuntimeConfig.load(verbose=verbose, scope_mode=scope_mode)
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return EXIT_USAGE

  if not json_mode:
    log_info(f"Verifying [path]{escape(str(path))}[/path] ({len(program.functions)} functions, scope={config.scope_mode.value})")

  report = AnalysisRunner(config).verify(program, echo=not json_mode)

  if json_mode:
    print_json(report)
  else:
    style = "green" if report.valid else "red"
    console.print(f"Is program valid? [{style}]{report.valid}[/{style}]")

  return 0 if report.valid else 1
