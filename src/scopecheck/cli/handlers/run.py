"""
Run Command Handler.

Flag-style entry point: ``scopecheck run --file PATH --mode MODE``, with the
mode given as a string and checked here rather than by argparse.
"""

from pathlib import Path
from rich.markup import escape

from scopecheck.cli.handlers.common import EXIT_USAGE
from scopecheck.cli.handlers.dependencies import handle_dependencies
from scopecheck.cli.handlers.unused import handle_unused_variables
from scopecheck.cli.handlers.verify import handle_verify
from scopecheck.enums import AnalysisMode
from scopecheck.utils.console import log_error


def handle_run(path: Path, mode: str, verbose: bool = False, json_mode: bool = False) -> int:
  """
  Dispatches ``mode`` to the matching handler.

  Args:
      path: Input JSON document.
      mode: One of 'verify', 'unused_variables', 'functions_dependancies'.
      verbose: Passed to ``verify``.
      json_mode: If True, print the report as JSON on stdout.

  Returns:
      int: The handler's exit code, or 2 for an unknown mode.
  """
  try:
    selected = AnalysisMode(mode)
  except ValueError:
    valid = ", ".join(m.value for m in AnalysisMode)
    log_error(f"Unknown mode '{escape(mode)}'. Please enter a valid mode: {valid}")
    return EXIT_USAGE

  if selected is AnalysisMode.VERIFY:
    return handle_verify(path, verbose=verbose or None, json_mode=json_mode)
  if selected is AnalysisMode.UNUSED_VARIABLES:
    return handle_unused_variables(path, json_mode=json_mode)
  return handle_dependencies(path, json_mode=json_mode)
