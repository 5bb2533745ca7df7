"""Helpers shared by the CLI handlers."""

import json
from pathlib import Path
from typing import Optional

from rich.markup import escape

from scopecheck.analysis.runner import AnalysisReport
from scopecheck.model.loader import ProgramLoadError, load_program
from scopecheck.model.nodes import Program
from scopecheck.utils.console import log_error

# Exit code for unreadable input or an unknown mode
EXIT_USAGE = 2


def read_program(path: Path) -> Optional[Program]:
  """
  Loads a program, logging the failure instead of raising.

  Args:
      path: The JSON document to read.

  Returns:
      The Program, or None if it could not be loaded.
  """
  try:
    return load_program(path)
  except ProgramLoadError as e:
    log_error(f"Could not load program: {escape(str(e))}")
    return None


def print_json(report: AnalysisReport) -> None:
  """Writes a report to stdout as plain JSON, bypassing Rich."""
  print(json.dumps(report.model_dump(mode="json"), indent=2, sort_keys=True))
