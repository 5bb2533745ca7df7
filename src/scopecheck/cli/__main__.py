"""
Main Entry Point for scopecheck CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `scopecheck.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from scopecheck.cli import commands
from scopecheck.enums import AnalysisMode, ScopeMode
from scopecheck import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="scopecheck: Static analysis for a minimal imperative AST")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: VERIFY ---
  cmd_verify = subparsers.add_parser(AnalysisMode.VERIFY.value, help="Check that a program is valid")
  cmd_verify.add_argument("path", type=Path, help="Program JSON file")
  cmd_verify.add_argument("--verbose", action="store_true", help="Report why the program was rejected")
  cmd_verify.add_argument(
    "--scope",
    choices=[m.value for m in ScopeMode],
    default=None,
    help="Block scoping model (default: from toml, else 'forward')",
  )
  cmd_verify.add_argument("--json", action="store_true", help="Print the report as JSON")

  # --- Command: UNUSED VARIABLES ---
  cmd_unused = subparsers.add_parser(
    AnalysisMode.UNUSED_VARIABLES.value, help="List declared variables that are never used"
  )
  cmd_unused.add_argument("path", type=Path, help="Program JSON file")
  cmd_unused.add_argument("--separator", default=None, help="Text joining function and variable names (default: '_')")
  cmd_unused.add_argument("--json", action="store_true", help="Print the report as JSON")

  # --- Command: FUNCTION DEPENDENCIES ---
  cmd_deps = subparsers.add_parser(
    AnalysisMode.FUNCTIONS_DEPENDANCIES.value, help="List the functions each function depends on"
  )
  cmd_deps.add_argument("path", type=Path, help="Program JSON file")
  cmd_deps.add_argument("--json", action="store_true", help="Print the report as JSON")

  # --- Command: RUN (flag style) ---
  cmd_run = subparsers.add_parser("run", help="Run an analysis selected with --mode")
  cmd_run.add_argument("--file", type=Path, required=True, help="Program JSON file")
  cmd_run.add_argument(
    "--mode",
    required=True,
    help=f"Analysis to run: {', '.join(m.value for m in AnalysisMode)}",
  )
  cmd_run.add_argument("--verbose", action="store_true", help="Report why the program was rejected")
  cmd_run.add_argument("--json", action="store_true", help="Print the report as JSON")

  args = parser.parse_args(argv)

  if args.command == AnalysisMode.VERIFY.value:
    return commands.handle_verify(args.path, args.verbose or None, args.scope, args.json)

  elif args.command == AnalysisMode.UNUSED_VARIABLES.value:
    return commands.handle_unused_variables(args.path, args.separator, args.json)

  elif args.command == AnalysisMode.FUNCTIONS_DEPENDANCIES.value:
    return commands.handle_dependencies(args.path, args.json)

  elif args.command == "run":
    return commands.handle_run(args.file, args.mode, args.verbose, args.json)

  return 0


if __name__ == "__main__":
  sys.exit(main())
