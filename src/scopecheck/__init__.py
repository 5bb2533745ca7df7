"""
scopecheck Package.

A static analyzer for a minimal imperative-language AST. It never executes the
program; it reasons about declaration, assignment and call structure.

Usage
-----

.. code-block:: python

    import scopecheck

    program = scopecheck.load_program("program.json")

    scopecheck.validate(program, verbose=True)
    # False

    scopecheck.find_unused_variables(program)
    # {"main_result"}

    scopecheck.compute_dependencies(program)
    # {"main": {"helper"}, "helper": set()}
"""

from scopecheck.analysis.callgraph import compute_dependencies
from scopecheck.analysis.runner import AnalysisReport, AnalysisRunner
from scopecheck.analysis.unused import find_unused_variables
from scopecheck.analysis.validator import validate
from scopecheck.config import RuntimeConfig
from scopecheck.enums import AnalysisMode, ScopeMode
from scopecheck.model.loader import ProgramLoadError, load_program, parse_program
from scopecheck.model.nodes import Program

__version__ = "0.1.0"

__all__ = [
  "AnalysisMode",
  "AnalysisReport",
  "AnalysisRunner",
  "Program",
  "ProgramLoadError",
  "RuntimeConfig",
  "ScopeMode",
  "__version__",
  "compute_dependencies",
  "find_unused_variables",
  "load_program",
  "parse_program",
  "validate",
]
