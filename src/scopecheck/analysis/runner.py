"""
Analysis Dispatch.

``AnalysisRunner`` maps an ``AnalysisMode`` to the matching pass and packages
the outcome as an ``AnalysisReport``. Set- and map-valued results are sorted
here so that reports are deterministic and serialize cleanly to JSON.
"""

import logging
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from scopecheck.analysis.callgraph import compute_dependencies
from scopecheck.analysis.diagnostics import Diagnostic, DiagnosticSink
from scopecheck.analysis.unused import find_unused_variables
from scopecheck.analysis.validator import ProgramValidator, logger as validator_logger
from scopecheck.config import RuntimeConfig
from scopecheck.enums import AnalysisMode
from scopecheck.model.nodes import Program

logger = logging.getLogger(__name__)


class AnalysisReport(BaseModel):
  """
  Outcome of a single analysis run.
  """

  mode: AnalysisMode
  valid: Optional[bool] = Field(None, description="Validator verdict. Only set in 'verify' mode.")
  unused_variables: List[str] = Field(default_factory=list, description="Sorted qualified names.")
  dependencies: Dict[str, List[str]] = Field(
    default_factory=dict,
    description="Function name -> sorted transitive dependencies.",
  )
  diagnostics: List[Diagnostic] = Field(default_factory=list, description="Verbose rejection reasons.")


class AnalysisRunner:
  """
  Runs one of the three analyses against a Program.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Args:
        config: Runtime settings. Defaults to ``RuntimeConfig()``.
    """
    self.config = config or RuntimeConfig()

  def run(self, program: Program, mode: AnalysisMode) -> AnalysisReport:
    """
    Dispatches ``mode``.

    Args:
        program: The AST to analyze.
        mode: Which analysis to perform.

    Returns:
        AnalysisReport: The populated report.

    Raises:
        ValueError: If ``mode`` is not a known analysis.
    """
    mode = AnalysisMode(mode)
    if mode is AnalysisMode.VERIFY:
      return self.verify(program)
    if mode is AnalysisMode.UNUSED_VARIABLES:
      return self.unused_variables(program)
    return self.dependencies(program)

  def verify(self, program: Program, echo: bool = True) -> AnalysisReport:
    """
    Validates ``program``. With ``config.verbose``, rejection reasons are
    recorded in the report and, if ``echo`` is set, logged as they occur.
    """
    sink = DiagnosticSink(enabled=self.config.verbose, logger=validator_logger, echo=echo)
    validator = ProgramValidator(program, scope_mode=self.config.scope_mode, sink=sink)
    valid = validator.validate()
    logger.debug("validated %d function(s): valid=%s", len(program.functions), valid)
    return AnalysisReport(mode=AnalysisMode.VERIFY, valid=valid, diagnostics=sink.diagnostics)

  def unused_variables(self, program: Program) -> AnalysisReport:
    names = find_unused_variables(program, separator=self.config.separator)
    return AnalysisReport(mode=AnalysisMode.UNUSED_VARIABLES, unused_variables=sorted(names))

  def dependencies(self, program: Program) -> AnalysisReport:
    closure = compute_dependencies(program)
    ordered = {name: sorted(closure[name]) for name in sorted(closure)}
    return AnalysisReport(mode=AnalysisMode.FUNCTIONS_DEPENDANCIES, dependencies=ordered)
