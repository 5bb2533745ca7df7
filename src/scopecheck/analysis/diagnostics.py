"""
Diagnostic Side Channel.

The Validator's verdict is a plain boolean. The human readable reason for a
rejection is reported separately, through a ``DiagnosticSink``, so that the
pass/fail logic never interleaves with output.
"""

import logging
from typing import Iterator, List, Optional
from pydantic import BaseModel, ConfigDict

from scopecheck.enums import DiagnosticCode


class Diagnostic(BaseModel):
  """
  A single rejection reason.
  """

  model_config = ConfigDict(frozen=True)

  code: DiagnosticCode
  function: str = ""
  message: str

  def __str__(self) -> str:
    scope = f"[{self.function}] " if self.function else ""
    return f"{scope}{self.code.value}: {self.message}"


class DiagnosticSink:
  """
  Accumulates diagnostics and mirrors each one to a logger.

  A disabled sink drops reports without formatting or logging them, which is
  how non-verbose validation runs.
  """

  def __init__(self, enabled: bool = True, logger: Optional[logging.Logger] = None, echo: bool = True):
    """
    Args:
        enabled: If False, ``report`` is a no-op.
        logger: Destination for log records. Defaults to this module's logger.
        echo: If False, diagnostics are recorded but not logged.
    """
    self.enabled = enabled
    self.echo = echo
    self._logger = logger or logging.getLogger(__name__)
    self._items: List[Diagnostic] = []

  def report(self, code: DiagnosticCode, function: str, message: str) -> None:
    """
    Records a rejection reason.

    Args:
        code: Classification of the violation.
        function: Name of the function being validated.
        message: Human readable detail.
    """
    if not self.enabled:
      return
    diagnostic = Diagnostic(code=code, function=function, message=message)
    self._items.append(diagnostic)
    if self.echo:
      self._logger.warning(str(diagnostic), extra={"markup": False})

  @property
  def diagnostics(self) -> List[Diagnostic]:
    """Diagnostics recorded so far, oldest first."""
    return list(self._items)

  def clear(self) -> None:
    self._items.clear()

  def __iter__(self) -> Iterator[Diagnostic]:
    return iter(self._items)

  def __len__(self) -> int:
    return len(self._items)
