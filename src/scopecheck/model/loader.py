"""
Program Loading Logic.

Decodes a JSON document into the immutable ``Program`` AST. This is thin glue
around the analysis core: every problem here (unreadable file, bad JSON, a
document whose shape does not match the schema) is reported as a single
``ProgramLoadError``.
"""

import json
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from scopecheck.model.nodes import Program


class ProgramLoadError(ValueError):
  """
  Raised when a program document cannot be turned into a ``Program``.

  Attributes:
      path: The source file, when the document came from disk.
      reason: Human readable description of the underlying failure.
  """

  def __init__(self, reason: str, path: Optional[Path] = None):
    self.path = path
    self.reason = reason
    location = f"{path}: " if path else ""
    super().__init__(f"{location}{reason}")


def program_from_dict(data: Any, path: Optional[Path] = None) -> Program:
  """
  Validates an already decoded JSON value as a Program.

  Args:
      data: The decoded document. Must be a JSON object.
      path: Optional source path, used in error messages.

  Returns:
      Program: The validated AST.

  Raises:
      ProgramLoadError: If the value does not match the Program schema.
  """
  if not isinstance(data, dict):
    raise ProgramLoadError(f"expected a JSON object at top level, got {type(data).__name__}", path)
  try:
    return Program.model_validate(data)
  except ValidationError as e:
    raise ProgramLoadError(f"document does not describe a program: {e}", path) from e
  except RecursionError as e:
    raise ProgramLoadError("document is nested too deeply", path) from e


def parse_program(text: Union[str, bytes], path: Optional[Path] = None) -> Program:
  """
  Parses JSON text into a Program.

  Args:
      text: The raw JSON document.
      path: Optional source path, used in error messages.

  Returns:
      Program: The validated AST.

  Raises:
      ProgramLoadError: If the text is not valid JSON or not a program.
  """
  try:
    data = json.loads(text)
  except RecursionError as e:
    raise ProgramLoadError("invalid JSON: document is nested too deeply", path) from e
  except ValueError as e:
    # JSONDecodeError, or an integer literal longer than the int conversion limit
    raise ProgramLoadError(f"invalid JSON: {e}", path) from e
  return program_from_dict(data, path)


def load_program(path: Path) -> Program:
  """
  Reads and parses a program file.

  Args:
      path: Location of the JSON document.

  Returns:
      Program: The validated AST.

  Raises:
      ProgramLoadError: If the file cannot be read or parsed.
  """
  path = Path(path)
  try:
    text = path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    raise ProgramLoadError(f"cannot read file: {e}", path) from e
  return parse_program(text, path)
