"""
Runtime Configuration Store.

Settings are resolved from three layers, lowest priority first:
model defaults, the ``[tool.scopecheck]`` table of the nearest ``pyproject.toml``,
and explicit overrides (usually CLI flags).
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from pydantic import BaseModel, Field, field_validator
from rich.markup import escape

from scopecheck.enums import ScopeMode
from scopecheck.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the analysis passes.
  """

  verbose: bool = Field(False, description="If True, the Validator reports the reason for a rejection.")
  scope_mode: ScopeMode = Field(
    ScopeMode.FORWARD,
    description="'forward' keeps block declarations visible afterwards; 'lexical' drops them on block exit.",
  )
  separator: str = Field("_", description="Joins function and variable names in unused-variable output.")

  @field_validator("separator")
  @classmethod
  def validate_separator(cls, v: str) -> str:
    """
    Rejects an empty separator, which would make qualified names ambiguous.

    Args:
        v (str): The separator to validate.

    Returns:
        str: The unchanged separator.

    Raises:
        ValueError: If the separator is empty.
    """
    if not v:
      raise ValueError("separator must be a non-empty string")
    return v

  @classmethod
  def load(
    cls,
    verbose: Optional[bool] = None,
    scope_mode: Optional[str] = None,
    separator: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        verbose (Optional[bool]): Override for verbose diagnostics.
        scope_mode (Optional[str]): Override for the scope model.
        separator (Optional[str]): Override for the qualified-name separator.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    if verbose is not None:
      final_verbose = verbose
    else:
      final_verbose = toml_config.get("verbose", False)

    final_scope = scope_mode or toml_config.get("scope_mode", ScopeMode.FORWARD.value)
    final_separator = separator if separator is not None else toml_config.get("separator", "_")

    return cls(verbose=final_verbose, scope_mode=final_scope, separator=final_separator)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable {escape(str(toml_path))}: {escape(str(e))}")
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("scopecheck", {}), parent

  return {}, None
