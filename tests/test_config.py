"""
Tests for RuntimeConfig defaults, TOML discovery and overrides.
"""

import pytest

from scopecheck.config import RuntimeConfig
from scopecheck.enums import ScopeMode


def write_toml(directory, body):
  (directory / "pyproject.toml").write_text(body, encoding="utf-8")


def test_defaults():
  config = RuntimeConfig()
  assert config.verbose is False
  assert config.scope_mode is ScopeMode.FORWARD
  assert config.separator == "_"


def test_load_without_toml(tmp_path):
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config == RuntimeConfig()


def test_load_reads_tool_section(tmp_path):
  write_toml(
    tmp_path,
    """
[tool.scopecheck]
verbose = true
scope_mode = "lexical"
separator = "::"
""",
  )
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config.verbose is True
  assert config.scope_mode is ScopeMode.LEXICAL
  assert config.separator == "::"


def test_load_searches_parent_directories(tmp_path):
  write_toml(tmp_path, '[tool.scopecheck]\nscope_mode = "lexical"\n')
  nested = tmp_path / "a" / "b"
  nested.mkdir(parents=True)
  assert RuntimeConfig.load(search_path=nested).scope_mode is ScopeMode.LEXICAL


def test_cli_overrides_win(tmp_path):
  write_toml(tmp_path, '[tool.scopecheck]\nverbose = true\nscope_mode = "lexical"\nseparator = "::"\n')
  config = RuntimeConfig.load(verbose=False, scope_mode="forward", separator=".", search_path=tmp_path)
  assert config.verbose is False
  assert config.scope_mode is ScopeMode.FORWARD
  assert config.separator == "."


def test_toml_without_tool_section(tmp_path):
  write_toml(tmp_path, '[project]\nname = "other"\n')
  assert RuntimeConfig.load(search_path=tmp_path) == RuntimeConfig()


def test_malformed_toml_falls_back_to_defaults(tmp_path, recording_console):
  write_toml(tmp_path, "[tool.scopecheck\nverbose = ")
  assert RuntimeConfig.load(search_path=tmp_path) == RuntimeConfig()
  assert "Ignoring unreadable" in recording_console.export_text()


def test_invalid_scope_mode_rejected():
  with pytest.raises(ValueError):
    RuntimeConfig(scope_mode="dynamic")


def test_empty_separator_rejected():
  with pytest.raises(ValueError):
    RuntimeConfig(separator="")
