"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports (``src`` and the ``builders`` helper module).
- Sample programs shared across test modules.
- Console isolation so Rich output never leaks between tests.
"""

import json
import sys
import pytest
from pathlib import Path

# Add src to path so we can import 'scopecheck' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))
sys.path.insert(0, str(Path(__file__).parent))

from rich.console import Console  # noqa: E402

from builders import assign, call, declare, func, num, op, program, var  # noqa: E402
from scopecheck.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture
def recording_console():
  """Routes console output and log records into an in-memory Rich console."""
  rec = Console(record=True, width=200, force_terminal=False)
  set_console(rec)
  yield rec
  reset_console()


@pytest.fixture
def sample_program_dict():
  """
  A valid two-function program.

  main(a): declares x, y; assigns x = a + 1; calls helper(x); y is never used.
  helper(p): uses p in an operation.
  """
  return program(
    func(
      "main",
      ["a"],
      declare("x"),
      declare("y"),
      assign("x", op("addition", var("a"), num("1"))),
      call("helper", var("x")),
    ),
    func(
      "helper",
      ["p"],
      declare("r"),
      assign("r", var("p")),
      op("print", var("r")),
    ),
  )


@pytest.fixture
def sample_program_file(tmp_path, sample_program_dict):
  """The sample program written to disk as JSON."""
  path = tmp_path / "program.json"
  path.write_text(json.dumps(sample_program_dict), encoding="utf-8")
  return path
