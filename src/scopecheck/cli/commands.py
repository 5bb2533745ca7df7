"""
CLI Command Handlers Facade.

Re-exports handlers from ``scopecheck.cli.handlers`` so the dispatcher (and
tests patching it) have a single module to target.
"""

from scopecheck.cli.handlers.dependencies import handle_dependencies
from scopecheck.cli.handlers.run import handle_run
from scopecheck.cli.handlers.unused import handle_unused_variables
from scopecheck.cli.handlers.verify import handle_verify

__all__ = [
  "handle_dependencies",
  "handle_run",
  "handle_unused_variables",
  "handle_verify",
]
