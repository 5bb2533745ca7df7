from .verify import handle_verify
from .unused import handle_unused_variables
from .dependencies import handle_dependencies
from .run import handle_run

__all__ = [
  "handle_dependencies",
  "handle_run",
  "handle_unused_variables",
  "handle_verify",
]
