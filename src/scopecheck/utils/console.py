"""
Central Logging and Console Utilities.

Output goes through the standard ``logging`` library, rendered by ``rich``.

1.  **Logging**: every module logs to a child of the ``scopecheck`` logger,
    which carries a single ``RichHandler`` bound to the active console.
2.  **Console Injection**: ``console`` is a proxy whose backend can be swapped
    with ``set_console`` (e.g. to an in-memory recorder in tests). Swapping the
    backend re-binds the handler so log records follow the new destination.

Attributes:
    console (_ConsoleProxy): A stable reference to the active Rich Console.
    logger (logging.Logger): The package root logger.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Between INFO and WARNING
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

LOGGER_NAME = "scopecheck"

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)

logger = logging.getLogger(LOGGER_NAME)


class _ConsoleProxy:
  """
  Forwards printing to a replaceable ``rich.console.Console`` backend.

  Attributes:
      _backend (Console): The active Rich Console instance.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates the log handler.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Restores a fresh standard output console."""
    self._backend = Console(theme=_THEME)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    """The currently active console."""
    return self._backend

  def _configure_logging(self) -> None:
    # Drop the handler bound to the previous backend
    for handler in list(logger.handlers):
      if isinstance(handler, RichHandler):
        logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )

    logger.setLevel(logging.INFO)
    logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """
    Forwards ``print`` calls to the active backend.

    Args:
        *args: Positional arguments for Rich print.
        **kwargs: Keyword arguments for Rich print.
    """
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and log records to ``new_console``.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Resets logging and console to standard output."""
  console.reset()


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. Can include rich markup like [bold].
  """
  logger.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  """
  Logs a success message at the custom SUCCESS level.

  Args:
      msg (str): The message content.
  """
  logger.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """
  Logs a warning message.

  Args:
      msg (str): The message content.
  """
  logger.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs an error message.

  Args:
      msg (str): The message content.
  """
  logger.error(f"❌ {msg}", extra={"markup": True})
