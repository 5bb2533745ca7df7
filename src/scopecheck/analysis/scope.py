"""
Variable State Tracking for the Validator.

``VariableScope`` maps each visible variable of one function to an
"assigned" flag. Parameters start out declared and assigned.

Two block disciplines are supported (see ``ScopeMode``):

- ``forward``: a single forward pass. Names declared inside a nested block stay
  in the map after the block ends.
- ``lexical``: ``snapshot`` is taken on block entry and ``restore`` on exit.
  Restoring drops names first declared inside the block but keeps the
  assigned flags of names that were already visible, so an assignment to an
  outer variable inside a block still counts afterwards.
"""

from typing import Dict, FrozenSet, Iterable

from scopecheck.enums import ScopeMode


class VariableScope:
  """
  Declared-variable table for the function currently being validated.
  """

  def __init__(self, parameters: Iterable[str] = (), mode: ScopeMode = ScopeMode.FORWARD):
    """
    Args:
        parameters: Function parameter names, seeded as assigned.
        mode: Block discipline used by ``snapshot``/``restore``.
    """
    self.mode = ScopeMode(mode)
    self._assigned: Dict[str, bool] = {name: True for name in parameters}

  def __contains__(self, name: str) -> bool:
    return name in self._assigned

  def declare(self, name: str) -> None:
    """
    Adds a new, unassigned variable.

    Args:
        name: Variable identifier. Callers check for redeclaration first.
    """
    self._assigned[name] = False

  def is_assigned(self, name: str) -> bool:
    """
    Args:
        name: Variable identifier.

    Returns:
        True if declared and assigned; False if unassigned or unknown.
    """
    return self._assigned.get(name, False)

  def mark_assigned(self, name: str) -> None:
    """Sets the assigned flag of ``name``."""
    self._assigned[name] = True

  def snapshot(self) -> FrozenSet[str]:
    """
    Captures the names visible on block entry.

    Returns:
        The set of currently declared names.
    """
    return frozenset(self._assigned)

  def restore(self, snapshot: FrozenSet[str]) -> None:
    """
    Ends a block. In lexical mode, forgets names declared since ``snapshot``.

    Args:
        snapshot: Value returned by ``snapshot`` on block entry.
    """
    if self.mode is not ScopeMode.LEXICAL:
      return
    for name in [n for n in self._assigned if n not in snapshot]:
      del self._assigned[name]
