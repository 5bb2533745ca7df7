"""
Unused Variable Detection.

``UnusedVariableFinder`` walks every function body and classifies each
declared variable (parameters included) as used or unused.

A variable is *used* when it appears as a non-target operand of an operation,
or as a bare argument of a function call, anywhere in its function. The target
of an ``assignment`` is not a use.

Usage is tracked per ``QualifiedName`` (function, variable) so that locals of
different functions never collide. The separator only matters when names are
rendered as strings.
"""

from typing import Dict, List, NamedTuple, Sequence, Set, Tuple

from scopecheck.model.nodes import (
  BlockStatement,
  FunctionCallNode,
  OperationNode,
  Program,
  VariableDeclaration,
  VariableNode,
)

DEFAULT_SEPARATOR = "_"


class QualifiedName(NamedTuple):
  """A variable identified together with its owning function."""

  function: str
  variable: str

  def render(self, separator: str = DEFAULT_SEPARATOR) -> str:
    """
    Args:
        separator: Text placed between function and variable names.

    Returns:
        str: e.g. ``"main_x"``.
    """
    return f"{self.function}{separator}{self.variable}"


class UnusedVariableFinder:
  """
  Depth-first usage scan over a Program.
  """

  def __init__(self) -> None:
    # False: declared, not yet used. True: used.
    self._usage: Dict[QualifiedName, bool] = {}
    self._function = ""

  def scan(self, program: Program) -> Set[QualifiedName]:
    """
    Args:
        program: The AST to scan. Assumed to be valid.

    Returns:
        Every qualified name whose final usage flag is unused.
    """
    self._usage = {}
    for function in program.functions:
      self._function = function.name
      for param in function.parameters:
        self._usage[self._key(param)] = False
      self._scan_statements(function.body.statements)
    return {name for name, used in self._usage.items() if not used}

  def _key(self, variable: str) -> QualifiedName:
    return QualifiedName(self._function, variable)

  def _scan_statements(self, statements: Sequence[object]) -> None:
    """
    Depth-first over ``statements`` with an explicit stack, in source order.

    Each item pairs a node with whether it is an assignment target. Statement
    and operand positions never share a kind other than calls and operations,
    so one dispatch covers both.
    """
    stack: List[Tuple[object, bool]] = [(s, False) for s in reversed(statements)]
    while stack:
      node, is_target = stack.pop()
      if isinstance(node, VariableDeclaration):
        # A declaration always resets usage state
        self._usage[self._key(node.variable)] = False
      elif isinstance(node, VariableNode):
        if not is_target:
          self._usage[self._key(node.variable)] = True
      elif isinstance(node, OperationNode):
        for index in reversed(range(len(node.operands))):
          stack.append((node.operands[index], index == 0 and node.is_assignment))
      elif isinstance(node, FunctionCallNode):
        stack.extend((argument, False) for argument in reversed(node.arguments))
      elif isinstance(node, BlockStatement):
        stack.extend((s, False) for s in reversed(node.block.statements))


def find_unused_symbols(program: Program) -> Set[QualifiedName]:
  """
  Returns unused variables as structured (function, variable) pairs.

  Args:
      program: The AST to scan.

  Returns:
      Set of unused qualified names.
  """
  return UnusedVariableFinder().scan(program)


def find_unused_variables(program: Program, separator: str = DEFAULT_SEPARATOR) -> Set[str]:
  """
  Returns unused variables as ``function + separator + variable`` strings.

  Args:
      program: The AST to scan.
      separator: Text joining function and variable names.

  Returns:
      Unordered set of rendered qualified names.
  """
  return {name.render(separator) for name in find_unused_symbols(program)}
