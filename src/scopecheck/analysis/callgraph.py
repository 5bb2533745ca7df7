"""
Function Dependency Resolution.

Computes, for each function, every function it calls directly or indirectly.

1.  **Direct calls**: every ``function_call`` inside a function body is
    collected in encounter order, including calls nested in blocks, in
    operation operands and in the arguments of other calls.
2.  **Roll out**: the transitive closure of the direct-call graph. A function
    only contains itself when a cycle leads back to it.

Callees are not checked against the declared functions. A name that is called
but never declared shows up inside other functions' sets and never as a key.
"""

from typing import Dict, List, Mapping, Sequence, Set

from scopecheck.model.nodes import BlockStatement, FunctionCallNode, OperationNode, Program


class CallGraph:
  """
  Direct-call graph of a Program plus its memoized closure.

  Attributes:
      direct: Function name -> callee names in encounter order (duplicates kept).
  """

  def __init__(self, direct: Mapping[str, Sequence[str]]):
    self.direct: Dict[str, List[str]] = {name: list(callees) for name, callees in direct.items()}
    # Only roots whose walk has finished are memoized
    self._closures: Dict[str, Set[str]] = {}

  @classmethod
  def from_program(cls, program: Program) -> "CallGraph":
    """
    Builds the direct-call graph of ``program``.

    Args:
        program: The AST to scan.

    Returns:
        CallGraph: A graph with one key per function, even functions that call nothing.
    """
    return cls(extract_direct_calls(program))

  def dependencies_of(self, root: str) -> Set[str]:
    """
    Depth-first reachability from ``root`` with a visited set.

    Args:
        root: Function name to expand.

    Returns:
        Every name reachable from ``root`` through at least one call.
    """
    if root in self._closures:
      return set(self._closures[root])

    reached: Set[str] = set()
    stack = list(reversed(self.direct.get(root, ())))
    while stack:
      name = stack.pop()
      if name in reached:
        continue
      reached.add(name)
      done = self._closures.get(name)
      if done is not None:
        # A completed closure is already transitively closed
        reached.update(done)
        continue
      stack.extend(reversed(self.direct.get(name, ())))

    self._closures[root] = reached
    return set(reached)

  def rolled_out(self) -> Dict[str, Set[str]]:
    """
    Returns:
        Function name -> transitive dependency set, for every key of ``direct``.
    """
    return {name: self.dependencies_of(name) for name in self.direct}


def _collect_calls(nodes: Sequence[object], calls: List[str]) -> None:
  # Explicit stack, children pushed in reverse to keep encounter order
  stack = list(reversed(nodes))
  while stack:
    node = stack.pop()
    if isinstance(node, FunctionCallNode):
      calls.append(node.called_function)
      stack.extend(reversed(node.arguments))
    elif isinstance(node, OperationNode):
      stack.extend(reversed(node.operands))
    elif isinstance(node, BlockStatement):
      stack.extend(reversed(node.block.statements))


def extract_direct_calls(program: Program) -> Dict[str, List[str]]:
  """
  Collects the direct callees of each function.

  Args:
      program: The AST to scan.

  Returns:
      Function name -> callee names in encounter order.
  """
  direct: Dict[str, List[str]] = {}
  for function in program.functions:
    calls = direct.setdefault(function.name, [])
    _collect_calls(function.body.statements, calls)
  return direct


def roll_out_dependencies(direct: Mapping[str, Sequence[str]]) -> Dict[str, Set[str]]:
  """
  Transitive closure of a direct-call mapping.

  Example: ``{A: [B], B: [C], C: []}`` -> ``{A: {B, C}, B: {C}, C: set()}``.

  Args:
      direct: Function name -> direct callee names.

  Returns:
      Function name -> every name reachable from it.
  """
  return CallGraph(direct).rolled_out()


def compute_dependencies(program: Program) -> Dict[str, Set[str]]:
  """
  Args:
      program: The AST to analyze. Assumed to be valid.

  Returns:
      Function name -> set of transitively called function names.
  """
  return CallGraph.from_program(program).rolled_out()
