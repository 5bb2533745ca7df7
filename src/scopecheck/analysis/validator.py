"""
Program Validation.

This module provides the ``ProgramValidator``, a single depth-first walk over
every function body that enforces:

1.  **Declaration before use**: a variable must be declared (or be a parameter)
    before it appears in an operation or call.
2.  **Assignment before use**: a declared variable must be assigned before it is
    read. The target of an ``assignment`` (operand 0) is exempt.
3.  **No redeclaration**: a name already visible in the function cannot be
    declared again.
4.  **Call checks**: the callee must be declared in the program and receive
    exactly as many arguments as it has parameters.
5.  **Operand shape**: numerical literals must parse as floats, assignment
    targets must be variables, and only the four operand kinds are accepted.

Validation stops at the first violation. Nothing is raised for malformed input:
missing fields take their empty values and the rules decide the verdict. The
reason for a rejection goes to a ``DiagnosticSink`` when verbose mode is on.
"""

import logging
import math
import re
from typing import Any, Dict, List, Optional, Tuple, Union

from scopecheck.analysis.diagnostics import DiagnosticSink
from scopecheck.analysis.scope import VariableScope
from scopecheck.enums import DiagnosticCode, ScopeMode
from scopecheck.model.nodes import (
  Block,
  BlockStatement,
  FunctionCallNode,
  NumericalNode,
  OperationNode,
  Program,
  VariableDeclaration,
  VariableNode,
)

logger = logging.getLogger(__name__)

# ASCII-only literal grammar: decimal, hexadecimal (mandatory p exponent) and the
# inf/infinity/nan words. Digit separators are checked by _underscores_ok.
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9_]+\.?[0-9_]*|\.[0-9_]+)(?:[eE][+-]?[0-9][0-9_]*)?")
_HEX_RE = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F_]+\.?[0-9a-fA-F_]*|\.[0-9a-fA-F_]+)[pP][+-]?[0-9][0-9_]*")
_SPECIAL_RE = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)

# Work item kinds for the explicit-stack walk
_BLOCK = "block"
_STATEMENT = "statement"
_OPERAND = "operand"
_ASSIGN = "assign"
_RESTORE = "restore"

_WorkItem = Tuple[str, Any, bool]


def _underscores_ok(text: str) -> bool:
  """
  Checks that every ``_`` sits between two digits, or between a base prefix and a digit.

  Args:
      text: A literal that already matched one of the literal patterns.

  Returns:
      True if the underscores are well placed.
  """
  if text[:1] in ("+", "-"):
    text = text[1:]
  saw = "^"
  start = 0
  hex_digits = False
  if len(text) >= 2 and text[0] == "0" and text[1].lower() in ("b", "o", "x"):
    start = 2
    saw = "0"
    hex_digits = text[1].lower() == "x"

  for c in text[start:]:
    if "0" <= c <= "9" or (hex_digits and "a" <= c.lower() <= "f"):
      saw = "0"
      continue
    if c == "_":
      if saw != "0":
        return False
      saw = "_"
      continue
    if saw == "_":
      return False
    saw = "!"
  return saw != "_"


def is_numeric_literal(text: str) -> bool:
  """
  Checks that ``text`` is a 64-bit floating-point literal. Integers qualify.

  Accepted forms:

  - decimal: ``42``, ``-2.5``, ``.5``, ``3.``, ``1e3``, ``1_000.5``
  - hexadecimal with a binary exponent: ``0x1p-2``, ``0x1.8P+1``
  - ``inf``, ``infinity`` (optionally signed) and ``nan``, in any case

  Only ASCII digits are accepted, surrounding whitespace is rejected, and a
  finite literal whose value overflows to infinity is rejected. Underflow to
  zero is allowed.

  Args:
      text: Literal text from a ``numerical`` operand.

  Returns:
      True if the text is a valid floating-point literal.
  """
  if _SPECIAL_RE.fullmatch(text):
    return True

  is_hex = _HEX_RE.fullmatch(text) is not None
  if not is_hex and _DECIMAL_RE.fullmatch(text) is None:
    return False
  if "_" in text and not _underscores_ok(text):
    return False

  digits = text.replace("_", "")
  try:
    value = float.fromhex(digits) if is_hex else float(digits)
  except OverflowError:
    return False
  return not math.isinf(value)


class ProgramValidator:
  """
  Validates one Program against the declaration, assignment and call rules.

  Attributes:
      program: The AST under validation.
      scope_mode: Block discipline for nested declarations.
      sink: Receives rejection reasons.
  """

  def __init__(
    self,
    program: Program,
    scope_mode: ScopeMode = ScopeMode.FORWARD,
    sink: Optional[DiagnosticSink] = None,
  ):
    """
    Args:
        program: The AST to validate.
        scope_mode: ``forward`` (default) or ``lexical``.
        sink: Diagnostic collaborator. A disabled sink is used if omitted.
    """
    self.program = program
    self.scope_mode = ScopeMode(scope_mode)
    self.sink = sink if sink is not None else DiagnosticSink(enabled=False)
    # name -> arity, shared by every function body
    self._declared_functions: Dict[str, int] = {f.name: f.arity for f in program.functions}
    self._current_function = ""

  def validate(self) -> bool:
    """
    Runs the walk over every function.

    Returns:
        True iff every function body is valid.
    """
    for function in self.program.functions:
      self._current_function = function.name
      scope = VariableScope(function.parameters, mode=self.scope_mode)
      if not self._validate_block(function.body, scope):
        return False
    return True

  def _reject(self, code: DiagnosticCode, message: str) -> bool:
    self.sink.report(code, self._current_function, message)
    return False

  def _validate_block(self, block: Block, scope: VariableScope) -> bool:
    """
    Walks ``block`` depth-first with an explicit stack, so nesting depth is not
    bounded by the interpreter's recursion limit.

    Items are popped in source order: children are pushed in reverse, and the
    follow-up of a node (restoring a block's scope, marking an assignment target)
    is pushed before its children.

    Args:
        block: A function body.
        scope: Variable state of the current function.

    Returns:
        True if every statement in the block is valid.
    """
    stack: List[_WorkItem] = [(_BLOCK, block, False)]
    while stack:
      kind, node, is_target = stack.pop()
      if kind == _BLOCK:
        stack.append((_RESTORE, scope.snapshot(), False))
        stack.extend((_STATEMENT, s, False) for s in reversed(node.statements))
      elif kind == _RESTORE:
        scope.restore(node)
      elif kind == _ASSIGN:
        # Only reached once the target passed the operand rule
        scope.mark_assigned(node.variable)
      elif kind == _OPERAND:
        if not self._validate_operand(node, is_target, scope, stack):
          return False
      elif not self._validate_statement(node, scope, stack):
        return False
    return True

  def _validate_statement(self, statement: object, scope: VariableScope, stack: List[_WorkItem]) -> bool:
    """
    Checks one statement and schedules its children.

    Statements of an unknown kind carry no rule and are accepted.
    """
    if isinstance(statement, BlockStatement):
      stack.append((_BLOCK, statement.block, False))
      return True

    if isinstance(statement, VariableDeclaration):
      if statement.variable in scope:
        return self._reject(
          DiagnosticCode.DUPLICATE_DECLARATION,
          f"variable '{statement.variable}' is already declared",
        )
      scope.declare(statement.variable)
      return True

    if isinstance(statement, OperationNode):
      return self._validate_operation(statement, stack)

    if isinstance(statement, FunctionCallNode):
      return self._validate_call(statement, stack)

    return True

  def _validate_operation(self, operation: OperationNode, stack: List[_WorkItem]) -> bool:
    if operation.is_assignment and not operation.operands:
      return self._reject(DiagnosticCode.INVALID_ASSIGNMENT_TARGET, "assignment has no target operand")

    if operation.is_assignment:
      stack.append((_ASSIGN, operation.operands[0], False))
    for index in reversed(range(len(operation.operands))):
      is_target = index == 0 and operation.is_assignment
      stack.append((_OPERAND, operation.operands[index], is_target))
    return True

  def _validate_call(self, call: FunctionCallNode, stack: List[_WorkItem]) -> bool:
    arity = self._declared_functions.get(call.called_function)
    if arity is None:
      return self._reject(
        DiagnosticCode.UNDECLARED_FUNCTION,
        f"call to undeclared function '{call.called_function}'",
      )
    if arity != len(call.arguments):
      return self._reject(
        DiagnosticCode.ARITY_MISMATCH,
        f"function '{call.called_function}' expects {arity} argument(s), got {len(call.arguments)}",
      )

    stack.extend((_OPERAND, argument, False) for argument in reversed(call.arguments))
    return True

  def _validate_operand(
    self,
    operand: Union[NumericalNode, VariableNode, OperationNode, FunctionCallNode, object],
    is_target: bool,
    scope: VariableScope,
    stack: List[_WorkItem],
  ) -> bool:
    """
    Applies the operand rule.

    Args:
        operand: The operand or call argument.
        is_target: True for operand 0 of an assignment.
        scope: Variable state of the current function.
        stack: Pending work; nested calls and operations schedule their children here.

    Returns:
        True if the operand is acceptable.
    """
    if is_target and not isinstance(operand, VariableNode):
      kind = getattr(operand, "type", "")
      return self._reject(
        DiagnosticCode.INVALID_ASSIGNMENT_TARGET,
        f"left hand side of assignment must be a variable, got '{kind}'",
      )

    if isinstance(operand, NumericalNode):
      if not is_numeric_literal(operand.value):
        return self._reject(
          DiagnosticCode.INVALID_NUMERIC_LITERAL,
          f"value '{operand.value}' is not a number",
        )
      return True

    if isinstance(operand, VariableNode):
      if operand.variable not in scope:
        return self._reject(
          DiagnosticCode.UNDECLARED_VARIABLE,
          f"variable '{operand.variable}' is not declared",
        )
      # A target only needs to exist; it is about to be assigned.
      if not is_target and not scope.is_assigned(operand.variable):
        return self._reject(
          DiagnosticCode.UNASSIGNED_VARIABLE,
          f"variable '{operand.variable}' is used before assignment",
        )
      return True

    if isinstance(operand, (FunctionCallNode, OperationNode)):
      return self._validate_statement(operand, scope, stack)

    return self._reject(
      DiagnosticCode.INVALID_OPERAND_KIND,
      f"'{getattr(operand, 'type', '')}' is not a valid operand kind",
    )


def validate(
  program: Program,
  verbose: bool = False,
  scope_mode: ScopeMode = ScopeMode.FORWARD,
  sink: Optional[DiagnosticSink] = None,
) -> bool:
  """
  Checks whether a program is valid.

  Args:
      program: The AST to validate.
      verbose: If True, the reason for a rejection is logged and recorded.
      scope_mode: Block discipline for nested declarations.
      sink: Optional diagnostic collaborator. Overrides ``verbose`` when given.

  Returns:
      True iff every function body is valid.
  """
  if sink is None:
    sink = DiagnosticSink(enabled=verbose, logger=logger)
  return ProgramValidator(program, scope_mode=scope_mode, sink=sink).validate()
