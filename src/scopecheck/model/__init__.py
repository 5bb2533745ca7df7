"""
Program Model Package.

Modules:
    - ``nodes``: Frozen pydantic models for Program, Function, Block and the
      statement/operand tagged unions.
    - ``loader``: JSON decoding into ``Program``.
"""

from scopecheck.model.nodes import (
  Block,
  BlockStatement,
  Function,
  FunctionCallNode,
  NumericalNode,
  Operand,
  OperationNode,
  Program,
  Statement,
  UnknownNode,
  VariableDeclaration,
  VariableNode,
)
from scopecheck.model.loader import ProgramLoadError, load_program, parse_program, program_from_dict

__all__ = [
  "Block",
  "BlockStatement",
  "Function",
  "FunctionCallNode",
  "NumericalNode",
  "Operand",
  "OperationNode",
  "Program",
  "ProgramLoadError",
  "Statement",
  "UnknownNode",
  "VariableDeclaration",
  "VariableNode",
  "load_program",
  "parse_program",
  "program_from_dict",
]
