"""
Enumerations for scopecheck.

This module defines the tags used across the codebase for AST node kinds,
analysis modes, scope handling and diagnostic classification.
"""

from enum import Enum


class NodeKind(str, Enum):
  """
  The ``type`` tag carried by every statement or operand in the input document.
  """

  BLOCK = "block"
  VARIABLE_DECLARATION = "variable_declaration"
  OPERATION = "operation"
  FUNCTION_CALL = "function_call"
  NUMERICAL = "numerical"
  VARIABLE = "variable"


# Operation kind that designates operand 0 as the assignment target.
ASSIGNMENT = "assignment"


class AnalysisMode(str, Enum):
  """
  The three analyses offered by the tool.

  Values match the mode selector accepted on the command line.
  """

  VERIFY = "verify"
  UNUSED_VARIABLES = "unused_variables"
  FUNCTIONS_DEPENDANCIES = "functions_dependancies"


class ScopeMode(str, Enum):
  """
  How the Validator treats declarations made inside a nested block.
  """

  FORWARD = "forward"  # single pass, inner declarations stay visible after the block
  LEXICAL = "lexical"  # names declared in a block are dropped when the block ends


class DiagnosticCode(str, Enum):
  """
  Reason a node was rejected by the Validator.
  """

  UNDECLARED_FUNCTION = "UndeclaredFunction"
  ARITY_MISMATCH = "ArityMismatch"
  INVALID_ASSIGNMENT_TARGET = "InvalidAssignmentTarget"
  INVALID_NUMERIC_LITERAL = "InvalidNumericLiteral"
  UNDECLARED_VARIABLE = "UndeclaredVariable"
  UNASSIGNED_VARIABLE = "UnassignedVariable"
  DUPLICATE_DECLARATION = "DuplicateDeclaration"
  INVALID_OPERAND_KIND = "InvalidOperandKind"
