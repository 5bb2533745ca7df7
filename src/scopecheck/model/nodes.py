"""
Pydantic Schemas for the Program AST.

Each statement kind and operand kind is its own frozen model, and the two
positions are modelled as separate tagged unions:

- ``Statement``: ``BlockStatement``, ``VariableDeclaration``, ``OperationNode``,
  ``FunctionCallNode``.
- ``Operand``: ``NumericalNode``, ``VariableNode``, ``FunctionCallNode``,
  ``OperationNode``.

A node whose ``type`` tag is not valid for its position is kept as an
``UnknownNode`` rather than failing the load. The analysis passes decide what an
unknown node means (the Validator ignores it as a statement and rejects it as an
operand).

Missing or ``null`` fields fall back to their empty value, and keys are matched
to field names case-insensitively.
"""

from typing import Annotated, Any, Dict, FrozenSet, Literal, Tuple, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator, model_validator

from scopecheck.enums import ASSIGNMENT, NodeKind

UNKNOWN_TAG = "unknown"


class _Node(BaseModel):
  """
  Shared configuration for all AST models.
  """

  model_config = ConfigDict(frozen=True, populate_by_name=True)

  @classmethod
  def _input_names(cls) -> Dict[str, str]:
    """
    Maps the case-folded form of every accepted input key to its spelling.

    Returns:
        Dict[str, str]: e.g. ``{"called_function": "called_function"}``.
    """
    names: Dict[str, str] = {}
    for name, info in cls.model_fields.items():
      names.setdefault(name.casefold(), name)
      if isinstance(info.validation_alias, AliasChoices):
        for choice in info.validation_alias.choices:
          if isinstance(choice, str):
            names.setdefault(choice.casefold(), choice)
    return names

  @model_validator(mode="before")
  @classmethod
  def _normalize_keys(cls, data: Any) -> Any:
    """
    Treats ``null`` fields as absent so they take their defaults, and matches
    keys to fields without regard to case (``Functions``, ``Called_Function``).

    When several keys name the same field, the last non-null one wins.
    """
    if not isinstance(data, dict):
      return data
    names = cls._input_names()
    normalized: Dict[Any, Any] = {}
    for key, value in data.items():
      if value is None:
        continue
      if isinstance(key, str):
        key = names.get(key.casefold(), key)
      normalized[key] = value
    return normalized


class NumericalNode(_Node):
  """A numeric literal. The text is kept verbatim and checked by the Validator."""

  type: Literal["numerical"] = NodeKind.NUMERICAL.value
  value: str = ""

  @field_validator("value", mode="before")
  @classmethod
  def _coerce_number(cls, v: Any) -> Any:
    # JSON numbers are accepted and kept as their text form
    if isinstance(v, (int, float)) and not isinstance(v, bool):
      return repr(v)
    return v


class VariableNode(_Node):
  """A reference to a variable by name."""

  type: Literal["variable"] = NodeKind.VARIABLE.value
  variable: str = ""


class VariableDeclaration(_Node):
  """Declares one new, unassigned variable."""

  type: Literal["variable_declaration"] = NodeKind.VARIABLE_DECLARATION.value
  variable: str = ""


class FunctionCallNode(_Node):
  """A call to a named function. Valid both as a statement and as an operand."""

  type: Literal["function_call"] = NodeKind.FUNCTION_CALL.value
  called_function: str = ""
  arguments: Tuple["Operand", ...] = ()


class OperationNode(_Node):
  """
  An operation over operands. Valid both as a statement and as an operand.

  When ``operation_type`` is ``"assignment"``, operand 0 is the assignment target.
  """

  type: Literal["operation"] = NodeKind.OPERATION.value
  operation_type: str = ""
  operands: Tuple["Operand", ...] = Field(
    (),
    validation_alias=AliasChoices("Operands", "operands"),
    serialization_alias="Operands",
  )

  @property
  def is_assignment(self) -> bool:
    """True if operand 0 is an assignment target."""
    return self.operation_type == ASSIGNMENT


class UnknownNode(_Node):
  """
  A node whose tag is not valid where it appears.

  Attributes:
      type: The raw tag from the input (may be empty, or a known kind used in
          the wrong position, such as ``block`` as an operand).
  """

  model_config = ConfigDict(frozen=True, extra="allow")

  type: str = ""


class Block(_Node):
  """An ordered sequence of statements."""

  statements: Tuple["Statement", ...] = ()


class BlockStatement(_Node):
  """A nested block used as a statement."""

  type: Literal["block"] = NodeKind.BLOCK.value
  block: Block = Field(default_factory=Block)


def _make_discriminator(allowed: FrozenSet[str]):
  """
  Builds a callable discriminator that maps tags outside ``allowed`` to ``unknown``.

  Args:
      allowed: Tags that have a dedicated model in this union.

  Returns:
      A function usable with ``pydantic.Discriminator``.
  """

  def discriminate(value: Any) -> str:
    if isinstance(value, UnknownNode):
      return UNKNOWN_TAG
    if isinstance(value, dict):
      tag = ""
      # Same key matching as _Node._normalize_keys
      for key, item in value.items():
        if isinstance(key, str) and key.casefold() == "type" and item is not None:
          tag = item
    else:
      tag = getattr(value, "type", "")
    if isinstance(tag, str) and tag in allowed:
      return tag
    return UNKNOWN_TAG

  return discriminate


_STATEMENT_TAGS = frozenset(
  {
    NodeKind.BLOCK.value,
    NodeKind.VARIABLE_DECLARATION.value,
    NodeKind.OPERATION.value,
    NodeKind.FUNCTION_CALL.value,
  }
)

_OPERAND_TAGS = frozenset(
  {
    NodeKind.NUMERICAL.value,
    NodeKind.VARIABLE.value,
    NodeKind.OPERATION.value,
    NodeKind.FUNCTION_CALL.value,
  }
)

Statement = Annotated[
  Union[
    Annotated[BlockStatement, Tag(NodeKind.BLOCK.value)],
    Annotated[VariableDeclaration, Tag(NodeKind.VARIABLE_DECLARATION.value)],
    Annotated[OperationNode, Tag(NodeKind.OPERATION.value)],
    Annotated[FunctionCallNode, Tag(NodeKind.FUNCTION_CALL.value)],
    Annotated[UnknownNode, Tag(UNKNOWN_TAG)],
  ],
  Discriminator(_make_discriminator(_STATEMENT_TAGS)),
]

Operand = Annotated[
  Union[
    Annotated[NumericalNode, Tag(NodeKind.NUMERICAL.value)],
    Annotated[VariableNode, Tag(NodeKind.VARIABLE.value)],
    Annotated[OperationNode, Tag(NodeKind.OPERATION.value)],
    Annotated[FunctionCallNode, Tag(NodeKind.FUNCTION_CALL.value)],
    Annotated[UnknownNode, Tag(UNKNOWN_TAG)],
  ],
  Discriminator(_make_discriminator(_OPERAND_TAGS)),
]


class Function(_Node):
  """
  A function declaration.

  Each parameter is implicitly declared and assigned on entry.
  """

  name: str = ""
  parameters: Tuple[str, ...] = ()
  body: Block = Field(default_factory=Block)

  @property
  def arity(self) -> int:
    """Number of arguments a call to this function must supply."""
    return len(self.parameters)


class Program(_Node):
  """
  The top-level AST: an ordered sequence of function declarations.

  Function names share one global namespace. Uniqueness is not enforced here.
  """

  functions: Tuple[Function, ...] = ()


FunctionCallNode.model_rebuild()
OperationNode.model_rebuild()
Block.model_rebuild()
BlockStatement.model_rebuild()
Function.model_rebuild()
Program.model_rebuild()
