"""
Tests for JSON decoding into the Program AST.
"""

import json
import sys

import pytest
from pydantic import ValidationError

from builders import block, call, declare, func, num, op, program, var
from scopecheck.model.loader import ProgramLoadError, load_program, parse_program, program_from_dict
from scopecheck.model.nodes import (
  BlockStatement,
  FunctionCallNode,
  NumericalNode,
  OperationNode,
  Program,
  UnknownNode,
  VariableDeclaration,
  VariableNode,
)


def test_load_program_from_file(sample_program_file):
  prog = load_program(sample_program_file)
  assert isinstance(prog, Program)
  assert [f.name for f in prog.functions] == ["main", "helper"]
  assert prog.functions[0].parameters == ("a",)
  assert prog.functions[1].arity == 1


def test_statement_variants():
  doc = program(
    func(
      "f",
      ["a"],
      declare("x"),
      op("assignment", var("x"), num("1")),
      call("f", var("a")),
      block(declare("y")),
    )
  )
  statements = program_from_dict(doc).functions[0].body.statements
  assert isinstance(statements[0], VariableDeclaration)
  assert isinstance(statements[1], OperationNode)
  assert statements[1].is_assignment
  assert isinstance(statements[1].operands[0], VariableNode)
  assert isinstance(statements[1].operands[1], NumericalNode)
  assert isinstance(statements[2], FunctionCallNode)
  assert statements[2].called_function == "f"
  assert isinstance(statements[3], BlockStatement)
  assert isinstance(statements[3].block.statements[0], VariableDeclaration)


def test_operands_key_accepts_both_spellings():
  upper = {"type": "operation", "operation_type": "print", "Operands": [var("a")]}
  lower = {"type": "operation", "operation_type": "print", "operands": [var("a")]}
  for stmt in (upper, lower):
    prog = program_from_dict(program(func("f", ["a"], stmt)))
    assert len(prog.functions[0].body.statements[0].operands) == 1


def test_dump_uses_capitalized_operands_key():
  prog = program_from_dict(program(func("f", ["a"], op("print", var("a")))))
  dumped = prog.model_dump(by_alias=True)
  assert "Operands" in dumped["functions"][0]["body"]["statements"][0]


def test_missing_fields_take_empty_values():
  prog = program_from_dict({"functions": [{"name": "f", "body": {"statements": [{"type": "function_call"}]}}, {}]})
  first, second = prog.functions
  assert first.parameters == ()
  stmt = first.body.statements[0]
  assert stmt.called_function == ""
  assert stmt.arguments == ()
  assert second.name == ""
  assert second.body.statements == ()


def test_null_fields_take_empty_values():
  prog = program_from_dict(
    {"functions": [{"name": "f", "parameters": None, "body": {"statements": [{"type": "operation", "Operands": None}]}}]}
  )
  assert prog.functions[0].parameters == ()
  assert prog.functions[0].body.statements[0].operands == ()


def test_empty_document_is_an_empty_program():
  assert program_from_dict({}).functions == ()


def test_unknown_tags_become_unknown_nodes():
  doc = program(func("f", [], {"type": "loop"}, op("print", {"type": "string", "value": "hi"}, block())))
  statements = program_from_dict(doc).functions[0].body.statements
  assert isinstance(statements[0], UnknownNode)
  assert statements[0].type == "loop"
  operands = statements[1].operands
  assert isinstance(operands[0], UnknownNode)
  # A block is a statement kind, not an operand kind
  assert isinstance(operands[1], UnknownNode)
  assert operands[1].type == "block"


def test_json_numbers_are_kept_as_text():
  doc = program(func("f", [], op("print", num(3), num(2.5))))
  operands = program_from_dict(doc).functions[0].body.statements[0].operands
  assert [o.value for o in operands] == ["3", "2.5"]


def test_nodes_are_frozen(sample_program_dict):
  prog = program_from_dict(sample_program_dict)
  with pytest.raises(ValidationError):
    prog.functions[0].name = "renamed"


def test_parse_program_from_text(sample_program_dict):
  prog = parse_program(json.dumps(sample_program_dict))
  assert len(prog.functions) == 2


def test_invalid_json_raises_load_error(tmp_path):
  path = tmp_path / "broken.json"
  path.write_text("{not json", encoding="utf-8")
  with pytest.raises(ProgramLoadError) as exc:
    load_program(path)
  assert exc.value.path == path
  assert "invalid JSON" in str(exc.value)


def test_missing_file_raises_load_error(tmp_path):
  with pytest.raises(ProgramLoadError) as exc:
    load_program(tmp_path / "nope.json")
  assert "cannot read file" in exc.value.reason


def test_top_level_must_be_object():
  with pytest.raises(ProgramLoadError):
    parse_program("[1, 2, 3]")


def test_schema_mismatch_raises_load_error():
  with pytest.raises(ProgramLoadError):
    program_from_dict({"functions": [{"name": "f", "parameters": "not-a-list"}]})


def test_load_error_is_a_value_error():
  assert issubclass(ProgramLoadError, ValueError)


def test_deeply_nested_json_raises_load_error():
  depth = 100000
  text = '{"functions": ' + "[" * depth + "]" * depth + "}"
  with pytest.raises(ProgramLoadError) as exc:
    parse_program(text)
  assert "nested too deeply" in exc.value.reason


@pytest.mark.skipif(not getattr(sys, "get_int_max_str_digits", lambda: 0)(), reason="no integer digit limit")
def test_oversized_integer_raises_load_error():
  text = '{"functions": [], "x": ' + "1" * (sys.get_int_max_str_digits() + 100) + "}"
  with pytest.raises(ProgramLoadError) as exc:
    parse_program(text)
  assert "invalid JSON" in exc.value.reason


def test_keys_match_case_insensitively():
  doc = {
    "Functions": [
      {
        "NAME": "f",
        "Parameters": ["a"],
        "Body": {
          "Statements": [
            {"Type": "function_call", "Called_Function": "f", "Arguments": [{"TYPE": "variable", "Variable": "a"}]},
            {"type": "operation", "OPERATION_TYPE": "print", "OPERANDS": [{"type": "numerical", "Value": "1"}]},
          ]
        },
      }
    ]
  }
  function = program_from_dict(doc).functions[0]
  assert function.name == "f"
  assert function.parameters == ("a",)
  call_stmt, print_stmt = function.body.statements
  assert isinstance(call_stmt, FunctionCallNode)
  assert call_stmt.called_function == "f"
  assert isinstance(call_stmt.arguments[0], VariableNode)
  assert call_stmt.arguments[0].variable == "a"
  assert isinstance(print_stmt, OperationNode)
  assert print_stmt.operation_type == "print"
  assert print_stmt.operands[0].value == "1"


def test_last_spelling_of_a_key_wins():
  prog = program_from_dict({"functions": [{"name": "first", "Name": "second", "NAME": None}]})
  assert prog.functions[0].name == "second"


def test_tag_values_stay_case_sensitive():
  prog = program_from_dict(program(func("f", [], {"type": "Block", "block": {"statements": []}})))
  assert isinstance(prog.functions[0].body.statements[0], UnknownNode)
