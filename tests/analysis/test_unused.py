"""
Tests for UnusedVariableFinder.
"""

from builders import assign, block, build, call, declare, deep_blocks, deep_calls, deep_operations, func, num, op, program, var
from scopecheck.analysis.unused import QualifiedName, find_unused_symbols, find_unused_variables
from scopecheck.model.nodes import Block, Function, OperationNode, Program, VariableDeclaration, VariableNode


def unused(document, **kwargs):
  return find_unused_variables(build(document), **kwargs)


def test_function_without_variables_reports_nothing():
  doc = program(func("myFunction", []))
  assert unused(doc) == set()


def test_one_unused_variable():
  doc = program(
    func(
      "myFunction",
      [],
      declare("result"),
      declare("x"),
      assign("x", num("1")),
      assign("result", var("x")),
    )
  )
  assert unused(doc) == {"myFunction_result"}


def test_unused_parameter_and_local():
  doc = program(func("myFunction", ["param_1"], declare("result")))
  assert unused(doc) == {"myFunction_param_1", "myFunction_result"}


def test_variable_used_as_call_argument():
  doc = program(
    func("helper", ["p"], op("print", var("p"))),
    func("main", [], declare("x"), assign("x", num("3")), call("helper", var("x"))),
  )
  assert unused(doc) == set()


def test_assignment_target_is_not_a_use():
  doc = program(func("f", [], declare("x"), assign("x", num("1"))))
  assert unused(doc) == {"f_x"}


def test_first_operand_of_other_operations_is_a_use():
  doc = program(func("f", ["a"], op("print", var("a"))))
  assert unused(doc) == set()


def test_nested_calls_and_operations_mark_usage():
  doc = program(
    func("g", ["p"], op("print", var("p"))),
    func(
      "f",
      ["a", "b", "c"],
      declare("r"),
      assign("r", op("addition", var("a"), call("g", op("multiplication", var("b"), num("2"))))),
      call("g", call("g", var("c"))),
      op("print", var("r")),
    ),
  )
  assert unused(doc) == set()


def test_nested_assignment_target_is_not_a_use():
  doc = program(func("f", [], declare("x"), op("print", assign("x", num("1")))))
  assert unused(doc) == {"f_x"}


def test_unused_variables_in_nested_blocks():
  doc = program(
    func(
      "main",
      [],
      declare("x"),
      assign("x", num("1")),
      block(
        declare("y"),
        block(declare("z"), op("print", var("x"))),
      ),
    )
  )
  assert unused(doc) == {"main_y", "main_z"}


def test_same_name_in_two_functions_is_tracked_separately():
  doc = program(
    func("main", [], declare("result"), assign("result", num("1"))),
    func("helper", [], declare("result"), assign("result", num("2")), op("print", var("result"))),
  )
  assert unused(doc) == {"main_result"}


def test_redeclaration_resets_usage():
  doc = program(func("f", [], declare("x"), op("print", var("x")), declare("x")))
  assert unused(doc) == {"f_x"}


def test_custom_separator():
  doc = program(func("f", ["a"]))
  assert unused(doc, separator="::") == {"f::a"}


def test_structured_names_do_not_collide():
  # Both render to "f_x_y" with the default separator
  doc = program(func("f", ["x_y"]), func("f_x", ["y"]))
  symbols = find_unused_symbols(build(doc))
  assert symbols == {QualifiedName("f", "x_y"), QualifiedName("f_x", "y")}
  assert unused(doc) == {"f_x_y"}
  assert unused(doc, separator=".") == {"f.x_y", "f_x.y"}


def test_qualified_name_render():
  name = QualifiedName("main", "count")
  assert name.render() == "main_count"
  assert name.render("/") == "main/count"


def test_sample_program(sample_program_dict):
  assert unused(sample_program_dict) == {"main_y"}


def test_deeply_nested_uses_are_found():
  depth = 5000
  body = Block(
    statements=(
      VariableDeclaration(variable="x"),
      VariableDeclaration(variable="y"),
      deep_blocks(depth, OperationNode(operation_type="print", operands=(VariableNode(variable="x"),))),
      OperationNode(operation_type="print", operands=(deep_operations(depth, VariableNode(variable="b")),)),
      deep_calls(depth, VariableNode(variable="c"), "f"),
    )
  )
  prog = Program(functions=(Function(name="f", parameters=("a", "b", "c"), body=body),))
  assert find_unused_variables(prog) == {"f_a", "f_y"}
