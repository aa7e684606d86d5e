import math
import numpy as np
import pytest
import sympy as sp

from exprparse import (
  Expression, CompileState, ErrorPolicy, Status, create_variable, set_variable,
  ConstantNode, OperatorNode, OpType
)
from exprparse.expression_tree import trees_equivalent


def test_variable_reads_current_value():
  """An expression consisting of a single variable returns its value"""
  for value in (0.0, -3.5, 1e10):
    x = create_variable(value)
    expr = Expression()
    assert expr.register_variable("x", x) is Status.SUCCESS
    assert expr.parse("x") is Status.SUCCESS
    result, status = expr.evaluate()
    assert status is Status.SUCCESS
    assert result == value


def test_binding_updates_visible_without_recompiling():
  x = create_variable(2.0)
  y = create_variable(1.0)
  expr = Expression()
  expr.register_variable("x", x)
  expr.register_variable("y", y)
  assert expr.parse("x * 3 + y") is Status.SUCCESS

  assert expr.evaluate() == (7.0, Status.SUCCESS)
  set_variable(x, 5.0)
  y.value = -1.0
  assert expr.evaluate() == (14.0, Status.SUCCESS)


def test_precedence_and_grouping():
  expr = Expression()
  assert expr.parse("1+2*3") is Status.SUCCESS
  assert expr.evaluate()[0] == 7

  assert expr.parse("(1+2)*3") is Status.SUCCESS
  assert expr.evaluate()[0] == 9


def test_right_leaning_subtraction():
  expr = Expression()
  expr.parse("8-3-2")
  assert expr.evaluate() == (7, Status.SUCCESS)


def test_left_associative_option():
  expr = Expression(associativity='left')
  expr.parse("8-3-2")
  assert expr.evaluate() == (3, Status.SUCCESS)


def test_unary_minus():
  expr = Expression()
  expr.parse("-5+2")
  assert expr.evaluate() == (-3, Status.SUCCESS)


def test_whitespace_is_ignored():
  expr = Expression()
  sq = lambda v: v * v
  expr.register_function("sq", sq)
  assert expr.parse("  sq ( 1 +\t2 )\n* 2 ") is Status.SUCCESS
  assert expr.evaluate() == (18, Status.SUCCESS)


def test_function_call():
  expr = Expression()
  assert expr.register_function("sq", lambda v: v * v) is Status.SUCCESS
  assert expr.parse("sq(3)") is Status.SUCCESS
  assert expr.evaluate() == (9, Status.SUCCESS)


def test_function_with_math_module():
  x = create_variable(0.25)
  expr = Expression()
  expr.register_variable("x", x)
  expr.register_function("sqrt", math.sqrt)
  expr.register_function("sin", np.sin)
  expr.parse("sqrt(x) + sin(0)")
  result, status = expr.evaluate()
  assert status is Status.SUCCESS
  assert np.isclose(result, 0.5)


def test_unregistered_function():
  expr = Expression()
  assert expr.parse("nope(3)") is Status.UNREGISTERED_SYMBOL
  assert not expr.is_compiled


def test_division_by_zero():
  expr = Expression()
  expr.parse("1/0")
  result, status = expr.evaluate()
  assert status is Status.DIVISION_BY_ZERO
  assert result == 0


def test_division_by_zero_variable():
  d = create_variable(0.0)
  expr = Expression()
  expr.register_variable("d", d)
  expr.parse("10/d")
  assert expr.evaluate() == (0, Status.DIVISION_BY_ZERO)

  # the tree stays usable after an evaluation error
  d.set(4.0)
  assert expr.evaluate() == (2.5, Status.SUCCESS)


def test_division_error_is_retained_by_default():
  """The trailing addition does not reset the status"""
  expr = Expression()
  expr.parse("1/0+5")
  assert expr.evaluate() == (5, Status.DIVISION_BY_ZERO)


def test_division_error_last_write_wins():
  expr = Expression(error_policy=ErrorPolicy.LAST_WRITE_WINS)
  expr.parse("1/0+5")
  assert expr.evaluate() == (5, Status.SUCCESS)

  # the enclosing addition completes last and hides the error
  expr.parse("5+1/0")
  assert expr.evaluate() == (5, Status.SUCCESS)

  # function calls do not write the channel
  expr.register_function("f", lambda v: v + 1)
  expr.parse("f(4/0)")
  assert expr.evaluate() == (1, Status.DIVISION_BY_ZERO)


def test_division_error_short_circuit():
  expr = Expression(error_policy='short_circuit')
  expr.parse("1/0+5")
  assert expr.evaluate() == (0, Status.DIVISION_BY_ZERO)


def test_both_children_evaluated_after_error():
  calls = []

  def record(v):
    calls.append(v)
    return v

  expr = Expression()
  expr.register_function("record", record)
  expr.parse("1/0+record(2)")
  result, status = expr.evaluate()
  assert calls == [2]
  assert result == 2
  assert status is Status.DIVISION_BY_ZERO


def test_not_compiled():
  expr = Expression()
  assert expr.evaluate() == (0, Status.NOT_COMPILED)
  assert expr.state is CompileState.EMPTY


def test_failed_parse_keeps_registry():
  x = create_variable(3.0)
  expr = Expression()
  expr.register_variable("x", x)
  assert expr.state is CompileState.POPULATED

  assert expr.parse("(x+") is Status.SYNTAX_ERROR
  assert expr.state is CompileState.FAILED
  assert expr.evaluate() == (0, Status.NOT_COMPILED)

  # retry without registering again
  assert expr.parse("(x+1)") is Status.SUCCESS
  assert expr.state is CompileState.COMPILED
  assert expr.evaluate() == (4, Status.SUCCESS)


def test_deeply_nested_text_reports_status():
  x = create_variable(1.0)
  expr = Expression()
  expr.register_variable("x", x)

  assert expr.parse("+".join(["x"] * 2000)) is Status.NESTING_TOO_DEEP
  assert expr.state is CompileState.FAILED
  assert expr.evaluate() == (0, Status.NOT_COMPILED)

  # bindings survive the failure
  assert expr.parse("+".join(["x"] * 50)) is Status.SUCCESS
  assert expr.evaluate() == (50, Status.SUCCESS)


def test_deeply_nested_tree_reports_status():
  expr = Expression()
  assert expr.parse("1") is Status.SUCCESS
  root = expr.root
  for _ in range(5000):
    root = OperatorNode(OpType.ADD, ConstantNode(np.float64(1)), root)
  expr.root = root

  assert expr.evaluate() == (0, Status.NESTING_TOO_DEEP)


def test_successful_parse_clears_registry():
  x = create_variable(3.0)
  expr = Expression()
  expr.register_variable("x", x)
  assert expr.parse("x") is Status.SUCCESS
  assert len(expr.registry) == 0

  # a new parse no longer sees x and drops the old tree
  assert expr.parse("x*2") is Status.UNREGISTERED_SYMBOL
  assert expr.evaluate() == (0, Status.NOT_COMPILED)


def test_reparse_replaces_tree():
  expr = Expression()
  expr.parse("1+1")
  expr.parse("2*5")
  assert expr.evaluate() == (10, Status.SUCCESS)
  assert expr.to_string() == "(2 * 5)"


def test_registration_after_compile_does_not_touch_tree():
  expr = Expression()
  expr.parse("2")
  assert expr.register_variable("x", create_variable(1.0)) is Status.SUCCESS
  assert expr.state is CompileState.COMPILED
  assert expr.is_compiled
  assert expr.evaluate() == (2, Status.SUCCESS)


def test_round_trip_structural_equivalence():
  x = create_variable(1.5)
  sq = lambda v: v * v
  trees = []
  for _ in range(2):
    expr = Expression()
    expr.register_variable("x", x)
    expr.register_function("sq", sq)
    assert expr.parse("sq(x) - 3*(x+1)/2") is Status.SUCCESS
    trees.append(expr)

  first, second = trees
  assert first.root is not second.root
  assert trees_equivalent(first.root, second.root)
  assert first == second
  assert first.evaluate() == second.evaluate()

  x.set(-2.0)
  assert first.evaluate() == second.evaluate()


def test_float32_expression():
  x = create_variable(1.5, dtype=np.float32)
  expr = Expression(dtype=np.float32)
  expr.register_variable("x", x)
  expr.parse("x*2+0.25")
  result, status = expr.evaluate()
  assert status is Status.SUCCESS
  assert isinstance(result, np.float32)
  assert result == np.float32(3.25)


def test_variable_dtype_follows_expression():
  x = create_variable(1.5, dtype=np.float32)
  expr = Expression()
  expr.register_variable("x", x)
  expr.parse("x")
  result, _ = expr.evaluate()
  assert isinstance(result, np.float64)


def test_invalid_options():
  for kwargs in ({'dtype': np.int32}, {'associativity': 'both'}, {'error_policy': 'ignore'}):
    with pytest.raises(ValueError):
      Expression(**kwargs)


def test_from_string():
  x = create_variable(2.0)
  expr = Expression.from_string("x*x+1", variables={"x": x})
  assert expr.evaluate() == (5, Status.SUCCESS)

  with pytest.raises(ValueError, match="SYNTAX_ERROR"):
    Expression.from_string("x*", variables={"x": x})


def test_inspection():
  x = create_variable(1.0)
  y = create_variable(2.0)
  expr = Expression()
  expr.register_variable("x", x)
  expr.register_variable("y", y)
  expr.register_function("f", lambda v: v + 1)
  expr.parse("f(x)*y+x")

  assert expr.size() == 6
  assert expr.depth() == 4
  assert expr.variables() == ["x", "y"]
  assert expr.functions() == ["f"]
  assert expr.to_string() == "((f(x) * y) + x)"


def test_to_sympy_matches_evaluation():
  x = create_variable(3.0)
  y = create_variable(4.0)
  expr = Expression()
  expr.register_variable("x", x)
  expr.register_variable("y", y)
  expr.parse("x+2*y-1/x")

  sym = expr.to_sympy()
  substituted = sym.subs({sp.Symbol("x"): 3.0, sp.Symbol("y"): 4.0})
  assert np.isclose(float(substituted), expr.evaluate()[0])
  assert isinstance(expr.to_latex(), str)
