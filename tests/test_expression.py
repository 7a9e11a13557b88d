import copy
import pickle

import pytest

from symexpr import (
    BinaryOpNode, Equation, Expression, OpType, ONE, TEN, TWO, X, Y, Z, ZERO,
    add, mul, power, value, variable
)
from symexpr.expression_tree import OPERATOR_SYMBOLS, BRACKET_SYMBOLS, BracketKind

x = variable('x')
y = variable('y')
z = variable('z')


def test_facade_behaves_like_its_root():
    expr = Expression(power(x, y)).add(2).mul(z).sub(10)
    assert isinstance(expr, Expression)
    assert expr.to_string() == "(x ^ y + 2) * z - 10"
    assert expr.evaluate({'x': 10, 'y': 3, 'z': 5}) == 5000.0
    assert expr.priority() == expr.root.priority()


def test_facade_operators_return_facades():
    expr = Expression(x)
    assert isinstance(expr + 1, Expression)
    assert isinstance(2 * expr, Expression)
    assert isinstance(y - expr, Expression)
    assert (y - expr).to_string() == "y - x"
    assert (expr ** 2 / y).to_string() == "x ^ 2 / y"


def test_facade_wraps_numbers_and_unwraps_facades():
    assert Expression(3).evaluate() == 3.0
    assert Expression(Expression(x)).root is x


def test_facade_inspection():
    expr = Expression(add(mul(x, y), power(x, z)))
    assert expr.size() == 7
    assert expr.depth() == 3
    assert expr.variables() == ['x', 'y', 'z']


def test_facade_equality():
    assert Expression(add(x, 1)) == Expression(add(x, 1))
    assert Expression(add(x, 1)) == add(x, 1)
    assert add(x, 1) == Expression(add(x, 1))
    assert Expression(add(x, 1)) != Expression(add(x, 2))
    assert hash(Expression(add(x, 1))) == hash(add(x, 1))


def test_structural_equality_and_hashing():
    assert add(x, 1) == add(variable('x'), value(1))
    assert add(x, 1) != add(1, x)
    assert add(x, 1) != mul(x, 1)
    assert len({add(x, 1), add(x, 1), add(x, 2)}) == 2
    assert variable('x') == variable('x')
    assert variable('x') != variable('y')


def test_nan_values_never_compare_equal():
    nan = value(float('nan'))
    assert nan != value(float('nan'))
    assert value(1.0) == value(1)


def test_nodes_are_immutable():
    expr = add(x, 1)
    with pytest.raises(AttributeError):
        expr.left = y
    with pytest.raises(AttributeError):
        x.name = 'y'
    with pytest.raises(AttributeError):
        del expr.right


def test_combining_twice_leaves_operands_untouched():
    base = add(x, y)
    first = mul(base, z)
    second = power(base, 2)
    assert base.to_string() == "x + y"
    assert first.to_string() == "(x + y) * z"
    assert second.to_string() == "(x + y) ^ 2"


def test_copy_is_deep_and_equal():
    expr = add(mul(x, 2), y)
    duplicate = expr.copy()
    assert duplicate == expr
    assert duplicate is not expr
    assert duplicate.left is not expr.left
    assert copy.deepcopy(expr) == expr
    assert copy.copy(expr) == expr


def test_pickle_preserves_structure():
    expr = add(mul(x, 2), y).bracket('square')
    assert pickle.loads(pickle.dumps(expr)) == expr


def test_children_and_predicates():
    expr = add(x, 2)
    assert expr.children() == (x, value(2))
    assert x.children() == ()
    assert x.is_leaf and x.is_variable and not x.is_value
    assert value(1).is_leaf and value(1).is_value
    assert not expr.is_leaf
    assert not expr.bracket().is_leaf


def test_binary_node_accepts_symbols():
    node = BinaryOpNode('^', x, 2)
    assert node.op_type == OpType.POW
    assert node.operator == '^'
    assert BinaryOpNode('**', x, 2) == node
    with pytest.raises(ValueError):
        BinaryOpNode('%', x, 2)


def test_variable_names_must_be_non_empty_strings():
    with pytest.raises(ValueError):
        variable('')
    with pytest.raises(ValueError):
        variable(3)


def test_literals():
    assert (X + Y * Z).to_string() == "x + y * z"
    assert ZERO.value == 0.0
    assert ONE.value == 1.0
    assert TWO.value == 2.0
    assert TEN.value == 10.0
    assert OPERATOR_SYMBOLS[OpType.DIV] == '/'
    assert BRACKET_SYMBOLS[BracketKind.CURLY] == ('{', '}')


def test_equation():
    equation = Equation(add(x, 1), 3)
    assert equation.to_string() == "x + 1 = 3"
    assert str(equation) == "x + 1 = 3"
    assert equation.evaluate({'x': 2}) == (3.0, 3.0)
    assert equation.residual({'x': 5}) == 3.0
    assert equation.is_satisfied({'x': 2})
    assert not equation.is_satisfied({'x': 2.5})
    assert equation == Equation(add(x, 1), value(3))


def test_tree_holding_nan_is_not_equal_to_itself():
    expr = add(value(float('nan')), x)
    assert expr != expr
    assert expr != add(value(float('nan')), x)
    assert add(value(1), x) == add(value(1), x)
