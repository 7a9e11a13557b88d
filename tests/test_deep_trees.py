import copy
import sys

from numpy.testing import assert_array_equal

from symexpr import Expression, add, power, value, variable
from symexpr.expression_tree.utils import calculate_tree_depth, get_all_nodes, get_variables

x = variable('x')

TERMS = 2000


def build_long_sum(terms=TERMS):
    expr = value(0)
    for _ in range(terms):
        expr = expr + x
    return expr


def test_long_sum_exceeds_recursion_limit():
    assert TERMS > sys.getrecursionlimit()


def test_long_sum_displays():
    text = build_long_sum().to_string()
    assert text == "0" + " + x" * TERMS
    assert "(" not in text
    assert repr(build_long_sum(3)) == (
        "BinaryOpNode('+', BinaryOpNode('+', BinaryOpNode('+', "
        "ValueNode(0.0), VariableNode('x')), VariableNode('x')), VariableNode('x'))"
    )
    assert repr(build_long_sum()).startswith("BinaryOpNode(")


def test_long_sum_evaluates():
    expr = build_long_sum()
    assert expr.evaluate({'x': 1.5}) == 1.5 * TERMS
    assert_array_equal(expr.evaluate_batch({'x': [1.0, 2.0]}), [TERMS, 2.0 * TERMS])


def test_long_sum_hashes_and_compares():
    first = build_long_sum()
    second = build_long_sum()
    assert hash(first) == hash(second)
    assert first == second
    assert first != build_long_sum(TERMS - 1)
    assert len({first, second}) == 1


def test_long_sum_size_depth_and_copy():
    expr = build_long_sum()
    assert expr.size() == 2 * TERMS + 1
    assert calculate_tree_depth(expr) == TERMS + 1
    assert len(get_all_nodes(expr, 'depth_first')) == 2 * TERMS + 1
    assert get_variables(expr) == ['x']
    duplicate = copy.deepcopy(expr)
    assert duplicate == expr
    assert duplicate.left is not expr.left


def test_long_power_tower_brackets_every_level():
    expr = x
    for _ in range(TERMS):
        expr = power(expr, 1)
    text = Expression(expr).to_string()
    assert text.count("(") == TERMS - 1
    assert expr.evaluate({'x': 3}) == 3.0


def test_shared_subtree_is_reused():
    shared = add(x, 1)
    expr = shared
    for _ in range(40):
        expr = add(expr, expr)
    # 2 ** 40 copies of the shared subtree if the sharing were expanded
    assert expr.evaluate({'x': 0}) == float(2 ** 40)
    assert hash(expr) == hash(add(expr.left, expr.right))
