import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from symexpr import UnknownVariable, ZeroDivision, add, div, power, value, variable

x = variable('x')
y = variable('y')


def test_columns_are_evaluated_elementwise():
    expr = x * 2 + y
    result = expr.evaluate_batch({'x': [1, 2, 3], 'y': [0, 1, 2]})
    assert isinstance(result, np.ndarray)
    assert_array_equal(result, [2.0, 5.0, 8.0])


def test_batch_matches_scalar_evaluation():
    expr = power(x, y).add(value(2)).mul(variable('z')).sub(value(10))
    columns = {'x': np.array([10.0, 2.0]), 'y': np.array([3.0, 2.0]), 'z': np.array([5.0, 1.0])}
    expected = [
        expr.evaluate({name: column[i] for name, column in columns.items()})
        for i in range(2)
    ]
    assert_allclose(expr.evaluate_batch(columns), expected)


def test_constants_broadcast_to_one_sample_without_columns():
    assert_array_equal(add(value(1), value(2)).evaluate_batch(), [3.0])


def test_constants_broadcast_to_column_length():
    assert_array_equal(add(x, value(1)).evaluate_batch({'x': np.zeros(4)}), np.ones(4))


def test_input_columns_are_not_returned_or_modified():
    column = np.array([1.0, 2.0])
    result = x.evaluate_batch({'x': column})
    result[0] = 99.0
    assert column[0] == 1.0


def test_mismatched_column_lengths():
    with pytest.raises(ValueError):
        add(x, y).evaluate_batch({'x': [1, 2], 'y': [1, 2, 3]})


def test_columns_must_be_one_dimensional():
    with pytest.raises(ValueError):
        x.evaluate_batch({'x': np.ones((2, 2))})


def test_zero_anywhere_in_divisor_raises():
    with pytest.raises(ZeroDivision):
        div(value(1), x).evaluate_batch({'x': [1.0, 0.0, 2.0]})


def test_unbound_column():
    with pytest.raises(UnknownVariable):
        add(x, y).evaluate_batch({'x': [1.0]})


def test_invalid_power_gives_nan_element():
    result = power(x, value(0.5)).evaluate_batch({'x': [4.0, -4.0]})
    assert result[0] == 2.0
    assert np.isnan(result[1])


def test_non_numeric_column_is_rejected():
    with pytest.raises(TypeError):
        x.evaluate_batch({'x': ["1", "2"]})
