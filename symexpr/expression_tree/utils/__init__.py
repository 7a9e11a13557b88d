"""Utilities for expression trees."""

from .sympy_utils import from_sympy, latex_representation
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_type,
    find_nodes_by_operator, get_constants, get_variables,
    get_variable_usage_counts
)

__all__ = [
    'from_sympy', 'latex_representation',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_type',
    'find_nodes_by_operator', 'get_constants', 'get_variables',
    'get_variable_usage_counts'
]
