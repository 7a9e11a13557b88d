"""Core expression tree components."""

from .node import (
  Node, ValueNode, VariableNode, BinaryOpNode, BracketNode,
  value, variable, add, sub, mul, div, power, bracket, as_node, format_value
)
from .operators import (
  NodeType, OpType, BracketKind, Priority,
  BINARY_OP_MAP, OPERATOR_SYMBOLS, BRACKET_SYMBOLS,
  needs_wrap, evaluate_binary_op_fast
)
from .errors import EvaluationError, ZeroDivision, UnknownVariable
from .equation import Equation

__all__ = [
  'Node', 'ValueNode', 'VariableNode', 'BinaryOpNode', 'BracketNode',
  'value', 'variable', 'add', 'sub', 'mul', 'div', 'power', 'bracket', 'as_node', 'format_value',
  'NodeType', 'OpType', 'BracketKind', 'Priority',
  'BINARY_OP_MAP', 'OPERATOR_SYMBOLS', 'BRACKET_SYMBOLS',
  'needs_wrap', 'evaluate_binary_op_fast',
  'EvaluationError', 'ZeroDivision', 'UnknownVariable',
  'Equation'
]
