import numpy as np
import numba
from enum import Enum, IntEnum
from typing import Dict, Tuple

class NodeType(IntEnum):
  VARIABLE = 0
  VALUE = 1
  BINARY_OP = 2
  BRACKET = 3

class OpType(IntEnum):
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW = 4

class BracketKind(Enum):
  ROUND = 'round'
  SQUARE = 'square'
  CURLY = 'curly'

class Priority(IntEnum):
  """Binding tightness of a node. Higher binds tighter."""
  ADDITIVE = 1
  MULTIPLICATIVE = 2
  POWER = 3
  ATOM = 4

  @classmethod
  def of(cls, op_type: OpType) -> 'Priority':
    return OP_PRIORITY[OpType(op_type)]

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV, '^': OpType.POW}
OPERATOR_SYMBOLS: Dict[OpType, str] = {op_type: symbol for symbol, op_type in BINARY_OP_MAP.items()}

OP_PRIORITY: Dict[OpType, Priority] = {
  OpType.ADD: Priority.ADDITIVE,
  OpType.SUB: Priority.ADDITIVE,
  OpType.MUL: Priority.MULTIPLICATIVE,
  OpType.DIV: Priority.MULTIPLICATIVE,
  OpType.POW: Priority.POWER,
}

BRACKET_SYMBOLS: Dict[BracketKind, Tuple[str, str]] = {
  BracketKind.ROUND: ('(', ')'),
  BracketKind.SQUARE: ('[', ']'),
  BracketKind.CURLY: ('{', '}'),
}

# Equal ranks chain from the left without brackets; powers never do.
LEFT_ASSOCIATIVE = frozenset({Priority.ADDITIVE, Priority.MULTIPLICATIVE})


def needs_wrap(child_rank: Priority, parent_rank: Priority, child_is_leaf: bool,
               is_left: bool = False) -> bool:
  """
  Decide whether an operand must be printed inside round brackets.

  Args:
      child_rank: priority of the operand
      parent_rank: priority of the binary node holding it
      child_is_leaf: leaves are never wrapped
      is_left: whether the operand is the left one

  Returns:
      True when the operand needs brackets to keep its grouping when re-read
  """
  if child_is_leaf:
    return False
  if child_rank > parent_rank:
    return False
  if child_rank < parent_rank:
    return True
  return not (is_left and parent_rank in LEFT_ASSOCIATIVE)


def resolve_operator(operator) -> OpType:
  """Accept either an OpType or its symbol."""
  if isinstance(operator, OpType):
    return operator
  if operator in BINARY_OP_MAP:
    return BINARY_OP_MAP[operator]
  if operator == '**':
    return OpType.POW
  raise ValueError(f"Unknown binary operator: {operator!r}")


@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_op_fast(left_val, right_val, op_type):
  # Works on scalars and arrays alike. error_model='numpy' returns nan/inf
  # instead of raising; divisors are checked for zero by the caller.
  if op_type == OpType.ADD:
    return left_val + right_val
  elif op_type == OpType.SUB:
    return left_val - right_val
  elif op_type == OpType.MUL:
    return left_val * right_val
  elif op_type == OpType.DIV:
    return left_val / right_val
  elif op_type == OpType.POW:
    return np.power(left_val, right_val)
  return left_val * np.nan
