import numpy as np
import sympy as sp
from typing import Any, List, Mapping, Optional, Union
from .core.node import Node, BinaryOpNode, BracketNode, Bindings, as_node
from .core.operators import OpType, BracketKind, Priority
from .utils.tree_utils import calculate_tree_depth, get_variables
from .utils.sympy_utils import latex_representation, from_sympy
from ..logging_system import LogLevel, log_info


class Expression:
  """Wrapper around any node that behaves exactly like the node it holds"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root):
    self.root: Node = as_node(root)
    self._string_cache: Optional[str] = None

  def evaluate(self, bindings: Optional[Bindings] = None) -> float:
    return self.root.evaluate(bindings)

  def evaluate_batch(self, columns: Optional[Mapping[Any, Any]] = None) -> np.ndarray:
    return self.root.evaluate_batch(columns)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def display(self) -> str:
    return self.to_string()

  def priority(self) -> Priority:
    return self.root.priority()

  def copy(self) -> 'Expression':
    return Expression(self.root.copy())

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def variables(self) -> List[str]:
    return get_variables(self.root)

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def latex(self) -> str:
    return latex_representation(self.root)

  @classmethod
  def from_sympy(cls, sympy_expr: sp.Expr) -> 'Expression':
    expr = cls(from_sympy(sympy_expr))
    log_info(f"Converted sympy expression {sympy_expr} to {expr}", LogLevel.DETAILED)
    return expr

  def _combine(self, op_type: OpType, other, reflected: bool = False):
    try:
      other = as_node(other)
    except TypeError:
      return NotImplemented
    if reflected:
      return Expression(BinaryOpNode(op_type, other, self.root))
    return Expression(BinaryOpNode(op_type, self.root, other))

  def add(self, other) -> 'Expression':
    return Expression(BinaryOpNode(OpType.ADD, self.root, as_node(other)))

  def sub(self, other) -> 'Expression':
    return Expression(BinaryOpNode(OpType.SUB, self.root, as_node(other)))

  def mul(self, other) -> 'Expression':
    return Expression(BinaryOpNode(OpType.MUL, self.root, as_node(other)))

  def div(self, other) -> 'Expression':
    return Expression(BinaryOpNode(OpType.DIV, self.root, as_node(other)))

  def pow(self, other) -> 'Expression':
    return Expression(BinaryOpNode(OpType.POW, self.root, as_node(other)))

  def bracket(self, kind: Union[BracketKind, str] = BracketKind.ROUND) -> 'Expression':
    return Expression(BracketNode(self.root, kind))

  def __add__(self, other):
    return self._combine(OpType.ADD, other)

  def __radd__(self, other):
    return self._combine(OpType.ADD, other, reflected=True)

  def __sub__(self, other):
    return self._combine(OpType.SUB, other)

  def __rsub__(self, other):
    return self._combine(OpType.SUB, other, reflected=True)

  def __mul__(self, other):
    return self._combine(OpType.MUL, other)

  def __rmul__(self, other):
    return self._combine(OpType.MUL, other, reflected=True)

  def __truediv__(self, other):
    return self._combine(OpType.DIV, other)

  def __rtruediv__(self, other):
    return self._combine(OpType.DIV, other, reflected=True)

  def __pow__(self, other):
    return self._combine(OpType.POW, other)

  def __rpow__(self, other):
    return self._combine(OpType.POW, other, reflected=True)

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if isinstance(other, Expression):
      return self.root == other.root
    if isinstance(other, Node):
      return self.root == other
    return NotImplemented

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.root!r})"
