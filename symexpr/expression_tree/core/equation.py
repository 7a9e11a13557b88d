import sympy as sp
from typing import Optional, Tuple
from .node import Node, Bindings, as_node


class Equation:
  """Two expressions related by equality. Kept for display and checking, not solving."""

  __slots__ = ('lhs', 'rhs')

  def __init__(self, lhs, rhs):
    self.lhs: Node = as_node(lhs)
    self.rhs: Node = as_node(rhs)

  def evaluate(self, bindings: Optional[Bindings] = None) -> Tuple[float, float]:
    return self.lhs.evaluate(bindings), self.rhs.evaluate(bindings)

  def residual(self, bindings: Optional[Bindings] = None) -> float:
    left_val, right_val = self.evaluate(bindings)
    return left_val - right_val

  def is_satisfied(self, bindings: Optional[Bindings] = None, tolerance: float = 1e-9) -> bool:
    return abs(self.residual(bindings)) <= tolerance

  def to_string(self) -> str:
    return f"{self.lhs.to_string()} = {self.rhs.to_string()}"

  def to_sympy(self) -> sp.Eq:
    return sp.Eq(self.lhs.to_sympy(), self.rhs.to_sympy(), evaluate=False)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Equation):
      return NotImplemented
    return self.lhs == other.lhs and self.rhs == other.rhs

  def __hash__(self) -> int:
    return hash((Equation, self.lhs, self.rhs))

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Equation({self.lhs!r}, {self.rhs!r})"
