"""symexpr

Symbolic arithmetic expressions: build a formula tree, print it with the
brackets it needs, evaluate it with variable bindings.
"""

from .expression_tree import (
  Expression, Node, ValueNode, VariableNode, BinaryOpNode, BracketNode, Equation,
  value, variable, add, sub, mul, div, power, bracket,
  OpType, BracketKind, Priority, needs_wrap,
  EvaluationError, ZeroDivision, UnknownVariable,
  X, Y, Z, ZERO, ONE, TWO, TEN,
  from_sympy, latex_representation
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "ValueNode", "VariableNode", "BinaryOpNode", "BracketNode", "Equation",
  "value", "variable", "add", "sub", "mul", "div", "power", "bracket",
  "OpType", "BracketKind", "Priority", "needs_wrap",
  "EvaluationError", "ZeroDivision", "UnknownVariable",
  "X", "Y", "Z", "ZERO", "ONE", "TWO", "TEN",
  "from_sympy", "latex_representation",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
