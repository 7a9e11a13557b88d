"""Expression Tree Module

Expression trees with priority-driven printing and evaluation.
"""

from .expression import Expression
from .core import (
    Node, ValueNode, VariableNode, BinaryOpNode, BracketNode, Equation,
    value, variable, add, sub, mul, div, power, bracket,
    NodeType, OpType, BracketKind, Priority,
    BINARY_OP_MAP, OPERATOR_SYMBOLS, BRACKET_SYMBOLS, needs_wrap,
    EvaluationError, ZeroDivision, UnknownVariable
)
from .literals import X, Y, Z, ZERO, ONE, TWO, TEN
from .utils import from_sympy, latex_representation

__all__ = [
    "Expression",
    "Node", "ValueNode", "VariableNode", "BinaryOpNode", "BracketNode", "Equation",
    "value", "variable", "add", "sub", "mul", "div", "power", "bracket",
    "NodeType", "OpType", "BracketKind", "Priority",
    "BINARY_OP_MAP", "OPERATOR_SYMBOLS", "BRACKET_SYMBOLS", "needs_wrap",
    "EvaluationError", "ZeroDivision", "UnknownVariable",
    "X", "Y", "Z", "ZERO", "ONE", "TWO", "TEN",
    "from_sympy", "latex_representation"
]
