"""Ready-made leaves and the symbol tables used for display."""

from .core.node import ValueNode, VariableNode
from .core.operators import OPERATOR_SYMBOLS, BRACKET_SYMBOLS

X = VariableNode('x')
Y = VariableNode('y')
Z = VariableNode('z')

ZERO = ValueNode(0.0)
ONE = ValueNode(1.0)
TWO = ValueNode(2.0)
TEN = ValueNode(10.0)

__all__ = ['X', 'Y', 'Z', 'ZERO', 'ONE', 'TWO', 'TEN', 'OPERATOR_SYMBOLS', 'BRACKET_SYMBOLS']
