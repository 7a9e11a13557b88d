import sympy as sp
from ..core.node import Node, ValueNode, VariableNode, BinaryOpNode
from ..core.operators import OpType


def latex_representation(node: Node) -> str:
  """Get LaTeX representation of the expression"""
  return sp.latex(node.to_sympy())


def _number_to_node(sympy_expr) -> ValueNode:
  try:
    return ValueNode(float(sympy_expr))
  except TypeError as e:
    raise ValueError(f"Cannot convert non-real number {sympy_expr} to a value") from e


def _fold(op_type: OpType, nodes) -> Node:
  # n-ary sympy operations become left-leaning binary chains
  result = nodes[0]
  for node in nodes[1:]:
    result = BinaryOpNode(op_type, result, node)
  return result


def from_sympy(sympy_expr) -> Node:
  """Convert a sympy expression to our node structure"""
  if isinstance(sympy_expr, str):
    raise ValueError(f"Expected a sympy expression, not text: {sympy_expr!r}")
  try:
    # strict: plain numbers are accepted, anything needing a parser is not
    sympy_expr = sp.sympify(sympy_expr, strict=True)
  except sp.SympifyError as e:
    raise ValueError(f"Unsupported input for from_sympy: {type(sympy_expr).__name__}") from e

  if sympy_expr.is_Symbol:
    return VariableNode(sympy_expr.name)

  if sympy_expr.is_number:
    return _number_to_node(sympy_expr)

  if isinstance(sympy_expr, sp.Pow):
    base, exponent = sympy_expr.args
    if exponent == -1:
      return BinaryOpNode(OpType.DIV, ValueNode(1.0), from_sympy(base))
    return BinaryOpNode(OpType.POW, from_sympy(base), from_sympy(exponent))

  if isinstance(sympy_expr, sp.Add):
    terms = sympy_expr.args
    result = from_sympy(terms[0])
    for term in terms[1:]:
      coeff, _ = term.as_coeff_Mul()
      if coeff.is_negative:
        result = BinaryOpNode(OpType.SUB, result, from_sympy(-term))
      else:
        result = BinaryOpNode(OpType.ADD, result, from_sympy(term))
    return result

  if isinstance(sympy_expr, sp.Mul):
    numerator = []
    denominator = []
    for factor in sympy_expr.args:
      if isinstance(factor, sp.Pow) and factor.exp == -1:
        denominator.append(from_sympy(factor.base))
      else:
        numerator.append(from_sympy(factor))
    result = _fold(OpType.MUL, numerator) if numerator else ValueNode(1.0)
    for node in denominator:
      result = BinaryOpNode(OpType.DIV, result, node)
    return result

  raise ValueError(f"Unsupported sympy expression: {type(sympy_expr).__name__}")
