import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from symexpr import (
  Expression, Equation, LogLevel, UnknownVariable, ZeroDivision,
  configure_logging, div, power, value, variable
)

def build_example():
  """(x ^ y + 2) * z - 10"""
  x, y, z = variable('x'), variable('y'), variable('z')
  return Expression(power(x, y)).add(value(2)).mul(z).sub(value(10))

def main():
  configure_logging(LogLevel.VERBOSE)

  expr = build_example()
  bindings = {'x': 10.0, 'y': 3.0, 'z': 5.0}
  print(f"Expression: {expr}")
  print(f"Variables:  {expr.variables()}")
  print(f"Value:      {expr.evaluate(bindings)}")
  print(f"LaTeX:      {expr.latex()}")

  columns = {'x': np.linspace(1, 3, 5), 'y': np.full(5, 2.0), 'z': np.arange(5.0)}
  print(f"Batch:      {expr.evaluate_batch(columns)}")

  try:
    expr.evaluate({'x': 10.0})
  except UnknownVariable as e:
    print(f"Missing binding: {e.name}")

  try:
    div(value(2), value(0)).evaluate()
  except ZeroDivision as e:
    print(f"Failed: {e}")

  equation = Equation(expr.root, 5000)
  print(f"{equation} holds: {equation.is_satisfied(bindings)}")

if __name__ == "__main__":
  main()
