"""Failures raised while evaluating an expression tree."""


class EvaluationError(ArithmeticError):
  """Base class for everything ``evaluate`` can raise."""


class ZeroDivision(EvaluationError, ZeroDivisionError):
  """The right operand of a division evaluated to exactly zero."""

  def __init__(self, dividend=None):
    super().__init__("division by zero")
    self.dividend = dividend


class UnknownVariable(EvaluationError, LookupError):
  """A variable had no entry in the supplied bindings."""

  def __init__(self, name: str):
    super().__init__(f"no value bound to variable {name!r}")
    self.name = name

  def __eq__(self, other):
    if not isinstance(other, UnknownVariable):
      return NotImplemented
    return self.name == other.name

  def __hash__(self):
    return hash((UnknownVariable, self.name))
