import math
import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from numbers import Real
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union
from .errors import UnknownVariable, ZeroDivision
from .operators import (
  NodeType, OpType, BracketKind, Priority,
  OPERATOR_SYMBOLS, BRACKET_SYMBOLS,
  needs_wrap, resolve_operator, evaluate_binary_op_fast
)
from ...logging_system import log_debug, log_warning

Bindings = Mapping[Any, float]


def format_value(value: float) -> str:
  """Integral values print without a fractional part, the rest as repr()."""
  if math.isfinite(value) and value.is_integer():
    if value == 0 and math.copysign(1.0, value) < 0:
      return "-0"
    return str(int(value))
  return repr(value)


def _coerce(other) -> Optional['Node']:
  if isinstance(other, Node):
    return other
  if isinstance(other, Real) and not isinstance(other, bool):
    return ValueNode(other)
  return None


def as_node(obj) -> 'Node':
  """Turn a node, an Expression wrapper or a plain number into a node."""
  root = getattr(obj, 'root', None)
  if isinstance(root, Node):
    return root
  node = _coerce(obj)
  if node is None:
    raise TypeError(f"Cannot use {type(obj).__name__} as an expression")
  return node


def prepare_columns(columns: Optional[Mapping[Any, Any]]) -> Tuple[Dict[Any, np.ndarray], int]:
  """Convert batch columns to float arrays and check they share one length."""
  prepared = {}
  n_samples = None
  for key, column in (columns or {}).items():
    array = np.asarray(column)
    if array.dtype.kind not in 'iuf':
      raise TypeError(f"Column {key!r} must hold real numbers, got dtype {array.dtype}")
    array = array.astype(np.float64, copy=False)
    if array.ndim != 1:
      raise ValueError(f"Column {key!r} must be one-dimensional, got shape {array.shape}")
    if n_samples is None:
      n_samples = array.shape[0]
    elif array.shape[0] != n_samples:
      raise ValueError(f"Column {key!r} has {array.shape[0]} samples, expected {n_samples}")
    prepared[key] = array
  return prepared, (1 if n_samples is None else n_samples)


def _postorder(root: 'Node', done: Optional[Callable[['Node'], bool]] = None) -> Iterator['Node']:
  """
  Yield every distinct node after its children, left subtree first.

  Iterative, so arbitrarily deep chains never hit the interpreter's
  recursion limit. Subtrees for which `done` returns True are yielded
  without being entered.
  """
  seen = set()
  stack = [(root, False)]
  while stack:
    node, expanded = stack.pop()
    if id(node) in seen:
      continue
    children = node.children()
    if expanded or not children or (done is not None and done(node)):
      seen.add(id(node))
      yield node
    else:
      stack.append((node, True))
      stack.extend((child, False) for child in reversed(children))


def _fold(root: 'Node', step: Callable[['Node', List[Any]], Any]) -> Any:
  """Bottom-up reduction: step(node, child_results) -> result for node."""
  results = {}
  for node in _postorder(root):
    results[id(node)] = step(node, [results[id(child)] for child in node.children()])
  return results[id(root)]


class Node(ABC):
  """Base node class. Nodes are immutable once built."""

  __slots__ = ('_hash_cache', '_size_cache')

  is_leaf = False
  is_value = False
  is_variable = False

  def __init__(self):
    self._set('_hash_cache', None)
    self._set('_size_cache', None)

  def _set(self, name: str, value):
    object.__setattr__(self, name, value)

  def __setattr__(self, name, value):
    raise AttributeError(f"{type(self).__name__} is immutable")

  def __delattr__(self, name):
    raise AttributeError(f"{type(self).__name__} is immutable")

  # Per-node steps, each given the already computed results of its children
  @abstractmethod
  def _evaluate_step(self, operands: List[float], bindings: Optional[Bindings]) -> float:
    pass

  @abstractmethod
  def _evaluate_array_step(self, operands: List[np.ndarray],
                           columns: Mapping[Any, np.ndarray], n_samples: int) -> np.ndarray:
    pass

  @abstractmethod
  def _format(self, operands: List[str]) -> str:
    pass

  @abstractmethod
  def _rebuild(self, children: List['Node']) -> 'Node':
    pass

  @abstractmethod
  def _sympy_step(self, operands: List[sp.Expr]) -> sp.Expr:
    pass

  @abstractmethod
  def priority(self) -> Priority:
    pass

  @abstractmethod
  def children(self) -> Tuple['Node', ...]:
    pass

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  @abstractmethod
  def _same_payload(self, other: 'Node') -> bool:
    pass

  def evaluate(self, bindings: Optional[Bindings] = None) -> float:
    """Evaluate to a float. The left operand is always evaluated before the right."""
    return _fold(self, lambda node, operands: node._evaluate_step(operands, bindings))

  def evaluate_batch(self, columns: Optional[Mapping[Any, Any]] = None) -> np.ndarray:
    """
    Evaluate the tree for many samples at once.

    Args:
        columns: variable name (or VariableNode) -> one-dimensional samples

    Returns:
        Array with one result per sample
    """
    prepared, n_samples = prepare_columns(columns)
    return self._evaluate_array(prepared, n_samples)

  def _evaluate_array(self, columns: Mapping[Any, np.ndarray], n_samples: int) -> np.ndarray:
    return _fold(self, lambda node, operands: node._evaluate_array_step(operands, columns, n_samples))

  def to_string(self) -> str:
    return _fold(self, lambda node, operands: node._format(operands))

  def display(self) -> str:
    return self.to_string()

  def copy(self) -> 'Node':
    """Independent duplicate of the whole tree"""
    return _fold(self, lambda node, children: node._rebuild(children))

  def to_sympy(self) -> sp.Expr:
    return _fold(self, lambda node, operands: node._sympy_step(operands))

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      for node in _postorder(self, done=lambda n: n._size_cache is not None):
        if node._size_cache is None:
          node._set('_size_cache', 1 + sum(child._size_cache for child in node.children()))
    return self._size_cache

  def __hash__(self) -> int:
    if self._hash_cache is None:
      # Children first, so each _compute_hash only reads cached child hashes
      for node in _postorder(self, done=lambda n: n._hash_cache is not None):
        if node._hash_cache is None:
          node._set('_hash_cache', node._compute_hash())
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node):
      return NotImplemented
    # No identity shortcut: a tree holding NaN is not equal even to itself
    pending = [(self, other)]
    while pending:
      mine, theirs = pending.pop()
      if type(mine) is not type(theirs) or not mine._same_payload(theirs):
        return False
      pending.extend(zip(mine.children(), theirs.children()))
    return True

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return _fold(self, lambda node, parts: node._repr_step(parts))

  def __copy__(self) -> 'Node':
    return self.copy()

  def __deepcopy__(self, memo) -> 'Node':
    return self.copy()

  # Named construction helpers
  def add(self, other) -> 'BinaryOpNode':
    return BinaryOpNode(OpType.ADD, self, as_node(other))

  def sub(self, other) -> 'BinaryOpNode':
    return BinaryOpNode(OpType.SUB, self, as_node(other))

  def mul(self, other) -> 'BinaryOpNode':
    return BinaryOpNode(OpType.MUL, self, as_node(other))

  def div(self, other) -> 'BinaryOpNode':
    return BinaryOpNode(OpType.DIV, self, as_node(other))

  def pow(self, other) -> 'BinaryOpNode':
    return BinaryOpNode(OpType.POW, self, as_node(other))

  def bracket(self, kind: Union[BracketKind, str] = BracketKind.ROUND) -> 'BracketNode':
    return BracketNode(self, kind)

  def _combine(self, op_type: OpType, other, reflected: bool = False):
    other = _coerce(other)
    if other is None:
      return NotImplemented
    if reflected:
      return BinaryOpNode(op_type, other, self)
    return BinaryOpNode(op_type, self, other)

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


class ValueNode(Node):
  __slots__ = ('value',)

  is_leaf = True
  is_value = True

  def __init__(self, value: float):
    super().__init__()
    self._set('value', float(value))

  def _evaluate_step(self, operands, bindings) -> float:
    return self.value

  def _evaluate_array_step(self, operands, columns, n_samples):
    return np.full(n_samples, self.value, dtype=np.float64)

  def _format(self, operands) -> str:
    return format_value(self.value)

  def priority(self) -> Priority:
    return Priority.ATOM

  def children(self) -> Tuple[Node, ...]:
    return ()

  def _rebuild(self, children) -> 'ValueNode':
    return ValueNode(self.value)

  def _compute_hash(self) -> int:
    return hash((NodeType.VALUE, self.value))

  def _same_payload(self, other) -> bool:
    return self.value == other.value

  def _sympy_step(self, operands) -> sp.Expr:
    if math.isnan(self.value):
      log_warning("Converting a NaN value to sympy.nan")
      return sp.nan
    if math.isinf(self.value):
      log_warning(f"Converting an infinite value {self.value} to sympy infinity")
      return sp.oo if self.value > 0 else -sp.oo
    if self.value.is_integer():
      return sp.Integer(int(self.value))
    return sp.Float(self.value)

  def __reduce__(self):
    return (ValueNode, (self.value,))

  def _repr_step(self, parts) -> str:
    return f"ValueNode({self.value!r})"


class VariableNode(Node):
  __slots__ = ('name',)

  is_leaf = True
  is_variable = True

  def __init__(self, name: str):
    super().__init__()
    if not isinstance(name, str) or not name:
      raise ValueError(f"Variable name must be a non-empty string, got {name!r}")
    self._set('name', name)

  def _lookup(self, bindings: Optional[Mapping]):
    if bindings:
      if self.name in bindings:
        return bindings[self.name]
      if self in bindings:
        return bindings[self]
    log_debug(f"Unbound variable {self.name!r} during evaluation")
    raise UnknownVariable(self.name)

  def _evaluate_step(self, operands, bindings) -> float:
    bound = self._lookup(bindings)
    if not isinstance(bound, Real) or isinstance(bound, bool):
      raise TypeError(f"Variable {self.name!r} is bound to {type(bound).__name__}, expected a real number")
    return float(bound)

  def _evaluate_array_step(self, operands, columns, n_samples):
    return self._lookup(columns).copy()

  def _format(self, operands) -> str:
    return self.name

  def priority(self) -> Priority:
    return Priority.ATOM

  def children(self) -> Tuple[Node, ...]:
    return ()

  def _rebuild(self, children) -> 'VariableNode':
    return VariableNode(self.name)

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE, self.name))

  def _same_payload(self, other) -> bool:
    return self.name == other.name

  def _sympy_step(self, operands) -> sp.Expr:
    return sp.Symbol(self.name)

  def __reduce__(self):
    return (VariableNode, (self.name,))

  def _repr_step(self, parts) -> str:
    return f"VariableNode({self.name!r})"


class BinaryOpNode(Node):
  __slots__ = ('op_type', 'left', 'right')

  def __init__(self, operator: Union[OpType, str], left: Node, right: Node):
    super().__init__()
    self._set('op_type', resolve_operator(operator))
    self._set('left', as_node(left))
    self._set('right', as_node(right))

  @property
  def operator(self) -> str:
    return OPERATOR_SYMBOLS[self.op_type]

  def _evaluate_step(self, operands, bindings) -> float:
    left_val, right_val = operands
    if self.op_type == OpType.DIV and right_val == 0.0:
      log_debug(f"Division by zero in {self.to_string()}")
      raise ZeroDivision(left_val)
    return float(evaluate_binary_op_fast(left_val, right_val, self.op_type))

  def _evaluate_array_step(self, operands, columns, n_samples):
    left_val, right_val = operands
    if self.op_type == OpType.DIV and np.any(right_val == 0.0):
      log_debug(f"Division by zero in {self.to_string()}")
      raise ZeroDivision(left_val)
    return evaluate_binary_op_fast(left_val, right_val, self.op_type)

  def _format(self, operands) -> str:
    left, right = operands
    rank = self.priority()
    if needs_wrap(self.left.priority(), rank, self.left.is_leaf, is_left=True):
      left = f"({left})"
    if needs_wrap(self.right.priority(), rank, self.right.is_leaf, is_left=False):
      right = f"({right})"
    return f"{left} {self.operator} {right}"

  def priority(self) -> Priority:
    return Priority.of(self.op_type)

  def children(self) -> Tuple[Node, ...]:
    return (self.left, self.right)

  def _rebuild(self, children) -> 'BinaryOpNode':
    left, right = children
    return BinaryOpNode(self.op_type, left, right)

  def _compute_hash(self) -> int:
    return hash((NodeType.BINARY_OP, self.op_type, hash(self.left), hash(self.right)))

  def _same_payload(self, other) -> bool:
    return self.op_type == other.op_type

  def _sympy_step(self, operands) -> sp.Expr:
    left, right = operands
    if self.op_type == OpType.ADD:
      return sp.Add(left, right)
    elif self.op_type == OpType.SUB:
      return sp.Add(left, sp.Mul(-1, right))
    elif self.op_type == OpType.MUL:
      return sp.Mul(left, right)
    elif self.op_type == OpType.DIV:
      return sp.Mul(left, sp.Pow(right, -1))
    return sp.Pow(left, right)

  def __reduce__(self):
    return (BinaryOpNode, (self.op_type, self.left, self.right))

  def _repr_step(self, parts) -> str:
    return f"BinaryOpNode({self.operator!r}, {parts[0]}, {parts[1]})"


class BracketNode(Node):
  """Explicit grouping, always printed with its delimiters."""

  __slots__ = ('inner', 'kind')

  def __init__(self, inner: Node, kind: Union[BracketKind, str] = BracketKind.ROUND):
    super().__init__()
    self._set('inner', as_node(inner))
    self._set('kind', BracketKind(kind))

  def _evaluate_step(self, operands, bindings) -> float:
    return operands[0]

  def _evaluate_array_step(self, operands, columns, n_samples):
    return operands[0]

  def _format(self, operands) -> str:
    opening, closing = BRACKET_SYMBOLS[self.kind]
    return f"{opening}{operands[0]}{closing}"

  def priority(self) -> Priority:
    return Priority.ATOM

  def children(self) -> Tuple[Node, ...]:
    return (self.inner,)

  def _rebuild(self, children) -> 'BracketNode':
    return BracketNode(children[0], self.kind)

  def _compute_hash(self) -> int:
    return hash((NodeType.BRACKET, self.kind, hash(self.inner)))

  def _same_payload(self, other) -> bool:
    return self.kind == other.kind

  def _sympy_step(self, operands) -> sp.Expr:
    return operands[0]

  def __reduce__(self):
    return (BracketNode, (self.inner, self.kind))

  def _repr_step(self, parts) -> str:
    return f"BracketNode({parts[0]}, {self.kind})"


def value(number: float) -> ValueNode:
  return ValueNode(number)


def variable(name: str) -> VariableNode:
  return VariableNode(name)


def add(left, right) -> BinaryOpNode:
  return BinaryOpNode(OpType.ADD, left, right)


def sub(left, right) -> BinaryOpNode:
  return BinaryOpNode(OpType.SUB, left, right)


def mul(left, right) -> BinaryOpNode:
  return BinaryOpNode(OpType.MUL, left, right)


def div(left, right) -> BinaryOpNode:
  return BinaryOpNode(OpType.DIV, left, right)


def power(left, right) -> BinaryOpNode:
  return BinaryOpNode(OpType.POW, left, right)


def bracket(inner, kind: Union[BracketKind, str] = BracketKind.ROUND) -> BracketNode:
  return BracketNode(inner, kind)
