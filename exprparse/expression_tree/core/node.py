import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Callable
from .operators import NodeType, OpType, OP_SYMBOLS, evaluate_operator
from .status import Status, StatusChannel
from .variable import Variable


class Node(ABC):
  """Base node class with structural hash and size caching

  Nodes are not modified after construction; the compiler builds each tree
  bottom-up and the container only ever replaces whole trees.
  """

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  @abstractmethod
  def evaluate(self, channel: StatusChannel) -> np.floating:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  @property
  @abstractmethod
  def node_type(self) -> NodeType:
    pass

  def children(self) -> tuple:
    return ()

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = 1 + sum(child.size() for child in self.children())
    return self._size_cache

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = self._compute_hash()
    return self._hash_cache

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()})"


class ConstantNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: np.floating):
    super().__init__()
    self.value = value

  @property
  def node_type(self) -> NodeType:
    return NodeType.CONSTANT

  def evaluate(self, channel: StatusChannel) -> np.floating:
    return self.value

  def to_string(self) -> str:
    # shortest text that reads back as the same value of its dtype
    magnitude = abs(self.value)
    if magnitude == 0 or 1e-4 <= magnitude < 1e16:
      return np.format_float_positional(self.value, trim='-')
    return np.format_float_scientific(self.value, trim='-')

  def _compute_hash(self) -> int:
    return hash((NodeType.CONSTANT, float(self.value)))

  def to_sympy(self):
    return sp.Float(float(self.value))


class VariableNode(Node):
  __slots__ = ('name', 'variable', 'dtype')

  def __init__(self, name: str, variable: Variable, dtype=np.float64):
    super().__init__()
    self.name = name
    self.variable = variable
    self.dtype = dtype

  @property
  def node_type(self) -> NodeType:
    return NodeType.VARIABLE

  def evaluate(self, channel: StatusChannel) -> np.floating:
    return self.dtype(self.variable.value)

  def to_string(self) -> str:
    return self.name

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE, self.name, id(self.variable)))

  def to_sympy(self):
    return sp.Symbol(self.name)


class OperatorNode(Node):
  __slots__ = ('op_type', 'left', 'right')

  def __init__(self, op_type: OpType, left: Node, right: Node):
    super().__init__()
    self.op_type = op_type
    self.left = left
    self.right = right

  @property
  def node_type(self) -> NodeType:
    return NodeType.OPERATOR

  @property
  def operator(self) -> str:
    return OP_SYMBOLS[self.op_type]

  def children(self) -> tuple:
    return (self.left, self.right)

  def evaluate(self, channel: StatusChannel) -> np.floating:
    # both sides are always walked, even after the left one reported an error
    left_val = self.left.evaluate(channel)
    right_val = self.right.evaluate(channel)
    scalar_type = type(left_val)

    if self.op_type == OpType.DIV and right_val == 0:
      channel.report(Status.DIVISION_BY_ZERO)
      return scalar_type(0)

    result = scalar_type(evaluate_operator(left_val, right_val, int(self.op_type)))
    channel.complete()
    return result

  def to_string(self) -> str:
    return f"({self.left.to_string()} {self.operator} {self.right.to_string()})"

  def _compute_hash(self) -> int:
    return hash((NodeType.OPERATOR, self.op_type, hash(self.left), hash(self.right)))

  def to_sympy(self):
    left = self.left.to_sympy()
    right = self.right.to_sympy()
    if self.op_type == OpType.ADD:
      return sp.Add(left, right)
    elif self.op_type == OpType.SUB:
      return sp.Add(left, sp.Mul(-1, right))
    elif self.op_type == OpType.MUL:
      return sp.Mul(left, right)
    elif self.op_type == OpType.DIV:
      return sp.Mul(left, sp.Pow(right, -1))
    else:
      raise RuntimeWarning(f"to_sympy reached unexpected operation at node {type(self)}")


class FunctionNode(Node):
  __slots__ = ('name', 'function', 'operand')

  def __init__(self, name: str, function: Callable, operand: Node):
    super().__init__()
    self.name = name
    self.function = function
    self.operand = operand

  @property
  def node_type(self) -> NodeType:
    return NodeType.FUNCTION

  def children(self) -> tuple:
    return (self.operand,)

  def evaluate(self, channel: StatusChannel) -> np.floating:
    operand_val = self.operand.evaluate(channel)
    return type(operand_val)(self.function(operand_val))

  def to_string(self) -> str:
    return f"{self.name}({self.operand.to_string()})"

  def _compute_hash(self) -> int:
    return hash((NodeType.FUNCTION, self.name, id(self.function), hash(self.operand)))

  def to_sympy(self):
    return sp.Function(self.name)(self.operand.to_sympy())
