import numpy as np
import sympy as sp
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .core.node import Node
from .core.status import Status, ErrorPolicy, StatusChannel, EvaluationAborted
from .core.variable import Variable, validate_dtype
from .compiler import ExpressionCompiler
from .registry import BindingRegistry
from .utils.tree_utils import calculate_tree_depth, get_variable_names, get_function_names
from ..logging_system import LogLevel, log_info, log_warning


class CompileState(Enum):
  EMPTY = 'empty'            # nothing registered, nothing compiled
  POPULATED = 'populated'    # bindings registered since the last parse
  COMPILED = 'compiled'      # tree built, registry cleared
  FAILED = 'failed'          # last parse failed, registry kept for a retry


class Expression:
  """Compiled arithmetic expression evaluated against live bindings

  Register variables and functions, ``parse`` the text once, then call
  ``evaluate`` as often as needed. Every failure is reported as a ``Status``.
  """

  __slots__ = ('root', 'dtype', 'error_policy', '_registry', '_compiler',
               '_state', '_string_cache')

  def __init__(self, dtype=np.float64, associativity: str = 'right',
               strict_literals: bool = False,
               error_policy=ErrorPolicy.RETAIN):
    self.dtype = validate_dtype(dtype)
    self.error_policy = ErrorPolicy(error_policy)
    self._registry = BindingRegistry()
    self._compiler = ExpressionCompiler(self._registry, dtype=self.dtype,
                                        associativity=associativity,
                                        strict_literals=strict_literals)
    self.root: Optional[Node] = None
    self._state = CompileState.EMPTY
    self._string_cache: Optional[str] = None

  @classmethod
  def from_string(cls, text: str, variables: Optional[Dict[str, Variable]] = None,
                  functions: Optional[Dict[str, Callable]] = None,
                  **options) -> 'Expression':
    """Register bindings and parse in one step; raises ValueError on failure."""
    expression = cls(**options)
    for name, variable in (variables or {}).items():
      status = expression.register_variable(name, variable)
      if status is not Status.SUCCESS:
        raise ValueError(f"Cannot register variable '{name}': {status.name}")
    for name, function in (functions or {}).items():
      status = expression.register_function(name, function)
      if status is not Status.SUCCESS:
        raise ValueError(f"Cannot register function '{name}': {status.name}")
    status = expression.parse(text)
    if status is not Status.SUCCESS:
      raise ValueError(f"Cannot parse '{text}': {status.name}")
    return expression

  @property
  def state(self) -> CompileState:
    return self._state

  @property
  def is_compiled(self) -> bool:
    return self.root is not None

  @property
  def registry(self) -> BindingRegistry:
    return self._registry

  def register_variable(self, name: str, variable: Variable) -> Status:
    status = self._registry.register_variable(name, variable)
    self._after_registration('variable', name, status)
    return status

  def register_function(self, name: str, function: Callable) -> Status:
    status = self._registry.register_function(name, function)
    self._after_registration('function', name, status)
    return status

  def _after_registration(self, kind: str, name: str, status: Status):
    if status is not Status.SUCCESS:
      log_warning(f"Cannot register {kind} '{name}': {status.name}")
    elif self.root is None:
      self._state = CompileState.POPULATED

  def parse(self, text: str) -> Status:
    stripped = ''.join(text.split())
    try:
      root, status = self._compiler.compile(stripped)
      node_count = root.size() if root is not None else 0
    except RecursionError:
      root, status = None, Status.NESTING_TOO_DEEP
    self._string_cache = None

    if status is Status.SUCCESS:
      self.root = root
      self._registry.clear()
      self._state = CompileState.COMPILED
      log_info(f"Compiled '{stripped}' into {node_count} nodes")
    else:
      self.root = None
      self._state = CompileState.FAILED
      log_warning(f"Failed to compile '{stripped[:80]}': {status.name}")
    return status

  def evaluate(self) -> Tuple[np.floating, Status]:
    if self.root is None:
      return self.dtype(0), Status.NOT_COMPILED

    channel = StatusChannel(self.error_policy)
    try:
      value = self.root.evaluate(channel)
    except EvaluationAborted:
      value = self.dtype(0)
    except RecursionError:
      value = self.dtype(0)
      channel.status = Status.NESTING_TOO_DEEP

    if channel.status is not Status.SUCCESS:
      log_info(f"Evaluation reported {channel.status.name}", LogLevel.DETAILED)
    return value, channel.status

  def to_string(self) -> str:
    if self.root is None:
      return ''
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def to_sympy(self) -> sp.Expr:
    if self.root is None:
      raise RuntimeError("Expression is not compiled")
    return self.root.to_sympy()

  def to_latex(self) -> str:
    return sp.latex(self.to_sympy())

  def size(self) -> int:
    return 0 if self.root is None else self.root.size()

  def depth(self) -> int:
    return 0 if self.root is None else calculate_tree_depth(self.root)

  def variables(self) -> List[str]:
    return [] if self.root is None else get_variable_names(self.root)

  def functions(self) -> List[str]:
    return [] if self.root is None else get_function_names(self.root)

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return hash(self) == hash(other)

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r}, state={self._state.value})"
