from typing import Callable, Dict, List, Optional

from .core.status import Status
from .core.variable import Variable


class BindingRegistry:
  """Names available to the compiler.

  Variables and functions share one flat namespace: a name registered in one
  table can never be registered in the other.
  """

  __slots__ = ('_variables', '_functions')

  def __init__(self):
    self._variables: Dict[str, Variable] = {}
    self._functions: Dict[str, Callable] = {}

  def register_variable(self, name: str, variable: Variable) -> Status:
    if not isinstance(variable, Variable):
      raise TypeError(f"Expected a Variable for '{name}', got {type(variable).__name__}")
    if name in self._functions:
      return Status.NAME_CLASH
    if name in self._variables:
      return Status.ALREADY_REGISTERED
    self._variables[name] = variable
    return Status.SUCCESS

  def register_function(self, name: str, function: Callable) -> Status:
    if not callable(function):
      raise TypeError(f"Function '{name}' must be callable, got {type(function).__name__}")
    if name in self._variables:
      return Status.NAME_CLASH
    if name in self._functions:
      return Status.ALREADY_REGISTERED
    self._functions[name] = function
    return Status.SUCCESS

  def get_variable(self, name: str) -> Optional[Variable]:
    return self._variables.get(name)

  def get_function(self, name: str) -> Optional[Callable]:
    return self._functions.get(name)

  def variable_names(self) -> List[str]:
    return list(self._variables)

  def function_names(self) -> List[str]:
    return list(self._functions)

  def clear(self):
    self._variables.clear()
    self._functions.clear()

  def __contains__(self, name: str) -> bool:
    return name in self._variables or name in self._functions

  def __len__(self) -> int:
    return len(self._variables) + len(self._functions)
