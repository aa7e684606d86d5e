import numpy as np


def validate_dtype(dtype) -> type:
  """Normalise ``dtype`` to a numpy floating scalar type."""
  try:
    scalar_type = np.dtype(dtype).type
  except TypeError:
    raise ValueError(f"Invalid dtype: {dtype!r}")
  if not issubclass(scalar_type, np.floating):
    raise ValueError(f"dtype must be a floating type, got {np.dtype(scalar_type).name}")
  return scalar_type


class Variable:
  """Caller-owned numeric slot shared with every tree that references it.

  The value lives in a 0-d numpy array, so writes through ``set`` are seen by
  compiled trees on their next evaluation.
  """

  __slots__ = ('_cell',)

  def __init__(self, value=0.0, dtype=np.float64):
    self._cell = np.array(value, dtype=validate_dtype(dtype))

  @property
  def dtype(self) -> np.dtype:
    return self._cell.dtype

  @property
  def value(self) -> np.floating:
    return self._cell[()]

  @value.setter
  def value(self, value):
    self.set(value)

  def set(self, value):
    self._cell[()] = value

  def __repr__(self) -> str:
    return f"Variable({self.value!r}, dtype={self.dtype.name})"


def create_variable(value, dtype=np.float64) -> Variable:
  return Variable(value, dtype)


def set_variable(variable: Variable, value):
  variable.set(value)
