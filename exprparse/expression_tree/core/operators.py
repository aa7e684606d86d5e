import numba
from enum import IntEnum


class NodeType(IntEnum):
  CONSTANT = 0
  VARIABLE = 1
  OPERATOR = 2
  FUNCTION = 3


class OpType(IntEnum):
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3


# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV}
OP_SYMBOLS = {op_type: symbol for symbol, op_type in BINARY_OP_MAP.items()}

ADDITIVE_OPERATORS = '+-'
MULTIPLICATIVE_OPERATORS = '*/'

_ADD = int(OpType.ADD)
_SUB = int(OpType.SUB)
_MUL = int(OpType.MUL)
_DIV = int(OpType.DIV)


@numba.njit(cache=True)
def evaluate_operator(left_val, right_val, op_code):
  # callers check for a zero divisor first
  if op_code == _ADD:
    return left_val + right_val
  elif op_code == _SUB:
    return left_val - right_val
  elif op_code == _MUL:
    return left_val * right_val
  elif op_code == _DIV:
    return left_val / right_val
  return left_val * 0.0
