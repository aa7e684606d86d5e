"""
Recursive-Descent Compiler

Turns whitespace-free expression text into a node tree. Each call splits its
text at one top-level operator (lowest precedence first, brackets respected)
and recurses into both halves; text without a top-level operator is a primary
term: a bracketed group, a numeric literal, a variable or a function call.
"""

import re
import numpy as np
from typing import Optional, Tuple

from .core.node import Node, ConstantNode, VariableNode, OperatorNode, FunctionNode
from .core.operators import BINARY_OP_MAP, ADDITIVE_OPERATORS, MULTIPLICATIVE_OPERATORS
from .core.status import Status
from .core.variable import validate_dtype
from .registry import BindingRegistry
from ..logging_system import log_debug

ASSOCIATIVITY_OPTIONS = ('right', 'left')

_NUMBER_PATTERN = re.compile(r'(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')

# a sign at the start of a term or directly after one of these is unary
_UNARY_CONTEXT = '+-*/('

CompileResult = Tuple[Optional[Node], Status]


class ExpressionCompiler:
  """
  Compile expression text against a binding registry.

  Args:
      registry: Variables and functions the text may reference
      dtype: numpy floating type used for every literal
      associativity: 'right' splits at the first top-level operator of the
          lowest precedence present, so ``8-3-2`` is ``8-(3-2)``; 'left' splits
          at the last one, so ``8-3-2`` is ``(8-3)-2``. In both modes a sign
          that opens a term (``-5+2``, ``2*-3``) is unary, never a split point.
      strict_literals: when False a literal only needs a numeric prefix
          (``3abc`` reads as ``3``); when True the whole term must be numeric
  """

  def __init__(self, registry: BindingRegistry, dtype=np.float64,
               associativity: str = 'right', strict_literals: bool = False):
    if associativity not in ASSOCIATIVITY_OPTIONS:
      raise ValueError(f"Invalid associativity: {associativity}")
    self.registry = registry
    self.dtype = validate_dtype(dtype)
    self.associativity = associativity
    self.strict_literals = strict_literals

  @property
  def left_associative(self) -> bool:
    return self.associativity == 'left'

  def compile(self, text: str) -> CompileResult:
    split_index, status = self._find_split(text)
    if status is not Status.SUCCESS:
      log_debug(f"unbalanced brackets in '{text}'")
      return None, status

    if split_index < 0:
      return self._compile_primary(text)

    operator = text[split_index]
    left_text = text[:split_index]
    right_text = text[split_index + 1:]
    log_debug(f"split '{text}' at '{operator}' -> '{left_text}' | '{right_text}'")

    if left_text:
      left, status = self.compile(left_text)
      if status is not Status.SUCCESS:
        return None, status
    elif operator == '-':
      # unary minus is 0 - operand
      left = ConstantNode(self.dtype(0))
    else:
      log_debug(f"missing left operand for '{operator}' in '{text}'")
      return None, Status.SYNTAX_ERROR

    right, status = self.compile(right_text)
    if status is not Status.SUCCESS:
      return None, status

    return OperatorNode(BINARY_OP_MAP[operator], left, right), Status.SUCCESS

  def _find_split(self, text: str) -> Tuple[int, Status]:
    """Position of the operator to split at, or -1 for a primary term."""
    paren_depth = 0
    first_additive = last_additive = -1
    first_multiplicative = last_multiplicative = -1

    for i, char in enumerate(text):
      if char == '(':
        paren_depth += 1
      elif char == ')':
        paren_depth -= 1
        if paren_depth < 0:
          return -1, Status.SYNTAX_ERROR
      elif paren_depth != 0:
        continue
      elif char in ADDITIVE_OPERATORS:
        if i == 0 or text[i - 1] in _UNARY_CONTEXT:
          continue
        if first_additive < 0:
          first_additive = i
        last_additive = i
      elif char in MULTIPLICATIVE_OPERATORS:
        if first_multiplicative < 0:
          first_multiplicative = i
        last_multiplicative = i

    if paren_depth != 0:
      return -1, Status.SYNTAX_ERROR

    if self.left_associative:
      split_index = last_additive if last_additive >= 0 else last_multiplicative
    else:
      split_index = first_additive if first_additive >= 0 else first_multiplicative

    if split_index < 0 and text and text[0] in ADDITIVE_OPERATORS:
      # leading sign with nothing else to split at
      split_index = 0
    return split_index, Status.SUCCESS

  def _compile_primary(self, text: str) -> CompileResult:
    if text.startswith('(') and text.endswith(')'):
      inner = text[1:-1]
      if not inner:
        return ConstantNode(self.dtype(0)), Status.SUCCESS
      return self.compile(inner)

    value = self._parse_literal(text)
    if value is not None:
      log_debug(f"literal '{text}' -> {value}")
      return ConstantNode(value), Status.SUCCESS

    variable = self.registry.get_variable(text)
    if variable is not None:
      log_debug(f"variable '{text}'")
      return VariableNode(text, variable, self.dtype), Status.SUCCESS

    if text.endswith(')'):
      return self._compile_call(text)

    if text.isidentifier() and text not in self.registry:
      log_debug(f"unregistered symbol '{text}'")
      return None, Status.UNREGISTERED_SYMBOL

    log_debug(f"malformed term '{text}'")
    return None, Status.SYNTAX_ERROR

  def _compile_call(self, text: str) -> CompileResult:
    open_index = text.find('(')
    if open_index < 0:
      return None, Status.SYNTAX_ERROR

    name = text[:open_index]
    function = self.registry.get_function(name)
    if function is None:
      if not name.isidentifier():
        log_debug(f"malformed function name '{name}' in '{text}'")
        return None, Status.SYNTAX_ERROR
      if name in self.registry:
        # a variable used with call syntax
        return None, Status.SYNTAX_ERROR
      log_debug(f"unregistered function '{name}'")
      return None, Status.UNREGISTERED_SYMBOL

    operand, status = self.compile(text[open_index + 1:-1])
    if status is not Status.SUCCESS:
      return None, status

    log_debug(f"call '{name}'")
    return FunctionNode(name, function, operand), Status.SUCCESS

  def _parse_literal(self, text: str) -> Optional[np.floating]:
    if self.strict_literals:
      match = _NUMBER_PATTERN.fullmatch(text)
    else:
      match = _NUMBER_PATTERN.match(text)
    if match is None:
      return None
    return self.dtype(match.group())
