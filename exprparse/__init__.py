# Python

"""exprparse

Compile arithmetic expressions with named variables and single-argument
functions into syntax trees, then evaluate them against live bindings.
"""

from .expression_tree import (
  Expression, CompileState, ExpressionCompiler, BindingRegistry,
  Node, ConstantNode, VariableNode, OperatorNode, FunctionNode,
  NodeType, OpType, Status, ErrorPolicy,
  Variable, create_variable, set_variable
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "CompileState", "ExpressionCompiler", "BindingRegistry",
  "Node", "ConstantNode", "VariableNode", "OperatorNode", "FunctionNode",
  "NodeType", "OpType", "Status", "ErrorPolicy",
  "Variable", "create_variable", "set_variable",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
