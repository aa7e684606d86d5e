"""Expression Tree Module

Compilation of arithmetic expression text into evaluable node trees.
"""

from .expression import Expression, CompileState
from .compiler import ExpressionCompiler
from .registry import BindingRegistry
from .core.node import (
    Node,
    ConstantNode,
    VariableNode,
    OperatorNode,
    FunctionNode
)
from .core.operators import NodeType, OpType, BINARY_OP_MAP, evaluate_operator
from .core.status import Status, ErrorPolicy, StatusChannel
from .core.variable import Variable, create_variable, set_variable
from .utils import get_all_nodes, calculate_tree_depth, trees_equivalent

__all__ = [
    "Expression", "CompileState", "ExpressionCompiler", "BindingRegistry",
    "Node", "ConstantNode", "VariableNode", "OperatorNode", "FunctionNode",
    "NodeType", "OpType", "BINARY_OP_MAP", "evaluate_operator",
    "Status", "ErrorPolicy", "StatusChannel",
    "Variable", "create_variable", "set_variable",
    "get_all_nodes", "calculate_tree_depth", "trees_equivalent"
]
