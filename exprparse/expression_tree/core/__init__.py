"""Core expression tree components."""

from .node import Node, ConstantNode, VariableNode, OperatorNode, FunctionNode
from .operators import NodeType, OpType, BINARY_OP_MAP, OP_SYMBOLS, evaluate_operator
from .status import Status, ErrorPolicy, StatusChannel, EvaluationAborted
from .variable import Variable, create_variable, set_variable, validate_dtype

__all__ = [
    'Node', 'ConstantNode', 'VariableNode', 'OperatorNode', 'FunctionNode',
    'NodeType', 'OpType', 'BINARY_OP_MAP', 'OP_SYMBOLS', 'evaluate_operator',
    'Status', 'ErrorPolicy', 'StatusChannel', 'EvaluationAborted',
    'Variable', 'create_variable', 'set_variable', 'validate_dtype'
]
