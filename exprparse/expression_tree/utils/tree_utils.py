"""
Tree Utility Functions

Traversal and inspection helpers for compiled expression trees.
"""

from typing import List, Dict
from collections import Counter

from ..core.node import Node, OperatorNode, FunctionNode, ConstantNode, VariableNode


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    nodes = [node]
    for child in node.children():
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    if isinstance(node, FunctionNode):
        return 1 + calculate_tree_depth(node.operand)
    elif isinstance(node, OperatorNode):
        return 1 + max(calculate_tree_depth(node.left), calculate_tree_depth(node.right))
    return 1


def get_variable_names(node: Node) -> List[str]:
    """Names of referenced variables, in order of first appearance"""
    names = [n.name for n in _depth_first_traversal(node) if isinstance(n, VariableNode)]
    return list(dict.fromkeys(names))


def get_function_names(node: Node) -> List[str]:
    """Names of called functions, in order of first appearance"""
    names = [n.name for n in _depth_first_traversal(node) if isinstance(n, FunctionNode)]
    return list(dict.fromkeys(names))


def get_variable_usage_counts(node: Node) -> Dict[str, int]:
    counts = Counter()
    for current in _depth_first_traversal(node):
        if isinstance(current, VariableNode):
            counts[current.name] += 1
    return dict(counts)


def get_constants(node: Node) -> List[ConstantNode]:
    return [n for n in _depth_first_traversal(node) if isinstance(n, ConstantNode)]


def trees_equivalent(first: Node, second: Node) -> bool:
    """Structural comparison: same shapes, operators, values and bindings."""
    if type(first) is not type(second):
        return False
    if isinstance(first, ConstantNode):
        return first.value == second.value
    if isinstance(first, VariableNode):
        return first.name == second.name and first.variable is second.variable
    if isinstance(first, OperatorNode):
        return (first.op_type == second.op_type
                and trees_equivalent(first.left, second.left)
                and trees_equivalent(first.right, second.right))
    if isinstance(first, FunctionNode):
        return (first.name == second.name
                and first.function is second.function
                and trees_equivalent(first.operand, second.operand))
    return False
