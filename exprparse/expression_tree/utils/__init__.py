"""Utilities for expression trees."""

from .tree_utils import (
    get_all_nodes, calculate_tree_depth, get_variable_names, get_function_names,
    get_variable_usage_counts, get_constants, trees_equivalent
)

__all__ = [
    'get_all_nodes', 'calculate_tree_depth', 'get_variable_names', 'get_function_names',
    'get_variable_usage_counts', 'get_constants', 'trees_equivalent'
]
