"""
Tree Utility Functions

Traversal and inspection helpers for expression trees. Every helper only
reads the tree; nodes are never modified.
"""

from typing import List, Dict, Union
from collections import Counter

from ..core.node import Node, BinaryOpNode, ValueNode, VariableNode
from ..core.operators import OpType, resolve_operator


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
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)  # FIFO for breadth-first
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first pre-order traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop()  # LIFO for depth-first
        all_nodes.append(current_node)
        nodes_to_visit.extend(reversed(current_node.children()))

    return all_nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    max_depth = 0
    nodes_to_visit = [(node, 1)]
    while nodes_to_visit:
        current_node, depth = nodes_to_visit.pop()
        max_depth = max(max_depth, depth)
        nodes_to_visit.extend((child, depth + 1) for child in current_node.children())
    return max_depth


def find_nodes_by_type(node: Node, node_type: type) -> List[Node]:
    """
    Find all nodes of a specific type in the tree.

    Args:
        node: Root node of the tree
        node_type: Type of nodes to find (e.g., ValueNode, VariableNode)

    Returns:
        List of nodes matching the specified type
    """
    all_nodes = get_all_nodes(node)
    return [n for n in all_nodes if isinstance(n, node_type)]


def find_nodes_by_operator(node: Node, operator: Union[OpType, str]) -> List[BinaryOpNode]:
    """
    Find all binary nodes with a specific operator.

    Args:
        node: Root node of the tree
        operator: Operator symbol or OpType to search for

    Returns:
        List of nodes with the specified operator
    """
    op_type = resolve_operator(operator)
    return [n for n in find_nodes_by_type(node, BinaryOpNode) if n.op_type == op_type]


def get_constants(node: Node) -> List[ValueNode]:
    """Value leaves in depth-first order"""
    return [n for n in _depth_first_traversal(node) if isinstance(n, ValueNode)]


def get_variables(node: Node) -> List[str]:
    """Variable names in order of first appearance, without duplicates"""
    names = [n.name for n in _depth_first_traversal(node) if isinstance(n, VariableNode)]
    return list(dict.fromkeys(names))


def get_variable_usage_counts(node: Node) -> Dict[str, int]:
    """
    Count how often each variable appears in the tree.

    Args:
        node: Root node of the tree

    Returns:
        Counter mapping variable name to number of occurrences
    """
    return Counter(n.name for n in _depth_first_traversal(node) if isinstance(n, VariableNode))
