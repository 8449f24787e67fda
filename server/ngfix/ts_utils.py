"""
Helpers for walking and inspecting tree-sitter TypeScript trees.

Nodes are never compared by identity: tree-sitter hands out fresh wrapper
objects on every access, and diagnostics only carry positions. Callers that
need to find a node again compare (start, width) pairs through `SourceFile`.
"""

from typing import Any, List, Optional

from .types import NodePredicate, SourceFile

# Node kinds that tree-sitter attaches anywhere as "extras"
TRIVIA_NODE_TYPES = {"comment", "html_comment"}


def find_first_matching_node(source_file: SourceFile, predicate: NodePredicate) -> Optional[Any]:
    """Return the first node, in pre-order, for which ``predicate`` holds."""
    root = source_file.root_node
    if root is None:
        return None

    # Explicit stack so deeply nested files don't hit the recursion limit
    stack = [root]
    while stack:
        node = stack.pop()
        if predicate(node):
            return node
        stack.extend(reversed(node.children))
    return None


def is_property_assignment(node: Any) -> bool:
    """`name: value` inside an object literal."""
    return node.type == "pair"


def is_array_literal(node: Any) -> bool:
    return node is not None and node.type == "array"


def property_name(node: Any) -> Optional[Any]:
    return node.child_by_field_name("key")


def property_initializer(node: Any) -> Optional[Any]:
    return node.child_by_field_name("value")


def is_trivia(node: Any) -> bool:
    return node.type in TRIVIA_NODE_TYPES


def array_elements(array_node: Any) -> List[Any]:
    """Element expressions of an array literal, in source order (comments excluded)."""
    return [child for child in array_node.named_children if not is_trivia(child)]
