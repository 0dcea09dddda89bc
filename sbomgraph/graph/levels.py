"""Breadth-first depth assignment."""

from collections import deque

from .model import DependencyGraph


def assign_levels(graph: DependencyGraph, root_id: str | None = None) -> set[str]:
    """Set each reachable node's level to its shortest distance from the root.

    First reach wins, so a node with several parents keeps the level of its
    shallowest parent + 1. Unreachable nodes keep whatever level they had.
    Returns the ids of the visited nodes, root included.
    """
    root_id = root_id or graph.root_id
    root = graph.get_node(root_id) if root_id else None
    if root is None:
        return set()

    root.level = 0
    visited = {root.id}
    queue = deque([root.id])

    while queue:
        current = graph.nodes[queue.popleft()]
        for child_id in graph.children(current.id):
            if child_id in visited:
                continue
            child = graph.get_node(child_id)
            if child is None:
                continue
            visited.add(child_id)
            child.level = current.level + 1
            queue.append(child_id)

    return visited
