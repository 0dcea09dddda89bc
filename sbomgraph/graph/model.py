"""Node/edge storage for a single report's dependency graph."""

from dataclasses import dataclass, field
from typing import Iterator

from ..models import Edge, Node


@dataclass
class DependencyGraph:
    """Insertion-ordered nodes and edges with O(1) lookup.

    Adjacency is a projection of the edge list: every `add_edge` appends the
    target to its source's child list in the same order. Endpoints are not
    validated here; the builder creates both nodes before linking them.
    """

    nodes: dict[str, Node] = field(default_factory=dict)  # id -> Node, insertion ordered
    edges: list[Edge] = field(default_factory=list)
    adjacency: dict[str, list[str]] = field(default_factory=dict)  # id -> child ids
    root_id: str | None = None

    def add_node(self, node: Node) -> None:
        """Add a node; a node with an existing id is ignored."""
        if node.id in self.nodes:
            return
        self.nodes[node.id] = node
        if self.root_id is None and node.is_root:
            self.root_id = node.id

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def get_node(self, node_id: str) -> Node | None:
        return self.nodes.get(node_id)

    def add_edge(self, source: str, target: str) -> None:
        self.edges.append(Edge(source=source, target=target))
        self.adjacency.setdefault(source, []).append(target)

    def children(self, node_id: str) -> list[str]:
        return self.adjacency.get(node_id, [])

    def iter_nodes(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def iter_edges(self) -> Iterator[Edge]:
        return iter(self.edges)

    @property
    def root(self) -> Node | None:
        if self.root_id is None:
            return None
        return self.nodes.get(self.root_id)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def dependency_count(self) -> int:
        """Nodes excluding the project root."""
        return sum(1 for n in self.nodes.values() if not n.is_root)

    @property
    def vulnerable_count(self) -> int:
        return sum(1 for n in self.nodes.values() if n.vulnerable)

    @property
    def max_level(self) -> int:
        return max((n.level for n in self.nodes.values()), default=0)
