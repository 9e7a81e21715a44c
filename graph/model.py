"""Graph data model for storing resource dependency relationships."""

from typing import Dict, Iterator, List, Tuple


class DependencyGraph:
    """
    A directed graph of resources reachable from one root resource.

    Nodes are resources in resolution order (dependencies before the
    resources that need them), and edges represent
    'dependent -> dependency' relationships in directive order.
    """

    def __init__(self, root):
        self.root = root
        self._nodes: List = []
        self._edges: Dict[object, List] = {}

    @property
    def nodes(self) -> List:
        """Return all nodes in insertion order."""
        return list(self._nodes)

    @property
    def edges(self) -> Dict[object, List]:
        """Return adjacency list representation of edges."""
        return {k: list(v) for k, v in self._edges.items()}

    def add_node(self, node) -> None:
        """Add a node to the graph; nodes already present keep their position."""
        if node not in self._nodes:
            self._nodes.append(node)

    def add_edge(self, source, target) -> None:
        """
        Add a directed edge from source to target.

        Automatically adds both nodes to the graph.
        """
        self.add_node(source)
        self.add_node(target)

        targets = self._edges.setdefault(source, [])
        if target not in targets:
            targets.append(target)

    def get_targets(self, source) -> List:
        """Get the resources the source depends on, in directive order."""
        return list(self._edges.get(source, []))

    def iter_edges(self) -> Iterator[Tuple[object, object]]:
        """Iterate over all edges as (source, target) tuples."""
        for source, targets in self._edges.items():
            for target in targets:
                yield source, target

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, node) -> bool:
        """Check if a node is in the graph."""
        return node in self._nodes

    def __repr__(self) -> str:
        edge_count = sum(len(t) for t in self._edges.values())
        return f"DependencyGraph(root={self.root!r}, nodes={len(self._nodes)}, edges={edge_count})"
