"""Graph builder that walks a resource's dependencies."""

from typing import List, Set

from graph.model import DependencyGraph


def build_graph(resource, recursive: bool = True) -> DependencyGraph:
    """
    Build the dependency graph of a resource.

    Nodes are added in resolution order, with the root last. Edges come
    from each resource's direct dependencies, so a cycle shows up as an
    edge back to a resource already in the graph.

    Args:
        resource: The root resource.
        recursive: If False, only the root's direct dependencies are added.

    Returns:
        DependencyGraph rooted at ``resource``.
    """
    graph = DependencyGraph(resource)

    for node in resource.resources(recursive=recursive):
        graph.add_node(node)

    pending: List = [resource]
    expanded: Set = set()

    while pending:
        node = pending.pop()
        if node in expanded:
            continue
        expanded.add(node)

        for dependency in node.dependencies():
            graph.add_edge(node, dependency)
            if recursive:
                pending.append(dependency)

    return graph
