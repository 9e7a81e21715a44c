"""JSON exporter for dependency graphs (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from graph.model import DependencyGraph
from .ascii_exporter import display_name


def to_json(
    graph: DependencyGraph,
    base: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a dependency graph to JSON format.

    Args:
        graph: The dependency graph to export.
        base: Optional base path for relative path display.
        indent: JSON indentation level.

    Returns:
        JSON string with the root, the nodes in resolution order and the
        edges in directive order.
    """
    nodes: List[str] = [display_name(node, base) for node in graph.nodes]

    edges: List[Dict[str, Any]] = []
    for source, target in graph.iter_edges():
        edges.append({
            "source": display_name(source, base),
            "target": display_name(target, base),
        })

    data: Dict[str, Any] = {
        "root": display_name(graph.root, base),
        "nodes": nodes,
        "edges": edges,
    }

    return json.dumps(data, indent=indent)
