"""ASCII tree-style exporter for dependency graphs."""

from pathlib import Path
from typing import List, Optional, Set, Tuple

from graph.model import DependencyGraph


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_ascii(
    graph: DependencyGraph,
    base: Optional[Path] = None,
    style: str = "tree",
) -> str:
    """
    Convert a dependency graph to an ASCII tree rooted at the graph's root.

    Args:
        graph: The dependency graph to export.
        base: Optional base path for relative path display.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).

    Returns:
        ASCII tree string. A resource that depends on one of its own
        ancestors is marked with [*] and not expanded again.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    lines: List[str] = []
    _render_node(
        graph=graph,
        node=graph.root,
        base=base,
        prefix="",
        is_last=True,
        chars=chars,
        ancestors=set(),
        lines=lines,
        is_root=True,
    )
    return "\n".join(lines)


def _render_node(
    graph: DependencyGraph,
    node,
    base: Optional[Path],
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    ancestors: Set,
    lines: List[str],
    is_root: bool = False,
) -> None:
    """
    Recursively render a node and its dependencies.

    Args:
        graph: The dependency graph.
        node: Current resource to render.
        base: Base path for display.
        prefix: Current line prefix for indentation.
        is_last: Whether this is the last child of its parent.
        chars: Character set (branch, last, vertical, space).
        ancestors: Resources on the path from the root (to detect cycles).
        lines: Output lines list (modified in place).
        is_root: Whether this is the root node.
    """
    branch, last, vertical, space = chars

    display = display_name(node, base)
    is_cycle = node in ancestors
    cycle_marker = " [*]" if is_cycle else ""

    if is_root:
        lines.append(f"{display}{cycle_marker}")
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{display}{cycle_marker}")

    if is_cycle:
        return

    ancestors.add(node)

    children = graph.get_targets(node)
    if is_root:
        new_prefix = ""
    else:
        new_prefix = prefix + (space if is_last else vertical)

    for index, child in enumerate(children):
        _render_node(
            graph=graph,
            node=child,
            base=base,
            prefix=new_prefix,
            is_last=(index == len(children) - 1),
            chars=chars,
            ancestors=ancestors,
            lines=lines,
        )

    # Allow the same resource to appear under different branches
    ancestors.discard(node)


def display_name(resource, base: Optional[Path] = None) -> str:
    """Get the display name of a resource, relative to ``base`` when possible."""
    if resource.file is None:
        return resource.name
    if base is not None:
        try:
            return str(resource.file.relative_to(Path(base).resolve())).replace("\\", "/")
        except ValueError:
            pass
    return str(resource.file).replace("\\", "/")
