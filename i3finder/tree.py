"""Flattening of the i3 layout tree into menu candidates.

The tree is walked depth-first in pre-order, so the menu lists each
workspace followed by the windows it contains, in layout order.
"""

from typing import Iterator, List, Optional, Sequence

from .models import Node

# Name of the hidden workspace holding scratchpad windows
SCRATCH_MARKER = "__i3_scratch"


def walk(root: Node) -> Iterator[Node]:
    """Yield root and all its descendants in depth-first pre-order.

    Uses an explicit stack, so tree depth is not limited by the
    interpreter's recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        # Reversed so the first child is popped first
        stack.extend(reversed(node.nodes))


def is_listable(node: Node) -> bool:
    """Window-holding containers and workspaces; layout splits are skipped."""
    return node.is_window or node.is_workspace


def is_scratch(node: Node) -> bool:
    return node.name is not None and SCRATCH_MARKER in node.name


def filter_nodes(nodes: Sequence[Node], show_scratch: bool = False) -> List[Node]:
    """Apply the listable and scratchpad filters, keeping order."""
    listable = [n for n in nodes if is_listable(n)]
    if show_scratch:
        return listable
    return [n for n in listable if not is_scratch(n)]


def flatten(root: Node, show_scratch: bool = False) -> List[Node]:
    """Reduce a tree to the ordered list of nodes worth offering in the menu.

    Args:
        root: Tree root from GET_TREE
        show_scratch: Keep the scratchpad workspace in the list

    Returns:
        Window containers and workspaces in pre-order
    """
    return filter_nodes(list(walk(root)), show_scratch)


def find_focused(nodes: Sequence[Node]) -> Optional[Node]:
    return next((n for n in nodes if n.focused), None)


def without_focused(nodes: Sequence[Node]) -> List[Node]:
    """Drop the currently focused node, since acting on it does nothing."""
    focused = find_focused(nodes)
    if focused is None:
        return list(nodes)
    return [n for n in nodes if n is not focused]
