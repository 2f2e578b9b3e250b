"""Rendering of tree nodes as menu lines."""

from collections import Counter
from typing import List, Sequence

from .models import Choice, Node


def format_display(node: Node, workspace_prefix: str) -> str:
    """Build the menu line for a node.

    Examples:
        workspace "2"              -> "workspace: 2"
        window "vim" marked "ed"   -> "ed: vim"
        workspace "3" marked "w"   -> "workspace: w: 3"
    """
    display = ""
    if node.mark is not None:
        display = f"{node.mark}: " + display
    if node.is_workspace:
        display = workspace_prefix + display
    return display + (node.name or "")


def to_choices(nodes: Sequence[Node], workspace_prefix: str) -> List[Choice]:
    """One Choice per node, in the same order."""
    return [Choice(display=format_display(n, workspace_prefix), id=n.id) for n in nodes]


def duplicate_displays(choices: Sequence[Choice]) -> List[str]:
    """Display strings shared by more than one choice."""
    counts = Counter(c.display for c in choices)
    return [display for display, count in counts.items() if count > 1]
