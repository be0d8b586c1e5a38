"""Positional search over the files of a compilation scope.

Nodes have no parent links; the chain of nodes enclosing a position is
recomputed from the file root whenever it is needed, so it is never stale
after earlier edits.
"""

from __future__ import annotations

from collections.abc import Sequence

from goquickfix.syntax import nodes as n
from goquickfix.syntax.nodes import iter_children


def find_unit(files: Sequence[n.File], pos: int) -> n.File | None:
    """Return the file whose position range contains pos, or None."""
    for f in files:
        if f.pos <= pos < f.end:
            return f
    return None


def path_enclosing(root: n.File, pos: int) -> list[n.Node]:
    """Return the nodes enclosing pos, innermost first, ending with root.

    Only nodes with a source position are entered; synthesized nodes never
    appear in the chain.

    Args:
        root: File to search.
        pos: A position inside root.

    Returns:
        The enclosing-node chain. Just [root] when no child contains pos.
    """
    chain: list[n.Node] = [root]
    node: n.Node = root
    while True:
        for child in iter_children(node):
            if child.contains(pos):
                chain.append(child)
                node = child
                break
        else:
            break
    chain.reverse()
    return chain
