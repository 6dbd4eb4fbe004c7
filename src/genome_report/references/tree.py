"""Traversal helpers for nested SNPedia page documents.

SNPedia exports are trees of dicts joined by list-valued keys, e.g.::

    {"sections": [{"paragraphs": [{"sentences": [{"text": "..."}]}]}]}

``iter_nodes(doc, ["sections", "paragraphs", "sentences"])`` yields every
sentence dict in document order. Missing keys and non-list values are treated
as empty branches.
"""

from collections.abc import Callable, Iterator, Sequence
from typing import Any


def iter_nodes(tree: Any, path: Sequence[str]) -> Iterator[dict]:
    """Yield every dict reached by following ``path`` through nested lists.

    Args:
        tree: Root node (usually a dict)
        path: Keys to descend through, each expected to hold a list

    Yields:
        Leaf dicts at the end of the path, in document order
    """
    if not isinstance(tree, dict):
        return
    if not path:
        yield tree
        return

    children = tree.get(path[0])
    if not isinstance(children, list):
        return

    for child in children:
        yield from iter_nodes(child, path[1:])


def collect(
    tree: Any,
    path: Sequence[str],
    predicate: Callable[[dict], bool] | None = None,
) -> list[dict]:
    """Return the nodes at ``path`` as a flat list, optionally filtered."""
    if predicate is None:
        return list(iter_nodes(tree, path))
    return [node for node in iter_nodes(tree, path) if predicate(node)]


def find_first(
    tree: Any,
    path: Sequence[str],
    predicate: Callable[[dict], bool],
) -> dict | None:
    """Return the first node at ``path`` satisfying ``predicate``."""
    for node in iter_nodes(tree, path):
        if predicate(node):
            return node
    return None
