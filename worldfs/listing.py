"""Directory listings for resolved nodes."""

from __future__ import annotations

from .nodes import VirtualNode, children_of


def _lines(names) -> str:
    return "".join(f"{name}\n" for name in names)


def list_node(node: VirtualNode, path: str) -> str:
    """Render ``node`` the way ``ls`` shows it.

    Folders list their direct children one per line, sorted by name. A file
    lists as the path that was used to reach it.
    """
    children = children_of(node)
    if children is None:
        return path
    return _lines(sorted(children))


__all__ = ["list_node"]
