"""Helpers for walking slash-delimited paths over the virtual tree."""

from __future__ import annotations

from .exceptions import NodeNotFound, NoParentOfRoot, TraverseIntoFile
from .nodes import VirtualNode, children_of


def normalize_path(path: str) -> str:
    """Strip leading and trailing slashes; ``""`` names the root."""
    return path.strip("/")


def iter_segments(path: str) -> list[str]:
    return [part for part in path.split("/") if part]


def resolve(root: VirtualNode, path: str) -> VirtualNode:
    """Walk ``path`` from ``root`` and return the node it names.

    ``.`` stays put and ``..`` climbs to the parent. The walk keeps a stack
    of the ancestors it passed through, so climbing is a pop and climbing
    above ``root`` shows up as an empty stack. Nodes are returned as is,
    nothing is copied.

    Raises:
        NoParentOfRoot: the path climbs above ``root``.
        NodeNotFound: a segment names no child of the current folder.
        TraverseIntoFile: a segment tries to descend below a file.
    """
    traversal: list[VirtualNode] = [root]
    for part in iter_segments(path):
        if part == ".":
            continue
        if part == "..":
            if not traversal:
                raise NoParentOfRoot()
            traversal.pop()
            continue
        if not traversal:
            raise NoParentOfRoot()
        current = traversal[-1]
        children = children_of(current)
        if children is None:
            raise TraverseIntoFile()
        try:
            traversal.append(children[part])
        except KeyError:
            raise NodeNotFound(part) from None
    if not traversal:
        raise NoParentOfRoot()
    return traversal.pop()


def file_suffix(path: str) -> str | None:
    """Return the text after the last ``.`` of the final path segment."""
    name = path.rstrip("/").rsplit("/", 1)[-1]
    if "." not in name:
        return None
    return name.rsplit(".", 1)[1]


__all__ = ["normalize_path", "iter_segments", "resolve", "file_suffix"]
