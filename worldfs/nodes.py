"""Node representations for the virtual world tree."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Union

from .exceptions import InvalidTree


@dataclass(frozen=True)
class Root:
    """Entry point of a tree; never the child of another node."""

    children: dict[str, "VirtualNode"] = field(default_factory=dict)


@dataclass(frozen=True)
class Folder:
    """Interior node. Metadata belongs to the storage layer."""

    metadata: Mapping[str, object] = field(default_factory=dict)
    children: dict[str, "VirtualNode"] = field(default_factory=dict)


@dataclass(frozen=True)
class File:
    """Terminal node. Content is fetched from the reader by path."""

    metadata: Mapping[str, object] = field(default_factory=dict)


VirtualNode = Union[Root, Folder, File]


def children_of(node: VirtualNode) -> dict[str, VirtualNode] | None:
    """Return the child mapping of a Root or Folder, ``None`` for a File."""
    if isinstance(node, (Root, Folder)):
        return node.children
    return None


def build_tree(entries: Iterable[tuple[str, bool, Mapping[str, object]]]) -> Root:
    """Assemble a tree from ``(path, is_dir, metadata)`` entries.

    Parent folders that are not listed explicitly are created with empty
    metadata. Entries may arrive in any order. ``.`` segments are dropped
    and ``..`` segments are rejected, since neither can name a child.
    """
    root = Root()
    for path, is_dir, metadata in sorted(entries, key=lambda entry: entry[0]):
        parts = [part for part in path.split("/") if part not in ("", ".")]
        if ".." in parts:
            raise InvalidTree(f"{path}: entries may not climb out of their folder")
        if not parts:
            continue
        current: Root | Folder = root
        for part in parts[:-1]:
            existing = current.children.get(part)
            if existing is None:
                existing = Folder()
                current.children[part] = existing
            elif isinstance(existing, File):
                raise InvalidTree(f"{path}: '{part}' is a file, not a folder")
            current = existing
        name = parts[-1]
        existing = current.children.get(name)
        if is_dir:
            if isinstance(existing, File):
                raise InvalidTree(f"{path} is listed as both a file and a folder")
            if existing is None:
                current.children[name] = Folder(metadata=dict(metadata))
            else:
                # implicit parent created earlier; keep its children
                current.children[name] = Folder(metadata=dict(metadata), children=existing.children)
        else:
            if isinstance(existing, Folder):
                raise InvalidTree(f"{path} is listed as both a file and a folder")
            if existing is not None:
                raise InvalidTree(f"{path} is listed more than once")
            current.children[name] = File(metadata=dict(metadata))
    return root


__all__ = [
    "Root",
    "Folder",
    "File",
    "VirtualNode",
    "children_of",
    "build_tree",
]
