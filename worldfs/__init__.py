"""worldfs package: inspect the virtual directory tree of a world file."""

from .adapters import DirectoryWorldReader, MemoryWorldReader, WorldReader, ZipWorldReader, open_world
from .listing import list_node
from .nodes import File, Folder, Root, VirtualNode, build_tree
from .path_utils import normalize_path, resolve
from .render import FILE_TYPES, RenderedOutput, render_file
from .schema import GlobalData, SchemaDescriptor, decode_schema

__all__ = [
    "Root",
    "Folder",
    "File",
    "VirtualNode",
    "build_tree",
    "resolve",
    "normalize_path",
    "list_node",
    "render_file",
    "RenderedOutput",
    "FILE_TYPES",
    "WorldReader",
    "MemoryWorldReader",
    "DirectoryWorldReader",
    "ZipWorldReader",
    "open_world",
    "GlobalData",
    "SchemaDescriptor",
    "decode_schema",
]
