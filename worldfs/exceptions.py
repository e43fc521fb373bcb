"""Exception hierarchy for worldfs."""

from __future__ import annotations


class WorldFSError(Exception):
    """Base class for every error raised by worldfs."""


# ----------------------------------------------------------------------
# Navigation
# ----------------------------------------------------------------------
class NavigationError(WorldFSError):
    """A path could not be walked over the virtual tree."""


class NoParentOfRoot(NavigationError):
    def __init__(self) -> None:
        super().__init__("You tried to go above the root directory.")


class NodeNotFound(NavigationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"cannot access '{name}': No such file or directory.")
        self.name = name


class TraverseIntoFile(NavigationError):
    def __init__(self) -> None:
        super().__init__("Tried to traverse into a file, not a folder.")


# ----------------------------------------------------------------------
# Rendering
# ----------------------------------------------------------------------
class RenderError(WorldFSError):
    """A file could not be turned into displayable output."""


class MissingFileSuffix(RenderError):
    def __init__(self, path: str) -> None:
        super().__init__(f"cannot classify '{path}': file name has no suffix")
        self.path = path


class StorageReadFailed(RenderError):
    def __init__(self, path: str) -> None:
        super().__init__(f"couldn't read file '{path}'")
        self.path = path


class GlobalDataUnavailable(RenderError):
    def __init__(self) -> None:
        super().__init__("couldn't get global data")


class SchemaDecodeFailed(RenderError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"couldn't read schema '{path}': {reason}")
        self.path = path
        self.reason = reason


class InvalidEncoding(RenderError):
    def __init__(self, path: str) -> None:
        super().__init__(f"'{path}' is not valid UTF-8 text")
        self.path = path


class UnsupportedFileType(RenderError):
    def __init__(self, suffix: str) -> None:
        super().__init__(f"Invalid file type: {suffix}")
        self.suffix = suffix


# ----------------------------------------------------------------------
# Storage
# ----------------------------------------------------------------------
class StorageError(WorldFSError):
    """The world container could not be opened or indexed."""


class ContainerOpenFailed(StorageError):
    pass


class TreeUnavailable(StorageError):
    pass


class InvalidTree(StorageError):
    pass


__all__ = [
    "WorldFSError",
    "NavigationError",
    "NoParentOfRoot",
    "NodeNotFound",
    "TraverseIntoFile",
    "RenderError",
    "MissingFileSuffix",
    "StorageReadFailed",
    "GlobalDataUnavailable",
    "SchemaDecodeFailed",
    "InvalidEncoding",
    "UnsupportedFileType",
    "StorageError",
    "ContainerOpenFailed",
    "TreeUnavailable",
    "InvalidTree",
]
