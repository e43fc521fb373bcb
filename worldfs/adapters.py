"""Storage readers that expose a world container to the core."""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from .exceptions import ContainerOpenFailed, InvalidTree, TreeUnavailable
from .nodes import Root, build_tree
from .schema import GlobalData, SchemaDescriptor, decode_schema

logger = logging.getLogger(__name__)

GLOBAL_DATA_PATH = "World/0/GlobalData.json"


class WorldReader:
    """Read-only access to the tree and payloads of one opened world."""

    def tree_root(self) -> Root:
        raise NotImplementedError

    def read_bytes(self, path: str) -> bytes:
        raise NotImplementedError

    def global_data(self) -> GlobalData:
        return GlobalData.from_bytes(self.read_bytes(GLOBAL_DATA_PATH))

    def decode_schema(self, data: bytes, global_data: GlobalData) -> SchemaDescriptor:
        return decode_schema(data, global_data)

    def close(self) -> None:
        pass

    def __enter__(self) -> "WorldReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _key(path: str) -> str:
    return PurePosixPath("/", path).as_posix().lstrip("/")


@dataclass
class MemoryWorldReader(WorldReader):
    files: Mapping[str, bytes] = field(default_factory=dict)
    global_context: GlobalData | None = None

    def __post_init__(self) -> None:
        self._files: dict[str, bytes] = {_key(path): bytes(data) for path, data in self.files.items()}

    def tree_root(self) -> Root:
        try:
            return build_tree(
                (path, False, {"size": len(data)}) for path, data in self._files.items()
            )
        except InvalidTree as exc:
            raise TreeUnavailable(str(exc)) from exc

    def read_bytes(self, path: str) -> bytes:
        data = self._files.get(_key(path))
        if data is None:
            raise FileNotFoundError(path)
        return data

    def global_data(self) -> GlobalData:
        if self.global_context is not None:
            return self.global_context
        return super().global_data()


@dataclass
class DirectoryWorldReader(WorldReader):
    """A world unpacked into a host directory."""

    root: Path

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        if not self.root.is_dir():
            raise ContainerOpenFailed(f"{self.root} is not a directory")
        self._root_resolved = self.root.resolve()

    def _resolve(self, path: str) -> Path:
        rel = PurePosixPath(path)
        if rel.is_absolute():
            rel = rel.relative_to("/")
        target = (self.root / Path(rel.as_posix())).resolve()
        if not target.is_relative_to(self._root_resolved):
            raise FileNotFoundError(f"Path escapes world root: {path}")
        return target

    def tree_root(self) -> Root:
        entries: list[tuple[str, bool, dict[str, object]]] = []
        try:
            for path in self.root.rglob("*"):
                rel_path = path.relative_to(self.root).as_posix()
                if path.is_dir():
                    entries.append((rel_path, True, {}))
                elif path.is_file():
                    entries.append((rel_path, False, {"size": path.stat().st_size}))
        except OSError as exc:
            raise TreeUnavailable(f"couldn't index {self.root}: {exc}") from exc
        logger.debug("Indexed %d entries under %s", len(entries), self.root)
        try:
            return build_tree(entries)
        except InvalidTree as exc:
            raise TreeUnavailable(str(exc)) from exc

    def read_bytes(self, path: str) -> bytes:
        target = self._resolve(path)
        if not target.is_file():
            raise FileNotFoundError(path)
        return target.read_bytes()


class ZipWorldReader(WorldReader):
    """A world packed into a zip archive."""

    def __init__(self, archive: str | Path) -> None:
        self.archive = Path(archive)
        try:
            self._zip = zipfile.ZipFile(self.archive)
        except (OSError, zipfile.BadZipFile) as exc:
            raise ContainerOpenFailed(f"couldn't open {self.archive}: {exc}") from exc
        self._members = {
            _key(info.filename): info.filename for info in self._zip.infolist() if not info.is_dir()
        }

    def tree_root(self) -> Root:
        entries = [
            (info.filename, info.is_dir(), {} if info.is_dir() else {"size": info.file_size})
            for info in self._zip.infolist()
        ]
        logger.debug("Indexed %d entries in %s", len(entries), self.archive)
        try:
            return build_tree(entries)
        except InvalidTree as exc:
            raise TreeUnavailable(str(exc)) from exc

    def read_bytes(self, path: str) -> bytes:
        try:
            return self._zip.read(self._members[_key(path)])
        except KeyError as exc:
            raise FileNotFoundError(path) from exc
        except zipfile.BadZipFile as exc:
            raise OSError(f"corrupt archive member {path}: {exc}") from exc

    def close(self) -> None:
        self._zip.close()


def open_world(path: str | Path) -> WorldReader:
    """Open the container at ``path`` with the reader that fits it."""
    target = Path(path)
    if target.is_dir():
        logger.debug("Opening %s as a directory world", target)
        return DirectoryWorldReader(target)
    if not target.exists():
        raise ContainerOpenFailed(f"{target}: No such file or directory")
    if target.suffix.lower() == ".zip" or zipfile.is_zipfile(target):
        logger.debug("Opening %s as a zip world", target)
        return ZipWorldReader(target)
    raise ContainerOpenFailed(f"{target}: unrecognised world container")


__all__ = [
    "GLOBAL_DATA_PATH",
    "WorldReader",
    "MemoryWorldReader",
    "DirectoryWorldReader",
    "ZipWorldReader",
    "open_world",
]
