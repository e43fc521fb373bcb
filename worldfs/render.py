"""Render world files as displayable output, chosen by file suffix."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import BinaryIO

from .adapters import WorldReader
from .exceptions import (
    GlobalDataUnavailable,
    InvalidEncoding,
    MissingFileSuffix,
    SchemaDecodeFailed,
    StorageReadFailed,
    UnsupportedFileType,
)
from .path_utils import file_suffix

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RenderedOutput:
    text: str = ""
    bytes_written: int = 0
    raw: bool = False


FileRenderer = Callable[[WorldReader, str, "BinaryIO | None"], RenderedOutput]


@dataclass(slots=True)
class FileTypeSpec:
    suffix: str
    handler: FileRenderer
    description: str = ""


class FileTypeRegistry:
    """Maps file suffixes to the renderer that displays them."""

    def __init__(self) -> None:
        self._types: dict[str, FileTypeSpec] = {}

    def register(
        self,
        suffix: str,
        handler: FileRenderer,
        *,
        description: str = "",
    ) -> FileRenderer:
        self._types[suffix] = FileTypeSpec(suffix, handler, description)
        return handler

    def renderer(
        self,
        suffix: str,
        *,
        description: str = "",
    ) -> Callable[[FileRenderer], FileRenderer]:
        """Decorator variant for registering renderers."""

        def decorator(func: FileRenderer) -> FileRenderer:
            return self.register(suffix, func, description=description)

        return decorator

    def get(self, suffix: str) -> FileRenderer | None:
        spec = self._types.get(suffix)
        return spec.handler if spec else None

    def iter_types(self) -> Iterable[FileTypeSpec]:
        return tuple(self._types.values())


FILE_TYPES = FileTypeRegistry()


def _read(reader: WorldReader, path: str) -> bytes:
    try:
        return reader.read_bytes(path)
    except OSError as exc:
        raise StorageReadFailed(path) from exc


@FILE_TYPES.renderer("schema", description="Schema descriptor, shown in canonical form")
def render_schema(reader: WorldReader, path: str, _: BinaryIO | None) -> RenderedOutput:
    data = _read(reader, path)
    try:
        global_data = reader.global_data()
    except (OSError, ValueError) as exc:
        raise GlobalDataUnavailable() from exc
    try:
        schema = reader.decode_schema(data, global_data)
    except ValueError as exc:
        raise SchemaDecodeFailed(path, str(exc)) from exc
    return RenderedOutput(text=str(schema))


@FILE_TYPES.renderer("json", description="UTF-8 text, passed through unchanged")
def render_json(reader: WorldReader, path: str, _: BinaryIO | None) -> RenderedOutput:
    data = _read(reader, path)
    try:
        return RenderedOutput(text=data.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise InvalidEncoding(path) from exc


@FILE_TYPES.renderer("mps", description="Binary payload, written raw to stdout")
def render_mps(reader: WorldReader, path: str, stream: BinaryIO | None) -> RenderedOutput:
    data = _read(reader, path)
    if stream is None:
        sys.stdout.flush()
        stream = sys.stdout.buffer
    stream.write(data)
    stream.flush()
    return RenderedOutput(bytes_written=len(data), raw=True)


def render_file(
    reader: WorldReader,
    path: str,
    stream: BinaryIO | None = None,
) -> RenderedOutput:
    """Render the file at ``path`` according to its suffix.

    ``path`` is handed to the reader unchanged; it is not resolved against
    the tree. Binary payloads go straight to ``stream`` (the process stdout
    when omitted) and produce no text; text renderers never touch ``stream``.
    """
    suffix = file_suffix(path)
    if suffix is None:
        raise MissingFileSuffix(path)
    handler = FILE_TYPES.get(suffix)
    if handler is None:
        raise UnsupportedFileType(suffix)
    logger.debug("Rendering %s as %s", path, suffix)
    return handler(reader, path, stream)


__all__ = [
    "FILE_TYPES",
    "FileTypeRegistry",
    "FileTypeSpec",
    "RenderedOutput",
    "render_file",
]
